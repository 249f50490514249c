from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


EventType = Literal[
    "pointer_move",
    "pointer_down",
    "pointer_up",
    "pointer_drag",
    "pointer_enter",
    "pointer_leave",
    "key_down",
    "key_up",
]

MouseButton = Literal["left", "right", "center"]


@dataclass(frozen=True)
class InputEvent:
    """One host input event, in canvas pixel coordinates."""

    event_type: EventType
    timestamp: float = 0.0
    x: Optional[float] = None
    y: Optional[float] = None
    button: Optional[MouseButton] = None
    key: Optional[str] = None
    key_code: Optional[int] = None
    special_key: Optional[str] = None
