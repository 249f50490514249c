from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from pjsketch_core.core.color import Color
from pjsketch_core.core.values import Size

from .fonts import FontDesign
from .images import ImageAsset
from .path import Path
from .transform import AffineTransform


LineCap = Literal["butt", "round", "square"]
LineJoin = Literal["miter", "round", "bevel"]


@dataclass(frozen=True)
class StrokeStyle:
    width: float = 1.0
    cap: LineCap = "round"
    join: LineJoin = "miter"


@dataclass(frozen=True)
class FontRequest:
    design: FontDesign = FontDesign.DEFAULT
    size: float = 12.0
    family: str = ""


@dataclass(frozen=True)
class TextMetrics:
    width: float
    ascent: float
    descent: float

    @property
    def height(self) -> float:
        return self.ascent + self.descent


class RenderSurface(Protocol):
    """Drawing target consumed by instructions.

    Geometry passed in is in user space; the surface applies ``transform``.
    """

    @property
    def size(self) -> Size:
        ...

    def begin_frame(self) -> None:
        """Reset the transform and discard the previous frame's output."""
        ...

    @property
    def transform(self) -> AffineTransform:
        ...

    @transform.setter
    def transform(self, value: AffineTransform) -> None:
        ...

    def concat(self, transform: AffineTransform) -> None:
        ...

    def fill_path(self, path: Path, color: Color) -> None:
        ...

    def stroke_path(self, path: Path, color: Color, style: StrokeStyle) -> None:
        ...

    def draw_image(self, image: ImageAsset, x: float, y: float, width: float, height: float) -> None:
        ...

    def draw_text(self, text: str, x: float, y: float, font: FontRequest, color: Color) -> None:
        """Draw one line of text with its left baseline at ``(x, y)``."""
        ...

    def measure_text(self, text: str, font: FontRequest) -> TextMetrics:
        ...
