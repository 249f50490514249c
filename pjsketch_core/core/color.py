from __future__ import annotations

import colorsys
from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """RGBA color with channels normalized to 0..1.

    Channels are not clamped here; backends clamp when they rasterize.
    """

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def from_rgb255(cls, red: float, green: float, blue: float, alpha: float = 255.0) -> Color:
        return cls(red / 255.0, green / 255.0, blue / 255.0, alpha / 255.0)

    @classmethod
    def from_hsb(cls, hue: float, saturation: float, brightness: float, alpha: float = 1.0) -> Color:
        r, g, b = colorsys.hsv_to_rgb(hue, saturation, brightness)
        return cls(r, g, b, alpha)

    @property
    def hsb(self) -> tuple[float, float, float]:
        r, g, b = (min(1.0, max(0.0, ch)) for ch in (self.red, self.green, self.blue))
        return colorsys.rgb_to_hsv(r, g, b)

    def to_rgba_u8(self) -> tuple[int, int, int, int]:
        return tuple(
            int(round(min(1.0, max(0.0, ch)) * 255.0)) for ch in (self.red, self.green, self.blue, self.alpha)
        )  # type: ignore[return-value]


WHITE = Color(1.0, 1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0, 1.0)
