from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from pjsketch_core.core.color import Color
from pjsketch_core.core.values import Size

from .images import ImageAsset
from .path import Path
from .surface import FontRequest, StrokeStyle, TextMetrics
from .transform import AffineTransform


@dataclass(frozen=True)
class FillOp:
    path: Path
    color: Color


@dataclass(frozen=True)
class StrokeOp:
    path: Path
    color: Color
    style: StrokeStyle


@dataclass(frozen=True)
class ImageOp:
    image_name: str
    rect: tuple[float, float, float, float]
    transform: AffineTransform


@dataclass(frozen=True)
class TextOp:
    text: str
    origin: tuple[float, float]
    font: FontRequest
    color: Color
    transform: AffineTransform


PaintOp = Union[FillOp, StrokeOp, ImageOp, TextOp]


@dataclass
class RecordingSurface:
    """Headless surface that keeps every paint call, with geometry in device space.

    Text metrics are synthetic (fixed advance per character) so recorded frames are
    reproducible on any machine.
    """

    width: float = 400.0
    height: float = 400.0
    transform: AffineTransform = field(default_factory=AffineTransform)
    operations: list[PaintOp] = field(default_factory=list)
    advance_ratio: float = 0.6
    ascent_ratio: float = 0.8
    descent_ratio: float = 0.2

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("surface dimensions must be > 0")

    @property
    def size(self) -> Size:
        return Size(float(self.width), float(self.height))

    def concat(self, transform: AffineTransform) -> None:
        self.transform = transform.then(self.transform)

    def fill_path(self, path: Path, color: Color) -> None:
        self.operations.append(FillOp(path=path.transformed(self.transform), color=color))

    def stroke_path(self, path: Path, color: Color, style: StrokeStyle) -> None:
        device_style = StrokeStyle(
            width=style.width * self.transform.line_scale(),
            cap=style.cap,
            join=style.join,
        )
        self.operations.append(StrokeOp(path=path.transformed(self.transform), color=color, style=device_style))

    def draw_image(self, image: ImageAsset, x: float, y: float, width: float, height: float) -> None:
        self.operations.append(ImageOp(image_name=image.name, rect=(x, y, width, height), transform=self.transform))

    def draw_text(self, text: str, x: float, y: float, font: FontRequest, color: Color) -> None:
        self.operations.append(TextOp(text=text, origin=(x, y), font=font, color=color, transform=self.transform))

    def measure_text(self, text: str, font: FontRequest) -> TextMetrics:
        return TextMetrics(
            width=self.advance_ratio * font.size * len(text),
            ascent=self.ascent_ratio * font.size,
            descent=self.descent_ratio * font.size,
        )

    def ops_of(self, kind: type) -> list[PaintOp]:
        return [op for op in self.operations if isinstance(op, kind)]

    def begin_frame(self) -> None:
        self.operations.clear()
        self.transform = AffineTransform()
