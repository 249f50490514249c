from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Union

from pjsketch_core.render.fonts import FontDesign
from pjsketch_core.render.transform import AffineTransform

from .color import BLACK, WHITE, Color
from .frame_rate_controller import FrameRateController
from .values import CanvasValue


class ShapeMode(str, Enum):
    """Reference-point interpretation for the generic four-argument rect/ellipse/arc forms."""

    CORNER = "corner"
    CORNERS = "corners"
    CENTER = "center"
    RADIUS = "radius"


RectMode = ShapeMode
EllipseMode = ShapeMode


class ImageMode(str, Enum):
    CORNER = "corner"
    CORNERS = "corners"
    CENTER = "center"


class ColorMode(str, Enum):
    RGB = "rgb"
    HSB = "hsb"


class StrokeCap(str, Enum):
    ROUND = "round"
    SQUARE = "square"
    PROJECT = "project"


class StrokeJoin(str, Enum):
    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"


class BeginShapeMode(str, Enum):
    POINTS = "points"
    LINES = "lines"
    TRIANGLES = "triangles"
    TRIANGLE_FAN = "triangle_fan"
    TRIANGLE_STRIP = "triangle_strip"
    QUADS = "quads"
    QUAD_STRIP = "quad_strip"


class EndShapeMode(str, Enum):
    CLOSE = "close"


class ShapeType(str, Enum):
    REGULAR = "regular"
    BEZIER = "bezier"
    CURVE = "curve"


class HorizontalAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlign(str, Enum):
    TOP = "top"
    CENTER = "center"
    BASELINE = "baseline"
    BOTTOM = "bottom"


def line_cap(cap: StrokeCap) -> str:
    """Backend cap for a sketch cap: SQUARE ends flush, PROJECT extends past the end."""
    if cap is StrokeCap.ROUND:
        return "round"
    if cap is StrokeCap.SQUARE:
        return "butt"
    if cap is StrokeCap.PROJECT:
        return "square"
    raise ValueError(f"unsupported stroke cap: {cap!r}")


@dataclass(frozen=True)
class PointVertex:
    x: CanvasValue
    y: CanvasValue


@dataclass(frozen=True)
class BezierVertex:
    cx1: CanvasValue
    cy1: CanvasValue
    cx2: CanvasValue
    cy2: CanvasValue
    x: CanvasValue
    y: CanvasValue

    # Treated as a plain point, a bezier vertex stands at its first control point.
    @property
    def anchor(self) -> tuple[CanvasValue, CanvasValue]:
        return self.cx1, self.cy1


Vertex = Union[PointVertex, BezierVertex]


def vertex_position(vertex: Vertex) -> tuple[CanvasValue, CanvasValue]:
    if isinstance(vertex, PointVertex):
        return vertex.x, vertex.y
    if isinstance(vertex, BezierVertex):
        return vertex.anchor
    raise ValueError(f"unsupported vertex: {vertex!r}")


@dataclass(frozen=True)
class CompatFlags:
    """Switches that keep legacy numeric output stable for existing sketches."""

    legacy_arc_stretch: bool = True
    radius_by_height: bool = False


@dataclass
class GameValues:
    """Mutable draw state for exactly one frame.

    Created fresh by the runtime before each frame walk and dropped afterwards.
    """

    frame_rate: FrameRateController = field(default_factory=lambda: FrameRateController(target_fps=60))
    post: Callable[[Callable[[], None]], None] | None = None
    compat: CompatFlags = field(default_factory=CompatFlags)

    fill_color: Color = WHITE
    stroke_color: Color = BLACK
    no_fill: bool = False
    no_stroke: bool = False

    text_design: FontDesign = FontDesign.DEFAULT
    text_size: float = 12.0
    text_align: tuple[HorizontalAlign, VerticalAlign] = (HorizontalAlign.LEFT, VerticalAlign.BASELINE)

    rect_mode: ShapeMode = ShapeMode.CORNER
    ellipse_mode: ShapeMode = ShapeMode.CENTER
    image_mode: ImageMode = ImageMode.CORNER

    curve_tightness: float = 0.0
    stroke_weight: float = 1.0
    stroke_cap: StrokeCap = StrokeCap.ROUND
    stroke_join: StrokeJoin = StrokeJoin.MITER

    vertices: list[Vertex] = field(default_factory=list)
    begin_shape_mode: BeginShapeMode | None = None
    shape_type: ShapeType = ShapeType.REGULAR

    color_mode: ColorMode = ColorMode.RGB
    matrices: list[AffineTransform] = field(default_factory=list)
    observed: dict[str, object] = field(default_factory=dict)

    @classmethod
    def fresh(
        cls,
        frame_rate: FrameRateController,
        post: Callable[[Callable[[], None]], None] | None = None,
        compat: CompatFlags | None = None,
    ) -> GameValues:
        """Default draw state for a new frame, sharing the host's frame-rate controller."""
        return cls(frame_rate=frame_rate, post=post, compat=compat or CompatFlags())

    def schedule(self, callback: Callable[[], None]) -> None:
        """Defer ``callback`` to the host scheduler; runs it now when there is no host."""
        if self.post is None:
            callback()
            return
        self.post(callback)

    def describe(self) -> str:
        mode = self.begin_shape_mode.value if self.begin_shape_mode is not None else "none"
        return f"shape_type={self.shape_type.value} begin_shape_mode={mode} vertices={len(self.vertices)}"
