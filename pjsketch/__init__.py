"""Processing-style drawing vocabulary: build per-frame ``Content`` out of instructions."""

from pjsketch_core.core.color import BLACK, WHITE, Color
from pjsketch_core.core.errors import (
    ConfigError,
    PjsketchError,
    ResourceNotFoundWarning,
    ShapeAssemblyError,
    UnsupportedOperationError,
)
from pjsketch_core.core.instructions import Action, Content, DelayedValue, Draw, FrameResult, content, perform
from pjsketch_core.core.runtime import CanvasValues, Game, SketchRuntime, load_game, render_operations
from pjsketch_core.core.state import (
    BeginShapeMode,
    ColorMode,
    EndShapeMode,
    GameValues,
    HorizontalAlign,
    ImageMode,
    ShapeMode,
    StrokeCap,
    StrokeJoin,
    VerticalAlign,
)
from pjsketch_core.core.values import Angle, CanvasPoint, CanvasSize, CanvasValue, degrees, px, radians, rel
from pjsketch_core.render.fonts import FontDesign
from pjsketch_core.render.images import ImageAsset

from .colors import (
    BlendMode,
    ColorComponents,
    alpha,
    background,
    blend_color,
    blue,
    brightness,
    color,
    color_mode,
    decompose,
    fill,
    green,
    hsb_color,
    hue,
    lerp_color,
    no_fill,
    no_stroke,
    red,
    saturation,
    stroke,
    stroke_weight,
)
from .complex_shapes import begin_shape, bezier_vertex, curve_vertex, end_shape, stroke_join, vertex
from .environment import (
    SoundPlayer,
    canvas_height,
    canvas_width,
    frame_rate,
    get_image,
    get_sound,
    loop,
    no_loop,
    pause_sound,
    play_sound,
    set_asset_dirs,
    set_sound_backend,
)
from .numeric import (
    bezier_point,
    bezier_tangent,
    constrain,
    curve_point,
    curve_tangent,
    dist,
    lerp,
    map_range,
)
from .shapes import (
    arc,
    bezier,
    curve,
    curve_tightness,
    ellipse,
    ellipse_mode,
    image,
    image_height,
    image_mode,
    image_width,
    line,
    path,
    point,
    quad,
    rect,
    rect_mode,
    stroke_cap,
    triangle,
)
from .transform import pop_matrix, print_matrix, push_matrix, reset_matrix, rotate, scale, translate
from .typography import (
    create_font,
    text,
    text_align,
    text_ascent,
    text_descent,
    text_font,
    text_leading,
    text_size,
    text_width,
)

# Processing constants. Setters coerce by value, so CENTER also works for
# image_mode and text_align, and ROUND for stroke_join.
CORNER = ShapeMode.CORNER
CORNERS = ShapeMode.CORNERS
CENTER = ShapeMode.CENTER
RADIUS = ShapeMode.RADIUS

LEFT = HorizontalAlign.LEFT
RIGHT = HorizontalAlign.RIGHT
TOP = VerticalAlign.TOP
BOTTOM = VerticalAlign.BOTTOM
BASELINE = VerticalAlign.BASELINE

RGB = ColorMode.RGB
HSB = ColorMode.HSB

ROUND = StrokeCap.ROUND
SQUARE = StrokeCap.SQUARE
PROJECT = StrokeCap.PROJECT
MITER = StrokeJoin.MITER
BEVEL = StrokeJoin.BEVEL

POINTS = BeginShapeMode.POINTS
LINES = BeginShapeMode.LINES
TRIANGLES = BeginShapeMode.TRIANGLES
TRIANGLE_FAN = BeginShapeMode.TRIANGLE_FAN
TRIANGLE_STRIP = BeginShapeMode.TRIANGLE_STRIP
QUADS = BeginShapeMode.QUADS
QUAD_STRIP = BeginShapeMode.QUAD_STRIP
CLOSE = EndShapeMode.CLOSE

BLEND = BlendMode.BLEND
ADD = BlendMode.ADD
SUBTRACT = BlendMode.SUBTRACT
DARKEST = BlendMode.DARKEST
LIGHTEST = BlendMode.LIGHTEST
DIFFERENCE = BlendMode.DIFFERENCE
EXCLUSION = BlendMode.EXCLUSION
MULTIPLY = BlendMode.MULTIPLY
SCREEN = BlendMode.SCREEN
OVERLAY = BlendMode.OVERLAY
HARD_LIGHT = BlendMode.HARD_LIGHT
SOFT_LIGHT = BlendMode.SOFT_LIGHT
DODGE = BlendMode.DODGE
BURN = BlendMode.BURN

__all__ = [
    "ADD",
    "Action",
    "Angle",
    "BASELINE",
    "BEVEL",
    "BLACK",
    "BLEND",
    "BOTTOM",
    "BURN",
    "BeginShapeMode",
    "BlendMode",
    "CENTER",
    "CLOSE",
    "CORNER",
    "CORNERS",
    "CanvasPoint",
    "CanvasSize",
    "CanvasValue",
    "CanvasValues",
    "Color",
    "ColorComponents",
    "ColorMode",
    "ConfigError",
    "Content",
    "DARKEST",
    "DIFFERENCE",
    "DODGE",
    "DelayedValue",
    "Draw",
    "EXCLUSION",
    "EndShapeMode",
    "FontDesign",
    "FrameResult",
    "Game",
    "GameValues",
    "HARD_LIGHT",
    "HSB",
    "HorizontalAlign",
    "ImageAsset",
    "ImageMode",
    "LEFT",
    "LIGHTEST",
    "LINES",
    "MITER",
    "MULTIPLY",
    "OVERLAY",
    "POINTS",
    "PROJECT",
    "PjsketchError",
    "QUADS",
    "QUAD_STRIP",
    "RADIUS",
    "RGB",
    "RIGHT",
    "ROUND",
    "ResourceNotFoundWarning",
    "SCREEN",
    "SOFT_LIGHT",
    "SQUARE",
    "SUBTRACT",
    "ShapeAssemblyError",
    "ShapeMode",
    "SketchRuntime",
    "SoundPlayer",
    "StrokeCap",
    "StrokeJoin",
    "TOP",
    "TRIANGLES",
    "TRIANGLE_FAN",
    "TRIANGLE_STRIP",
    "UnsupportedOperationError",
    "VerticalAlign",
    "WHITE",
    "alpha",
    "arc",
    "background",
    "begin_shape",
    "bezier",
    "bezier_point",
    "bezier_tangent",
    "bezier_vertex",
    "blend_color",
    "blue",
    "brightness",
    "canvas_height",
    "canvas_width",
    "color",
    "color_mode",
    "constrain",
    "content",
    "create_font",
    "curve",
    "curve_point",
    "curve_tangent",
    "curve_tightness",
    "curve_vertex",
    "decompose",
    "degrees",
    "dist",
    "ellipse",
    "ellipse_mode",
    "end_shape",
    "fill",
    "frame_rate",
    "get_image",
    "get_sound",
    "green",
    "hsb_color",
    "hue",
    "image",
    "image_height",
    "image_mode",
    "image_width",
    "lerp",
    "lerp_color",
    "line",
    "load_game",
    "loop",
    "map_range",
    "no_fill",
    "no_loop",
    "no_stroke",
    "path",
    "pause_sound",
    "perform",
    "play_sound",
    "point",
    "pop_matrix",
    "print_matrix",
    "push_matrix",
    "px",
    "quad",
    "radians",
    "rect",
    "rect_mode",
    "red",
    "rel",
    "render_operations",
    "reset_matrix",
    "rotate",
    "saturation",
    "scale",
    "set_asset_dirs",
    "set_sound_backend",
    "stroke",
    "stroke_cap",
    "stroke_join",
    "stroke_weight",
    "text",
    "text_align",
    "text_ascent",
    "text_descent",
    "text_font",
    "text_leading",
    "text_size",
    "text_width",
    "translate",
    "triangle",
    "vertex",
]
