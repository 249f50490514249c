from .color import BLACK, WHITE, Color
from .config import CONFIG_FILENAME, SketchConfig, load_config, parse_config
from .errors import (
    ConfigError,
    PjsketchError,
    ResourceNotFoundWarning,
    ShapeAssemblyError,
    UnsupportedOperationError,
)
from .events import InputEvent
from .frame_rate_controller import FrameRateController
from .instructions import (
    Action,
    Content,
    DelayedValue,
    Draw,
    FrameResult,
    Instruction,
    content,
    evaluate_frame,
    perform,
)
from .state import (
    BeginShapeMode,
    BezierVertex,
    ColorMode,
    CompatFlags,
    EllipseMode,
    EndShapeMode,
    GameValues,
    HorizontalAlign,
    ImageMode,
    PointVertex,
    RectMode,
    ShapeMode,
    ShapeType,
    StrokeCap,
    StrokeJoin,
    VerticalAlign,
    Vertex,
)
from .values import Angle, CanvasPoint, CanvasSize, CanvasValue, Size, degrees, px, radians, rel

__all__ = [
    "Action",
    "Angle",
    "BLACK",
    "BeginShapeMode",
    "BezierVertex",
    "CONFIG_FILENAME",
    "CanvasPoint",
    "CanvasSize",
    "CanvasValue",
    "Color",
    "ColorMode",
    "CompatFlags",
    "ConfigError",
    "Content",
    "DelayedValue",
    "Draw",
    "EllipseMode",
    "EndShapeMode",
    "FrameRateController",
    "FrameResult",
    "GameValues",
    "HorizontalAlign",
    "ImageMode",
    "InputEvent",
    "Instruction",
    "PjsketchError",
    "PointVertex",
    "RectMode",
    "ResourceNotFoundWarning",
    "ShapeAssemblyError",
    "ShapeMode",
    "ShapeType",
    "SketchConfig",
    "Size",
    "StrokeCap",
    "StrokeJoin",
    "UnsupportedOperationError",
    "VerticalAlign",
    "Vertex",
    "WHITE",
    "content",
    "degrees",
    "evaluate_frame",
    "load_config",
    "parse_config",
    "perform",
    "px",
    "radians",
    "rel",
]
