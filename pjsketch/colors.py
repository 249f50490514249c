from __future__ import annotations

from enum import Enum
from typing import Callable, NamedTuple

from pjsketch_core.core.color import Color
from pjsketch_core.core.instructions import Action, Draw
from pjsketch_core.core.state import ColorMode, GameValues
from pjsketch_core.core.values import Size
from pjsketch_core.render.path import Path
from pjsketch_core.render.surface import RenderSurface

ColorSource = Callable[[ColorMode], Color]


def _channel(value: float) -> float:
    # NSColor-style component readout: float noise below 1e-9 is dropped.
    return round(value * 255.0, 9)


def color(gray_or_red: float, green: float | None = None, blue: float | None = None, alpha: float = 255.0) -> Color:
    """``color(gray)`` or ``color(r, g, b[, alpha])`` with 0..255 channels; always RGB."""
    if green is None and blue is None:
        return Color.from_rgb255(gray_or_red, gray_or_red, gray_or_red, alpha)
    if green is None or blue is None:
        raise TypeError("color() takes a gray level or red, green and blue")
    return Color.from_rgb255(gray_or_red, green, blue, alpha)


def hsb_color(hue: float, saturation: float, brightness: float, alpha: float = 255.0) -> Color:
    return Color.from_hsb(hue / 255.0, saturation / 255.0, brightness / 255.0, alpha / 255.0)


def _mode_color(mode: ColorMode, p1: float, p2: float, p3: float, alpha: float) -> Color:
    if mode is ColorMode.RGB:
        return Color.from_rgb255(p1, p2, p3, alpha)
    if mode is ColorMode.HSB:
        return hsb_color(p1, p2, p3, alpha)
    raise ValueError(f"unsupported color mode: {mode!r}")


def _color_source(
    name: str,
    args: tuple,
    *,
    red: float | None,
    green: float | None,
    blue: float | None,
    hue: float | None,
    saturation: float | None,
    brightness: float | None,
    alpha: float,
) -> ColorSource:
    rgb = (red, green, blue)
    hsb = (hue, saturation, brightness)
    named_rgb = any(v is not None for v in rgb)
    named_hsb = any(v is not None for v in hsb)
    if named_rgb or named_hsb:
        if args or (named_rgb and named_hsb):
            raise TypeError(f"{name}() mixes color forms")
        channels = rgb if named_rgb else hsb
        if any(v is None for v in channels):
            raise TypeError(f"{name}() needs all three named channels")
        fixed = Color.from_rgb255(*channels, alpha) if named_rgb else hsb_color(*channels, alpha)
        return lambda mode: fixed
    if len(args) == 1 and isinstance(args[0], Color):
        given = args[0]
        return lambda mode: given
    if len(args) in (1, 2):
        gray = args[0]
        gray_alpha = args[1] if len(args) == 2 else alpha
        return lambda mode: _mode_color(mode, gray, gray, gray, gray_alpha)
    if len(args) in (3, 4):
        p1, p2, p3 = args[:3]
        a = args[3] if len(args) == 4 else alpha
        return lambda mode: _mode_color(mode, p1, p2, p3, a)
    raise TypeError(f"{name}() takes a Color, a gray level, or three channels with optional alpha")


def fill(
    *args,
    red: float | None = None,
    green: float | None = None,
    blue: float | None = None,
    hue: float | None = None,
    saturation: float | None = None,
    brightness: float | None = None,
    alpha: float = 255.0,
) -> Action:
    """Set the fill color and turn filling back on.

    Positional channels follow the frame's color mode; named channels do not.
    """
    source = _color_source(
        "fill", args, red=red, green=green, blue=blue, hue=hue, saturation=saturation, brightness=brightness, alpha=alpha
    )

    def mutate(values: GameValues) -> None:
        values.fill_color = source(values.color_mode)
        values.no_fill = False

    return Action(mutate, label="fill")


def no_fill() -> Action:
    def mutate(values: GameValues) -> None:
        values.no_fill = True

    return Action(mutate, label="no_fill")


def stroke(
    *args,
    red: float | None = None,
    green: float | None = None,
    blue: float | None = None,
    hue: float | None = None,
    saturation: float | None = None,
    brightness: float | None = None,
    alpha: float = 255.0,
) -> Action:
    source = _color_source(
        "stroke",
        args,
        red=red,
        green=green,
        blue=blue,
        hue=hue,
        saturation=saturation,
        brightness=brightness,
        alpha=alpha,
    )

    def mutate(values: GameValues) -> None:
        values.stroke_color = source(values.color_mode)
        values.no_stroke = False

    return Action(mutate, label="stroke")


def no_stroke() -> Action:
    def mutate(values: GameValues) -> None:
        values.no_stroke = True

    return Action(mutate, label="no_stroke")


def stroke_weight(weight: float) -> Action:
    def mutate(values: GameValues) -> None:
        values.stroke_weight = float(weight)

    return Action(mutate, label="stroke_weight")


def background(
    *args,
    red: float | None = None,
    green: float | None = None,
    blue: float | None = None,
    hue: float | None = None,
    saturation: float | None = None,
    brightness: float | None = None,
    alpha: float = 255.0,
) -> Draw:
    """Cover the whole canvas with one color, ignoring fill and stroke settings."""
    source = _color_source(
        "background",
        args,
        red=red,
        green=green,
        blue=blue,
        hue=hue,
        saturation=saturation,
        brightness=brightness,
        alpha=alpha,
    )

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        surface.fill_path(Path().add_rect(0.0, 0.0, size.width, size.height), source(values.color_mode))

    return Draw(paint, label="background")


def color_mode(mode: ColorMode) -> Action:
    mode = ColorMode(mode)

    def mutate(values: GameValues) -> None:
        values.color_mode = mode

    return Action(mutate, label="color_mode")


class ColorComponents(NamedTuple):
    red: float
    green: float
    blue: float
    alpha: float
    hue: float
    saturation: float
    brightness: float


def decompose(c: Color) -> ColorComponents:
    """All seven components of ``c`` on the 0..255 scale."""
    h, s, v = c.hsb
    return ColorComponents(
        _channel(c.red),
        _channel(c.green),
        _channel(c.blue),
        _channel(c.alpha),
        _channel(h),
        _channel(s),
        _channel(v),
    )


def red(c: Color) -> float:
    return _channel(c.red)


def green(c: Color) -> float:
    return _channel(c.green)


def blue(c: Color) -> float:
    return _channel(c.blue)


def alpha(c: Color) -> float:
    return _channel(c.alpha)


def hue(c: Color) -> float:
    return _channel(c.hsb[0])


def saturation(c: Color) -> float:
    return _channel(c.hsb[1])


def brightness(c: Color) -> float:
    return _channel(c.hsb[2])


def lerp_color(c1: Color, c2: Color, amount: float) -> Color:
    """Per-channel RGBA interpolation; ``amount`` outside 0..1 extrapolates."""
    a = decompose(c1)
    b = decompose(c2)
    return Color.from_rgb255(
        a.red + (b.red - a.red) * amount,
        a.green + (b.green - a.green) * amount,
        a.blue + (b.blue - a.blue) * amount,
        a.alpha + (b.alpha - a.alpha) * amount,
    )


class BlendMode(str, Enum):
    BLEND = "blend"
    ADD = "add"
    SUBTRACT = "subtract"
    DARKEST = "darkest"
    LIGHTEST = "lightest"
    DIFFERENCE = "difference"
    EXCLUSION = "exclusion"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    OVERLAY = "overlay"
    HARD_LIGHT = "hard_light"
    SOFT_LIGHT = "soft_light"
    DODGE = "dodge"
    BURN = "burn"


def _clamp255(value: float) -> float:
    return min(max(value, 0.0), 255.0)


def _div(a: int, b: int) -> int:
    # Integer division truncating toward zero.
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _overlay(test: float, low: float, high: float, b: float) -> int:
    if test < 128:
        return int(low * b) >> 7
    return 255 - (int((255 - high) * (255 - b)) >> 7)


def _hard_light(a: int, b: int) -> int:
    if b < 128:
        return (a * b) >> 7
    return 255 - (((255 - a) * (255 - b)) >> 7)


def _soft_light(a: int, b: int) -> int:
    return ((a * b) >> 7) + ((a * a) >> 8) - ((a * a * b) >> 15)


def _dodge(a: int, b: int) -> float:
    if b == 255:
        return 255.0
    return _clamp255(_div(a << 8, 255 - b))


def _burn(a: int, b: int) -> float:
    if b == 0:
        return 0.0
    return 255.0 - _clamp255(_div((255 - a) << 8, b))


def blend_color(c1: Color, c2: Color, mode: BlendMode = BlendMode.BLEND, *, legacy_overlay: bool = True) -> Color:
    """Combine two colors channel by channel on the 0..255 scale; the result is opaque.

    ``legacy_overlay`` keeps the historical OVERLAY blue channel, which tests and scales
    with the red channel of ``c1``. Pass False for the per-channel formula.
    """
    mode = BlendMode(mode)
    a = decompose(c1)
    b = decompose(c2)
    pairs = ((a.red, b.red), (a.green, b.green), (a.blue, b.blue))

    if mode is BlendMode.BLEND:
        factor = (255.0 - b.alpha) / 255.0
        channels = [x * factor + y for x, y in pairs]
    elif mode is BlendMode.ADD:
        channels = [min(x + y, 255.0) for x, y in pairs]
    elif mode is BlendMode.SUBTRACT:
        channels = [max(x - y, 0.0) for x, y in pairs]
    elif mode is BlendMode.DARKEST:
        channels = [min(x, y) for x, y in pairs]
    elif mode is BlendMode.LIGHTEST:
        channels = [max(x, y) for x, y in pairs]
    elif mode is BlendMode.DIFFERENCE:
        channels = [abs(y - x) for x, y in pairs]
    elif mode is BlendMode.EXCLUSION:
        channels = [y + x - (int(y * x) >> 7) for x, y in pairs]
    elif mode is BlendMode.MULTIPLY:
        channels = [int(x * y) >> 8 for x, y in pairs]
    elif mode is BlendMode.SCREEN:
        channels = [255 - (int((255 - x) * (255 - y)) >> 8) for x, y in pairs]
    elif mode is BlendMode.OVERLAY:
        channels = [_overlay(a.red, a.red, a.red, b.red), _overlay(a.green, a.green, a.green, b.green)]
        if legacy_overlay:
            channels.append(_overlay(a.red, a.red, a.blue, b.blue))
        else:
            channels.append(_overlay(a.blue, a.blue, a.blue, b.blue))
    elif mode is BlendMode.HARD_LIGHT:
        channels = [_hard_light(int(x), int(y)) for x, y in pairs]
    elif mode is BlendMode.SOFT_LIGHT:
        channels = [_soft_light(int(x), int(y)) for x, y in pairs]
    elif mode is BlendMode.DODGE:
        channels = [_dodge(int(x), int(y)) for x, y in pairs]
    elif mode is BlendMode.BURN:
        channels = [_burn(int(x), int(y)) for x, y in pairs]
    else:
        raise ValueError(f"unsupported blend mode: {mode!r}")
    return Color.from_rgb255(float(channels[0]), float(channels[1]), float(channels[2]), 255.0)
