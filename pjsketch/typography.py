from __future__ import annotations

from pjsketch_core.core.errors import UnsupportedOperationError
from pjsketch_core.core.instructions import Action, DelayedValue, Draw
from pjsketch_core.core.state import GameValues, HorizontalAlign, VerticalAlign
from pjsketch_core.core.values import CanvasValue, Scalar, Size
from pjsketch_core.render.fonts import FontDesign
from pjsketch_core.render.surface import FontRequest, RenderSurface, TextMetrics

from .geometry import as_point, as_size


def _font(values: GameValues) -> FontRequest:
    return FontRequest(design=values.text_design, size=values.text_size)


def _horizontal_offset(align: HorizontalAlign, width: float) -> float:
    if align is HorizontalAlign.LEFT:
        return 0.0
    if align is HorizontalAlign.CENTER:
        return width / 2.0
    if align is HorizontalAlign.RIGHT:
        return width
    raise ValueError(f"unsupported horizontal alignment: {align!r}")


def first_baseline(align: VerticalAlign, y: float, metrics: TextMetrics, line_count: int = 1) -> float:
    """Baseline of the first line so the text block sits at ``y`` as ``align`` asks."""
    block = metrics.height * line_count
    if align is VerticalAlign.BASELINE:
        return y
    if align is VerticalAlign.TOP:
        return y + metrics.ascent
    if align is VerticalAlign.CENTER:
        return y - block / 2.0 + metrics.ascent
    if align is VerticalAlign.BOTTOM:
        return y - block + metrics.ascent
    raise ValueError(f"unsupported vertical alignment: {align!r}")


def wrap_lines(surface: RenderSurface, text_value: str, font: FontRequest, max_width: float) -> list[str]:
    out: list[str] = []
    for raw_line in text_value.splitlines() or [""]:
        words = raw_line.split(" ")
        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if surface.measure_text(candidate, font).width <= max_width:
                current = candidate
            else:
                out.append(current)
                current = word
        out.append(current)
    return out


def _text_at(text_value: str, x: CanvasValue, y: CanvasValue) -> Draw:
    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        font = _font(values)
        lines = text_value.splitlines() or [""]
        horizontal, vertical = values.text_align
        line_metrics = [surface.measure_text(line, font) for line in lines]
        ref = line_metrics[0]
        left = x.resolve(size.width)
        baseline = first_baseline(vertical, y.resolve(size.height), ref, len(lines))
        for line, metrics in zip(lines, line_metrics):
            surface.draw_text(line, left - _horizontal_offset(horizontal, metrics.width), baseline, font, values.fill_color)
            baseline += ref.height

    return Draw(paint, label="text")


def _text_in(text_value: str, x: CanvasValue, y: CanvasValue, width: CanvasValue, height: CanvasValue) -> Draw:
    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        font = _font(values)
        left = x.resolve(size.width)
        top = y.resolve(size.height)
        bottom = top + height.resolve(size.height)
        metrics = surface.measure_text(text_value, font)
        baseline = top + metrics.ascent
        for line in wrap_lines(surface, text_value, font, width.resolve(size.width)):
            if baseline + metrics.descent > bottom:
                break
            surface.draw_text(line, left, baseline, font, values.fill_color)
            baseline += metrics.height

    return Draw(paint, label="text_box")


def text(text_value: object, *args: CanvasValue | Scalar, at: object = None, size: object = None) -> Draw:
    """Draw text in the fill color.

    ``text(s, x, y)`` or ``text(s, at=point)`` honours ``text_align``; multi-line strings
    stack downward. ``text(s, x, y, width, height)`` or ``text(s, at=point, size=size)``
    wraps words inside the box from its top-left corner and ignores ``text_align``.
    """
    text_value = str(text_value)
    if at is not None:
        if args:
            raise TypeError("text() takes either coordinates or at=")
        anchor = as_point(at)
        args = (anchor.x, anchor.y)
        if size is not None:
            box = as_size(size)
            args += (box.width, box.height)
    elif size is not None:
        raise TypeError("text() size= needs at=")
    coords = [CanvasValue.coerce(a) for a in args]
    if len(coords) == 2:
        return _text_at(text_value, *coords)
    if len(coords) == 4:
        return _text_in(text_value, *coords)
    raise TypeError(f"text() takes 2 or 4 coordinates, got {len(coords)}")


def text_size(value: float) -> Action:
    def mutate(values: GameValues) -> None:
        values.text_size = float(value)

    return Action(mutate, label="text_size")


def create_font(design: FontDesign) -> FontDesign:
    return FontDesign(design)


def text_font(design: FontDesign, size: float | None = None) -> Action:
    design = FontDesign(design)

    def mutate(values: GameValues) -> None:
        values.text_design = design
        if size is not None:
            values.text_size = float(size)

    return Action(mutate, label="text_font")


def text_align(horizontal: HorizontalAlign, vertical: VerticalAlign = VerticalAlign.BASELINE) -> Action:
    alignment = (HorizontalAlign(horizontal), VerticalAlign(vertical))

    def mutate(values: GameValues) -> None:
        values.text_align = alignment

    return Action(mutate, label="text_align")


def text_width(text_value: str) -> DelayedValue[float]:
    return DelayedValue(
        lambda surface, size, values: surface.measure_text(str(text_value), _font(values)).width,
        name="text_width",
    )


def text_ascent() -> DelayedValue[float]:
    return DelayedValue(lambda surface, size, values: surface.measure_text("", _font(values)).ascent, name="text_ascent")


def text_descent() -> DelayedValue[float]:
    return DelayedValue(
        lambda surface, size, values: surface.measure_text("", _font(values)).descent, name="text_descent"
    )


def text_leading(amount: float) -> Action:
    raise UnsupportedOperationError(
        "text_leading() is not supported; multi-line text advances by the font's ascent plus descent"
    )
