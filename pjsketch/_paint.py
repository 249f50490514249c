from __future__ import annotations

from pjsketch_core.core.state import GameValues, line_cap
from pjsketch_core.render.path import Path
from pjsketch_core.render.surface import RenderSurface, StrokeStyle


def stroke_style(values: GameValues) -> StrokeStyle:
    return StrokeStyle(width=values.stroke_weight, cap=line_cap(values.stroke_cap), join=values.stroke_join.value)


def fill_path(surface: RenderSurface, path: Path, values: GameValues) -> None:
    if not values.no_fill:
        surface.fill_path(path, values.fill_color)


def stroke_path(surface: RenderSurface, path: Path, values: GameValues) -> None:
    if not values.no_stroke:
        surface.stroke_path(path, values.stroke_color, stroke_style(values))


def paint_path(surface: RenderSurface, path: Path, values: GameValues) -> None:
    """Fill then stroke, each skipped when switched off."""
    fill_path(surface, path, values)
    stroke_path(surface, path, values)


def paint_point(surface: RenderSurface, x: float, y: float, values: GameValues) -> None:
    # Points are filled with the stroke color: a dot centered on the point for heavy
    # strokes, a stroke-weight square hanging off the point otherwise.
    weight = values.stroke_weight
    if weight > 1:
        marker = Path().add_ellipse(x - weight / 2.0, y - weight / 2.0, weight, weight)
    else:
        marker = Path().add_rect(x, y, weight, weight)
    surface.fill_path(marker, values.stroke_color)
