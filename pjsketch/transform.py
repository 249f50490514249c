from __future__ import annotations

import logging

from pjsketch_core.core.instructions import Draw
from pjsketch_core.core.state import GameValues
from pjsketch_core.core.values import Angle, CanvasValue, Scalar, Size
from pjsketch_core.render.surface import RenderSurface
from pjsketch_core.render.transform import AffineTransform

LOGGER = logging.getLogger(__name__)


def rotate(angle: Angle | Scalar) -> Draw:
    """Rotate later drawing about the current origin; numbers are degrees."""
    angle = Angle.coerce(angle)

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        surface.concat(AffineTransform.rotation(angle.radians))

    return Draw(paint, label="rotate")


def scale(x: float, y: float | None = None) -> Draw:
    sx = float(x)
    sy = sx if y is None else float(y)

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        surface.concat(AffineTransform.scaling(sx, sy))

    return Draw(paint, label="scale")


def translate(x: CanvasValue | Scalar, y: CanvasValue | Scalar) -> Draw:
    dx = CanvasValue.coerce(x)
    dy = CanvasValue.coerce(y)

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        surface.concat(AffineTransform.translation(dx.resolve(size.width), dy.resolve(size.height)))

    return Draw(paint, label="translate")


def push_matrix() -> Draw:
    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        values.matrices.append(surface.transform)

    return Draw(paint, label="push_matrix")


def pop_matrix() -> Draw:
    """Restore the last pushed transform; an empty stack restores identity."""

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        surface.transform = values.matrices.pop() if values.matrices else AffineTransform.identity()

    return Draw(paint, label="pop_matrix")


def reset_matrix() -> Draw:
    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        surface.transform = AffineTransform.identity()

    return Draw(paint, label="reset_matrix")


def print_matrix() -> Draw:
    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        a, b, c, d, tx, ty = surface.transform.as_tuple()
        LOGGER.info("matrix [%g %g %g | %g %g %g]", a, c, tx, b, d, ty)

    return Draw(paint, label="print_matrix")
