from __future__ import annotations

from dataclasses import replace
import logging
from typing import Callable, Mapping, Sequence, Union

from pjsketch_core.core.instructions import Action, DelayedValue, Draw
from pjsketch_core.core.state import GameValues, ImageMode, ShapeMode, StrokeCap
from pjsketch_core.core.values import Angle, CanvasPoint, CanvasValue, Scalar, Size
from pjsketch_core.render.images import ImageAsset
from pjsketch_core.render.path import Path
from pjsketch_core.render.surface import RenderSurface

from ._paint import fill_path, paint_path, paint_point, stroke_path
from .geometry import BoxSpec, arc_paths, as_point, as_size, box_spec_from_keywords, catmull_rom_path

LOGGER = logging.getLogger(__name__)

PathSource = Union[Path, Callable[[Path], object]]


def _resolve_points(points: Sequence[CanvasPoint], size: Size) -> list[tuple[float, float]]:
    return [p.resolve(size) for p in points]


def _point_list(name: str, args: tuple, coords: Mapping[str, object], names: Sequence[str]) -> list[CanvasPoint]:
    """Read ``len(names)`` points from flat coordinates, point objects or named points."""
    n = len(names)
    if args and coords:
        raise TypeError(f"{name}() takes either positional or keyword points, not both")
    if coords:
        if set(coords) != set(names):
            raise TypeError(f"{name}() takes keyword points {', '.join(names)}")
        return [as_point(coords[key]) for key in names]
    if len(args) == 2 * n:
        return [CanvasPoint(args[2 * i], args[2 * i + 1]) for i in range(n)]
    if len(args) == n:
        return [as_point(arg) for arg in args]
    raise TypeError(f"{name}() takes {2 * n} coordinates or {n} points, got {len(args)} arguments")


def _generic_box(name: str, args: tuple, coords: Mapping[str, object]) -> BoxSpec | None:
    """None means the four positional coordinates are read with the frame's mode."""
    if coords:
        if args:
            raise TypeError(f"{name}() takes either four positional coordinates or named ones")
        return box_spec_from_keywords(name, coords)
    if len(args) != 4:
        raise TypeError(f"{name}() takes four positional coordinates, got {len(args)}")
    return None


def _frame_spec(fixed: BoxSpec | None, mode: ShapeMode, args: tuple, values: GameValues) -> BoxSpec:
    if fixed is None:
        return BoxSpec(mode, *args)
    if fixed.uniform_radius and values.compat.radius_by_height:
        return replace(fixed, uniform_radius=False)
    return fixed


def rect(*args: CanvasValue | Scalar, corner_radius: float = 0.0, **coords: object) -> Draw:
    """Draw a rectangle.

    ``rect(p1, p2, p3, p4)`` reads its coordinates according to ``rect_mode``; a fifth
    positional argument is the corner radius. The named forms fix the interpretation:
    ``x/y/width/height``, ``x/y/opposite_x/opposite_y``, ``center_x/center_y/width/height``,
    ``center_x/center_y/x_radius/y_radius``, ``origin/size``, ``origin/opposite`` and
    ``center/size``.
    """
    if len(args) == 5 and not coords:
        corner_radius = float(args[4])
        args = args[:4]
    fixed = _generic_box("rect", args, coords)

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        spec = _frame_spec(fixed, values.rect_mode, args, values)
        box = spec.resolve(size)
        path = Path().add_rounded_rect(box.x, box.y, box.width, box.height, corner_radius)
        paint_path(surface, path, values)

    return Draw(paint, label="rect")


def rect_mode(mode: ShapeMode) -> Action:
    mode = ShapeMode(mode)

    def mutate(values: GameValues) -> None:
        values.rect_mode = mode

    return Action(mutate, label="rect_mode")


def ellipse(*args: CanvasValue | Scalar, **coords: object) -> Draw:
    """Draw an ellipse inscribed in a box read like ``rect``, using ``ellipse_mode``.

    ``ellipse(center_x=..., center_y=..., radius=...)`` resolves the radius against the
    canvas width on both axes, so a relative radius stays circular. Set
    ``[compat] radius_by_height`` to resolve the vertical radius against the height
    instead, which stretches a relative radius on a non-square canvas.
    """
    fixed = _generic_box("ellipse", args, coords)

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        spec = _frame_spec(fixed, values.ellipse_mode, args, values)
        box = spec.resolve(size)
        paint_path(surface, Path().add_ellipse(box.x, box.y, box.width, box.height), values)

    return Draw(paint, label="ellipse")


def ellipse_mode(mode: ShapeMode) -> Action:
    mode = ShapeMode(mode)

    def mutate(values: GameValues) -> None:
        values.ellipse_mode = mode

    return Action(mutate, label="ellipse_mode")


def arc(
    *args: CanvasValue | Scalar | Angle,
    start: Angle | Scalar | None = None,
    stop: Angle | Scalar | None = None,
    **coords: object,
) -> Draw:
    """Draw an arc of the ellipse described by the box arguments.

    Positional form: ``arc(p1, p2, p3, p4, start, stop)`` using ``ellipse_mode``. Plain
    numbers for angles are degrees. The filled region is a pie slice; the stroke follows
    the curve only.
    The named forms are those of ``ellipse``, including the single ``radius``.
    """
    if len(args) == 6 and start is None and stop is None:
        start, stop = args[4], args[5]
        args = args[:4]
    if start is None or stop is None:
        raise TypeError("arc() needs start and stop angles")
    start_angle = Angle.coerce(start)
    stop_angle = Angle.coerce(stop)
    fixed = _generic_box("arc", args, coords)

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        spec = _frame_spec(fixed, values.ellipse_mode, args, values)
        outlines = arc_paths(
            spec.resolve(size),
            spec.mode,
            start_angle.radians,
            stop_angle.radians,
            legacy_stretch=values.compat.legacy_arc_stretch,
        )
        if outlines is None:
            return
        fill_outline, stroke_outline = outlines
        fill_path(surface, fill_outline, values)
        stroke_path(surface, stroke_outline, values)

    return Draw(paint, label="arc")


def line(*args: object, **coords: object) -> Draw:
    """``line(x1, y1, x2, y2)``, ``line(p1, p2)`` or ``line(start=..., end=...)``."""
    start, end = _point_list("line", args, coords, ("start", "end"))

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        (x1, y1), (x2, y2) = _resolve_points((start, end), size)
        paint_path(surface, Path().move_to(x1, y1).line_to(x2, y2), values)

    return Draw(paint, label="line")


def point(*args: object, **coords: object) -> Draw:
    """Mark one point in the stroke color; ``stroke_weight`` sets the marker size."""
    if not args and set(coords) == {"x", "y"}:
        where = CanvasPoint(coords["x"], coords["y"])
    else:
        (where,) = _point_list("point", args, coords, ("at",))

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        x, y = where.resolve(size)
        paint_point(surface, x, y, values)

    return Draw(paint, label="point")


def stroke_cap(cap: StrokeCap) -> Action:
    cap = StrokeCap(cap)

    def mutate(values: GameValues) -> None:
        values.stroke_cap = cap

    return Action(mutate, label="stroke_cap")


def triangle(*args: object, **coords: object) -> Draw:
    corners = _point_list("triangle", args, coords, ("p1", "p2", "p3"))

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        (x1, y1), (x2, y2), (x3, y3) = _resolve_points(corners, size)
        path = Path().move_to(x1, y1).line_to(x2, y2).line_to(x3, y3).line_to(x1, y1)
        paint_path(surface, path, values)

    return Draw(paint, label="triangle")


def quad(*args: object, **coords: object) -> Draw:
    """Closed four-sided polygon through the corners in the order given."""
    corners = _point_list("quad", args, coords, ("p1", "p2", "p3", "p4"))

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        (x1, y1), (x2, y2), (x3, y3), (x4, y4) = _resolve_points(corners, size)
        path = Path().move_to(x1, y1).line_to(x2, y2).line_to(x3, y3).line_to(x4, y4).close_subpath()
        paint_path(surface, path, values)

    return Draw(paint, label="quad")


def bezier(*args: object, **coords: object) -> Draw:
    """Cubic bezier from ``start`` to ``end`` steered by two control points."""
    points = _point_list("bezier", args, coords, ("start", "control1", "control2", "end"))

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        (x1, y1), (cx1, cy1), (cx2, cy2), (x2, y2) = _resolve_points(points, size)
        paint_path(surface, Path().move_to(x1, y1).curve_to(cx1, cy1, cx2, cy2, x2, y2), values)

    return Draw(paint, label="bezier")


def curve(*args: object, **coords: object) -> Draw:
    """Catmull-Rom segment between the middle two points, shaped by ``curve_tightness``."""
    points = _point_list("curve", args, coords, ("start", "control1", "control2", "end"))

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        path = catmull_rom_path(_resolve_points(points, size), values.curve_tightness)
        if path is not None:
            paint_path(surface, path, values)

    return Draw(paint, label="curve")


def curve_tightness(tightness: float) -> Action:
    def mutate(values: GameValues) -> None:
        values.curve_tightness = float(tightness)

    return Action(mutate, label="curve_tightness")


def path(source: PathSource) -> Draw:
    """Fill and stroke an arbitrary path, given ready-made or as a builder callback."""

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        if isinstance(source, Path):
            built = source
        else:
            built = Path()
            source(built)
        paint_path(surface, built, values)

    return Draw(paint, label="path")


def _image_spec(args: tuple, coords: Mapping[str, object]) -> tuple[ImageMode | None, list[CanvasValue | None]]:
    if coords and args:
        raise TypeError("image() takes either positional or named placement")
    if not coords:
        if len(args) not in (2, 3, 4):
            raise TypeError(f"image() takes 2 to 4 placement coordinates, got {len(args)}")
        padded = list(args) + [None] * (4 - len(args))
        return None, [None if v is None else CanvasValue.coerce(v) for v in padded]

    keys = set(coords)

    def pick(*names: str) -> list[CanvasValue | None]:
        return [None if coords.get(n) is None else CanvasValue.coerce(coords[n]) for n in names]

    if {"x", "y"} <= keys <= {"x", "y", "width", "height"}:
        return ImageMode.CORNER, pick("x", "y", "width", "height")
    if {"x", "y"} <= keys <= {"x", "y", "opposite_x", "opposite_y"}:
        return ImageMode.CORNERS, pick("x", "y", "opposite_x", "opposite_y")
    if {"center_x", "center_y"} <= keys <= {"center_x", "center_y", "width", "height"}:
        return ImageMode.CENTER, pick("center_x", "center_y", "width", "height")
    if keys in ({"origin"}, {"origin", "size"}, {"center"}, {"center", "size"}):
        anchor = as_point(coords.get("origin", coords.get("center")))
        extent = as_size(coords["size"]) if coords.get("size") is not None else None
        mode = ImageMode.CORNER if "origin" in keys else ImageMode.CENTER
        return mode, [anchor.x, anchor.y, extent.width if extent else None, extent.height if extent else None]
    if keys == {"origin", "opposite"}:
        origin, opposite = as_point(coords["origin"]), as_point(coords["opposite"])
        return ImageMode.CORNERS, [origin.x, origin.y, opposite.x, opposite.y]
    raise TypeError(f"image() got an unsupported set of coordinates: {sorted(keys)}")


def image_rect(
    asset: ImageAsset,
    mode: ImageMode,
    coords: Sequence[CanvasValue | None],
    size: Size,
) -> tuple[float, float, float, float]:
    """Placement rectangle for ``asset``; missing extents fall back to its natural size.

    In CORNERS mode a missing opposite coordinate is the natural width or height used
    as a coordinate, not as an extent.
    """
    p1, p2, p3, p4 = coords
    x = p1.resolve(size.width)
    y = p2.resolve(size.height)
    natural_w = float(asset.width)
    natural_h = float(asset.height)
    if mode is ImageMode.CORNERS:
        if p3 is None and p4 is None:
            return x, y, natural_w, natural_h
        ox = p3.resolve(size.width) if p3 is not None else natural_w
        oy = p4.resolve(size.height) if p4 is not None else natural_h
        return x, y, ox - x, oy - y
    w = p3.resolve(size.width) if p3 is not None else natural_w
    h = p4.resolve(size.height) if p4 is not None else natural_h
    if mode is ImageMode.CORNER:
        return x, y, w, h
    if mode is ImageMode.CENTER:
        return x - w / 2.0, y - h / 2.0, w, h
    raise ValueError(f"unsupported image mode: {mode!r}")


def image(asset: ImageAsset | None, *args: CanvasValue | Scalar | None, **coords: object) -> Draw:
    """Draw a loaded image.

    ``image(img, p1, p2[, p3, p4])`` follows ``image_mode``. Named forms: ``x/y`` with
    optional ``width/height`` or ``opposite_x/opposite_y``, ``center_x/center_y`` with
    optional ``width/height``, ``origin`` or ``center`` with optional ``size``, and
    ``origin/opposite``. A missing asset (None) draws nothing.
    """
    fixed_mode, placement = _image_spec(args, coords)

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        if asset is None:
            LOGGER.debug("image() skipped: no asset")
            return
        mode = fixed_mode or values.image_mode
        surface.draw_image(asset, *image_rect(asset, mode, placement, size))

    return Draw(paint, label="image")


def image_mode(mode: ImageMode) -> Action:
    mode = ImageMode(mode)

    def mutate(values: GameValues) -> None:
        values.image_mode = mode

    return Action(mutate, label="image_mode")


def image_width(asset: ImageAsset) -> DelayedValue[float]:
    return DelayedValue(lambda surface, size, values: float(asset.width), name="image_width")


def image_height(asset: ImageAsset) -> DelayedValue[float]:
    return DelayedValue(lambda surface, size, values: float(asset.height), name="image_height")
