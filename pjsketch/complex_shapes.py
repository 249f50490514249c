from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from pjsketch_core.core.errors import ShapeAssemblyError
from pjsketch_core.core.instructions import Action, Draw
from pjsketch_core.core.state import (
    BeginShapeMode,
    BezierVertex,
    EndShapeMode,
    GameValues,
    PointVertex,
    ShapeType,
    StrokeJoin,
    Vertex,
    vertex_position,
)
from pjsketch_core.core.values import CanvasPoint, Size
from pjsketch_core.render.path import Path
from pjsketch_core.render.surface import RenderSurface

from ._paint import paint_path, paint_point
from .geometry import as_point, catmull_rom_path

Point = tuple[float, float]


@dataclass(frozen=True)
class AssembledShape:
    """Geometry produced by ``end_shape``: one path to paint, or point markers."""

    path: Path | None = None
    markers: tuple[Point, ...] = ()


def _single_point(name: str, args: tuple, coords: dict) -> CanvasPoint:
    if coords:
        if args or set(coords) != {"x", "y"}:
            raise TypeError(f"{name}() takes x and y")
        return CanvasPoint(coords["x"], coords["y"])
    if len(args) == 2:
        return CanvasPoint(args[0], args[1])
    if len(args) == 1:
        return as_point(args[0])
    raise TypeError(f"{name}() takes (x, y) or a single point")


def begin_shape(mode: BeginShapeMode | None = None) -> Action:
    """Start collecting vertices; ``mode`` picks how ``end_shape`` groups them."""
    mode = None if mode is None else BeginShapeMode(mode)

    def mutate(values: GameValues) -> None:
        values.begin_shape_mode = mode
        values.vertices = []
        values.shape_type = ShapeType.REGULAR

    return Action(mutate, label="begin_shape")


def vertex(*args: object, **coords: object) -> Action:
    where = _single_point("vertex", args, coords)

    def mutate(values: GameValues) -> None:
        values.vertices.append(PointVertex(where.x, where.y))

    return Action(mutate, label="vertex")


def curve_vertex(*args: object, **coords: object) -> Action:
    """Add a Catmull-Rom control point and switch the shape to curve assembly."""
    where = _single_point("curve_vertex", args, coords)

    def mutate(values: GameValues) -> None:
        values.shape_type = ShapeType.CURVE
        values.vertices.append(PointVertex(where.x, where.y))

    return Action(mutate, label="curve_vertex")


def bezier_vertex(*args: object, **coords: object) -> Action:
    """``bezier_vertex(cx1, cy1, cx2, cy2, x, y)`` or ``bezier_vertex(control1=, control2=, end=)``."""
    if coords:
        if args or set(coords) != {"control1", "control2", "end"}:
            raise TypeError("bezier_vertex() takes control1, control2 and end")
        c1, c2, end = (as_point(coords[k]) for k in ("control1", "control2", "end"))
    elif len(args) == 6:
        c1, c2, end = CanvasPoint(args[0], args[1]), CanvasPoint(args[2], args[3]), CanvasPoint(args[4], args[5])
    elif len(args) == 3:
        c1, c2, end = (as_point(a) for a in args)
    else:
        raise TypeError(f"bezier_vertex() takes 6 coordinates or 3 points, got {len(args)} arguments")
    added = BezierVertex(c1.x, c1.y, c2.x, c2.y, end.x, end.y)

    def mutate(values: GameValues) -> None:
        values.shape_type = ShapeType.BEZIER
        values.vertices.append(added)

    return Action(mutate, label="bezier_vertex")


def _positions(vertices: Sequence[Vertex], size: Size) -> list[Point]:
    out: list[Point] = []
    for v in vertices:
        x, y = vertex_position(v)
        out.append((x.resolve(size.width), y.resolve(size.height)))
    return out


def _polygon(path: Path, points: Sequence[Point], *, close: bool = True) -> None:
    path.move_to(*points[0])
    for p in points[1:]:
        path.line_to(*p)
    if close:
        path.close_subpath()


def _bezier_path(vertices: Sequence[Vertex], size: Size, close: bool) -> Path:
    w, h = size.width, size.height
    first_x, first_y = vertex_position(vertices[0])
    path = Path().move_to(first_x.resolve(w), first_y.resolve(h))
    for v in vertices[1:]:
        if isinstance(v, BezierVertex):
            path.curve_to(
                v.cx1.resolve(w), v.cy1.resolve(h), v.cx2.resolve(w), v.cy2.resolve(h), v.x.resolve(w), v.y.resolve(h)
            )
        else:
            x, y = vertex_position(v)
            path.line_to(x.resolve(w), y.resolve(h))
    if close:
        path.close_subpath()
    return path


def _grouped_path(mode: BeginShapeMode, points: Sequence[Point], close: bool) -> Path:
    n = len(points)
    path = Path()
    if mode is BeginShapeMode.LINES:
        for i in range(0, n - 1, 2):
            _polygon(path, points[i : i + 2], close=False)
    elif mode is BeginShapeMode.TRIANGLES:
        for i in range(0, n - 2, 3):
            _polygon(path, points[i : i + 3])
    elif mode is BeginShapeMode.TRIANGLE_STRIP:
        for i in range(n - 2):
            _polygon(path, points[i : i + 3])
    elif mode is BeginShapeMode.TRIANGLE_FAN:
        if n > 2:
            for i in range(2, n):
                _polygon(path, (points[0], points[i - 1], points[i]))
    elif mode is BeginShapeMode.QUADS:
        for i in range(0, n - 3, 4):
            _polygon(path, points[i : i + 4])
    elif mode is BeginShapeMode.QUAD_STRIP:
        if n > 3:
            for i in range(0, n, 2):
                if i + 3 < n:
                    _polygon(path, (points[i + 2], points[i], points[i + 1], points[i + 3]), close=False)
                elif i + 1 < n:
                    _polygon(path, points[i : i + 2], close=False)
            if close:
                path.close_subpath()
    else:
        raise ValueError(f"unsupported begin_shape mode: {mode!r}")
    return path


def assemble_shape(
    vertices: Sequence[Vertex],
    begin_mode: BeginShapeMode | None,
    shape_type: ShapeType,
    size: Size,
    *,
    close: bool = False,
    tightness: float = 0.0,
) -> AssembledShape:
    """Turn the vertex buffer into geometry.

    Bezier shapes take precedence over ``begin_mode``; curve shapes need four points and
    produce nothing with fewer. Incomplete trailing groups are dropped.
    """
    if not vertices:
        raise ShapeAssemblyError("end_shape() with no vertices; call vertex() after begin_shape()")
    if shape_type is ShapeType.BEZIER:
        return AssembledShape(path=_bezier_path(vertices, size, close))
    if shape_type is ShapeType.CURVE:
        return AssembledShape(path=catmull_rom_path(_positions(vertices, size), tightness))
    if shape_type is not ShapeType.REGULAR:
        raise ValueError(f"unsupported shape type: {shape_type!r}")

    points = _positions(vertices, size)
    if begin_mode is None:
        path = Path()
        _polygon(path, points, close=close)
        return AssembledShape(path=path)
    if begin_mode is BeginShapeMode.POINTS:
        return AssembledShape(markers=tuple(points))
    return AssembledShape(path=_grouped_path(begin_mode, points, close))


def end_shape(mode: EndShapeMode | None = None) -> Draw:
    """Paint the collected vertices; ``CLOSE`` joins the last vertex back to the first."""
    close = mode is not None and EndShapeMode(mode) is EndShapeMode.CLOSE

    def paint(surface: RenderSurface, size: Size, values: GameValues) -> None:
        shape = assemble_shape(
            values.vertices,
            values.begin_shape_mode,
            values.shape_type,
            size,
            close=close,
            tightness=values.curve_tightness,
        )
        for x, y in shape.markers:
            paint_point(surface, x, y, values)
        if shape.path is not None and not shape.path.is_empty:
            paint_path(surface, shape.path, values)

    return Draw(paint, label="end_shape")


def stroke_join(join: StrokeJoin) -> Action:
    join = StrokeJoin(join)

    def mutate(values: GameValues) -> None:
        values.stroke_join = join

    return Action(mutate, label="stroke_join")
