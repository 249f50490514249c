from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence, Union

from pjsketch_core.core.state import ShapeMode
from pjsketch_core.core.values import CanvasPoint, CanvasSize, CanvasValue, Scalar, Size
from pjsketch_core.render.path import Path
from pjsketch_core.render.transform import AffineTransform

Coordinate = Union[CanvasValue, Scalar]
PointLike = Union[CanvasPoint, Sequence[Coordinate]]
SizeLike = Union[CanvasSize, Sequence[Coordinate]]


def as_point(value: PointLike) -> CanvasPoint:
    if isinstance(value, CanvasPoint):
        return value
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return CanvasPoint(value[0], value[1])
    raise TypeError(f"expected a CanvasPoint or an (x, y) pair, got {value!r}")


def as_size(value: SizeLike) -> CanvasSize:
    if isinstance(value, CanvasSize):
        return value
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return CanvasSize(value[0], value[1])
    raise TypeError(f"expected a CanvasSize or a (width, height) pair, got {value!r}")


@dataclass(frozen=True)
class Box:
    """A resolved pixel rectangle. Width and height may be negative."""

    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2.0, self.y + self.height / 2.0


@dataclass(frozen=True)
class BoxSpec:
    """Four unresolved coordinates tagged with the shape mode that reads them.

    ``uniform_radius`` makes a RADIUS spec resolve both radii against the width.
    """

    mode: ShapeMode
    p1: CanvasValue
    p2: CanvasValue
    p3: CanvasValue
    p4: CanvasValue
    uniform_radius: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", ShapeMode(self.mode))
        for name in ("p1", "p2", "p3", "p4"):
            object.__setattr__(self, name, CanvasValue.coerce(getattr(self, name)))

    def resolve(self, size: Size) -> Box:
        w = size.width
        h = size.height
        a = self.p1.resolve(w)
        b = self.p2.resolve(h)
        if self.mode is ShapeMode.CORNER:
            return Box(a, b, self.p3.resolve(w), self.p4.resolve(h))
        if self.mode is ShapeMode.CORNERS:
            return Box(a, b, self.p3.resolve(w) - a, self.p4.resolve(h) - b)
        if self.mode is ShapeMode.CENTER:
            width = self.p3.resolve(w)
            height = self.p4.resolve(h)
            return Box(a - width / 2.0, b - height / 2.0, width, height)
        if self.mode is ShapeMode.RADIUS:
            rx = self.p3.resolve(w)
            ry = self.p4.resolve(w if self.uniform_radius else h)
            return Box(a - rx, b - ry, rx * 2.0, ry * 2.0)
        raise ValueError(f"unsupported shape mode: {self.mode!r}")


def box_spec_from_keywords(name: str, coords: Mapping[str, object]) -> BoxSpec:
    """Map one of the named coordinate forms of rect/ellipse/arc to a fixed-mode spec."""
    keys = frozenset(coords)
    c = coords
    if keys == {"x", "y", "width", "height"}:
        return BoxSpec(ShapeMode.CORNER, c["x"], c["y"], c["width"], c["height"])
    if keys == {"x", "y", "opposite_x", "opposite_y"}:
        return BoxSpec(ShapeMode.CORNERS, c["x"], c["y"], c["opposite_x"], c["opposite_y"])
    if keys == {"center_x", "center_y", "width", "height"}:
        return BoxSpec(ShapeMode.CENTER, c["center_x"], c["center_y"], c["width"], c["height"])
    if keys == {"center_x", "center_y", "x_radius", "y_radius"}:
        return BoxSpec(ShapeMode.RADIUS, c["center_x"], c["center_y"], c["x_radius"], c["y_radius"])
    if keys == {"center_x", "center_y", "radius"}:
        return BoxSpec(ShapeMode.RADIUS, c["center_x"], c["center_y"], c["radius"], c["radius"], uniform_radius=True)
    if keys == {"origin", "size"}:
        origin, size = as_point(c["origin"]), as_size(c["size"])
        return BoxSpec(ShapeMode.CORNER, origin.x, origin.y, size.width, size.height)
    if keys == {"origin", "opposite"}:
        origin, opposite = as_point(c["origin"]), as_point(c["opposite"])
        return BoxSpec(ShapeMode.CORNERS, origin.x, origin.y, opposite.x, opposite.y)
    if keys == {"center", "size"}:
        center, size = as_point(c["center"]), as_size(c["size"])
        return BoxSpec(ShapeMode.CENTER, center.x, center.y, size.width, size.height)
    raise TypeError(f"{name}() got an unsupported set of coordinates: {sorted(keys)}")


def arc_paths(
    box: Box,
    mode: ShapeMode,
    start: float,
    stop: float,
    *,
    legacy_stretch: bool = True,
) -> tuple[Path, Path] | None:
    """Fill and stroke outlines of an arc inscribed in ``box``; angles in radians.

    The arc is built as a circle of radius ``box.width / 2`` and then squashed to the box
    height. With ``legacy_stretch`` CENTER boxes stay circular and the other modes are
    scaled about the y origin and shifted by ``cy * (1 - k)``, which moves the arc off
    center whenever width and height differ. Without it the squash happens about the
    box center for every mode.
    """
    if box.width == 0:
        return None
    cx, cy = box.center
    radius = box.width / 2.0
    stroke = Path().add_arc(cx, cy, radius, start, stop)
    fill = Path().add_arc(cx, cy, radius, start, stop).line_to(cx, cy).close_subpath()
    k = box.height / box.width
    if legacy_stretch:
        if mode is ShapeMode.CENTER:
            return fill, stroke
        squash = AffineTransform.translation(0.0, cy - cy * k).then(AffineTransform.scaling(1.0, k))
    else:
        squash = (
            AffineTransform.translation(-cx, -cy)
            .then(AffineTransform.scaling(1.0, k))
            .then(AffineTransform.translation(cx, cy))
        )
    return fill.transformed(squash), stroke.transformed(squash)


def catmull_rom_path(points: Sequence[tuple[float, float]], tightness: float = 0.0) -> Path | None:
    """Cubic segments through ``points[1:-1]``; the first and last points only steer.

    Returns None for fewer than four points.
    """
    n = len(points)
    if n < 4:
        return None
    s = 1.0 - tightness
    path = Path().move_to(*points[1])
    for i in range(1, n - 2):
        x0, y0 = points[i - 1]
        x1, y1 = points[i]
        x2, y2 = points[i + 1]
        x3, y3 = points[i + 2]
        path.curve_to(
            x1 + (s * x2 - s * x0) / 6.0,
            y1 + (s * y2 - s * y0) / 6.0,
            x2 + (s * x1 - s * x3) / 6.0,
            y2 + (s * y1 - s * y3) / 6.0,
            x2,
            y2,
        )
    return path
