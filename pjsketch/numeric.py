from __future__ import annotations

import math
from typing import TypeVar

from pjsketch_core.core.values import CanvasPoint, CanvasValue

C = TypeVar("C", float, CanvasValue, CanvasPoint, tuple)


def dist(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x2 - x1, y2 - y1)


def lerp(start: float, stop: float, amount: float) -> float:
    return start + (stop - start) * amount


def constrain(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def map_range(value: float, start1: float, stop1: float, start2: float, stop2: float) -> float:
    """Re-map ``value`` from one range onto another; nothing is clamped."""
    if stop1 == start1:
        raise ValueError("map_range() needs a non-empty source range")
    return start2 + (stop2 - start2) * ((value - start1) / (stop1 - start1))


def _componentwise(fn, a, b, c, d, t):
    # Points are evaluated one axis at a time; scalars and CanvasValues go straight through.
    if isinstance(a, CanvasPoint):
        return CanvasPoint(fn(a.x, b.x, c.x, d.x, t), fn(a.y, b.y, c.y, d.y, t))
    if isinstance(a, tuple):
        return tuple(fn(*axis, t) for axis in zip(a, b, c, d))
    return None


def bezier_point(a: C, b: C, c: C, d: C, t: float) -> C:
    """Position at ``t`` on the cubic bezier with anchors ``a``, ``d`` and controls ``b``, ``c``."""
    split = _componentwise(bezier_point, a, b, c, d, t)
    if split is not None:
        return split
    mt = 1.0 - t
    return mt * mt * mt * a + 3 * mt * mt * t * b + 3 * mt * t * t * c + t * t * t * d


def bezier_tangent(a: C, b: C, c: C, d: C, t: float) -> C:
    split = _componentwise(bezier_tangent, a, b, c, d, t)
    if split is not None:
        return split
    return 3 * t * t * (-a + 3 * b - 3 * c + d) + 6 * t * (a - 2 * b + c) + 3 * (-a + b)


def curve_point(a: C, b: C, c: C, d: C, t: float) -> C:
    """Catmull-Rom position between ``b`` (t=0) and ``c`` (t=1)."""
    split = _componentwise(curve_point, a, b, c, d, t)
    if split is not None:
        return split
    t2 = t * t
    t3 = t2 * t
    return 0.5 * (2 * b + (-a + c) * t + (2 * a - 5 * b + 4 * c - d) * t2 + (-a + 3 * b - 3 * c + d) * t3)


def curve_tangent(a: C, b: C, c: C, d: C, t: float) -> C:
    split = _componentwise(curve_tangent, a, b, c, d, t)
    if split is not None:
        return split
    return 0.5 * ((-a + c) + 2 * (2 * a - 5 * b + 4 * c - d) * t + 3 * (-a + 3 * b - 3 * c + d) * t * t)
