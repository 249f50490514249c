from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable, Iterator, Union

import numpy as np

from .transform import AffineTransform


_KAPPA = 0.5522847498307936
_TAU = 2.0 * math.pi


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class CurveTo:
    c1x: float
    c1y: float
    c2x: float
    c2y: float
    x: float
    y: float


@dataclass(frozen=True)
class ClosePath:
    pass


PathCommand = Union[MoveTo, LineTo, CurveTo, ClosePath]


@dataclass(frozen=True)
class Polyline:
    points: np.ndarray
    closed: bool


class Path:
    """Ordered list of path commands, built the way a 2D canvas path is built."""

    def __init__(self, commands: Iterable[PathCommand] = ()) -> None:
        self._commands: list[PathCommand] = []
        self._subpath_start: tuple[float, float] | None = None
        self._current: tuple[float, float] | None = None
        for command in commands:
            self._append(command)

    def _append(self, command: PathCommand) -> None:
        if isinstance(command, MoveTo):
            self.move_to(command.x, command.y)
        elif isinstance(command, LineTo):
            self.line_to(command.x, command.y)
        elif isinstance(command, CurveTo):
            self.curve_to(command.c1x, command.c1y, command.c2x, command.c2y, command.x, command.y)
        elif isinstance(command, ClosePath):
            self.close_subpath()
        else:
            raise ValueError(f"unsupported path command: {command!r}")

    @property
    def commands(self) -> tuple[PathCommand, ...]:
        return tuple(self._commands)

    @property
    def current_point(self) -> tuple[float, float] | None:
        return self._current

    @property
    def is_empty(self) -> bool:
        return not self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[PathCommand]:
        return iter(self._commands)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._commands == other._commands

    def __repr__(self) -> str:
        return f"Path({self._commands!r})"

    def move_to(self, x: float, y: float) -> Path:
        point = (float(x), float(y))
        self._commands.append(MoveTo(*point))
        self._subpath_start = point
        self._current = point
        return self

    def line_to(self, x: float, y: float) -> Path:
        if self._current is None:
            return self.move_to(x, y)
        point = (float(x), float(y))
        self._commands.append(LineTo(*point))
        self._current = point
        return self

    def curve_to(self, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float) -> Path:
        if self._current is None:
            self.move_to(c1x, c1y)
        self._commands.append(CurveTo(float(c1x), float(c1y), float(c2x), float(c2y), float(x), float(y)))
        self._current = (float(x), float(y))
        return self

    def close_subpath(self) -> Path:
        if self._current is None or isinstance(self._commands[-1], ClosePath):
            return self
        self._commands.append(ClosePath())
        self._current = self._subpath_start
        return self

    def add_path(self, other: Path) -> Path:
        for command in other:
            self._append(command)
        return self

    def add_rect(self, x: float, y: float, width: float, height: float) -> Path:
        self.move_to(x, y)
        self.line_to(x + width, y)
        self.line_to(x + width, y + height)
        self.line_to(x, y + height)
        return self.close_subpath()

    def add_rounded_rect(self, x: float, y: float, width: float, height: float, radius: float) -> Path:
        left = min(x, x + width)
        top = min(y, y + height)
        w = abs(width)
        h = abs(height)
        r = max(0.0, min(float(radius), w / 2.0, h / 2.0))
        if r <= 0.0:
            return self.add_rect(x, y, width, height)
        k = r * _KAPPA
        right = left + w
        bottom = top + h
        self.move_to(left + r, top)
        self.line_to(right - r, top)
        self.curve_to(right - r + k, top, right, top + r - k, right, top + r)
        self.line_to(right, bottom - r)
        self.curve_to(right, bottom - r + k, right - r + k, bottom, right - r, bottom)
        self.line_to(left + r, bottom)
        self.curve_to(left + r - k, bottom, left, bottom - r + k, left, bottom - r)
        self.line_to(left, top + r)
        self.curve_to(left, top + r - k, left + r - k, top, left + r, top)
        return self.close_subpath()

    def add_ellipse(self, x: float, y: float, width: float, height: float) -> Path:
        rx = width / 2.0
        ry = height / 2.0
        cx = x + rx
        cy = y + ry
        kx = rx * _KAPPA
        ky = ry * _KAPPA
        self.move_to(cx + rx, cy)
        self.curve_to(cx + rx, cy + ky, cx + kx, cy + ry, cx, cy + ry)
        self.curve_to(cx - kx, cy + ry, cx - rx, cy + ky, cx - rx, cy)
        self.curve_to(cx - rx, cy - ky, cx - kx, cy - ry, cx, cy - ry)
        self.curve_to(cx + kx, cy - ry, cx + rx, cy - ky, cx + rx, cy)
        return self.close_subpath()

    def add_arc(
        self,
        cx: float,
        cy: float,
        radius: float,
        start: float,
        end: float,
        *,
        clockwise: bool = False,
    ) -> Path:
        """Append a circular arc; angles in radians, increasing unless ``clockwise``.

        A line joins the current point to the arc start when the path already has one.
        """
        sweep = end - start
        if clockwise:
            sweep = -sweep
        if sweep >= _TAU:
            sweep = _TAU
        elif sweep < 0:
            sweep = sweep % _TAU
        direction = -1.0 if clockwise else 1.0
        sx = cx + radius * math.cos(start)
        sy = cy + radius * math.sin(start)
        if self._current is None:
            self.move_to(sx, sy)
        else:
            self.line_to(sx, sy)
        if sweep == 0.0:
            return self
        segments = max(1, int(math.ceil(sweep / (math.pi / 2.0) - 1e-9)))
        step = sweep / segments
        angle = start
        for _ in range(segments):
            p0x, p0y, p1x, p1y, p2x, p2y, p3x, p3y = _acute_arc_to_bezier(angle, direction * step)
            self.curve_to(
                cx + radius * p1x,
                cy + radius * p1y,
                cx + radius * p2x,
                cy + radius * p2y,
                cx + radius * p3x,
                cy + radius * p3y,
            )
            angle += direction * step
        return self

    def transformed(self, transform: AffineTransform) -> Path:
        if transform.is_identity:
            return Path(self._commands)
        out = Path()
        for command in self._commands:
            if isinstance(command, MoveTo):
                out.move_to(*transform.apply(command.x, command.y))
            elif isinstance(command, LineTo):
                out.line_to(*transform.apply(command.x, command.y))
            elif isinstance(command, CurveTo):
                c1 = transform.apply(command.c1x, command.c1y)
                c2 = transform.apply(command.c2x, command.c2y)
                end = transform.apply(command.x, command.y)
                out.curve_to(c1[0], c1[1], c2[0], c2[1], end[0], end[1])
            else:
                out.close_subpath()
        return out

    def subpaths(self) -> list[list[PathCommand]]:
        groups: list[list[PathCommand]] = []
        for command in self._commands:
            if isinstance(command, MoveTo) or not groups:
                groups.append([])
            groups[-1].append(command)
        return groups

    def flatten(self, max_steps: int = 64) -> list[Polyline]:
        """Sample curves into polylines, one per subpath."""
        out: list[Polyline] = []
        for group in self.subpaths():
            points: list[tuple[float, float]] = []
            closed = False
            for command in group:
                if isinstance(command, (MoveTo, LineTo)):
                    points.append((command.x, command.y))
                elif isinstance(command, CurveTo):
                    p0 = points[-1] if points else (command.c1x, command.c1y)
                    samples = _sample_cubic(
                        p0,
                        (command.c1x, command.c1y),
                        (command.c2x, command.c2y),
                        (command.x, command.y),
                        max_steps,
                    )
                    points.extend((float(px), float(py)) for px, py in samples[1:])
                elif isinstance(command, ClosePath):
                    closed = True
            if points:
                out.append(Polyline(points=np.asarray(points, dtype=np.float64), closed=closed))
        return out

    def bounds(self) -> tuple[float, float, float, float] | None:
        polylines = self.flatten()
        if not polylines:
            return None
        pts = np.concatenate([poly.points for poly in polylines], axis=0)
        return (
            float(pts[:, 0].min()),
            float(pts[:, 1].min()),
            float(pts[:, 0].max()),
            float(pts[:, 1].max()),
        )


def cubic_point(
    p0: tuple[float, float],
    p1: tuple[float, float],
    p2: tuple[float, float],
    p3: tuple[float, float],
    t: float,
) -> tuple[float, float]:
    mt = 1.0 - t
    a = mt * mt * mt
    b = 3.0 * mt * mt * t
    c = 3.0 * mt * t * t
    d = t * t * t
    return (
        a * p0[0] + b * p1[0] + c * p2[0] + d * p3[0],
        a * p0[1] + b * p1[1] + c * p2[1] + d * p3[1],
    )


def _sample_cubic(p0, p1, p2, p3, max_steps: int) -> np.ndarray:
    ctrl = np.array([p0, p1, p2, p3], dtype=np.float64)
    hull = float(np.sum(np.hypot(*np.diff(ctrl, axis=0).T)))
    steps = int(max(4, min(max_steps, math.ceil(hull / 2.0))))
    t = np.linspace(0.0, 1.0, steps + 1).reshape(-1, 1)
    mt = 1.0 - t
    return (mt**3) * ctrl[0] + 3.0 * (mt**2) * t * ctrl[1] + 3.0 * mt * (t**2) * ctrl[2] + (t**3) * ctrl[3]


def _acute_arc_to_bezier(start: float, size: float) -> tuple[float, ...]:
    # Unit-circle bezier for an arc of at most a quarter turn.
    alpha = size / 2.0
    cos_alpha = math.cos(alpha)
    sin_alpha = math.sin(alpha)
    cot_alpha = 1.0 / math.tan(alpha)
    phi = start + alpha
    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)
    lmbda = (4.0 - cos_alpha) / 3.0
    mu = sin_alpha + (cos_alpha - lmbda) * cot_alpha
    return (
        math.cos(start),
        math.sin(start),
        lmbda * cos_phi + mu * sin_phi,
        lmbda * sin_phi - mu * cos_phi,
        lmbda * cos_phi - mu * sin_phi,
        lmbda * sin_phi + mu * cos_phi,
        math.cos(start + size),
        math.sin(start + size),
    )
