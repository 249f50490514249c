from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Union


Scalar = Union[int, float]


@dataclass(frozen=True)
class Size:
    """Pixel extent of a drawing surface."""

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("surface size must be >= 0")


@dataclass(frozen=True)
class CanvasValue:
    """A coordinate made of a pixel offset plus a fraction of the axis extent.

    ``resolve(extent)`` is always ``relative * extent + absolute``; nothing is clamped.
    """

    absolute: float = 0.0
    relative: float = 0.0

    @classmethod
    def from_absolute(cls, value: Scalar) -> CanvasValue:
        return cls(absolute=float(value))

    @classmethod
    def from_relative(cls, value: Scalar) -> CanvasValue:
        return cls(relative=float(value))

    @classmethod
    def zero(cls) -> CanvasValue:
        return cls()

    @classmethod
    def coerce(cls, value: CanvasValue | Scalar) -> CanvasValue:
        if isinstance(value, CanvasValue):
            return value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"cannot use {value!r} as a canvas coordinate")
        return cls(absolute=float(value))

    def resolve(self, extent: float) -> float:
        return self.relative * extent + self.absolute

    def __add__(self, other: CanvasValue | Scalar) -> CanvasValue:
        other = CanvasValue.coerce(other)
        return CanvasValue(self.absolute + other.absolute, self.relative + other.relative)

    __radd__ = __add__

    def __sub__(self, other: CanvasValue | Scalar) -> CanvasValue:
        other = CanvasValue.coerce(other)
        return CanvasValue(self.absolute - other.absolute, self.relative - other.relative)

    def __rsub__(self, other: CanvasValue | Scalar) -> CanvasValue:
        return CanvasValue.coerce(other) - self

    def __mul__(self, factor: Scalar) -> CanvasValue:
        if isinstance(factor, CanvasValue):
            return NotImplemented
        return CanvasValue(self.absolute * factor, self.relative * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: Scalar) -> CanvasValue:
        if isinstance(divisor, CanvasValue):
            return NotImplemented
        return CanvasValue(self.absolute / divisor, self.relative / divisor)

    def __neg__(self) -> CanvasValue:
        return self * -1


def px(value: Scalar) -> CanvasValue:
    return CanvasValue.from_absolute(value)


def rel(value: Scalar) -> CanvasValue:
    return CanvasValue.from_relative(value)


@dataclass(frozen=True)
class CanvasPoint:
    """An (x, y) pair where x resolves against width and y against height."""

    x: CanvasValue = CanvasValue()
    y: CanvasValue = CanvasValue()

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", CanvasValue.coerce(self.x))
        object.__setattr__(self, "y", CanvasValue.coerce(self.y))

    @classmethod
    def from_absolute(cls, x: Scalar = 0.0, y: Scalar = 0.0) -> CanvasPoint:
        return cls(px(x), px(y))

    @classmethod
    def from_relative(cls, x: Scalar = 0.0, y: Scalar = 0.0) -> CanvasPoint:
        return cls(rel(x), rel(y))

    @classmethod
    def zero(cls) -> CanvasPoint:
        return cls()

    def resolve(self, size: Size) -> tuple[float, float]:
        return self.x.resolve(size.width), self.y.resolve(size.height)

    def __add__(self, other: CanvasPoint) -> CanvasPoint:
        return CanvasPoint(self.x + other.x, self.y + other.y)

    def __sub__(self, other: CanvasPoint) -> CanvasPoint:
        return CanvasPoint(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: Scalar) -> CanvasPoint:
        return CanvasPoint(self.x * factor, self.y * factor)

    __rmul__ = __mul__


@dataclass(frozen=True)
class CanvasSize:
    width: CanvasValue = CanvasValue()
    height: CanvasValue = CanvasValue()

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", CanvasValue.coerce(self.width))
        object.__setattr__(self, "height", CanvasValue.coerce(self.height))

    @classmethod
    def from_absolute(cls, width: Scalar = 0.0, height: Scalar = 0.0) -> CanvasSize:
        return cls(px(width), px(height))

    @classmethod
    def from_relative(cls, width: Scalar = 0.0, height: Scalar = 0.0) -> CanvasSize:
        return cls(rel(width), rel(height))

    @classmethod
    def zero(cls) -> CanvasSize:
        return cls()

    def resolve(self, size: Size) -> tuple[float, float]:
        return self.width.resolve(size.width), self.height.resolve(size.height)

    def __add__(self, other: CanvasSize) -> CanvasSize:
        return CanvasSize(self.width + other.width, self.height + other.height)

    def __sub__(self, other: CanvasSize) -> CanvasSize:
        return CanvasSize(self.width - other.width, self.height - other.height)


@dataclass(frozen=True)
class Angle:
    """An angle stored in radians. Plain numbers passed where an angle is expected are degrees."""

    radians: float = 0.0

    @classmethod
    def from_degrees(cls, value: Scalar) -> Angle:
        return cls(math.radians(value))

    @classmethod
    def from_radians(cls, value: Scalar) -> Angle:
        return cls(float(value))

    @classmethod
    def coerce(cls, value: Angle | Scalar) -> Angle:
        if isinstance(value, Angle):
            return value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"cannot use {value!r} as an angle")
        return cls.from_degrees(value)

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)


def degrees(value: Scalar) -> Angle:
    return Angle.from_degrees(value)


def radians(value: Scalar) -> Angle:
    return Angle.from_radians(value)
