from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np


@dataclass(frozen=True)
class AffineTransform:
    """2D affine map ``(x, y) -> (a*x + c*y + tx, b*x + d*y + ty)``."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @classmethod
    def identity(cls) -> AffineTransform:
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> AffineTransform:
        return cls(tx=float(tx), ty=float(ty))

    @classmethod
    def scaling(cls, sx: float, sy: float) -> AffineTransform:
        return cls(a=float(sx), d=float(sy))

    @classmethod
    def rotation(cls, radians: float) -> AffineTransform:
        cos_t = math.cos(radians)
        sin_t = math.sin(radians)
        return cls(a=cos_t, b=sin_t, c=-sin_t, d=cos_t)

    def then(self, other: AffineTransform) -> AffineTransform:
        """Return the transform that applies ``self`` first and ``other`` second."""
        return AffineTransform(
            a=self.a * other.a + self.b * other.c,
            b=self.a * other.b + self.b * other.d,
            c=self.c * other.a + self.d * other.c,
            d=self.c * other.b + self.d * other.d,
            tx=self.tx * other.a + self.ty * other.c + other.tx,
            ty=self.tx * other.b + self.ty * other.d + other.ty,
        )

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (self.a * x + self.c * y + self.tx, self.b * x + self.d * y + self.ty)

    def apply_points(self, points: np.ndarray) -> np.ndarray:
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        matrix = np.array([[self.a, self.b], [self.c, self.d]], dtype=np.float64)
        return pts @ matrix + np.array([self.tx, self.ty], dtype=np.float64)

    def determinant(self) -> float:
        return (self.a * self.d) - (self.b * self.c)

    def inverted(self) -> AffineTransform:
        det = self.determinant()
        if abs(det) < 1e-12:
            raise ValueError("transform is not invertible")
        a = self.d / det
        b = -self.b / det
        c = -self.c / det
        d = self.a / det
        return AffineTransform(
            a=a,
            b=b,
            c=c,
            d=d,
            tx=-(self.tx * a + self.ty * c),
            ty=-(self.tx * b + self.ty * d),
        )

    def line_scale(self) -> float:
        """Average linear scale, used to map stroke widths into device space."""
        return math.sqrt(abs(self.determinant()))

    @property
    def is_identity(self) -> bool:
        return self == AffineTransform()

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.tx, self.ty)
