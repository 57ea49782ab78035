"""2D affine transforms. Leaf module: no svg imports.

A Matrix2D maps (x, y) to
    (scale_x*x + skew_x*y + trans_x, skew_y*x + scale_y*y + trans_y).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from vectorscene.errors import SingularMatrix
from vectorscene.utils.geometry import FixedPoint


@dataclass(frozen=True)
class Matrix2D:
    scale_x: float = 1.0
    skew_x: float = 0.0
    trans_x: float = 0.0
    skew_y: float = 0.0
    scale_y: float = 1.0
    trans_y: float = 0.0

    def multiply(self, b: Matrix2D) -> Matrix2D:
        """Return self·b: b is applied in the coordinate space produced by self."""
        return Matrix2D(
            scale_x=self.scale_x * b.scale_x + self.skew_x * b.skew_y,
            skew_x=self.scale_x * b.skew_x + self.skew_x * b.scale_y,
            trans_x=self.scale_x * b.trans_x + self.skew_x * b.trans_y + self.trans_x,
            skew_y=self.skew_y * b.scale_x + self.scale_y * b.skew_y,
            scale_y=self.skew_y * b.skew_x + self.scale_y * b.scale_y,
            trans_y=self.skew_y * b.trans_x + self.scale_y * b.trans_y + self.trans_y,
        )

    def scale(self, sx: float, sy: float) -> Matrix2D:
        return self.multiply(Matrix2D(scale_x=sx, scale_y=sy))

    def translate(self, dx: float, dy: float) -> Matrix2D:
        return self.multiply(Matrix2D(trans_x=dx, trans_y=dy))

    def rotate(self, theta: float) -> Matrix2D:
        """Rotate by theta radians (positive turns +x toward +y)."""
        cos, sin = math.cos(theta), math.sin(theta)
        return self.multiply(Matrix2D(scale_x=cos, skew_x=-sin, skew_y=sin, scale_y=cos))

    def skew_x_by(self, theta: float) -> Matrix2D:
        return self.multiply(Matrix2D(skew_x=math.tan(theta)))

    def skew_y_by(self, theta: float) -> Matrix2D:
        return self.multiply(Matrix2D(skew_y=math.tan(theta)))

    def as_array(self) -> NDArray[np.float64]:
        """3×3 homogeneous form."""
        return np.array(
            [
                [self.scale_x, self.skew_x, self.trans_x],
                [self.skew_y, self.scale_y, self.trans_y],
                [0.0, 0.0, 1.0],
            ]
        )

    def invert(self) -> Matrix2D:
        """Inverse via the adjugate (transposed cofactor matrix) over the determinant."""
        m = self.as_array()
        cofactors = np.empty((3, 3))
        for i in range(3):
            rows = [r for r in range(3) if r != i]
            for j in range(3):
                cols = [c for c in range(3) if c != j]
                minor = m[rows[0], cols[0]] * m[rows[1], cols[1]] - m[rows[0], cols[1]] * m[rows[1], cols[0]]
                cofactors[i, j] = minor if (i + j) % 2 == 0 else -minor
        determinant = float(np.dot(m[0], cofactors[0]))
        if determinant == 0:
            raise SingularMatrix(f"cannot invert singular matrix {self}")
        inv = cofactors.T / determinant
        return Matrix2D(
            scale_x=float(inv[0, 0]),
            skew_x=float(inv[0, 1]),
            trans_x=float(inv[0, 2]),
            skew_y=float(inv[1, 0]),
            scale_y=float(inv[1, 1]),
            trans_y=float(inv[1, 2]),
        )

    def transform_point(self, x: float, y: float) -> tuple[float, float]:
        return (
            x * self.scale_x + y * self.skew_x + self.trans_x,
            x * self.skew_y + y * self.scale_y + self.trans_y,
        )

    def transform_vector(self, x: float, y: float) -> tuple[float, float]:
        """Like transform_point, ignoring translation."""
        return x * self.scale_x + y * self.skew_x, x * self.skew_y + y * self.scale_y

    def transform_fixed(self, p: FixedPoint) -> FixedPoint:
        """Transform a 26.6 fixed point; translation is scaled into fixed units."""
        return FixedPoint(
            int(p.x * self.scale_x + p.y * self.skew_x + self.trans_x * 64),
            int(p.x * self.skew_y + p.y * self.scale_y + self.trans_y * 64),
        )

    def is_close(self, other: Matrix2D, tol: float = 1e-9) -> bool:
        return bool(np.allclose(self.as_array(), other.as_array(), atol=tol))


IDENTITY = Matrix2D()
