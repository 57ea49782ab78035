"""Leaf-node geometry helpers. No svg imports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

# 26.6 fixed point: 6 fractional bits, 1/64 px resolution.
FIXED_SHIFT = 6
FIXED_ONE = 1 << FIXED_SHIFT


class FixedPoint(NamedTuple):
    """A point in 26.6 fixed-point sub-pixel units."""

    x: int
    y: int

    @classmethod
    def from_float(cls, x: float, y: float) -> FixedPoint:
        # int() truncates toward zero
        return cls(int(x * FIXED_ONE), int(y * FIXED_ONE))

    def to_float(self) -> tuple[float, float]:
        return self.x / FIXED_ONE, self.y / FIXED_ONE


@dataclass
class Bounds:
    """An axis-aligned box such as a viewport or a path extent."""

    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def signed_area(points: NDArray[np.float64]) -> float:
    """Shoelace formula over a closed point loop. Positive = CCW in y-up space."""
    if len(points) < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def winding_direction(points: NDArray[np.float64]) -> int:
    """Return 1 for CCW, -1 for CW, 0 if degenerate."""
    sa = signed_area(points)
    if sa > 0:
        return 1
    elif sa < 0:
        return -1
    return 0
