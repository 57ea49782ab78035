"""Path builder: an append-only sequence of drawing operations.

Coordinates are 26.6 fixed-point (FixedPoint); text rendering divides by 64
and prints three decimals, e.g. ``M0.000,0.000 L10.000,0.000 Z``.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

from vectorscene.utils.geometry import FIXED_ONE, Bounds, FixedPoint, bbox, winding_direction
from vectorscene.utils.matrix import Matrix2D


def _fmt(p: FixedPoint) -> str:
    return f"{p.x / FIXED_ONE:4.3f},{p.y / FIXED_ONE:4.3f}"


@dataclass(frozen=True)
class MoveTo:
    to: FixedPoint

    def __str__(self) -> str:
        return "M" + _fmt(self.to)


@dataclass(frozen=True)
class LineTo:
    to: FixedPoint

    def __str__(self) -> str:
        return "L" + _fmt(self.to)


@dataclass(frozen=True)
class QuadTo:
    ctrl: FixedPoint
    to: FixedPoint

    def __str__(self) -> str:
        return f"Q{_fmt(self.ctrl)},{_fmt(self.to)}"


@dataclass(frozen=True)
class CubicTo:
    ctrl1: FixedPoint
    ctrl2: FixedPoint
    to: FixedPoint

    def __str__(self) -> str:
        return f"C{_fmt(self.ctrl1)},{_fmt(self.ctrl2)},{_fmt(self.to)}"


@dataclass(frozen=True)
class Close:
    def __str__(self) -> str:
        return "Z"


Operation = MoveTo | LineTo | QuadTo | CubicTo | Close


@dataclass
class Path:
    """Ordered drawing program."""

    ops: list[Operation] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.ops)

    def __iter__(self) -> Iterator[Operation]:
        return iter(self.ops)

    def __getitem__(self, index: int) -> Operation:
        return self.ops[index]

    def __str__(self) -> str:
        return self.to_svg_path()

    def to_svg_path(self) -> str:
        return " ".join(str(op) for op in self.ops)

    def clear(self) -> None:
        self.ops.clear()

    def copy(self) -> Path:
        return Path(list(self.ops))

    def start(self, a: FixedPoint) -> None:
        """Start a new subpath at a."""
        self.ops.append(MoveTo(a))

    def line(self, b: FixedPoint) -> None:
        self.ops.append(LineTo(b))

    def quad_bezier(self, b: FixedPoint, c: FixedPoint) -> None:
        self.ops.append(QuadTo(b, c))

    def cube_bezier(self, b: FixedPoint, c: FixedPoint, d: FixedPoint) -> None:
        self.ops.append(CubicTo(b, c, d))

    def stop(self, close_loop: bool) -> None:
        """End the current subpath, closing it back to its start if close_loop."""
        if close_loop:
            self.ops.append(Close())

    def points(self) -> list[FixedPoint]:
        """Every point in op order, control points included."""
        pts: list[FixedPoint] = []
        for op in self.ops:
            match op:
                case MoveTo(to) | LineTo(to):
                    pts.append(to)
                case QuadTo(ctrl, to):
                    pts.extend((ctrl, to))
                case CubicTo(ctrl1, ctrl2, to):
                    pts.extend((ctrl1, ctrl2, to))
                case Close():
                    pass
        return pts

    def extent(self) -> Bounds:
        """Float bounding box of all points (control points included)."""
        pts = self.points()
        if not pts:
            return Bounds()
        arr = np.array(pts, dtype=np.float64) / FIXED_ONE
        xmin, ymin, xmax, ymax = bbox(arr)
        return Bounds(xmin, ymin, xmax - xmin, ymax - ymin)

    def winding(self) -> int:
        """Winding of the first subpath's on-curve points: 1, -1 or 0."""
        vertices: list[FixedPoint] = []
        for op in self.ops:
            match op:
                case MoveTo(to):
                    if vertices:
                        break
                    vertices.append(to)
                case LineTo(to) | QuadTo(_, to) | CubicTo(_, _, to):
                    vertices.append(to)
                case Close():
                    break
        if len(vertices) < 3:
            return 0
        return winding_direction(np.array(vertices, dtype=np.float64))

    def transformed(self, m: Matrix2D) -> Path:
        """A new path with every point mapped through m."""
        t = m.transform_fixed
        out = Path()
        for op in self.ops:
            match op:
                case MoveTo(to):
                    out.start(t(to))
                case LineTo(to):
                    out.line(t(to))
                case QuadTo(ctrl, to):
                    out.quad_bezier(t(ctrl), t(to))
                case CubicTo(ctrl1, ctrl2, to):
                    out.cube_bezier(t(ctrl1), t(ctrl2), t(to))
                case Close():
                    out.stop(True)
        return out

    def to_float_ops(self) -> list[tuple[str, tuple[float, ...]]]:
        """(command letter, flat float coordinates) per op, for painting backends."""
        result: list[tuple[str, tuple[float, ...]]] = []
        for op in self.ops:
            match op:
                case MoveTo(to):
                    result.append(("M", to.to_float()))
                case LineTo(to):
                    result.append(("L", to.to_float()))
                case QuadTo(ctrl, to):
                    result.append(("Q", ctrl.to_float() + to.to_float()))
                case CubicTo(ctrl1, ctrl2, to):
                    result.append(("C", ctrl1.to_float() + ctrl2.to_float() + to.to_float()))
                case Close():
                    result.append(("Z", ()))
        return result


class MatrixAdder:
    """Appends to a Path after mapping every point through a matrix."""

    def __init__(self, path: Path, m: Matrix2D) -> None:
        self.path = path
        self.m = m

    def start(self, a: FixedPoint) -> None:
        self.path.start(self.m.transform_fixed(a))

    def line(self, b: FixedPoint) -> None:
        self.path.line(self.m.transform_fixed(b))

    def cube_bezier(self, b: FixedPoint, c: FixedPoint, d: FixedPoint) -> None:
        t = self.m.transform_fixed
        self.path.cube_bezier(t(b), t(c), t(d))
