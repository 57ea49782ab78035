"""Shape synthesis: basic SVG shapes as Path builder calls.

All coordinates are user-space floats; the caller has already applied the
drawing origin offset.
"""

from __future__ import annotations

import math

from vectorscene.errors import ParamMismatch
from vectorscene.svg.arc import Point, circular_arc, full_ellipse
from vectorscene.svg.path import MatrixAdder, Path
from vectorscene.utils.geometry import FixedPoint
from vectorscene.utils.matrix import IDENTITY

_fixed = FixedPoint.from_float


def add_rect(path: Path, min_x: float, min_y: float, max_x: float, max_y: float, rot: float = 0.0) -> None:
    """Closed rectangle, rotated about its center by rot degrees."""
    cx, cy = (min_x + max_x) / 2, (min_y + max_y) / 2
    m = IDENTITY.translate(cx, cy).rotate(math.radians(rot)).translate(-cx, -cy)
    q = MatrixAdder(path, m)
    q.start(_fixed(min_x, min_y))
    q.line(_fixed(max_x, min_y))
    q.line(_fixed(max_x, max_y))
    q.line(_fixed(min_x, max_y))
    path.stop(True)


def round_gap(q: MatrixAdder, a: Point, t_norm: Point, l_norm: Point) -> None:
    """Bridge from a+t_norm to a+l_norm with a clockwise circular arc around a."""
    s1 = (a[0] + t_norm[0], a[1] + t_norm[1])
    s2 = (a[0] + l_norm[0], a[1] + l_norm[1])
    first, cubics = circular_arc(a, s1, s2, clockwise=True)
    q.line(_fixed(*first))
    for c in cubics:
        q.cube_bezier(_fixed(*c.ctrl1), _fixed(*c.ctrl2), _fixed(*c.end))
    # the last spline point may miss s2 by rounding
    q.line(_fixed(*s2))


def add_round_rect(
    path: Path,
    min_x: float,
    min_y: float,
    max_x: float,
    max_y: float,
    rx: float,
    ry: float,
    rot: float = 0.0,
) -> None:
    """Rectangle with elliptical corners of radii rx, ry, rotated about its center by rot degrees.

    Radii are clamped to half the width/height. The corners are drawn as
    circles of radius rx in a frame stretched vertically by rx/ry, which the
    path matrix undoes.
    """
    if rx <= 0 or ry <= 0:
        add_rect(path, min_x, min_y, max_x, max_y, rot)
        return

    w = max_x - min_x
    h = max_y - min_y
    rx = min(rx, w / 2)
    ry = min(ry, h / 2)
    stretch = rx / ry
    mid_x = min_x + w / 2
    mid_y = min_y + h / 2
    m = (
        IDENTITY.translate(mid_x, mid_y)
        .rotate(math.radians(rot))
        .scale(1, 1 / stretch)
        .translate(-mid_x, -mid_y)
    )
    max_y = mid_y + h / 2 * stretch
    min_y = mid_y - h / 2 * stretch

    q = MatrixAdder(path, m)
    q.start(_fixed(min_x + rx, min_y))
    q.line(_fixed(max_x - rx, min_y))
    round_gap(q, (max_x - rx, min_y + rx), (0, -rx), (rx, 0))
    q.line(_fixed(max_x, max_y - rx))
    round_gap(q, (max_x - rx, max_y - rx), (rx, 0), (0, rx))
    q.line(_fixed(min_x + rx, max_y))
    round_gap(q, (min_x + rx, max_y - rx), (0, rx), (-rx, 0))
    q.line(_fixed(min_x, min_y + rx))
    round_gap(q, (min_x + rx, min_y + rx), (-rx, 0), (0, -rx))
    path.stop(True)


def add_ellipse(path: Path, cx: float, cy: float, rx: float, ry: float) -> Point:
    """Closed ellipse; returns the start/end point (the rightmost point)."""
    start, cubics = full_ellipse((cx, cy), rx, ry)
    path.start(_fixed(*start))
    for c in cubics:
        path.cube_bezier(_fixed(*c.ctrl1), _fixed(*c.ctrl2), _fixed(*c.end))
    path.stop(True)
    return start


def add_line(path: Path, x1: float, y1: float, x2: float, y2: float) -> None:
    path.start(_fixed(x1, y1))
    path.line(_fixed(x2, y2))


def add_polyline(path: Path, coords: list[float], close: bool = False) -> None:
    """Open (or, for polygons, closed) run of straight segments.

    Fewer than three points draws nothing.
    """
    if len(coords) % 2 != 0:
        raise ParamMismatch(f"polyline has an odd number of coordinates ({len(coords)})")
    if len(coords) <= 4:
        return
    path.start(_fixed(coords[0], coords[1]))
    for i in range(2, len(coords) - 1, 2):
        path.line(_fixed(coords[i], coords[i + 1]))
    if close:
        path.stop(True)
