"""Arc solver: elliptical and circular arcs as cubic Bézier splines.

Control points follow L. Maisonobe, "Drawing an elliptical arc using
polylines, quadratic or cubic Bezier curves" (2003): for a segment spanning
Δ radians of the parametric angle, the tangents at both ends are scaled by
sin(Δ)·(√(4+3·tan²(Δ/2)) − 1)/3.

Pure float geometry; callers convert to fixed point.
"""

from __future__ import annotations

import math
from typing import NamedTuple

Point = tuple[float, float]

# Widest parametric span a single cubic may cover.
MAX_SEGMENT_ANGLE = math.pi / 8
CUBICS_PER_HALF_CIRCLE = 8


class Cubic(NamedTuple):
    ctrl1: Point
    ctrl2: Point
    end: Point


class EllipseCenter(NamedTuple):
    center: Point
    rx: float
    ry: float


def maisonobe_alpha(d_eta: float) -> float:
    t = math.tan(d_eta / 2)
    return math.sin(d_eta) * (math.sqrt(4 + 3 * t * t) - 1) / 3


def ellipse_point_at(rx: float, ry: float, sin_rot: float, cos_rot: float, eta: float, center: Point) -> Point:
    a_cos = rx * math.cos(eta)
    b_sin = ry * math.sin(eta)
    return (
        center[0] + a_cos * cos_rot - b_sin * sin_rot,
        center[1] + a_cos * sin_rot + b_sin * cos_rot,
    )


def ellipse_prime(rx: float, ry: float, sin_rot: float, cos_rot: float, eta: float) -> Point:
    """Tangent vector of the parameterized ellipse at eta."""
    b_cos = ry * math.cos(eta)
    a_sin = rx * math.sin(eta)
    return -a_sin * cos_rot - b_cos * sin_rot, -a_sin * sin_rot + b_cos * cos_rot


def find_ellipse_center(
    rx: float,
    ry: float,
    rotation: float,
    start: Point,
    end: Point,
    large_arc: bool,
    sweep: bool,
) -> EllipseCenter:
    """Locate the center of the ellipse through start and end.

    Works in a frame with the origin at start and the ellipse axes aligned,
    with x scaled by ry/rx so the ellipse becomes a circle of radius ry; the
    center then lies on the perpendicular bisector of the chord. If the
    radii cannot span the chord they are grown uniformly to the smallest
    size that can, and the adjusted radii are returned with the center.

    rotation is in radians.
    """
    cos, sin = math.cos(rotation), math.sin(rotation)
    nx, ny = end[0] - start[0], end[1] - start[1]
    nx, ny = nx * cos + ny * sin, -nx * sin + ny * cos
    nx *= ry / rx

    mid_x, mid_y = nx / 2, ny / 2
    mid_len_sq = mid_x * mid_x + mid_y * mid_y

    hr = 0.0
    if ry * ry < mid_len_sq:
        nry = math.sqrt(mid_len_sq)
        rx = nry if rx == ry else rx * nry / ry
        ry = nry
    elif mid_len_sq > 0:
        hr = math.sqrt(ry * ry - mid_len_sq) / math.sqrt(mid_len_sq)

    # hr == 0 means both candidate centers coincide
    if large_arc == sweep:
        cx, cy = mid_x + mid_y * hr, mid_y - mid_x * hr
    else:
        cx, cy = mid_x - mid_y * hr, mid_y + mid_x * hr

    cx *= rx / ry
    return EllipseCenter(
        (cx * cos - cy * sin + start[0], cx * sin + cy * cos + start[1]),
        rx,
        ry,
    )


def elliptical_spline(
    center: Point,
    rx: float,
    ry: float,
    rotation: float,
    eta_start: float,
    delta_eta: float,
    end: Point | None = None,
) -> list[Cubic]:
    """Cubic approximation of an elliptical arc in center form.

    Spans delta_eta radians of the parametric angle from eta_start, in steps
    no wider than MAX_SEGMENT_ANGLE. When end is given it replaces the final
    computed point so the spline lands exactly on it.
    """
    segs = int(abs(delta_eta) / MAX_SEGMENT_ANGLE) + 1
    d_eta = delta_eta / segs
    alpha = maisonobe_alpha(d_eta)
    sin_rot, cos_rot = math.sin(rotation), math.cos(rotation)

    lx, ly = ellipse_point_at(rx, ry, sin_rot, cos_rot, eta_start, center)
    ldx, ldy = ellipse_prime(rx, ry, sin_rot, cos_rot, eta_start)
    cubics: list[Cubic] = []
    for i in range(1, segs + 1):
        eta = eta_start + d_eta * i
        if i == segs and end is not None:
            px, py = end
        else:
            px, py = ellipse_point_at(rx, ry, sin_rot, cos_rot, eta, center)
        dx, dy = ellipse_prime(rx, ry, sin_rot, cos_rot, eta)
        cubics.append(
            Cubic(
                (lx + alpha * ldx, ly + alpha * ldy),
                (px - alpha * dx, py - alpha * dy),
                (px, py),
            )
        )
        lx, ly, ldx, ldy = px, py, dx, dy
    return cubics


def endpoint_arc(
    start: Point,
    end: Point,
    rx: float,
    ry: float,
    rotation_deg: float,
    large_arc: bool,
    sweep: bool,
) -> list[Cubic]:
    """Cubic approximation of an SVG endpoint-form arc (the ``A`` command).

    The caller handles the degenerate cases of SVG 1.1 F.6.2: zero radii
    (draw a line) and coincident endpoints (draw nothing).
    """
    rx, ry = abs(rx), abs(ry)
    rotation = math.radians(rotation_deg)
    center, rx, ry = find_ellipse_center(rx, ry, rotation, start, end, large_arc, sweep)

    start_angle = math.atan2(start[1] - center[1], start[0] - center[0]) - rotation
    end_angle = math.atan2(end[1] - center[1], end[0] - center[0]) - rotation
    eta_start = math.atan2(math.sin(start_angle) / ry, math.cos(start_angle) / rx)
    eta_end = math.atan2(math.sin(end_angle) / ry, math.cos(end_angle) / rx)

    # The center already encodes large_arc; sweep alone fixes the direction.
    delta_eta = eta_end - eta_start
    if sweep and delta_eta < 0:
        delta_eta += 2 * math.pi
    elif not sweep and delta_eta >= 0:
        delta_eta -= 2 * math.pi

    return elliptical_spline(center, rx, ry, rotation, eta_start, delta_eta, end)


def full_ellipse(center: Point, rx: float, ry: float) -> tuple[Point, list[Cubic]]:
    """Closed ellipse starting at the rightmost point, traversed with negative angle."""
    start = (center[0] + rx, center[1])
    return start, elliptical_spline(center, rx, ry, 0.0, 0.0, -2 * math.pi, start)


def circular_arc(
    center: Point,
    s1: Point,
    s2: Point,
    clockwise: bool,
    trim_start: float = 0.0,
    trim_end: float = 0.0,
) -> tuple[Point, list[Cubic]]:
    """Cubic approximation of a circular arc from the ray through s1 to the ray through s2.

    The radius is taken from s1. trim_start and trim_end are fractions of the
    sweep removed from either end, for partial strokes. Returns the first
    on-curve point and the cubics.
    """
    cx, cy = center
    theta1 = math.atan2(s1[1] - cy, s1[0] - cx)
    theta2 = math.atan2(s2[1] - cy, s2[0] - cx)
    if not clockwise:
        while theta1 < theta2:
            theta1 += 2 * math.pi
    else:
        while theta2 < theta1:
            theta2 += 2 * math.pi
    delta = theta2 - theta1
    if trim_start > 0:
        ds = delta * trim_start
        delta -= ds
        theta1 += ds
    if trim_end > 0:
        delta -= delta * trim_end

    segs = int(abs(delta) / (math.pi / CUBICS_PER_HALF_CIRCLE)) + 1
    d_theta = delta / segs
    alpha = maisonobe_alpha(d_theta)
    r = math.hypot(s1[0] - cx, s1[1] - cy)

    def on_circle(theta: float) -> tuple[Point, Point]:
        tangent = (-r * math.sin(theta), r * math.cos(theta))
        return (cx + r * math.cos(theta), cy + r * math.sin(theta)), tangent

    first, ldp = on_circle(theta1)
    prev = first
    cubics: list[Cubic] = []
    for i in range(1, segs + 1):
        p, dp = on_circle(theta1 + d_theta * i)
        cubics.append(
            Cubic(
                (prev[0] + alpha * ldp[0], prev[1] + alpha * ldp[1]),
                (p[0] - alpha * dp[0], p[1] - alpha * dp[1]),
                p,
            )
        )
        prev, ldp = p, dp
    return first, cubics
