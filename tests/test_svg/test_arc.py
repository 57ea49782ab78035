"""Tests for the arc solver."""

import math

import pytest
import svgpathtools

from vectorscene.svg.arc import (
    circular_arc,
    elliptical_spline,
    endpoint_arc,
    find_ellipse_center,
    full_ellipse,
    maisonobe_alpha,
)


def _dist(a, b) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def test_alpha_quarter_turn():
    assert maisonobe_alpha(math.pi / 2) == pytest.approx((math.sqrt(7) - 1) / 3)
    assert maisonobe_alpha(0.0) == 0.0


def test_center_of_half_circle():
    center, rx, ry = find_ellipse_center(5, 5, 0.0, (0, 0), (10, 0), False, True)
    assert center == pytest.approx((5.0, 0.0))
    assert (rx, ry) == (5, 5)


def test_small_radii_are_scaled_up():
    center, rx, ry = find_ellipse_center(1, 1, 0.0, (0, 0), (10, 0), False, True)
    assert center == pytest.approx((5.0, 0.0))
    assert rx == pytest.approx(5.0)
    assert ry == pytest.approx(5.0)


def test_scaled_radii_keep_ratio():
    center, rx, ry = find_ellipse_center(2, 1, 0.0, (0, 0), (10, 0), False, True)
    assert rx / ry == pytest.approx(2.0)
    assert center == pytest.approx((5.0, 0.0))


def test_flags_choose_center():
    # chord of length 10, radius 10: centers at (5, ±5√3)
    small_cw, _, _ = find_ellipse_center(10, 10, 0.0, (0, 0), (10, 0), False, True)
    large_cw, _, _ = find_ellipse_center(10, 10, 0.0, (0, 0), (10, 0), True, True)
    assert small_cw == pytest.approx((5.0, 5 * math.sqrt(3)))
    assert large_cw == pytest.approx((5.0, -5 * math.sqrt(3)))


def test_half_circle_spline():
    cubics = endpoint_arc((0, 0), (10, 0), 5, 5, 0, False, True)
    assert cubics[-1].end == (10, 0)
    for c in cubics:
        for p in (c.ctrl1, c.ctrl2, c.end):
            assert _dist(p, (5, 0)) <= 5.1
        assert _dist(c.end, (5, 0)) == pytest.approx(5.0)
    # first control point lies on the tangent at the start
    c1 = cubics[0].ctrl1
    assert c1[0] * (0 - 5) + c1[1] * 0 == pytest.approx(0.0, abs=1e-9)


def test_sweep_flag_flips_side():
    above = endpoint_arc((0, 0), (10, 0), 5, 5, 0, False, True)
    below = endpoint_arc((0, 0), (10, 0), 5, 5, 0, False, False)
    assert max(c.end[1] for c in above) <= 1e-9
    assert min(c.end[1] for c in above) == pytest.approx(-5.0, abs=0.1)
    assert min(c.end[1] for c in below) >= -1e-9
    assert max(c.end[1] for c in below) == pytest.approx(5.0, abs=0.1)


def test_large_arc_spans_more():
    small = endpoint_arc((0, 0), (10, 0), 10, 10, 0, False, True)
    large = endpoint_arc((0, 0), (10, 0), 10, 10, 0, True, True)
    assert len(large) > len(small)
    assert large[-1].end == (10, 0)


def test_negative_radii_use_magnitude():
    assert endpoint_arc((0, 0), (10, 0), -5, -5, 0, False, True) == endpoint_arc(
        (0, 0), (10, 0), 5, 5, 0, False, True
    )


@pytest.mark.parametrize(
    "start, end, rx, ry, rot, large, sweep",
    [
        ((0, 0), (8, 6), 10, 5, 30, True, False),
        ((3, 4), (-2, 7), 4, 6, -45, False, True),
        ((0, 0), (10, 0), 1, 1, 0, False, False),
    ],
)
def test_center_matches_svgpathtools(start, end, rx, ry, rot, large, sweep):
    arc = svgpathtools.Arc(complex(*start), complex(rx, ry), rot, large, sweep, complex(*end))
    center, _, _ = find_ellipse_center(rx, ry, math.radians(rot), start, end, large, sweep)
    assert center[0] == pytest.approx(arc.center.real, abs=1e-6)
    assert center[1] == pytest.approx(arc.center.imag, abs=1e-6)


def test_full_ellipse_is_closed():
    start, cubics = full_ellipse((10, 20), 4, 2)
    assert start == (14, 20)
    assert cubics[-1].end == start
    # traversed with negative angle: heads toward smaller y first
    assert cubics[0].end[1] < 20


def test_elliptical_spline_segment_count():
    cubics = elliptical_spline((0, 0), 1, 1, 0.0, 0.0, math.pi / 2)
    assert len(cubics) == 5
    assert cubics[-1].end == pytest.approx((0.0, 1.0))


def test_circular_quarter_arc():
    first, cubics = circular_arc((0, 0), (1, 0), (0, 1), clockwise=True)
    assert first == pytest.approx((1.0, 0.0))
    assert cubics[-1].end == pytest.approx((0.0, 1.0), abs=1e-12)
    for c in cubics:
        assert _dist(c.end, (0, 0)) == pytest.approx(1.0)


def test_circular_arc_trim():
    first, cubics = circular_arc((0, 0), (1, 0), (0, 1), clockwise=True, trim_start=0.5)
    h = math.sqrt(0.5)
    assert first == pytest.approx((h, h))
    assert cubics[-1].end == pytest.approx((0.0, 1.0), abs=1e-12)

    first, cubics = circular_arc((0, 0), (1, 0), (0, 1), clockwise=True, trim_end=0.5)
    assert first == pytest.approx((1.0, 0.0))
    assert cubics[-1].end == pytest.approx((h, h))
