"""Tests for the affine matrix and fixed-point helpers."""

import math

import numpy as np
import pytest

from vectorscene.errors import SingularMatrix
from vectorscene.utils.geometry import FixedPoint, signed_area, winding_direction
from vectorscene.utils.matrix import IDENTITY, Matrix2D


M = Matrix2D(scale_x=2.0, skew_x=0.5, trans_x=3.0, skew_y=-1.0, scale_y=1.5, trans_y=-4.0)


def test_identity_is_neutral():
    assert IDENTITY.multiply(M) == M
    assert M.multiply(IDENTITY) == M


def test_inverse_round_trip():
    assert M.multiply(M.invert()).is_close(IDENTITY)
    assert M.invert().multiply(M).is_close(IDENTITY)


def test_singular_matrix_raises():
    with pytest.raises(SingularMatrix):
        Matrix2D(scale_x=1.0, skew_x=2.0, skew_y=2.0, scale_y=4.0).invert()
    with pytest.raises(SingularMatrix):
        IDENTITY.scale(0, 1).invert()


def test_local_composition_order():
    # translate is outermost: scale first, then shift
    m = IDENTITY.translate(10, 0).scale(2, 2)
    assert m.transform_point(1, 1) == (12.0, 2.0)


def test_rotate_quarter_turn():
    x, y = IDENTITY.rotate(math.pi / 2).transform_point(1, 0)
    assert x == pytest.approx(0.0, abs=1e-12)
    assert y == pytest.approx(1.0)


def test_transform_vector_ignores_translation():
    m = IDENTITY.translate(100, 100).scale(2, 3)
    assert m.transform_vector(1, 1) == (2.0, 3.0)


def test_skew():
    x, y = IDENTITY.skew_x_by(math.pi / 4).transform_point(0, 1)
    assert x == pytest.approx(1.0)
    assert y == 1.0


def test_as_array_matches_transform_point():
    p = M.as_array() @ np.array([2.0, 5.0, 1.0])
    assert tuple(p[:2]) == pytest.approx(M.transform_point(2.0, 5.0))


def test_transform_fixed_scales_translation():
    m = Matrix2D(trans_x=1.0, trans_y=-0.5)
    assert m.transform_fixed(FixedPoint(64, 0)) == FixedPoint(128, -32)


def test_fixed_point_truncates():
    assert FixedPoint.from_float(1.0, -2.5) == FixedPoint(64, -160)
    assert FixedPoint.from_float(0.01, -0.01) == FixedPoint(0, 0)
    assert FixedPoint(96, 32).to_float() == (1.5, 0.5)


def test_winding_direction():
    square = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=np.float64)
    assert signed_area(square) == pytest.approx(1.0)
    assert winding_direction(square) == 1
    assert winding_direction(square[::-1]) == -1
