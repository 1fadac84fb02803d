import pytest

from rollermesh.vectors import (
    check_right_hand,
    points_close,
    v_cross,
    v_norm,
    xy_dot,
    xy_perp_ccw,
)


def test_cross_product_orts():
    assert v_cross((1.0, 0.0, 0.0), (0.0, 1.0, 0.0)) == (0.0, 0.0, 1.0)


def test_cross_product_collinear():
    assert v_cross((1.0, 2.0, 3.0), (2.0, 4.0, 6.0)) == (0.0, 0.0, 0.0)


def test_cross_product():
    c = v_cross((0.2, 0.3, 0.4), (0.5, 0.6, 0.7))
    assert c == pytest.approx((-0.03, 0.06, -0.03))


def test_vector_normalize():
    assert v_norm((2.0, 10.0, 11.0)) == pytest.approx((2.0 / 15.0, 2.0 / 3.0, 11.0 / 15.0))
    assert v_norm((0.0, 0.0, 0.0)) == (0.0, 0.0, 0.0)


def test_xy_perp_ccw_orts():
    assert xy_perp_ccw((1.0, 0.0, 0.0)) == (0.0, 1.0, 0.0)
    assert xy_perp_ccw((0.0, 1.0, 5.0)) == (-1.0, 0.0, 5.0)


def test_xy_dot_ignores_z():
    assert xy_dot((1.0, 2.0, 100.0), (3.0, 4.0, -100.0)) == 11.0


def test_right_hand_orts():
    assert check_right_hand((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))
    assert not check_right_hand((-1.0, 0.0, 0.0), (0.0, -1.0, 0.0), (0.0, 0.0, -1.0))


def test_points_close_uses_machine_epsilon():
    assert points_close((1.0, 2.0, 3.0), (1.0, 2.0, 3.0))
    assert not points_close((1.0, 2.0, 3.0), (1.0, 2.0, 3.001))
