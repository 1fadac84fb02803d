import numpy as np
import pytest

from rollermesh.grid import RadiusGrid
from rollermesh.split import lls_sse, split_quad_optimal


def test_lls_sse_exact_linear():
    assert lls_sse(1.0, 2.0, 3.0, 4.0) == 0.0
    assert lls_sse(2.0, 4.0, 6.0, 8.0) == 0.0
    assert lls_sse(1.0, 1.0, 1.0, 1.0) == 0.0


def test_lls_sse_compare():
    assert lls_sse(1.0, 2.0, 3.0, 5.0) < lls_sse(1.0, 2.0, 3.0, 5.1)


def test_lls_sse_matches_numpy_fit():
    ys = np.array([1.0, 3.0, 2.0, 5.0])
    xs = np.arange(4.0)
    coeffs = np.polyfit(xs, ys, 1)
    residual = ys - np.polyval(coeffs, xs)
    assert lls_sse(*ys) == pytest.approx(float((residual ** 2).sum()))


def _grid(fn, size=10):
    cols, rows = np.meshgrid(np.arange(size), np.arange(size))
    return RadiusGrid(fn(cols.astype(float), rows.astype(float)))


def test_prefers_diagonal_along_constant_ridge():
    # constant along col - row: the top-left/bottom-right diagonal is flat
    grid = _grid(lambda c, r: 5.0 + 0.1 * (c - r) ** 2)
    split = split_quad_optimal(grid, 4, 4)
    assert split.tlbr is True


def test_prefers_other_diagonal_along_constant_anti_ridge():
    grid = _grid(lambda c, r: 5.0 + 0.1 * (c + r - 8.0) ** 2)
    split = split_quad_optimal(grid, 4, 4)
    assert split.tlbr is False


def test_tie_goes_to_top_left_bottom_right():
    grid = RadiusGrid(np.full((6, 6), 3.0))
    assert split_quad_optimal(grid, 2, 2).tlbr is True


def test_corner_radii_are_cell_corners():
    radii = np.arange(1.0, 17.0).reshape(4, 4)
    grid = RadiusGrid(radii)
    split = split_quad_optimal(grid, 1, 2)
    assert (split.rho_tl, split.rho_tr, split.rho_bl, split.rho_br) == (10.0, 11.0, 14.0, 15.0)
    # last column and row wrap around
    split = split_quad_optimal(grid, 3, 3)
    assert (split.rho_tl, split.rho_tr, split.rho_bl, split.rho_br) == (16.0, 13.0, 4.0, 1.0)
