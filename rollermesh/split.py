# rollermesh/split.py
from __future__ import annotations

from typing import NamedTuple

from .grid import RadiusGrid


class QuadSplit(NamedTuple):
    """Diagonal choice for one grid cell plus its corner radii."""
    tlbr: bool  # True: split along top-left/bottom-right
    rho_tl: float
    rho_tr: float
    rho_bl: float
    rho_br: float


def lls_sse(y1: float, y2: float, y3: float, y4: float) -> float:
    """
    Residual sum of squares of the least-squares line through
    (0, y1), (1, y2), (2, y3), (3, y4).
    """
    y_sum = y1 + y2 + y3 + y4
    xy_sum = y2 + 2.0 * y3 + 3.0 * y4
    y_squared_sum = y1 * y1 + y2 * y2 + y3 * y3 + y4 * y4
    ss_yy = y_squared_sum - y_sum * y_sum * 0.25
    ss_xy = xy_sum - 1.5 * y_sum
    return ss_yy - ss_xy * ss_xy * 0.2


def split_quad_optimal(grid: RadiusGrid, col: int, row: int) -> QuadSplit:
    """
    Pick the diagonal of cell (col, row) that follows the surface best.

    Each diagonal is extended one sample beyond the cell on both sides; the
    one whose four radii lie closer to a straight line wins. Ties go to the
    top-left/bottom-right diagonal.
    """
    rho = grid.rho_looped
    quad_tl = rho(col, row)
    quad_tr = rho(col + 1, row)
    quad_bl = rho(col, row + 1)
    quad_br = rho(col + 1, row + 1)
    tlbr_score = lls_sse(rho(col - 1, row - 1), quad_tl, quad_br, rho(col + 2, row + 2))
    trbl_score = lls_sse(rho(col - 1, row + 2), quad_bl, quad_tr, rho(col + 2, row - 1))
    return QuadSplit(tlbr_score <= trbl_score, quad_tl, quad_tr, quad_bl, quad_br)
