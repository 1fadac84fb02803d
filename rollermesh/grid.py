# rollermesh/grid.py
from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

logger = logging.getLogger(__name__)


def rescale_min_max(values: np.ndarray, new_min: float, new_max: float, *, inverted: bool = False) -> np.ndarray:
    """
    Linearly map ``values`` so that their minimum lands on ``new_min`` and their
    maximum on ``new_max`` (swapped when ``inverted``).

    A constant input has no range to stretch; it is reported and mapped to a
    flat surface at ``new_max``.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        raise ValueError("Cannot rescale an empty array.")
    lo = float(arr.min())
    hi = float(arr.max())
    if lo == hi:
        logger.warning("Image is solid color; roller surface will be flat")
        return np.full(arr.shape, float(new_max), dtype=np.float64)
    if inverted:
        lo, hi = hi, lo
    scale = (new_max - new_min) / (hi - lo)
    return new_min + (arr - lo) * scale


class RadiusGrid:
    """
    Read-only height field of surface radii, ``height`` rows by ``width`` columns.

    Row 0 is the top edge of the pattern. Lookups through ``rho_looped`` wrap
    both axes, so a cell's neighbourhood is always defined.
    """

    __slots__ = ("width", "height", "_rows")

    def __init__(self, radii: np.ndarray) -> None:
        arr = np.asarray(radii, dtype=np.float64)
        if arr.ndim != 2:
            raise ValueError(f"Radius grid must be 2D (rows, columns); got shape {arr.shape}.")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ValueError("Radius grid must be non-empty.")
        if not np.all(np.isfinite(arr)) or np.any(arr <= 0.0):
            raise ValueError("Radius grid values must be finite and greater than zero.")
        self.height, self.width = (int(s) for s in arr.shape)
        # plain floats are much faster than numpy scalars in the meshing loops
        self._rows: List[List[float]] = arr.tolist()

    def __repr__(self) -> str:
        return f"RadiusGrid(width={self.width}, height={self.height})"

    def rho(self, col: int, row: int) -> float:
        return self._rows[row][col]

    def rho_looped(self, col: int, row: int) -> float:
        # rows wrap too: the diagonal selector reads up to two rows beyond the grid, and
        # a vertical stack copy continues into row 0 of the next one
        return self._rows[row % self.height][col % self.width]

    def top_line(self) -> Sequence[float]:
        return self._rows[0]

    def bottom_line(self) -> Sequence[float]:
        return self._rows[-1]

    def to_array(self) -> np.ndarray:
        return np.array(self._rows, dtype=np.float64)


def grid_from_array(levels: np.ndarray, min_radius: float, max_radius: float, *, inverted: bool = False) -> RadiusGrid:
    """Turn a 2D array of gray levels into radii between ``min_radius`` and ``max_radius``."""
    return RadiusGrid(rescale_min_max(levels, min_radius, max_radius, inverted=inverted))
