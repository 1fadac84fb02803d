"""
Closed circular parameterization shared by the roller body and its ends.

A sampler with ``n_points`` samples exposes ``n_points + 1`` positions: the
last one repeats the first so that walking 0..n_points closes the seam
without modulo arithmetic at the call site.
"""
from __future__ import annotations

import math
from typing import List, Tuple

from .errors import MeshInvariantError
from .vectors import Vec3

Vec2 = Tuple[float, float]


class CircleSampler:
    __slots__ = ("n_points", "axis_shift", "_sin_cos")

    def __init__(self, n_points: int, axis_shift: float = 0.0) -> None:
        if n_points < 1:
            raise ValueError(f"Circle needs at least one point; got {n_points}.")
        self.n_points = int(n_points)
        self.axis_shift = float(axis_shift)
        phi_step = 2.0 * math.pi / self.n_points
        table: List[Vec2] = []
        for n in range(self.n_points):
            phi = n * phi_step
            table.append((math.sin(phi), math.cos(phi)))
        table.append(table[0])
        self._sin_cos: Tuple[Vec2, ...] = tuple(table)

    def __len__(self) -> int:
        return len(self._sin_cos)

    def __repr__(self) -> str:
        return f"CircleSampler(n_points={self.n_points}, axis_shift={self.axis_shift})"

    def _entry(self, n: int) -> Vec2:
        if n < 0 or n > self.n_points:
            raise MeshInvariantError(
                f"Circle index {n} outside 0..{self.n_points}"
            )
        return self._sin_cos[n]

    def angle(self, n: int) -> float:
        """Angle of sample ``n`` in [0, 2pi); the seam sample reports angle 0."""
        sin_phi, cos_phi = self._entry(n)
        return math.atan2(sin_phi, cos_phi) % (2.0 * math.pi)

    def get_xy(self, n: int, rho: float) -> Vec2:
        sin_phi, cos_phi = self._entry(n)
        return (rho * cos_phi + self.axis_shift, rho * sin_phi + self.axis_shift)

    def get_point(self, n: int, rho: float, z: float) -> Vec3:
        x, y = self.get_xy(n, rho)
        return (x, y, z)

    def center(self, z: float) -> Vec3:
        return (self.axis_shift, self.axis_shift, z)
