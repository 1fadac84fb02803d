# rollermesh/vectors.py
from __future__ import annotations

import math
import sys
from typing import Tuple

Vec3 = Tuple[float, float, float]

UP: Vec3 = (0.0, 0.0, 1.0)
DOWN: Vec3 = (0.0, 0.0, -1.0)
ZERO: Vec3 = (0.0, 0.0, 0.0)

EPSILON = sys.float_info.epsilon


# -----------------------------
# Small vector utilities
# -----------------------------

def v_sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def v_dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def v_cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def v_len(a: Vec3) -> float:
    return math.sqrt(v_dot(a, a))


def v_norm(a: Vec3) -> Vec3:
    l = v_len(a)
    if l == 0:
        return ZERO
    return (a[0] / l, a[1] / l, a[2] / l)


# -----------------------------
# Planar helpers (XY plane)
# -----------------------------

def xy_perp_ccw(a: Vec3) -> Vec3:
    """
    Counter-clockwise quarter turn of the XY part seen from +z:
    (x, y) -> (-y, x). z is carried through unchanged.

    Applied to an edge walked counter-clockwise it points to the left of the
    edge, i.e. into the polygon.
    """
    return (-a[1], a[0], a[2])


def xy_dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1]


# -----------------------------
# Predicates
# -----------------------------

def check_right_hand(a: Vec3, b: Vec3, c: Vec3) -> bool:
    """True when (a, b, c) form a right-handed triple (positive determinant)."""
    det = (
        a[0] * b[1] * c[2] + a[1] * b[2] * c[0] + a[2] * b[0] * c[1]
        - a[2] * b[1] * c[0]
        - a[1] * b[0] * c[2]
        - a[0] * b[2] * c[1]
    )
    return det > 0.0


def points_close(a: Vec3, b: Vec3) -> bool:
    return (
        abs(a[0] - b[0]) <= EPSILON
        and abs(a[1] - b[1]) <= EPSILON
        and abs(a[2] - b[2]) <= EPSILON
    )
