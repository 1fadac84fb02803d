# rollermesh/analysis.py
from __future__ import annotations

import numpy as np


# ----------------------------
# Mesh analysis: area & volume
# ----------------------------

def triangle_area(triangles: np.ndarray) -> np.ndarray:
    """Areas of an (N, 3, 3) stack of triangles."""
    tri = np.asarray(triangles, dtype=np.float64)
    ab = tri[:, 1] - tri[:, 0]
    ac = tri[:, 2] - tri[:, 0]
    return 0.5 * np.linalg.norm(np.cross(ab, ac), axis=1)


def mesh_surface_area(triangles: np.ndarray) -> float:
    return float(triangle_area(triangles).sum())


def mesh_volume(triangles: np.ndarray) -> float:
    """
    Signed volume for a closed, consistently oriented triangle soup.
    Uses origin-based tetrahedron summation: V = sum(dot(a, cross(b,c))) / 6
    """
    tri = np.asarray(triangles, dtype=np.float64)
    if tri.size == 0:
        return 0.0
    vol6 = np.einsum("ij,ij->i", tri[:, 0], np.cross(tri[:, 1], tri[:, 2]))
    return float(vol6.sum() / 6.0)
