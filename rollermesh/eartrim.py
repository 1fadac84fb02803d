# rollermesh/eartrim.py
from __future__ import annotations

import math
from typing import Iterator, List, Sequence, Tuple

from .errors import MeshInvariantError
from .stl import StlFileWriter
from .vectors import DOWN, UP, Vec3, v_sub, xy_dot, xy_perp_ccw


def triangle_is_ear(left: Vec3, middle: Vec3, right: Vec3) -> bool:
    """``middle`` sticks out to the left of the chord left -> right."""
    base_normal = xy_perp_ccw(v_sub(right, left))
    return xy_dot(base_normal, v_sub(middle, left)) > 0.0


def fill_polygon_by_ear_trimming(stl_writer: StlFileWriter, polygon: Sequence[Vec3], normal_up: bool) -> int:
    """
    Triangulate a flat, clockwise (seen from +Z) polygon by clipping ears.

    The polygon is treated as open between its first and last point: those two
    are never clipped. Interior vertices are scanned from the back, the first
    ear found is emitted and removed, and the scan restarts. Every face gets
    the fixed normal UP or DOWN with matching winding.

    Returns:
        Number of triangles written (``len(polygon) - 2``).
    """
    points: List[Vec3] = list(polygon)
    normal = UP if normal_up else DOWN
    written = 0
    while len(points) >= 3:
        for i in range(len(points) - 2, 0, -1):
            left, middle, right = points[i - 1], points[i], points[i + 1]
            if triangle_is_ear(left, middle, right):
                if normal_up:
                    stl_writer.write_face(normal, left, right, middle)
                else:
                    stl_writer.write_face(normal, middle, right, left)
                del points[i]
                written += 1
                break
        else:
            raise MeshInvariantError(
                f"Failed to triangulate polygon iteratively: no ear among {len(points)} points"
            )
    return written


def annulus_segments(inner_count: int, outer_count: int) -> Iterator[Tuple[int, int, int]]:
    """
    Map each inner-ring segment onto a run of the outer ring.

    Yields ``(i, n_start, n_end)`` for i in 1..inner_count: segment i spans
    inner points i-1..i and outer points n_start..n_end. The last segment
    always ends exactly on ``outer_count``.
    """
    step_scale = outer_count / inner_count
    n_end = 0
    for i in range(1, inner_count + 1):
        n_start = n_end
        if i != inner_count:
            n_end = int(math.floor(i * step_scale + 0.5))
        else:
            n_end = outer_count
        yield i, n_start, n_end
