# rollermesh/construct.py
from __future__ import annotations

import logging
from typing import Optional

from .circles import CircleSampler
from .ends import make_channel, make_lids_holed, make_lids_solid, make_pins
from .params import ChannelEnd, FlatEnd, PinEnd, RollerParameters
from .split import split_quad_optimal
from .stl import StlFileWriter

logger = logging.getLogger(__name__)


def make_pattern_roller(params: RollerParameters, path: str, *, validate: Optional[bool] = None) -> int:
    """
    Generate the whole roller and stream it into a binary STL at ``path``.

    The face count is settled (and checked for overflow) before the file is
    opened. Returns the number of faces written.
    """
    n_faces = params.faces_count()
    stl_writer = StlFileWriter(path, n_faces, validate=validate)
    with stl_writer:
        write_pattern_roller(stl_writer, params)
        return stl_writer.finish()


def write_pattern_roller(stl_writer: StlFileWriter, params: RollerParameters) -> None:
    big_circle = CircleSampler(params.circle_points(), params.roller_diameter * 0.5)
    make_cylinder_patterned(stl_writer, params, big_circle)
    logger.debug("body done: %d faces", stl_writer.faces_written)
    end = params.roller_end
    if isinstance(end, FlatEnd):
        make_lids_solid(stl_writer, params, big_circle)
    elif isinstance(end, PinEnd):
        small_circle = CircleSampler(end.resolution, params.roller_diameter * 0.5)
        make_pins(stl_writer, params, small_circle, end.diameter, end.length)
        make_lids_holed(stl_writer, params, big_circle, small_circle, end.diameter, end.length)
    elif isinstance(end, ChannelEnd):
        small_circle = CircleSampler(end.resolution, params.roller_diameter * 0.5)
        make_channel(stl_writer, params, small_circle, end.diameter)
        make_lids_holed(stl_writer, params, big_circle, small_circle, end.diameter, 0.0)
    else:
        raise TypeError(f"Unknown roller end: {end!r}")
    logger.debug("ends done (%s): %d faces", type(end).__name__, stl_writer.faces_written)


def body_z_max(params: RollerParameters) -> float:
    end = params.roller_end
    if isinstance(end, PinEnd):
        return params.roller_length + end.length
    return params.roller_length


def make_cylinder_patterned(stl_writer: StlFileWriter, params: RollerParameters, circle: CircleSampler) -> None:
    """
    Lateral surface: two triangles per grid cell, repeated for every stacked
    copy of the pattern.

    Row 0 of the grid is the top of the body. The last row of the last
    vertical copy has no row below it and is skipped.
    """
    grid = params.grid
    width = grid.width
    height = grid.height
    hstack = params.stack_horizontal
    vstack = params.stack_vertical
    z_max = body_z_max(params)
    z_step = params.roller_length / (height * vstack - 1)
    write = stl_writer.write_face_auto_normal
    for i in range(width):
        for j in range(height):
            tlbr, rho_tl, rho_tr, rho_bl, rho_br = split_quad_optimal(grid, i, j)
            for p in range(hstack):
                x_tl, y_tl = circle.get_xy(i + p * width, rho_tl)
                x_tr, y_tr = circle.get_xy(i + p * width + 1, rho_tr)
                x_bl, y_bl = circle.get_xy(i + p * width, rho_bl)
                x_br, y_br = circle.get_xy(i + p * width + 1, rho_br)
                for q in range(vstack):
                    if j == height - 1 and q == vstack - 1:
                        continue
                    z_t = z_max - (j + height * q) * z_step
                    z_b = z_t - z_step
                    tl = (x_tl, y_tl, z_t)
                    bl = (x_bl, y_bl, z_b)
                    tr = (x_tr, y_tr, z_t)
                    br = (x_br, y_br, z_b)
                    if tlbr:
                        write(tl, br, tr)
                        write(bl, br, tl)
                    else:
                        write(bl, tr, tl)
                        write(bl, br, tr)
