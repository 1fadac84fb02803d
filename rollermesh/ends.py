"""
End geometry of the roller: flat discs, a through channel or a pair of pins.

Solid discs are fanned straight from the body's boundary rows. Channel and
pin ends live on their own, usually coarser, circle; the ring between that
circle and the body boundary is closed by ``make_lids_holed`` through ear
clipping, one irregular polygon per inner segment.
"""
from __future__ import annotations

from .circles import CircleSampler
from .eartrim import annulus_segments, fill_polygon_by_ear_trimming
from .params import RollerParameters
from .stl import StlFileWriter
from .vectors import DOWN, UP, v_norm, v_sub, xy_perp_ccw


def make_lids_solid(stl_writer: StlFileWriter, params: RollerParameters, circle: CircleSampler) -> None:
    z_max = params.roller_length
    top_radii = params.grid.top_line()
    bot_radii = params.grid.bottom_line()
    top_center = circle.center(z_max)
    bot_center = circle.center(0.0)
    top_new = circle.get_point(0, top_radii[0], z_max)
    bot_new = circle.get_point(0, bot_radii[0], 0.0)
    for i in range(1, circle.n_points + 1):
        top_old, bot_old = top_new, bot_new
        top_new = circle.get_point(i, top_radii[i % len(top_radii)], z_max)
        bot_new = circle.get_point(i, bot_radii[i % len(bot_radii)], 0.0)
        stl_writer.write_face(UP, top_center, top_old, top_new)
        stl_writer.write_face(DOWN, bot_center, bot_new, bot_old)


def make_channel(stl_writer: StlFileWriter, params: RollerParameters, circle: CircleSampler,
                 channel_diameter: float) -> None:
    """Inner wall of the through hole; normals point towards the axis."""
    z_max = params.roller_length
    channel_radius = channel_diameter * 0.5
    top_new = circle.get_point(0, channel_radius, z_max)
    bot_new = circle.get_point(0, channel_radius, 0.0)
    for i in range(1, circle.n_points + 1):
        top_old, bot_old = top_new, bot_new
        top_new = circle.get_point(i, channel_radius, z_max)
        bot_new = circle.get_point(i, channel_radius, 0.0)
        normal = v_norm(xy_perp_ccw(v_sub(top_new, top_old)))
        stl_writer.write_face(normal, top_old, top_new, bot_old)
        stl_writer.write_face(normal, bot_old, top_new, bot_new)


def make_pins(stl_writer: StlFileWriter, params: RollerParameters, circle: CircleSampler,
              pin_diameter: float, pin_length: float) -> None:
    """Both pins: a tip disc and a side wall each, the wall ending on the body's end plane."""
    z_max = params.roller_length + 2.0 * pin_length
    z_top_base = z_max - pin_length
    z_bot_base = pin_length
    top_center = circle.center(z_max)
    bot_center = circle.center(0.0)
    pin_radius = pin_diameter * 0.5
    x_new, y_new = circle.get_xy(0, pin_radius)
    for i in range(1, circle.n_points + 1):
        x_old, y_old = x_new, y_new
        x_new, y_new = circle.get_xy(i, pin_radius)

        # top pin
        p1 = (x_old, y_old, z_max)
        p2 = (x_new, y_new, z_max)
        stl_writer.write_face(UP, p1, p2, top_center)
        p3 = (x_old, y_old, z_top_base)
        p4 = (x_new, y_new, z_top_base)
        normal = v_norm(xy_perp_ccw(v_sub(p1, p2)))
        stl_writer.write_face(normal, p3, p2, p1)
        stl_writer.write_face(normal, p2, p3, p4)

        # bottom pin
        p1 = (x_old, y_old, 0.0)
        p2 = (x_new, y_new, 0.0)
        stl_writer.write_face(DOWN, bot_center, p2, p1)
        p3 = (x_old, y_old, z_bot_base)
        p4 = (x_new, y_new, z_bot_base)
        normal = v_norm(xy_perp_ccw(v_sub(p1, p2)))
        stl_writer.write_face(normal, p1, p2, p3)
        stl_writer.write_face(normal, p4, p3, p2)


def make_lids_holed(stl_writer: StlFileWriter, params: RollerParameters, big_circle: CircleSampler,
                    small_circle: CircleSampler, inner_diameter: float, z_shift: float) -> None:
    """Close the rings between the end feature and the body boundary at both ends."""
    radii_top = params.grid.top_line()
    radii_bot = params.grid.bottom_line()
    z_top = z_shift + params.roller_length
    z_bot = z_shift
    inner_radius = inner_diameter * 0.5
    x_new, y_new = small_circle.get_xy(0, inner_radius)
    for i, n_start, n_end in annulus_segments(small_circle.n_points, big_circle.n_points):
        x_old, y_old = x_new, y_new
        x_new, y_new = small_circle.get_xy(i, inner_radius)
        outer = range(n_end, n_start - 1, -1)

        top_polygon = [(x_new, y_new, z_top)]
        top_polygon.extend(big_circle.get_point(n, radii_top[n % len(radii_top)], z_top) for n in outer)
        top_polygon.append((x_old, y_old, z_top))
        fill_polygon_by_ear_trimming(stl_writer, top_polygon, True)

        bot_polygon = [(x_new, y_new, z_bot)]
        bot_polygon.extend(big_circle.get_point(n, radii_bot[n % len(radii_bot)], z_bot) for n in outer)
        bot_polygon.append((x_old, y_old, z_bot))
        fill_polygon_by_ear_trimming(stl_writer, bot_polygon, False)
