import math

import numpy as np
import pytest

from rollermesh.errors import ParameterError
from rollermesh.grid import RadiusGrid
from rollermesh.params import (
    ChannelEnd,
    FlatEnd,
    PinEnd,
    RollerParameters,
    derive_dimensions,
    format_bytes_size,
    outline_clearance,
)


def _params(width=4, height=4, end=None, **kwargs):
    grid = RadiusGrid(np.full((height, width), 1.0))
    return RollerParameters(grid=grid, roller_diameter=2.0, roller_length=3.0,
                            roller_end=end or FlatEnd(), **kwargs)


def test_flat_face_count_4x4():
    params = _params()
    assert params.circle_points() == 4
    assert params.faces_count() == 2 * 4 * 3 + 2 * 4 == 32
    assert params.bytes_estimate() == 84 + 50 * 32


def test_stacked_face_count():
    params = _params(stack_horizontal=3, stack_vertical=2)
    assert params.circle_points() == 12
    assert params.faces_count() == 2 * 12 * (8 - 1) + 2 * 12


def test_pin_and_channel_face_counts():
    assert _params(end=PinEnd(diameter=0.5, length=1.0, resolution=6)).faces_count() == 24 + 8 + 48
    assert _params(end=ChannelEnd(diameter=0.5, resolution=6)).faces_count() == 24 + 8 + 24


def test_face_count_overflow():
    grid = RadiusGrid(np.full((3, 1000), 1.0))
    params = RollerParameters(grid=grid, roller_diameter=2.0, roller_length=3.0,
                              stack_horizontal=1000, stack_vertical=1000)
    with pytest.raises(ParameterError, match="Overflow"):
        params.faces_count()


def test_end_feature_must_fit_inside_body():
    with pytest.raises(ParameterError, match="end outline"):
        _params(end=ChannelEnd(diameter=2.0, resolution=8))


def _round_grid(width, radius=10.0):
    return RadiusGrid(np.full((4, width), radius))


def test_end_feature_must_clear_outline_chords():
    # vertices sit at radius 10, the hexagon edges come within 10*cos(pi/6) of the axis
    with pytest.raises(ParameterError, match="end outline"):
        RollerParameters(grid=_round_grid(6), roller_diameter=20.0, roller_length=5.0,
                         roller_end=ChannelEnd(diameter=19.0, resolution=40))
    # 9.99975 is above 10*cos(pi/300)
    with pytest.raises(ParameterError, match="end outline"):
        RollerParameters(grid=_round_grid(300), roller_diameter=20.0, roller_length=5.0,
                         roller_end=PinEnd(diameter=19.9995, length=1.0, resolution=600))
    RollerParameters(grid=_round_grid(6), roller_diameter=20.0, roller_length=5.0,
                     roller_end=ChannelEnd(diameter=17.0, resolution=40))


def test_outline_clearance():
    assert outline_clearance([10.0] * 6) == pytest.approx(10.0 * math.cos(math.pi / 6))
    assert outline_clearance([10.0] * 3, repeats=2) == pytest.approx(10.0 * math.cos(math.pi / 6))
    # the edge from (10, 0) to (0, 1) passes closer than either vertex
    assert outline_clearance([10.0, 1.0, 10.0, 1.0]) == pytest.approx(10.0 / math.sqrt(101.0))


def test_too_few_points_rejected():
    with pytest.raises(ParameterError):
        _params(width=2)
    with pytest.raises(ParameterError):
        _params(height=1)
    with pytest.raises(ParameterError):
        PinEnd(diameter=1.0, length=1.0, resolution=2)
    with pytest.raises(ParameterError):
        ChannelEnd(diameter=1.0, resolution=0)


def test_format_bytes_size():
    assert format_bytes_size(84) == "84 B"
    assert format_bytes_size(1023) == "1023 B"
    assert format_bytes_size(1024) == "1.00 KiB"
    assert format_bytes_size(3 * 2 ** 20 // 2) == "1.50 MiB"
    assert format_bytes_size(5 * 2 ** 40) == "5120.00 GiB"


def test_summary_line():
    assert _params().summary() == "length: 3.00 diameter: 2.00 filesize: 1.64 KiB"


# ----------------------
# Dimension derivation
# ----------------------

def test_dimensions_from_diameter_or_length():
    assert derive_dimensions(10, 10, diameter=1.0).roller_length == math.pi
    assert derive_dimensions(10, 10, length=1.0).roller_diameter == 1.0 / math.pi
    assert derive_dimensions(10, 10, diameter=1.0, stack_vertical=10).roller_length == pytest.approx(10.0 * math.pi)
    assert derive_dimensions(10, 10, diameter=1.0, stack_horizontal=10).roller_length == pytest.approx(0.1 * math.pi)


def test_default_relief_and_grid_step():
    dims = derive_dimensions(20, 10, length=10.0)
    assert dims.relief_depth == pytest.approx(0.02 * dims.roller_diameter)
    assert dims.grid_step == pytest.approx(1.0)
    assert (dims.grid_width, dims.grid_height, dims.resample) == (20, 10, False)
    assert dims.max_radius - dims.min_radius == pytest.approx(dims.relief_depth)


def test_grid_step_resizes_image():
    dims = derive_dimensions(20, 10, length=10.0, grid_step=0.5)
    assert (dims.grid_width, dims.grid_height, dims.resample) == (40, 20, True)


@pytest.mark.parametrize("kwargs", [
    dict(diameter=1.0, length=1.0),
    dict(),
    dict(diameter=2.0, relief_depth=1.0),
    dict(diameter=2.0, relief_depth=0.0),
    dict(diameter=0.0),
    dict(length=0.0),
    dict(diameter=1.0, pin_diameter=1.0, pin_length=1.0),
    dict(diameter=1.0, channel_diameter=1.0),
    dict(length=1.0, pin_diameter=0.1),
    dict(length=1.0, pin_length=0.1),
    dict(length=1.0, pin_diameter=0.1, pin_length=0.0),
    dict(length=1.0, pin_diameter=0.1, pin_length=0.1, channel_diameter=0.1),
    dict(diameter=1.0, stack_vertical=0),
    dict(diameter=1.0, grid_step=-1.0),
])
def test_invalid_dimensions(kwargs):
    with pytest.raises(ParameterError):
        derive_dimensions(10, 10, **kwargs)


def test_channel_limit_message_names_channel_and_limit():
    with pytest.raises(ParameterError) as exc:
        derive_dimensions(10, 10, diameter=10.0, relief_depth=0.5, channel_diameter=9.5)
    assert "Channel diameter (9.5)" in str(exc.value)
    assert f"< {9.0 * math.cos(math.pi / 10)}" in str(exc.value)


def test_end_limit_accounts_for_outline_chords():
    # below the 9.0 core diameter, but a 10-sided outline only clears 9.0*cos(pi/10)
    with pytest.raises(ParameterError, match="Channel diameter"):
        derive_dimensions(10, 10, diameter=10.0, relief_depth=0.5, channel_diameter=8.7)
    with pytest.raises(ParameterError, match="Pin diameter"):
        derive_dimensions(10, 10, diameter=10.0, relief_depth=0.5, pin_diameter=8.7, pin_length=1.0)
    dims = derive_dimensions(10, 10, diameter=10.0, relief_depth=0.5, channel_diameter=8.5)
    assert dims.roller_end.diameter == 8.5


def test_end_resolution_follows_grid_step():
    dims = derive_dimensions(10, 10, diameter=10.0, grid_step=0.5, pin_diameter=2.0, pin_length=3.0)
    assert dims.roller_end == PinEnd(diameter=2.0, length=3.0, resolution=round(2 * math.pi * 2.0 / 0.5))
    dims = derive_dimensions(10, 10, diameter=10.0, grid_step=0.5, channel_diameter=4.0)
    assert isinstance(dims.roller_end, ChannelEnd)
    assert dims.roller_end.resolution == 50


def test_with_grid_checks_size():
    dims = derive_dimensions(4, 3, diameter=10.0)
    params = dims.with_grid(RadiusGrid(np.full((3, 4), 4.9)))
    assert params.roller_diameter == 10.0
    with pytest.raises(ParameterError, match="expected 4x3"):
        dims.with_grid(RadiusGrid(np.full((4, 4), 4.9)))
