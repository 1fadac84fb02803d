"""
Roller geometry: end variants, derived dimensions and face-count accounting.

The roller is described in two steps. ``derive_dimensions`` works from the
source image size alone and settles every length (diameter, body length,
relief depth, grid step, end features) plus the grid size the image must be
resampled to. ``RollerParameters`` then pairs those numbers with the actual
radius grid and is what the mesher consumes.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

import numpy as np

from .errors import ParameterError
from .grid import RadiusGrid
from .stl import FACE_RECORD_SIZE, HEADER_SIZE, MAX_FACES

OVERFLOW_ERROR_TEXT = "Overflow in STL face counter: resulting model is too big"
MAX_STACK = 1000
DEFAULT_RELIEF_FRACTION = 0.02


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def outline_clearance(line: Sequence[float], repeats: int = 1) -> float:
    """
    Smallest distance from the roller axis to the closed polygon traced by one
    boundary row of radii (repeated ``repeats`` times around the circle).

    Edges are straight chords, so this is below the smallest vertex radius.
    """
    radii = np.tile(np.asarray(line, dtype=np.float64), repeats)
    phi = np.arange(radii.size) * (2.0 * math.pi / radii.size)
    p = np.stack([radii * np.cos(phi), radii * np.sin(phi)], axis=1)
    d = np.roll(p, -1, axis=0) - p
    # foot of the perpendicular from the axis, clamped onto the edge
    t = np.clip(-np.einsum("ij,ij->i", p, d) / np.einsum("ij,ij->i", d, d), 0.0, 1.0)
    return float(np.hypot(*(p + t[:, None] * d).T).min())


# ----------------
# End variants
# ----------------

@dataclass(frozen=True)
class FlatEnd:
    """Plain discs closing both ends."""


@dataclass(frozen=True)
class PinEnd:
    """Coaxial pins of ``diameter`` x ``length`` at both ends."""
    diameter: float
    length: float
    resolution: int

    def __post_init__(self) -> None:
        if not self.diameter > 0.0:
            raise ParameterError("Pin diameter should be greater than zero")
        if not self.length > 0.0:
            raise ParameterError("Pin length should be greater than zero")
        if self.resolution < 3:
            raise ParameterError(f"Pin needs at least 3 circle points; got {self.resolution}")


@dataclass(frozen=True)
class ChannelEnd:
    """Coaxial through hole of ``diameter``."""
    diameter: float
    resolution: int

    def __post_init__(self) -> None:
        if not self.diameter > 0.0:
            raise ParameterError("Channel diameter should be greater than zero")
        if self.resolution < 3:
            raise ParameterError(f"Channel needs at least 3 circle points; got {self.resolution}")


RollerEnd = Union[FlatEnd, PinEnd, ChannelEnd]


# ----------------
# Parameters
# ----------------

@dataclass
class RollerParameters:
    grid: RadiusGrid
    roller_diameter: float
    roller_length: float
    roller_end: RollerEnd = field(default_factory=FlatEnd)
    stack_horizontal: int = 1
    stack_vertical: int = 1
    relief_depth: float = 0.0
    grid_step: float = 0.0

    def __post_init__(self) -> None:
        if not (1 <= self.stack_horizontal <= MAX_STACK and 1 <= self.stack_vertical <= MAX_STACK):
            raise ParameterError(f"Stack counts should be within 1..{MAX_STACK}")
        if not (self.roller_diameter > 0.0 and self.roller_length > 0.0):
            raise ParameterError("All roller dimensions should be greater than zero")
        if self.circle_points() < 3:
            raise ParameterError(
                f"Roller needs at least 3 points around its circumference; got {self.circle_points()}"
            )
        if self.body_rows() < 2:
            raise ParameterError("Roller needs at least 2 rows of points along its length")
        if not isinstance(self.roller_end, (FlatEnd, PinEnd, ChannelEnd)):
            raise ParameterError(f"Unknown roller end: {self.roller_end!r}")
        if not isinstance(self.roller_end, FlatEnd):
            inner_radius = self.roller_end.diameter * 0.5
            clearance = min(
                outline_clearance(self.grid.top_line(), self.stack_horizontal),
                outline_clearance(self.grid.bottom_line(), self.stack_horizontal),
            )
            if inner_radius >= clearance:
                raise ParameterError(
                    f"End feature radius ({inner_radius}) should be less than "
                    f"the distance from the axis to the end outline of the body ({clearance})"
                )

    def circle_points(self) -> int:
        """Lateral resolution: points around the full body circumference."""
        return self.grid.width * self.stack_horizontal

    def body_rows(self) -> int:
        return self.grid.height * self.stack_vertical

    def faces_count(self) -> int:
        """Exact number of triangles one generation pass emits.

        Raises ParameterError when the count does not fit the 32-bit STL header.
        """
        width_points = self.circle_points()
        body_faces = 2 * width_points * (self.body_rows() - 1)
        if body_faces > MAX_FACES:
            raise ParameterError(OVERFLOW_ERROR_TEXT)
        end = self.roller_end
        if isinstance(end, FlatEnd):
            end_faces = 2 * width_points
        elif isinstance(end, PinEnd):
            end_faces = 2 * width_points + 8 * end.resolution
        elif isinstance(end, ChannelEnd):
            end_faces = 2 * width_points + 4 * end.resolution
        else:
            raise ParameterError(f"Unknown roller end: {end!r}")
        n_faces = body_faces + end_faces
        if n_faces > MAX_FACES:
            raise ParameterError(OVERFLOW_ERROR_TEXT)
        return n_faces

    def bytes_estimate(self) -> int:
        return HEADER_SIZE + 4 + FACE_RECORD_SIZE * self.faces_count()

    def summary(self) -> str:
        return "length: {:.2f} diameter: {:.2f} filesize: {}".format(
            self.roller_length, self.roller_diameter, format_bytes_size(self.bytes_estimate())
        )


def format_bytes_size(bytes_count: int) -> str:
    magnitude = int(math.log2(bytes_count)) // 10 if bytes_count > 0 else 0
    if magnitude == 0:
        return f"{bytes_count} B"
    unit, base = {1: ("KiB", 2 ** 10), 2: ("MiB", 2 ** 20)}.get(magnitude, ("GiB", 2 ** 30))
    return f"{bytes_count / base:.2f} {unit}"


# ----------------------
# Dimension derivation
# ----------------------

@dataclass(frozen=True)
class RollerDimensions:
    roller_diameter: float
    roller_length: float
    relief_depth: float
    grid_step: float
    grid_width: int
    grid_height: int
    resample: bool
    roller_end: RollerEnd
    stack_horizontal: int = 1
    stack_vertical: int = 1

    @property
    def min_radius(self) -> float:
        return self.roller_diameter * 0.5 - self.relief_depth

    @property
    def max_radius(self) -> float:
        return self.roller_diameter * 0.5

    def with_grid(self, grid: RadiusGrid) -> RollerParameters:
        if (grid.width, grid.height) != (self.grid_width, self.grid_height):
            raise ParameterError(
                f"Radius grid is {grid.width}x{grid.height}, expected {self.grid_width}x{self.grid_height}"
            )
        return RollerParameters(
            grid=grid,
            roller_diameter=self.roller_diameter,
            roller_length=self.roller_length,
            roller_end=self.roller_end,
            stack_horizontal=self.stack_horizontal,
            stack_vertical=self.stack_vertical,
            relief_depth=self.relief_depth,
            grid_step=self.grid_step,
        )


def derive_dimensions(
    image_width: int,
    image_height: int,
    *,
    diameter: Optional[float] = None,
    length: Optional[float] = None,
    grid_step: Optional[float] = None,
    relief_depth: Optional[float] = None,
    pin_diameter: Optional[float] = None,
    pin_length: Optional[float] = None,
    channel_diameter: Optional[float] = None,
    stack_horizontal: int = 1,
    stack_vertical: int = 1,
) -> RollerDimensions:
    """
    Work out every roller dimension from the image size and the given options.

    Exactly one of ``diameter``/``length`` is required; the other follows from
    the aspect ratio of the stacked image wrapped once around the roller.
    """
    if (diameter is None) == (length is None):
        raise ParameterError("Exactly one of roller diameter and roller length should be given")
    if image_width < 1 or image_height < 1:
        raise ParameterError(f"Image is empty ({image_width}x{image_height})")
    if not (1 <= stack_horizontal <= MAX_STACK and 1 <= stack_vertical <= MAX_STACK):
        raise ParameterError(f"Stack counts should be within 1..{MAX_STACK}")
    if pin_diameter is not None and channel_diameter is not None:
        raise ParameterError("Pins and channel cannot be combined")
    if (pin_diameter is None) != (pin_length is None):
        raise ParameterError("Pin diameter and pin length should be given together")

    surface_width_px = image_width * stack_horizontal
    surface_height_px = image_height * stack_vertical
    aspect_ratio = surface_width_px / surface_height_px
    if diameter is not None:
        pixel_size = math.pi * diameter / surface_width_px
        length = math.pi * diameter / aspect_ratio
    else:
        pixel_size = length / surface_height_px
        diameter = length * aspect_ratio / math.pi
    if not (diameter > 0.0 and length > 0.0):
        raise ParameterError("All roller dimensions should be greater than zero")

    if relief_depth is None:
        relief_depth = DEFAULT_RELIEF_FRACTION * diameter
    if not relief_depth > 0.0:
        raise ParameterError("Relief depth should be greater than zero")
    if not diameter > 2.0 * relief_depth:
        raise ParameterError(
            f"Relief depth ({relief_depth}) should be less than radius ({diameter * 0.5})"
        )

    if grid_step is not None:
        if not grid_step > 0.0:
            raise ParameterError("Grid step should be greater than zero")
        scale = pixel_size / grid_step
        grid_width = _round_half_up(scale * image_width)
        grid_height = _round_half_up(scale * image_height)
        if grid_width < 1 or grid_height < 1:
            raise ParameterError(f"Grid step ({grid_step}) is too big for this roller")
        resample = True
    else:
        grid_width, grid_height = image_width, image_height
        grid_step = length / surface_height_px
        resample = False

    core_diameter = diameter - 2.0 * relief_depth
    # a core-radius polygon of this many sides is the narrowest the body ends can be
    end_limit = core_diameter * math.cos(math.pi / (grid_width * stack_horizontal))
    roller_end: RollerEnd
    if pin_diameter is not None:
        if not pin_length > 0.0:
            raise ParameterError("Pin length should be greater than zero")
        if not end_limit > pin_diameter:
            raise ParameterError(
                f"Pin diameter ({pin_diameter}) is too big (should be < {end_limit})"
            )
        roller_end = PinEnd(
            diameter=pin_diameter,
            length=pin_length,
            resolution=_round_half_up(2.0 * math.pi * pin_diameter / grid_step),
        )
    elif channel_diameter is not None:
        if not end_limit > channel_diameter:
            raise ParameterError(
                f"Channel diameter ({channel_diameter}) is too big (should be < {end_limit})"
            )
        roller_end = ChannelEnd(
            diameter=channel_diameter,
            resolution=_round_half_up(2.0 * math.pi * channel_diameter / grid_step),
        )
    else:
        roller_end = FlatEnd()

    return RollerDimensions(
        roller_diameter=diameter,
        roller_length=length,
        relief_depth=relief_depth,
        grid_step=grid_step,
        grid_width=grid_width,
        grid_height=grid_height,
        resample=resample,
        roller_end=roller_end,
        stack_horizontal=stack_horizontal,
        stack_vertical=stack_vertical,
    )
