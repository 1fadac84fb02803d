"""
rollermesh: turn a pattern image into a binary STL of an embossing roller.

The image becomes a grid of surface radii wrapped once around a cylinder.
The lateral surface is tessellated cell by cell, picking for each cell the
diagonal that best follows the local curvature, and the ends are closed as
flat discs, pins or a through channel. Faces are streamed straight into the
STL file; nothing is held in memory beyond the radius grid.
"""
from .circles import CircleSampler  # noqa: F401
from .construct import make_cylinder_patterned, make_pattern_roller  # noqa: F401
from .errors import MeshInvariantError, MeshIOError, ParameterError, RollerMeshError  # noqa: F401
from .grid import RadiusGrid, grid_from_array  # noqa: F401
from .params import (  # noqa: F401
    ChannelEnd,
    FlatEnd,
    PinEnd,
    RollerEnd,
    RollerParameters,
    derive_dimensions,
)
from .stl import StlFileWriter, read_stl_binary, read_stl_face_count  # noqa: F401

__version__ = "0.1.0"
