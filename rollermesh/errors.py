"""Exception types raised while building a roller mesh."""


class RollerMeshError(Exception):
    """Base class for every error raised by rollermesh."""


class ParameterError(RollerMeshError, ValueError):
    """Invalid roller geometry or a model too big for the STL face counter."""


class MeshIOError(RollerMeshError, OSError):
    """Output file could not be opened or written."""


class MeshInvariantError(RollerMeshError, AssertionError):
    """Generated geometry broke an invariant; this is a bug, not bad input."""
