"""
Streaming binary STL writer for generated roller meshes.

Layout (little-endian):

    80-byte header | uint32 face count | face count x 50-byte records

Each record holds the normal and three vertices as float32 followed by a
2-byte attribute field that is always zero. The face count goes into the
header before any face is produced, so the writer is told up front how many
faces to expect and, with validation on, refuses to finish unless exactly
that many were written.
"""
from __future__ import annotations

import logging
import struct
from typing import BinaryIO, Optional, Tuple

import numpy as np

from .config import validation_enabled
from .errors import MeshInvariantError, MeshIOError, ParameterError
from .vectors import ZERO, Vec3, check_right_hand, points_close, v_cross, v_norm, v_sub

logger = logging.getLogger(__name__)

HEADER_SIZE = 80
HEADER_TEXT = b"pattern roller"
FACE_RECORD_SIZE = 50
MAX_FACES = 2 ** 32 - 1

_COUNT = struct.Struct("<I")
_FACE = struct.Struct("<12fH")


def face_normal(a: Vec3, b: Vec3, c: Vec3) -> Vec3:
    """Unit normal of triangle abc following the right-hand rule (zero if degenerate)."""
    return v_norm(v_cross(v_sub(b, a), v_sub(c, a)))


def check_face(n: Vec3, a: Vec3, b: Vec3, c: Vec3) -> None:
    """Raise MeshInvariantError for a degenerate face or a normal facing the wrong way."""
    if points_close(a, b) or points_close(b, c) or points_close(c, a) or points_close(n, ZERO):
        raise MeshInvariantError(
            f"Encountered degenerate face: a:{a!r} b:{b!r} c:{c!r} n:{n!r}"
        )
    if not check_right_hand(v_sub(c, b), v_sub(a, b), n):
        raise MeshInvariantError(
            f"Encountered inverted normal: a:{a!r} b:{b!r} c:{c!r} n:{n!r}"
        )


class StlFileWriter:
    """
    Sequential binary STL sink.

    Open it with the final face count, write faces in order, then call
    ``finish()`` exactly once. ``finish()`` is where a short or long write is
    detected; leaving the writer through ``close()`` or a ``with`` block only
    releases the file.
    """

    def __init__(self, path: str, expected_faces: int, *, validate: Optional[bool] = None) -> None:
        if expected_faces < 0 or expected_faces > MAX_FACES:
            raise ParameterError(
                f"Overflow in STL face counter: {expected_faces} faces do not fit in 32 bits"
            )
        self.path = str(path)
        self.expected_faces = int(expected_faces)
        self.validate = validation_enabled(validate)
        self.faces_written = 0
        try:
            self._file: Optional[BinaryIO] = open(self.path, "wb")
        except OSError as exc:
            raise MeshIOError(f"Failed to open file '{self.path}' for writing: {exc}") from exc
        logger.debug("writing %d faces to %s (validation %s)", self.expected_faces, self.path,
                     "on" if self.validate else "off")
        self._write(HEADER_TEXT + bytes(HEADER_SIZE - len(HEADER_TEXT)))
        self._write(_COUNT.pack(self.expected_faces))

    # ---- context manager ----
    def __enter__(self) -> "StlFileWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._file is None

    def _write(self, data: bytes) -> None:
        if self._file is None:
            raise MeshIOError(f"STL file '{self.path}' is already closed")
        try:
            self._file.write(data)
        except OSError as exc:
            raise MeshIOError(f"Failed to write to file '{self.path}': {exc}") from exc

    def write_face(self, n: Vec3, a: Vec3, b: Vec3, c: Vec3) -> None:
        if self.validate:
            check_face(n, a, b, c)
            if self.faces_written >= self.expected_faces:
                raise MeshInvariantError(
                    f"Faces count mismatch: more than {self.expected_faces} faces written to '{self.path}'"
                )
        self._write(_FACE.pack(n[0], n[1], n[2],
                               a[0], a[1], a[2],
                               b[0], b[1], b[2],
                               c[0], c[1], c[2],
                               0))
        self.faces_written += 1

    def write_face_auto_normal(self, a: Vec3, b: Vec3, c: Vec3) -> None:
        self.write_face(face_normal(a, b, c), a, b, c)

    def close(self) -> None:
        if self._file is None:
            return
        f, self._file = self._file, None
        try:
            f.close()
        except OSError as exc:
            raise MeshIOError(f"Failed to write to file '{self.path}': {exc}") from exc

    def finish(self) -> int:
        """Close the file and return the number of faces written.

        Raises MeshInvariantError (validation on) when that number differs from
        the count written into the header.
        """
        self.close()
        if self.validate and self.faces_written != self.expected_faces:
            raise MeshInvariantError(
                f"Faces count mismatch: stl file '{self.path}' was not fully written "
                f"({self.faces_written} of {self.expected_faces} faces)"
            )
        logger.debug("finished %s with %d faces", self.path, self.faces_written)
        return self.faces_written


# ---------------
# Read-back
# ---------------

def _read_header(f: BinaryIO, path: str) -> int:
    head = f.read(HEADER_SIZE + _COUNT.size)
    if len(head) != HEADER_SIZE + _COUNT.size:
        raise MeshIOError(f"File '{path}' is too short to be a binary STL")
    return _COUNT.unpack_from(head, HEADER_SIZE)[0]


def read_stl_face_count(path: str) -> int:
    """Face count declared in the header of a binary STL."""
    try:
        with open(path, "rb") as f:
            return _read_header(f, str(path))
    except OSError as exc:
        raise MeshIOError(f"Failed to read file '{path}': {exc}") from exc


def read_stl_binary(path: str) -> Tuple[np.ndarray, np.ndarray]:
    """
    Load a binary STL.

    Returns:
        (normals, triangles) with shapes (N, 3) and (N, 3, 3), dtype float32.
    """
    try:
        with open(path, "rb") as f:
            n_faces = _read_header(f, str(path))
            body = f.read()
    except OSError as exc:
        raise MeshIOError(f"Failed to read file '{path}': {exc}") from exc
    if len(body) != n_faces * FACE_RECORD_SIZE:
        raise MeshIOError(
            f"File '{path}' declares {n_faces} faces but holds {len(body)} bytes of face data"
        )
    record = np.dtype([("normal", "<f4", (3,)), ("vertices", "<f4", (3, 3)), ("attr", "<u2")])
    data = np.frombuffer(body, dtype=record, count=n_faces)
    return data["normal"].astype(np.float32), data["vertices"].astype(np.float32)
