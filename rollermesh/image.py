# rollermesh/image.py
from __future__ import annotations

import logging

import numpy as np
from PIL import Image

from .errors import MeshIOError
from .grid import RadiusGrid, grid_from_array

logger = logging.getLogger(__name__)

_HIGH_DEPTH_MODES = ("I;16", "I;16L", "I;16B", "I;16N")


def load_image(path: str) -> Image.Image:
    """Decode an image file into a single-channel float ("F" mode) image."""
    try:
        with Image.open(path) as raw:
            raw.load()
            image = _to_gray(raw)
    except OSError as exc:
        raise MeshIOError(f"Failed to read file '{path}': {exc}") from exc
    logger.debug("loaded %s: %dx%d", path, image.width, image.height)
    return image


def _to_gray(image: Image.Image) -> Image.Image:
    if image.mode in _HIGH_DEPTH_MODES:
        image = image.convert("I")
    elif image.mode not in ("L", "I", "F"):
        image = image.convert("L")
    return image.convert("F")


def resize_image(image: Image.Image, width: int, height: int, pixelated: bool = False) -> Image.Image:
    if pixelated:
        resample = Image.Resampling.NEAREST
    elif image.width > width and image.height > height:
        resample = Image.Resampling.LANCZOS
    else:
        resample = Image.Resampling.BICUBIC
    return image.resize((width, height), resample=resample)


def image_to_radii(image: Image.Image, min_radius: float, max_radius: float, *, inverted: bool = False) -> RadiusGrid:
    """Map gray levels onto radii; brighter pixels give larger radii unless inverted."""
    levels = np.asarray(image, dtype=np.float64)
    return grid_from_array(levels, min_radius, max_radius, inverted=inverted)
