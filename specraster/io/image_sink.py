"""PNG output for finished RGBA rasters (Pillow)."""

from __future__ import annotations

import numpy as np
from PIL import Image

from specraster.util.errors import ImageWriteError
from specraster.util.logging import get_logger

logger = get_logger(__name__)


def default_output_path(input_path: str) -> str:
    """``<input>.png`` next to the input file."""
    return f"{input_path}.png"


def to_image(raster: np.ndarray) -> Image.Image:
    if raster.ndim != 3 or raster.shape[2] != 4 or raster.dtype != np.uint8:
        raise ImageWriteError(f"expected (H, W, 4) uint8 raster, got {raster.shape} {raster.dtype}")
    return Image.fromarray(raster)


def save_png(raster: np.ndarray, path: str) -> str:
    """Write ``raster`` to ``path`` as PNG and return the path."""
    image = to_image(raster)
    logger.info("Saving image as %r ...", path, extra={"path": path})
    try:
        image.save(path, format="PNG")
    except (OSError, ValueError) as exc:
        raise ImageWriteError(f"cannot write {path}: {exc}") from exc
    return path
