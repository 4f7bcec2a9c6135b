"""Normalized magnitude to 8-bit channel conversion."""

from __future__ import annotations

import math

import numpy as np


def quantize(magnitude: float) -> int:
    """Return ``floor(magnitude * 255)``.

    Inputs are expected in [0, 1]; nothing is clamped here.
    """
    return int(math.floor(float(magnitude) * 255.0))


def quantize_array(magnitudes: np.ndarray) -> np.ndarray:
    """Vectorized ``quantize`` returning ``uint8``."""
    return np.floor(np.asarray(magnitudes, dtype=np.float64) * 255.0).astype(np.uint8)
