"""Frequency-axis mappers that paint one SpectrumFrame into one image column.

Two closed modes exist:

- ``LogarithmicAxis``: log-spaced rows with step-hold fill, so every row of
  the band is painted even where linear FFT bins are sparse.
- ``LinearStridedAxis``: four consecutive bins packed into the four channels
  of one pixel; rows past the packed region are left at zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Union

import numpy as np

from specraster.dsp.types import SpectrumFrame
from specraster.raster.quantize import quantize, quantize_array

CHANNELS = 4


@dataclass(frozen=True)
class LogarithmicAxis:
    rows_per_band: int
    freq_min: float = 20.0
    freq_max: float = 10_000.0

    def __post_init__(self) -> None:
        if self.rows_per_band <= 0:
            raise ValueError("rows_per_band must be > 0")
        if not (0.0 < self.freq_min < self.freq_max):
            raise ValueError("require 0 < freq_min < freq_max")

    @property
    def log_min(self) -> float:
        return math.log10(self.freq_min)

    @property
    def log_max(self) -> float:
        return math.log10(self.freq_max)

    def row_for(self, frequency: float) -> Optional[int]:
        """Row (relative to the band top) for ``frequency``, or None when out of range."""
        if frequency <= 0.0:
            return None
        log_f = math.log10(frequency)
        if log_f < self.log_min or log_f > self.log_max:
            return None
        norm = (log_f - self.log_min) / (self.log_max - self.log_min)
        return int(round(norm * self.rows_per_band))


@dataclass(frozen=True)
class LinearStridedAxis:
    """Linear bins packed ``stride`` per pixel.

    ``row_height`` is the configured band row height ``h``; only the first
    ``h // 2`` bins are drawn. ``tempo_bpm`` is carried for beat-aligned
    layouts and does not affect the column fill.
    """

    row_height: int
    stride: int = CHANNELS
    tempo_bpm: Optional[float] = None

    def __post_init__(self) -> None:
        if self.row_height <= 0:
            raise ValueError("row_height must be > 0")
        if self.stride != CHANNELS:
            raise ValueError(f"stride must equal the pixel channel count ({CHANNELS})")

    @property
    def bin_limit(self) -> int:
        return self.row_height // 2

    @property
    def rows_per_band(self) -> int:
        return max(1, -(-self.bin_limit // self.stride))


AxisMode = Union[LogarithmicAxis, LinearStridedAxis]


def log_row_targets(frame: SpectrumFrame, axis: LogarithmicAxis) -> List[Optional[int]]:
    """Per-pair target rows relative to the band top; None marks a skipped pair."""
    return [axis.row_for(f) for f, _ in frame]


def fill_log_column(
    image: np.ndarray,
    frame: SpectrumFrame,
    axis: LogarithmicAxis,
    x: int,
    row_offset: int,
) -> int:
    """Step-hold fill of rows ``[row_offset, row_offset + rows_per_band)`` at column ``x``.

    Returns the number of rows written, always ``rows_per_band``.
    """
    band_end = row_offset + axis.rows_per_band
    prev_val = 0
    row = row_offset
    for freq, mag in frame:
        rel = axis.row_for(freq)
        if rel is None:
            continue
        target = min(rel + row_offset, band_end)
        while row < target:
            image[row, x, :] = prev_val
            row += 1
        prev_val = quantize(mag)

    while row < band_end:
        image[row, x, :] = prev_val
        row += 1
    return row - row_offset


def fill_linear_column(
    image: np.ndarray,
    frame: SpectrumFrame,
    axis: LinearStridedAxis,
    x: int,
    row_offset: int,
) -> int:
    """Pack bins ``y..y+3`` into one RGBA pixel at row ``row_offset + y // 4``.

    Bins at or past ``min(h // 2, len(frame))`` leave their channel at 0.

    Returns the number of pixels written.
    """
    values = quantize_array(frame.magnitudes)
    limit = min(axis.bin_limit, values.size)
    written = 0
    for y in range(0, limit, axis.stride):
        pixel = np.zeros(CHANNELS, dtype=np.uint8)
        chunk = values[y : min(y + axis.stride, limit)]
        pixel[: chunk.size] = chunk
        image[row_offset + y // axis.stride, x, :] = pixel
        written += 1
    return written


def fill_column(
    image: np.ndarray,
    frame: SpectrumFrame,
    axis: AxisMode,
    x: int,
    row_offset: int,
) -> int:
    """Dispatch to the column fill for ``axis``."""
    if isinstance(axis, LogarithmicAxis):
        return fill_log_column(image, frame, axis, x, row_offset)
    if isinstance(axis, LinearStridedAxis):
        return fill_linear_column(image, frame, axis, x, row_offset)
    raise TypeError(f"unsupported axis mode: {type(axis).__name__}")
