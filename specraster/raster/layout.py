"""Band layout: wrap a long column sequence into vertically stacked bands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from specraster.util.errors import EmptyRecordingError
from specraster.util.math import nearest_power_of_two_below


def auto_band_width(total_columns: int) -> int:
    """One quarter of the nearest power of two below ``total_columns``, at least 1."""
    return max(1, nearest_power_of_two_below(total_columns) // 4)


@dataclass(frozen=True)
class BandLayout:
    total_columns: int
    band_width: int
    rows_per_band: int

    @classmethod
    def for_columns(cls, total_columns: int, rows_per_band: int, band_width: Optional[int] = None) -> "BandLayout":
        if total_columns <= 0:
            raise EmptyRecordingError("recording is shorter than one analysis window")
        if rows_per_band <= 0:
            raise ValueError(f"rows per band must be > 0, got {rows_per_band}")
        if band_width is not None and band_width <= 0:
            raise ValueError(f"band width must be > 0, got {band_width}")
        width = band_width if band_width is not None else auto_band_width(total_columns)
        return cls(total_columns=total_columns, band_width=width, rows_per_band=rows_per_band)

    @property
    def band_count(self) -> int:
        return self.total_columns // self.band_width + 1

    @property
    def width(self) -> int:
        return self.band_width

    @property
    def height(self) -> int:
        return self.rows_per_band * self.band_count

    def band_index(self, column: int) -> int:
        return column // self.band_width

    def locate(self, column: int) -> Tuple[int, int]:
        """Return ``(x, row_offset)`` of ``column`` inside the image."""
        return column % self.band_width, self.band_index(column) * self.rows_per_band
