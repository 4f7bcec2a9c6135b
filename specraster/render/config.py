"""Render configuration dataclass and pipeline constants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from specraster.dsp.fft import SCALINGS, Scaling
from specraster.raster.axis import AxisMode, LinearStridedAxis, LogarithmicAxis

SAMPLING_RATE = 44_100
SAMPLING_WINDOW = 2048
FREQUENCY_MIN = 20.0
FREQUENCY_MAX = 10_000.0
DEFAULT_ROW_HEIGHT = 128

MODES = ("log", "linear")


@dataclass
class RenderConfig:
    row_height: int = DEFAULT_ROW_HEIGHT
    mode: str = "log"
    band_width: Optional[int] = None
    scaling: str = "zero-to-one"
    freq_min: float = FREQUENCY_MIN
    freq_max: float = FREQUENCY_MAX
    tempo_bpm: Optional[float] = None
    sample_rate: int = SAMPLING_RATE
    window: int = SAMPLING_WINDOW

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"unknown mode '{self.mode}' (expected one of {', '.join(MODES)})")
        if self.scaling not in SCALINGS:
            raise ValueError(f"unknown scaling '{self.scaling}'")
        if self.row_height <= 0:
            raise ValueError("row height must be > 0")
        if self.window < 2:
            raise ValueError("window must hold at least 2 samples")

    @property
    def freq_range(self) -> Tuple[float, float]:
        return 0.0, float(self.freq_max)

    def scaling_fn(self) -> Optional[Scaling]:
        return SCALINGS[self.scaling]

    def axis(self) -> AxisMode:
        if self.mode == "linear":
            return LinearStridedAxis(row_height=self.row_height, tempo_bpm=self.tempo_bpm)
        return LogarithmicAxis(rows_per_band=self.row_height, freq_min=self.freq_min, freq_max=self.freq_max)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "row_height": self.row_height,
            "mode": self.mode,
            "band_width": self.band_width,
            "scaling": self.scaling,
            "freq_min": self.freq_min,
            "freq_max": self.freq_max,
            "tempo_bpm": self.tempo_bpm,
            "sample_rate": self.sample_rate,
            "window": self.window,
        }
