"""FFT helper routines turning one analysis window into a SpectrumFrame."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

import numpy as np
from scipy import fft as sp_fft

from specraster.dsp.types import SpectrumFrame
from specraster.util.errors import DegenerateWindowError

MIN_WINDOW_SAMPLES = 2

Scaling = Callable[[np.ndarray], np.ndarray]


def scale_to_zero_to_one(mags: np.ndarray) -> np.ndarray:
    """Divide by the frame maximum so the loudest bin is exactly 1.0."""
    peak = float(np.max(mags)) if mags.size else 0.0
    if peak <= 0.0:
        return np.zeros_like(mags)
    return mags / peak


def divide_by_n(mags: np.ndarray) -> np.ndarray:
    """Divide by the number of bins, clipped into [0, 1]."""
    if mags.size == 0:
        return mags
    return np.clip(mags / float(mags.size), 0.0, 1.0)


def divide_by_n_sqrt(mags: np.ndarray) -> np.ndarray:
    """Divide by sqrt(bin count), clipped into [0, 1]."""
    if mags.size == 0:
        return mags
    return np.clip(mags / np.sqrt(float(mags.size)), 0.0, 1.0)


SCALINGS: Dict[str, Optional[Scaling]] = {
    "zero-to-one": scale_to_zero_to_one,
    "divide-by-n": divide_by_n,
    "divide-by-n-sqrt": divide_by_n_sqrt,
    "none": None,
}


def samples_fft_to_spectrum(
    window: np.ndarray,
    sample_rate: int,
    freq_range: Tuple[float, float],
    scaling: Optional[Scaling] = scale_to_zero_to_one,
) -> SpectrumFrame:
    """Return the scaled one-sided magnitude spectrum of ``window``.

    Bins are ``k * sample_rate / N``; only bins inside the inclusive
    ``freq_range`` are kept, and scaling runs on that subset.
    """
    samples = np.asarray(window, dtype=np.float32)
    n = int(samples.size)
    if n < MIN_WINDOW_SAMPLES:
        raise DegenerateWindowError(f"window has {n} samples, need at least {MIN_WINDOW_SAMPLES}")
    if not np.all(np.isfinite(samples)):
        raise DegenerateWindowError("window contains non-finite samples")

    spectrum = sp_fft.rfft(samples)
    freqs = sp_fft.rfftfreq(n, d=1.0 / float(sample_rate))
    lo, hi = freq_range
    keep = (freqs >= lo) & (freqs <= hi)
    freqs = freqs[keep]
    mags = np.abs(spectrum[keep]).astype(np.float64)

    if scaling is None:
        mags = np.clip(mags, 0.0, 1.0)
    else:
        mags = np.asarray(scaling(mags), dtype=np.float64)
        if mags.shape != freqs.shape:
            raise DegenerateWindowError(f"scaling changed frame length: {mags.shape} != {freqs.shape}")
    return SpectrumFrame(freqs.astype(np.float32), mags.astype(np.float32))
