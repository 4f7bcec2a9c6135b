"""Dataclasses shared between the spectrum extractor and the axis mappers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

import numpy as np


@dataclass(frozen=True)
class SpectrumFrame:
    """Ascending ``(frequency, magnitude)`` pairs for one analysis window."""

    frequencies: np.ndarray
    magnitudes: np.ndarray

    def __post_init__(self) -> None:
        freqs = np.asarray(self.frequencies, dtype=np.float32)
        mags = np.asarray(self.magnitudes, dtype=np.float32)
        if freqs.ndim != 1 or mags.ndim != 1:
            raise ValueError("spectrum frame arrays must be one-dimensional")
        if freqs.shape != mags.shape:
            raise ValueError(f"frequency/magnitude length mismatch: {freqs.size} != {mags.size}")
        if freqs.size > 1 and not np.all(np.diff(freqs) > 0):
            raise ValueError("spectrum frame frequencies must be strictly increasing")
        object.__setattr__(self, "frequencies", freqs)
        object.__setattr__(self, "magnitudes", mags)

    def __len__(self) -> int:
        return int(self.frequencies.size)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        for f, m in zip(self.frequencies.tolist(), self.magnitudes.tolist()):
            yield f, m

    @property
    def max_frequency(self) -> float:
        return float(self.frequencies[-1]) if self.frequencies.size else 0.0


def frame_from_pairs(pairs: Iterable[Tuple[float, float]]) -> SpectrumFrame:
    """Build a frame from explicit ``(frequency, magnitude)`` pairs."""
    items = list(pairs)
    if not items:
        return SpectrumFrame(np.zeros(0, dtype=np.float32), np.zeros(0, dtype=np.float32))
    freqs, mags = zip(*items)
    return SpectrumFrame(np.asarray(freqs, dtype=np.float32), np.asarray(mags, dtype=np.float32))
