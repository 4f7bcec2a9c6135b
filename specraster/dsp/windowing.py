"""Fixed-length, non-overlapping analysis windows over a flat sample stream."""

from __future__ import annotations

from typing import Iterator, Tuple

import numpy as np


def total_columns(sample_count: int, window: int) -> int:
    """Number of full windows (output columns); the partial remainder is dropped."""
    if window <= 0:
        raise ValueError("window length must be > 0")
    return max(0, int(sample_count)) // int(window)


def window_bounds(index: int, sample_count: int, window: int) -> Tuple[int, int]:
    """Return the ``[start, end)`` sample span of window ``index``, clipped at the stream end."""
    start = index * window
    end = min((index + 1) * window, sample_count)
    return start, end


def iter_windows(samples: np.ndarray, window: int) -> Iterator[Tuple[int, np.ndarray]]:
    """Yield ``(index, view)`` for every full window of ``samples``.

    Views share memory with ``samples``; nothing is copied.
    """
    n = int(samples.shape[0])
    for index in range(total_columns(n, window)):
        start, end = window_bounds(index, n, window)
        yield index, samples[start:end]
