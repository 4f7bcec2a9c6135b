import math

import numpy as np

from specraster.dsp.types import frame_from_pairs
from specraster.raster.axis import LogarithmicAxis, fill_log_column, log_row_targets


class _CountingImage:
    """Records how many times each (row, x) pixel is written."""

    def __init__(self, height: int, width: int):
        self.data = np.full((height, width, 4), -1, dtype=np.int32)
        self.counts = np.zeros((height, width), dtype=np.int32)

    def __setitem__(self, key, value) -> None:
        row, x, _ = key
        self.counts[row, x] += 1
        self.data[key] = value


def _linear_bins(count: int, spacing: float, value: float = 0.5):
    return frame_from_pairs((k * spacing, value) for k in range(count))


def test_every_band_row_written_exactly_once() -> None:
    axis = LogarithmicAxis(rows_per_band=64)
    image = _CountingImage(64 * 3, 2)
    frame = _linear_bins(465, 44100 / 2048)
    written = fill_log_column(image, frame, axis, x=1, row_offset=64)
    assert written == 64
    assert np.all(image.counts[64:128, 1] == 1)
    assert not np.any(image.data[64:128, 1] == -1)
    # nothing outside the band or column is touched
    assert np.all(image.counts[:64] == 0)
    assert np.all(image.counts[128:] == 0)
    assert np.all(image.counts[:, 0] == 0)


def test_target_rows_are_non_decreasing() -> None:
    axis = LogarithmicAxis(rows_per_band=128)
    frame = _linear_bins(465, 44100 / 2048)
    targets = [t for t in log_row_targets(frame, axis) if t is not None]
    assert targets
    assert all(b >= a for a, b in zip(targets, targets[1:]))
    assert targets[-1] <= 128


def test_out_of_range_pairs_do_not_disturb_held_value() -> None:
    axis = LogarithmicAxis(rows_per_band=32)
    image = np.zeros((32, 1, 4), dtype=np.uint8)
    frame = frame_from_pairs([(10.0, 1.0), (100.0, 0.5), (20_000.0, 1.0)])
    fill_log_column(image, frame, axis, x=0, row_offset=0)

    target = axis.row_for(100.0)
    assert target is not None
    assert np.all(image[:target, 0, :] == 0)
    assert np.all(image[target:, 0, :] == 127)
    assert axis.row_for(10.0) is None
    assert axis.row_for(20_000.0) is None


def test_step_hold_carries_previous_value_across_sparse_rows() -> None:
    axis = LogarithmicAxis(rows_per_band=100)
    image = np.zeros((100, 1, 4), dtype=np.uint8)
    frame = frame_from_pairs([(20.0, 1.0), (200.0, 0.2), (2000.0, 0.6)])
    fill_log_column(image, frame, axis, x=0, row_offset=0)

    r200 = axis.row_for(200.0)
    r2000 = axis.row_for(2000.0)
    assert np.all(image[0:r200, 0, 0] == 255)
    assert np.all(image[r200:r2000, 0, 0] == 51)
    assert np.all(image[r2000:, 0, 0] == 153)
    # all four channels carry the same value
    assert np.all(image[:, 0, :] == image[:, 0, :1])


def test_row_mapping_matches_log_formula() -> None:
    axis = LogarithmicAxis(rows_per_band=128)
    expected = round((math.log10(440.0) - math.log10(20.0)) / (math.log10(10_000.0) - math.log10(20.0)) * 128)
    assert axis.row_for(440.0) == expected
    assert axis.row_for(20.0) == 0
    assert axis.row_for(10_000.0) == 128
    assert axis.row_for(0.0) is None


def test_bin_at_freq_max_stays_inside_its_band() -> None:
    axis = LogarithmicAxis(rows_per_band=32)
    image = _CountingImage(32 * 3, 1)
    frame = frame_from_pairs([(50.0, 0.2), (1000.0, 0.4), (10_000.0, 1.0)])
    assert axis.row_for(10_000.0) == 32

    written = fill_log_column(image, frame, axis, x=0, row_offset=32)
    assert written == 32
    assert np.all(image.counts[32:64, 0] == 1)
    assert np.all(image.counts[:32] == 0)
    assert np.all(image.counts[64:] == 0)
    # the bin sitting on the band edge has no row left to hold it
    assert image.data[63, 0, 0] == 102
