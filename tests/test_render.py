import math

import numpy as np
import pytest
import soundfile as sf
from PIL import Image

import specraster.render.runner as runner_mod
from specraster.render.config import RenderConfig
from specraster.render.runner import SpectrogramRenderer, render_file
from specraster.util.errors import DegenerateWindowError, EmptyRecordingError

RATE = 44_100
W = 2048


def _tone(freq: float, windows: int) -> np.ndarray:
    t = np.arange(W * windows, dtype=np.float64) / RATE
    return (0.8 * np.sin(2.0 * np.pi * freq * t)).astype(np.float32)


def _expected_row(freq: float, rows: int) -> int:
    lo, hi = math.log10(20.0), math.log10(10_000.0)
    return round((math.log10(freq) - lo) / (hi - lo) * rows)


def test_tone_renders_one_bright_row_per_column() -> None:
    rows = 128
    renderer = SpectrogramRenderer(RenderConfig(row_height=rows))
    image = renderer.render(_tone(440.0, 10))

    assert image.shape == (rows * 6, 2, 4)
    assert image.dtype == np.uint8
    expected = _expected_row(440.0, rows)
    for column in range(10):
        x = column % 2
        offset = (column // 2) * rows
        band = image[offset : offset + rows, x, 0]
        assert int(band.max()) >= 200
        assert abs(int(np.argmax(band)) - expected) <= 2
    # the last band has no columns and stays unpainted
    assert not np.any(image[5 * rows :])


def test_progress_observer_sees_every_column_in_order() -> None:
    seen = []
    renderer = SpectrogramRenderer(RenderConfig(row_height=32), on_column=lambda i, n: seen.append((i, n)))
    renderer.render(_tone(1000.0, 7))
    assert seen == [(i, 7) for i in range(7)]


def test_linear_mode_uses_packed_band_height() -> None:
    renderer = SpectrogramRenderer(RenderConfig(row_height=128, mode="linear", tempo_bpm=120.0))
    image = renderer.render(_tone(440.0, 10))
    assert image.shape == (16 * 6, 2, 4)
    # bins 20/21 hold the tone: row 5, channels 0 and 1
    assert int(image[5, 0, :2].max()) >= 200


def test_explicit_band_width_overrides_auto_width() -> None:
    renderer = SpectrogramRenderer(RenderConfig(row_height=8, band_width=4))
    image = renderer.render(_tone(440.0, 10))
    assert image.shape == (8 * 3, 4, 4)


def test_short_recording_is_rejected() -> None:
    renderer = SpectrogramRenderer(RenderConfig())
    with pytest.raises(EmptyRecordingError):
        renderer.render(np.zeros(W - 1, dtype=np.float32))


def test_spectrum_failure_names_the_column(monkeypatch) -> None:
    def _boom(window, sample_rate, freq_range, scaling):
        raise DegenerateWindowError("window too short")

    monkeypatch.setattr(runner_mod, "samples_fft_to_spectrum", _boom)
    renderer = SpectrogramRenderer(RenderConfig(row_height=16))
    with pytest.raises(DegenerateWindowError) as info:
        renderer.render(_tone(440.0, 3))
    assert "column 0" in str(info.value)


def test_render_file_writes_rgba_png(tmp_path) -> None:
    path = tmp_path / "tone.wav"
    sf.write(str(path), _tone(440.0, 10), RATE, subtype="FLOAT")

    out = render_file(str(path), RenderConfig(row_height=64))
    assert out == f"{path}.png"
    with Image.open(out) as img:
        assert img.mode == "RGBA"
        assert img.size == (2, 64 * 6)
