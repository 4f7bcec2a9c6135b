"""High-level renderer that turns a sample stream into a wrapped spectrogram raster."""

from __future__ import annotations

import time
from typing import Callable, Optional

import numpy as np

from specraster.dsp.fft import samples_fft_to_spectrum
from specraster.dsp.windowing import iter_windows, total_columns
from specraster.io.decoder import extract_samples
from specraster.io.image_sink import default_output_path, save_png
from specraster.raster.axis import CHANNELS, fill_column
from specraster.raster.layout import BandLayout
from specraster.render.config import RenderConfig
from specraster.util.errors import DegenerateWindowError
from specraster.util.logging import get_logger

logger = get_logger(__name__)

ColumnObserver = Callable[[int, int], None]


def _no_progress(index: int, total: int) -> None:
    return None


class SpectrogramRenderer:
    """Bind a RenderConfig to the window → spectrum → column loop."""

    def __init__(self, config: RenderConfig, on_column: Optional[ColumnObserver] = None):
        self.config = config
        self.axis = config.axis()
        self.scaling = config.scaling_fn()
        self.on_column = on_column or _no_progress

    def layout_for(self, sample_count: int) -> BandLayout:
        columns = total_columns(sample_count, self.config.window)
        return BandLayout.for_columns(columns, self.axis.rows_per_band, self.config.band_width)

    def render(self, samples: np.ndarray) -> np.ndarray:
        """Return an ``(height, width, 4)`` uint8 raster for ``samples``."""
        stream = np.asarray(samples, dtype=np.float32).reshape(-1)
        stream.setflags(write=False)
        layout = self.layout_for(stream.size)
        logger.info(
            "Rendering %d columns into %dx%d (%d bands, mode=%s)",
            layout.total_columns,
            layout.width,
            layout.height,
            layout.band_count,
            self.config.mode,
            extra={"sample_count": int(stream.size)},
        )
        image = np.zeros((layout.height, layout.width, CHANNELS), dtype=np.uint8)

        t0 = time.time()
        for index, window in iter_windows(stream, self.config.window):
            try:
                frame = samples_fft_to_spectrum(
                    window,
                    self.config.sample_rate,
                    self.config.freq_range,
                    self.scaling,
                )
            except DegenerateWindowError as exc:
                raise DegenerateWindowError(f"column {index}: {exc.message}") from exc
            x, row_offset = layout.locate(index)
            fill_column(image, frame, self.axis, x, row_offset)
            self.on_column(index, layout.total_columns)

        logger.debug(
            "Rendered %d columns",
            layout.total_columns,
            extra={"duration_ms": int((time.time() - t0) * 1000)},
        )
        return image


def render_file(
    path: str,
    config: RenderConfig,
    output: Optional[str] = None,
    on_column: Optional[ColumnObserver] = None,
) -> str:
    """Decode ``path``, render it and write the PNG; returns the output path."""
    decoded = extract_samples(path)
    if decoded.sample_rate != config.sample_rate:
        logger.warning(
            "Input sample rate %d Hz differs from analysis rate %d Hz; frequencies are interpreted at %d Hz",
            decoded.sample_rate,
            config.sample_rate,
            config.sample_rate,
        )
    if decoded.truncated:
        logger.warning("Decoding stopped early; rendering %d samples", decoded.sample_count)
    renderer = SpectrogramRenderer(config, on_column=on_column)
    image = renderer.render(decoded.samples)
    return save_png(image, output or default_output_path(path))
