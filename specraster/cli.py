#!/usr/bin/env python3
"""specraster CLI entrypoint (package module)."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Any, List, Optional, Set

from specraster.dsp.fft import SCALINGS
from specraster.render.config import DEFAULT_ROW_HEIGHT, FREQUENCY_MAX, FREQUENCY_MIN, MODES, RenderConfig
from specraster.render.runner import ColumnObserver, render_file
from specraster.util.errors import SpectrogramError
from specraster.util.exit_codes import ExitCode
from specraster.util.logging import configure_logging, get_logger, log_exception

logger = get_logger(__name__)


def build_config(args: argparse.Namespace) -> RenderConfig:
    return RenderConfig(
        row_height=args.width,
        mode=args.mode,
        band_width=args.band_width,
        scaling=args.scaling,
        freq_min=args.freq_min,
        freq_max=args.freq_max,
        tempo_bpm=args.tempo,
    )


def progress_observer(every: int = 0) -> ColumnObserver:
    """Log ``Processing column i of n`` roughly ten times per render (or every ``every`` columns)."""

    def _observe(index: int, total: int) -> None:
        step = every or max(1, total // 10)
        if index % step == 0 or index == total - 1:
            logger.info("Processing column %d of %d", index + 1, total, extra={"column": index})

    return _observe


def run(args: argparse.Namespace) -> int:
    """Top-level CLI dispatcher; returns a process exit code."""
    configure_logging(level=args.log_level, json_file=args.log_json)
    config = build_config(args)
    logger.debug("Render config: %s", config.to_dict())
    try:
        out = render_file(args.file, config, output=args.output, on_column=progress_observer())
    except SpectrogramError as exc:
        log_exception(logger, str(exc), error_type=exc.stage, stage=exc.stage)
        return ExitCode.for_stage(exc.stage)
    except Exception:
        log_exception(logger, "Unexpected failure while rendering", error_type="general")
        return ExitCode.GENERAL_ERROR
    logger.info("Wrote %s", out, extra={"path": out})
    return ExitCode.SUCCESS


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(
        description="Render an audio file as a band-wrapped spectrogram PNG",
        argument_default=argparse.SUPPRESS,
    )
    p.add_argument("-f", "--file", type=str, help="Input audio file")
    p.add_argument(
        "-w",
        "--width",
        type=int,
        help=f"Row height of each band in pixels; controls the number of frequency rows (default {DEFAULT_ROW_HEIGHT})",
    )
    p.add_argument("--band-width", dest="band_width", type=int, help="Columns per band (default: derived from recording length)")
    p.add_argument("--mode", choices=list(MODES), help="Frequency axis: log (step-hold) or linear (4 bins per pixel) (default log)")
    p.add_argument("--tempo", type=float, help="Tempo in BPM, recorded with the linear mode configuration")
    p.add_argument("--scaling", choices=list(SCALINGS), help="Magnitude scaling applied per window (default zero-to-one)")
    p.add_argument("--freq-min", dest="freq_min", type=float, help=f"Lowest frequency on the log axis [Hz] (default {FREQUENCY_MIN:g})")
    p.add_argument("--freq-max", dest="freq_max", type=float, help=f"Highest analysed frequency [Hz] (default {FREQUENCY_MAX:g})")
    p.add_argument("-o", "--output", type=str, help="Output PNG path (default <file>.png)")
    p.add_argument("--log-level", dest="log_level", type=str, help="Log level (default $SPECRASTER_LOG_LEVEL or INFO)")
    p.add_argument("--log-json", dest="log_json", type=str, help="Append JSON-lines logs to this path")

    args = p.parse_args(argv)
    args._cli_overrides = set()

    _set_default(args, args._cli_overrides, "width", DEFAULT_ROW_HEIGHT)
    _set_default(args, args._cli_overrides, "band_width", None)
    _set_default(args, args._cli_overrides, "mode", "log")
    _set_default(args, args._cli_overrides, "tempo", None)
    _set_default(args, args._cli_overrides, "scaling", "zero-to-one")
    _set_default(args, args._cli_overrides, "freq_min", FREQUENCY_MIN)
    _set_default(args, args._cli_overrides, "freq_max", FREQUENCY_MAX)
    _set_default(args, args._cli_overrides, "output", None)
    _set_default(args, args._cli_overrides, "log_level", None)
    _set_default(args, args._cli_overrides, "log_json", os.environ.get("SPECRASTER_LOG_JSON"))

    if not getattr(args, "file", None):
        p.error("--file is required")
    if args.width <= 0:
        p.error("--width must be > 0")
    if args.band_width is not None and args.band_width <= 0:
        p.error("--band-width must be > 0")
    if not (0.0 < args.freq_min < args.freq_max):
        p.error("--freq-min must be > 0 and below --freq-max")
    if args.tempo is not None and args.tempo <= 0:
        p.error("--tempo must be > 0")
    if "tempo" in args._cli_overrides and args.mode != "linear":
        print("[tempo] --tempo only applies to --mode linear; ignoring", file=sys.stderr)

    delattr(args, "_cli_overrides")
    return args


def _set_default(args: argparse.Namespace, overrides: Set[str], attr: str, value: Any) -> None:
    if hasattr(args, attr):
        overrides.add(attr)
    else:
        setattr(args, attr, value)


def main(argv: Optional[List[str]] = None) -> int:
    return run(parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
