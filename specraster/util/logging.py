"""Logging setup for specraster.

Library modules only ask for a logger; nothing is printed until the CLI
calls ``configure_logging``. Progress and stage failures go to stderr, and
``--log-json`` appends one JSON object per record for later inspection.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, Optional

ROOT = "specraster"

# Fields passed through ``extra={}`` that end up in JSON records.
RECORD_FIELDS = ("column", "stage", "error_type", "duration_ms", "sample_count", "path")

logging.getLogger(ROOT).addHandler(logging.NullHandler())


class JSONLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in RECORD_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        if record.exc_info:
            payload["traceback"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _resolve_level(level: Optional[str]) -> int:
    if level is None:
        if os.environ.get("SPECRASTER_DEBUG", "").strip() in ("1", "true", "yes"):
            level = "DEBUG"
        else:
            level = os.environ.get("SPECRASTER_LOG_LEVEL", "INFO")
    return getattr(logging, str(level).upper(), logging.INFO)


def configure_logging(*, level: Optional[str] = None, json_file: Optional[str] = None) -> logging.Logger:
    """Install the stderr handler (and optional JSON-lines file) on the package logger.

    ``level`` falls back to SPECRASTER_DEBUG / SPECRASTER_LOG_LEVEL, then INFO.
    Repeated calls replace the handlers from the previous call.
    """
    root = logging.getLogger(ROOT)
    numeric_level = _resolve_level(level)
    root.setLevel(numeric_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if not isinstance(handler, logging.NullHandler):
            handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s", "%H:%M:%S"))
    root.addHandler(console)

    if json_file:
        try:
            sink = logging.FileHandler(json_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root.warning("Cannot open JSON log file %s: %s", json_file, exc)
        else:
            sink.setFormatter(JSONLineFormatter())
            root.addHandler(sink)

    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``specraster`` namespace; installs no handlers."""
    if name == "__main__":
        name = f"{ROOT}.main"
    elif name != ROOT and not name.startswith(ROOT + "."):
        name = f"{ROOT}.{name}"
    return logging.getLogger(name)


def log_exception(logger: logging.Logger, message: str, *, error_type: Optional[str] = None, **extra: Any) -> None:
    """Log the exception being handled, tagged with ``error_type``."""
    if error_type:
        extra["error_type"] = error_type
    logger.exception(message, extra=extra)
