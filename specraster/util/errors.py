"""Exception hierarchy shared by the pipeline stages."""

from __future__ import annotations


class SpectrogramError(Exception):
    """Fatal pipeline failure attributed to a named stage."""

    stage = "pipeline"

    def __init__(self, message: str, *, stage: str | None = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage
        self.message = message

    def __str__(self) -> str:
        return f"[{self.stage}] {self.message}"


class AudioDecodeError(SpectrogramError):
    stage = "decode"


class DegenerateWindowError(SpectrogramError):
    stage = "spectrum"


class EmptyRecordingError(SpectrogramError):
    stage = "layout"


class ImageWriteError(SpectrogramError):
    stage = "image"
