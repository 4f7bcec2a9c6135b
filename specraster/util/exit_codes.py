"""Documented exit codes for the specraster CLI.

Exit codes follow UNIX conventions:
- 0: Success
- 1: General/unspecified error
- 2: Invalid command-line arguments or usage
- 3-5: Pipeline stage failures

Usage:
    from specraster.util.exit_codes import ExitCode
    sys.exit(ExitCode.DECODE_ERROR)
"""

from __future__ import annotations


class ExitCode:
    """Exit code constants for specraster processes.

    Attributes:
        SUCCESS: Image written.
        GENERAL_ERROR: Unspecified runtime error.
        INVALID_ARGS: Command-line argument validation failed.
        DECODE_ERROR: Input could not be opened or decoded.
        ANALYSIS_ERROR: Windowing, FFT or layout failed.
        IMAGE_WRITE_ERROR: The output image could not be written.
    """

    SUCCESS: int = 0
    GENERAL_ERROR: int = 1
    INVALID_ARGS: int = 2
    DECODE_ERROR: int = 3
    ANALYSIS_ERROR: int = 4
    IMAGE_WRITE_ERROR: int = 5

    @classmethod
    def message(cls, code: int) -> str:
        """Return a human-readable message for an exit code."""
        messages = {
            cls.SUCCESS: "Success",
            cls.GENERAL_ERROR: "General error",
            cls.INVALID_ARGS: "Invalid arguments",
            cls.DECODE_ERROR: "Audio decode failed",
            cls.ANALYSIS_ERROR: "Spectrum analysis failed",
            cls.IMAGE_WRITE_ERROR: "Image write failed",
        }
        return messages.get(code, f"Unknown exit code {code}")

    @classmethod
    def for_stage(cls, stage: str) -> int:
        """Map a pipeline stage name to its exit code."""
        stages = {
            "decode": cls.DECODE_ERROR,
            "layout": cls.ANALYSIS_ERROR,
            "spectrum": cls.ANALYSIS_ERROR,
            "raster": cls.ANALYSIS_ERROR,
            "image": cls.IMAGE_WRITE_ERROR,
        }
        return stages.get(stage, cls.GENERAL_ERROR)
