"""Audio decoding into a flat interleaved float32 sample stream (libsndfile via soundfile)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, List

import numpy as np
import soundfile as sf

from specraster.util.errors import AudioDecodeError
from specraster.util.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BLOCK_FRAMES = 4096


@dataclass
class DecodeResult:
    samples: np.ndarray
    sample_rate: int
    channels: int
    skipped_blocks: int = 0
    truncated: bool = False

    @property
    def sample_count(self) -> int:
        return int(self.samples.size)


def decode_blocks(snd: Any, block_frames: int = DEFAULT_BLOCK_FRAMES) -> DecodeResult:
    """Read ``snd`` block by block and interleave channels into one stream.

    A block that fails to read but can be seeked past is skipped. A block
    that cannot be seeked past ends decoding; what was read so far is kept.
    """
    channels = int(snd.channels)
    chunks: List[np.ndarray] = []
    sample_count = 0
    skipped = 0
    truncated = False
    while True:
        position = snd.tell()
        try:
            block = snd.read(block_frames, dtype="float32", always_2d=True)
        except RuntimeError as exc:
            try:
                snd.seek(position + block_frames)
            except (RuntimeError, ValueError) as seek_exc:
                logger.warning(
                    "Stopping decode at frame %d after unrecoverable error: %s (%s)",
                    position,
                    exc,
                    seek_exc,
                    extra={"stage": "decode", "sample_count": sample_count},
                )
                truncated = True
                break
            skipped += 1
            logger.debug("Skipped undecodable block at frame %d: %s", position, exc)
            continue
        if block.shape[0] == 0:
            break
        interleaved = np.ascontiguousarray(block, dtype=np.float32).reshape(-1)
        chunks.append(interleaved)
        sample_count += interleaved.size
        logger.debug("Decoded %d samples", sample_count)
        if block.shape[0] < block_frames:
            break

    samples = np.concatenate(chunks) if chunks else np.zeros(0, dtype=np.float32)
    return DecodeResult(
        samples=samples,
        sample_rate=int(snd.samplerate),
        channels=channels,
        skipped_blocks=skipped,
        truncated=truncated,
    )


def extract_samples(path: str, block_frames: int = DEFAULT_BLOCK_FRAMES) -> DecodeResult:
    """Open ``path`` and decode it fully.

    Raises:
        AudioDecodeError: the file is missing, unreadable or not a supported container.
    """
    if not os.path.isfile(path):
        raise AudioDecodeError(f"input file not found: {path}")
    try:
        snd = sf.SoundFile(path, mode="r")
    except (RuntimeError, OSError) as exc:
        raise AudioDecodeError(f"cannot open {path}: {exc}") from exc

    with snd:
        if snd.channels <= 0:
            raise AudioDecodeError(f"{path} has no audio channels")
        logger.info(
            "Decoding %s (%s, %d Hz, %d ch)",
            path,
            snd.format_info,
            snd.samplerate,
            snd.channels,
            extra={"path": path},
        )
        result = decode_blocks(snd, block_frames)

    logger.info(
        "Finished, with %d samples",
        result.sample_count,
        extra={"sample_count": result.sample_count, "stage": "decode"},
    )
    if result.skipped_blocks:
        logger.warning("Skipped %d undecodable blocks", result.skipped_blocks)
    return result
