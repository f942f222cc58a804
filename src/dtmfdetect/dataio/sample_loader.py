"""Utilities for loading sample recordings stored as CSV."""

from pathlib import Path
from typing import Iterator
import io

import numpy as np


def _is_sample_row(line: str) -> bool:
    """True when every non-empty field of ``line`` parses as a sample value."""
    fields = [field.strip() for field in line.split(",")]
    values = [field for field in fields if field]
    if not values:
        return False
    try:
        for value in values:
            float(value)
    except ValueError:
        return False
    return True


def load_samples_csv(path: Path) -> np.ndarray:
    """
    Load a CSV file of samples, one column per channel.

    A leading row of channel names (``left,right``) is skipped. Always
    returns a 2-D ``(frames, channels)`` float32 array.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        first_line = f.readline()
        rest = f.read()

    body = first_line + rest if _is_sample_row(first_line) else rest
    frames = np.loadtxt(io.StringIO(body), delimiter=",", dtype=np.float32, ndmin=2)
    if frames.size == 0:
        raise ValueError(f"{path} contains no samples")
    return frames


def iter_frame_chunks(frames: np.ndarray, frames_per_chunk: int) -> Iterator[np.ndarray]:
    """
    Yield interleaved chunks holding ``frames_per_chunk`` whole frames each.

    ``frames`` is a ``(frames, channels)`` array, or a 1-D array for mono.
    Every chunk keeps all channels of a frame together, so chunk ``i``
    starts with channel 0 of frame ``i * frames_per_chunk``. The last chunk
    may be shorter.
    """
    if frames_per_chunk <= 0:
        raise ValueError(f"frames_per_chunk must be a positive integer, got {frames_per_chunk}")

    frames = np.asarray(frames)
    if frames.ndim == 1:
        frames = frames.reshape(-1, 1)
    elif frames.ndim != 2:
        raise ValueError(f"frames must be 1-D or 2-D, got shape {frames.shape}")

    for first in range(0, frames.shape[0], frames_per_chunk):
        yield frames[first : first + frames_per_chunk].reshape(-1)
