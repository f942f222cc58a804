"""Sample sources feeding the analyzer.

A sample source exposes its channel count and sample rate and hands out
interleaved float samples on request. Channel ``c`` of frame ``n`` lives at
index ``n * channels + c``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Optional, Protocol

import numpy as np
from numpy.typing import ArrayLike


class Samples(Protocol):
    """Pull interface over multi-channel audio."""

    @property
    def channels(self) -> int:  # pragma: no cover - protocol
        ...

    @property
    def sample_rate(self) -> int:  # pragma: no cover - protocol
        ...

    def read(self, count: int) -> np.ndarray:  # pragma: no cover - protocol
        """Return up to ``count`` interleaved samples; an empty array once exhausted."""
        ...


def _validate_layout(channels: int, sample_rate: int) -> None:
    if channels <= 0:
        raise ValueError(f"channels must be > 0, got {channels}")
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be > 0, got {sample_rate}")


class AudioData:
    """
    In-memory sample source.

    ``data`` is either a 1-D interleaved array or a 2-D ``(frames, channels)``
    array; the latter is flattened row by row.
    """

    def __init__(self, data: ArrayLike, channels: int, sample_rate: int) -> None:
        _validate_layout(channels, sample_rate)
        arr = np.asarray(data, dtype=np.float32)
        if arr.ndim == 2:
            if arr.shape[1] != channels:
                raise ValueError(
                    f"data has {arr.shape[1]} columns but channels={channels}"
                )
            arr = arr.reshape(-1)
        elif arr.ndim != 1:
            raise ValueError(f"data must be 1-D or 2-D, got shape {arr.shape}")

        self._data = arr
        self._channels = int(channels)
        self._sample_rate = int(sample_rate)
        self._offset = 0

    @property
    def channels(self) -> int:
        return self._channels

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def position(self) -> float:
        """Seconds of audio handed out so far."""
        return (self._offset // self._channels) / float(self._sample_rate)

    def __len__(self) -> int:
        return int(self._data.size)

    def read(self, count: int) -> np.ndarray:
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        start = self._offset
        end = min(self._data.size, start + count)
        self._offset = end
        return self._data[start:end]


class StreamSamples:
    """
    Sample source over an iterable of interleaved chunks.

    Chunks may have any length; reads are re-cut to the requested size so a
    capture callback delivering e.g. 160-sample frames can drive a detector
    working on 205-sample blocks.
    """

    def __init__(self, chunks: Iterable[ArrayLike], channels: int, sample_rate: int) -> None:
        _validate_layout(channels, sample_rate)
        self._chunks: Iterator[ArrayLike] = iter(chunks)
        self._channels = int(channels)
        self._sample_rate = int(sample_rate)
        self._pending = np.empty(0, dtype=np.float32)
        self._exhausted = False

    @property
    def channels(self) -> int:
        return self._channels

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    def _next_chunk(self) -> Optional[np.ndarray]:
        try:
            chunk = next(self._chunks)
        except StopIteration:
            self._exhausted = True
            return None
        return np.asarray(chunk, dtype=np.float32).reshape(-1)

    def read(self, count: int) -> np.ndarray:
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        parts = [self._pending]
        available = self._pending.size
        while available < count and not self._exhausted:
            chunk = self._next_chunk()
            if chunk is None:
                break
            parts.append(chunk)
            available += chunk.size

        joined = np.concatenate(parts) if len(parts) > 1 else self._pending
        self._pending = joined[count:]
        return joined[:count]


__all__ = ["AudioData", "Samples", "StreamSamples"]
