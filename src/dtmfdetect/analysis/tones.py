"""Pair start/stop changes into complete tones."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .analyzer import DtmfChange
from .keys import PhoneKey


@dataclass(frozen=True, slots=True)
class DtmfTone:
    """A key sounding on one channel from ``position`` for ``duration`` seconds."""

    key: PhoneKey
    position: float
    duration: float
    channel: int

    @classmethod
    def from_changes(cls, start: DtmfChange, stop: DtmfChange) -> "DtmfTone":
        if not start.is_start or stop.is_start:
            raise ValueError("expected a start change followed by a stop change")
        if start.key is not stop.key or start.channel != stop.channel:
            raise ValueError(f"changes do not belong together: {start} / {stop}")
        return cls(
            key=start.key,
            position=start.position,
            duration=stop.position - start.position,
            channel=start.channel,
        )

    def __str__(self) -> str:
        return f"{self.key} @ {self.position:.5f}s for {self.duration:.5f}s (ch {self.channel})"


def to_dtmf_tones(changes: Iterable[DtmfChange]) -> List[DtmfTone]:
    """
    Match every start with the next stop of the same key on the same channel.

    Stops without a preceding start are ignored; a start that never stops
    raises ``ValueError``.
    """
    pending = list(changes)
    tones: List[DtmfTone] = []
    for idx, change in enumerate(pending):
        if not change.is_start:
            continue
        stop = next(
            (
                c
                for c in pending[idx + 1 :]
                if not c.is_start and c.key is change.key and c.channel == change.channel
            ),
            None,
        )
        if stop is None:
            raise ValueError(f"no matching stop for {change}")
        tones.append(DtmfTone.from_changes(change, stop))

    tones.sort(key=lambda t: (t.position, t.channel))
    return tones


__all__ = ["DtmfTone", "to_dtmf_tones"]
