"""Streaming start/stop analysis of DTMF keys across sample blocks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from ..config.detector_config import DetectorConfig
from ..dataio.samples import Samples
from ..tools.debug import time_block
from .detector import Detector
from .keys import PhoneKey

logger = logging.getLogger(__name__)

DetectorOrConfig = Union[Detector, DetectorConfig]


class ConfigMismatchError(ValueError):
    """Raised when a sample source and a detector disagree on rate or channels."""


@dataclass(frozen=True, slots=True)
class DtmfChange:
    """A key starting or stopping on one channel.

    ``position`` is measured in seconds from the start of the stream.
    """

    key: PhoneKey
    position: float
    channel: int
    is_start: bool

    @classmethod
    def start(cls, key: PhoneKey, position: float, channel: int) -> "DtmfChange":
        return cls(key=key, position=position, channel=channel, is_start=True)

    @classmethod
    def stop(cls, key: PhoneKey, position: float, channel: int) -> "DtmfChange":
        return cls(key=key, position=position, channel=channel, is_start=False)

    def __str__(self) -> str:
        sign = "+" if self.is_start else "-"
        return f"{sign}{self.key} @ {self.position:.5f}s (ch {self.channel})"


class Analyzer:
    """
    Drive a :class:`Detector` block by block over a sample source.

    Every call to :meth:`analyze_next_block` reads one block, detects the
    key on each channel and reports the differences to the previous block.
    Transitions are stamped with the position of the block start. When the
    source runs dry, keys still sounding are stopped at the position of the
    last processed sample.

    :attr:`more_samples_available` starts out ``True`` and only turns
    ``False`` once a read comes back shorter than a full block. The source
    is never read ahead of time, so an empty source, or one holding an
    exact multiple of the block size, needs one more
    :meth:`analyze_next_block` call (returning no changes) before the flag
    drops.

    Not thread-safe: one analyzer follows one stream.
    """

    def __init__(self, samples: Samples, detector: Detector) -> None:
        if samples is None:
            raise ValueError("samples must not be None")
        if detector is None:
            raise ValueError("detector must not be None")
        if not isinstance(detector, Detector):
            raise TypeError(f"detector must be a Detector, got {type(detector).__name__}")
        if detector.config.sample_rate != samples.sample_rate:
            raise ConfigMismatchError(
                f"detector sample rate ({detector.config.sample_rate} Hz) does not match "
                f"sample source ({samples.sample_rate} Hz)"
            )
        if detector.channels != samples.channels:
            raise ConfigMismatchError(
                f"detector expects {detector.channels} channel(s) but sample source "
                f"provides {samples.channels}"
            )

        self._samples = samples
        self._detector = detector
        self._block_len = detector.config.sample_block_size * detector.channels
        self._last_keys: List[PhoneKey] = [PhoneKey.NONE] * detector.channels
        self._frames_consumed = 0
        self._more_samples_available = True

    @classmethod
    def create(
        cls,
        samples: Samples,
        config_or_detector: Optional[DetectorOrConfig],
    ) -> "Analyzer":
        """Build an analyzer from either a ready detector or a detector config."""
        if samples is None:
            raise ValueError("samples must not be None")
        if config_or_detector is None:
            raise ValueError("config_or_detector must not be None")
        if isinstance(config_or_detector, DetectorConfig):
            if config_or_detector.sample_rate != samples.sample_rate:
                raise ConfigMismatchError(
                    f"config sample rate ({config_or_detector.sample_rate} Hz) does not match "
                    f"sample source ({samples.sample_rate} Hz)"
                )
            detector = Detector(samples.channels, config_or_detector)
        elif isinstance(config_or_detector, Detector):
            detector = config_or_detector
        else:
            raise TypeError(
                "config_or_detector must be a Detector or DetectorConfig, "
                f"got {type(config_or_detector).__name__}"
            )
        return cls(samples, detector)

    @property
    def detector(self) -> Detector:
        return self._detector

    @property
    def more_samples_available(self) -> bool:
        return self._more_samples_available

    @property
    def position(self) -> float:
        """Seconds of audio analysed so far."""
        return self._frames_consumed / float(self._detector.config.sample_rate)

    def analyze_next_block(self) -> List[DtmfChange]:
        """
        Analyse the next block and return the key changes it produced.

        Events come channel by channel; within a channel a stop precedes a
        start. Once the source is exhausted and the final flush has been
        returned, further calls return an empty list.
        """
        if not self._more_samples_available:
            return []

        with time_block("analyze_next_block", audio_s=self._detector.config.block_duration_s):
            block = self._samples.read(self._block_len)
            if len(block) < self._block_len:
                self._more_samples_available = False

            current_keys = self._detector.detect(block)

            channels = self._detector.channels
            sample_rate = float(self._detector.config.sample_rate)
            block_start = self._frames_consumed / sample_rate
            frames_read = len(block) // channels
            block_end = (self._frames_consumed + frames_read) / sample_rate

            changes: List[DtmfChange] = []
            for channel, (last, current) in enumerate(zip(self._last_keys, current_keys)):
                if current is not last:
                    if last is not PhoneKey.NONE:
                        changes.append(DtmfChange.stop(last, block_start, channel))
                    if current is not PhoneKey.NONE:
                        changes.append(DtmfChange.start(current, block_start, channel))
                if not self._more_samples_available and current is not PhoneKey.NONE:
                    changes.append(DtmfChange.stop(current, block_end, channel))

            if self._more_samples_available:
                self._last_keys = list(current_keys)
            else:
                self._last_keys = [PhoneKey.NONE] * channels
                logger.debug("Sample source exhausted at %.5fs", block_end)
            self._frames_consumed += frames_read

        for change in changes:
            logger.debug("DTMF change: %s", change)
        return changes

    def iter_changes(self) -> Iterator[DtmfChange]:
        """Yield every remaining change until the source is exhausted."""
        while self._more_samples_available:
            yield from self.analyze_next_block()


def detect_dtmf_changes(
    samples: Samples,
    config_or_detector: Optional[DetectorOrConfig] = None,
) -> List[DtmfChange]:
    """Analyse a whole sample source; uses the default config when none is given."""
    analyzer = Analyzer.create(samples, config_or_detector or DetectorConfig.default())
    return list(analyzer.iter_changes())


__all__ = [
    "Analyzer",
    "ConfigMismatchError",
    "DtmfChange",
    "detect_dtmf_changes",
]
