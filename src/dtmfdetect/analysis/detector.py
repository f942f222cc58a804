"""Per-block DTMF key detection."""

from __future__ import annotations

import logging
import math
import numbers
from typing import List, Sequence, Tuple

import numpy as np
from numpy.typing import ArrayLike

from ..config.detector_config import DetectorConfig
from .goertzel import Goertzel
from .keys import HIGH_TONES, LOW_TONES, PhoneKey, to_phone_key

logger = logging.getLogger(__name__)


class Detector:
    """
    Run one Goertzel resonator per DTMF frequency over each channel of a block.

    A key is reported for a channel when exactly one of the four low-tone
    responses and exactly one of the four high-tone responses reach the
    configured threshold. The resonators are rebuilt from the stored
    initial values on every :meth:`detect` call, so no filter state leaks
    from one block into the next.
    """

    def __init__(self, channels: int, config: DetectorConfig) -> None:
        if isinstance(channels, bool) or not isinstance(channels, numbers.Integral) or channels <= 0:
            raise ValueError(f"channels must be a positive integer, got {channels!r}")
        if not isinstance(config, DetectorConfig):
            raise TypeError(f"config must be a DetectorConfig, got {type(config).__name__}")

        self.channels = int(channels)
        self.config = config

        rate = config.sample_rate
        size = config.sample_block_size
        self._init_lo: Tuple[Goertzel, ...] = tuple(Goertzel.init(f, rate, size) for f in LOW_TONES)
        self._init_hi: Tuple[Goertzel, ...] = tuple(Goertzel.init(f, rate, size) for f in HIGH_TONES)

    def __repr__(self) -> str:
        return f"Detector(channels={self.channels}, config={self.config!r})"

    def detect(self, sample_block: ArrayLike) -> List[PhoneKey]:
        """
        Return the key detected in each channel of ``sample_block``.

        Parameters
        ----------
        sample_block:
            Interleaved samples. Normally ``sample_block_size * channels``
            long; the last block of a stream may be shorter.

        Returns
        -------
        list of PhoneKey
            One entry per channel, ``PhoneKey.NONE`` where nothing was found.
        """
        block = np.asarray(sample_block, dtype=np.float64).reshape(-1)
        keys: List[PhoneKey] = []
        for channel in range(self.channels):
            # Strided view keeps sample order within the channel.
            samples = block[channel :: self.channels].tolist()
            lo = [g.add_samples(samples) for g in self._init_lo]
            hi = [g.add_samples(samples) for g in self._init_hi]
            keys.append(self._decide(lo, hi))

        if logger.isEnabledFor(logging.DEBUG) and any(k is not PhoneKey.NONE for k in keys):
            logger.debug("Detected keys per channel: %s", [str(k) for k in keys])
        return keys

    def _response(self, goertzel: Goertzel) -> float:
        return goertzel.norm_response if self.config.normalize_response else goertzel.response

    def _decide(self, lo: Sequence[Goertzel], hi: Sequence[Goertzel]) -> PhoneKey:
        lo_values = [self._response(g) for g in lo]
        hi_values = [self._response(g) for g in hi]
        fst_lo, snd_lo = _find_max_two(lo_values)
        fst_hi, snd_hi = _find_max_two(hi_values)
        fst_lo_val, snd_lo_val = lo_values[fst_lo], lo_values[snd_lo]
        fst_hi_val, snd_hi_val = hi_values[fst_hi], hi_values[snd_hi]

        threshold = self.config.threshold
        if (
            fst_lo_val < threshold
            or fst_hi_val < threshold
            or (fst_lo_val > threshold and snd_lo_val > threshold)
            or (fst_hi_val > threshold and snd_hi_val > threshold)
            or math.isnan(fst_lo_val)
            or math.isnan(fst_hi_val)
        ):
            return PhoneKey.NONE
        return to_phone_key(HIGH_TONES[fst_hi], LOW_TONES[fst_lo])


def _find_max_two(values: Sequence[float]) -> Tuple[int, int]:
    """
    Return the indices of the largest and second-largest of four responses.

    Later indices only win on strict ``>``, so ties go to the lower index.
    NaN never compares greater and therefore never displaces anything.
    """
    fst, snd = 0, 1
    if values[1] > values[0]:
        fst, snd = 1, 0

    for idx in (2, 3):
        if values[idx] > values[fst]:
            snd = fst
            fst = idx
        elif values[idx] > values[snd]:
            snd = idx

    return fst, snd


__all__ = ["Detector"]
