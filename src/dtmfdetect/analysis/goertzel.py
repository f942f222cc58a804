"""Goertzel resonator for measuring a single frequency bin."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable


@dataclass(frozen=True, slots=True)
class Goertzel:
    """
    Immutable second-order Goertzel accumulator.

    Each call to :meth:`add_sample` returns a new accumulator, so a single
    initial value can seed any number of independent filters.

    Notes
    -----
    ``coefficient`` depends only on the target frequency, the sample rate
    and the block size. ``q1``/``q2`` are the two most recent filter outputs
    and ``energy`` is the sum of the squared samples fed so far.
    """

    coefficient: float
    block_size: int
    q1: float = 0.0
    q2: float = 0.0
    energy: float = 0.0

    @classmethod
    def init(cls, frequency: float, sample_rate: int, block_size: int) -> "Goertzel":
        """
        Create a zeroed accumulator tuned to ``frequency``.

        Parameters
        ----------
        frequency:
            Target frequency in Hz.
        sample_rate:
            Sampling rate in Hz. Must be > 0.
        block_size:
            Number of samples per analysis block. Must be > 0.
        """
        if sample_rate <= 0:
            raise ValueError(f"sample_rate must be > 0, got {sample_rate}")
        if block_size <= 0:
            raise ValueError(f"block_size must be > 0, got {block_size}")

        k = round(block_size * frequency / sample_rate)
        omega = 2.0 * math.pi * k / block_size
        return cls(coefficient=2.0 * math.cos(omega), block_size=int(block_size))

    def add_sample(self, sample: float) -> "Goertzel":
        x = float(sample)
        q0 = self.coefficient * self.q1 - self.q2 + x
        return replace(self, q1=q0, q2=self.q1, energy=self.energy + x * x)

    def add_samples(self, samples: Iterable[float]) -> "Goertzel":
        """Feed ``samples`` in order; equivalent to chained :meth:`add_sample` calls."""
        c = self.coefficient
        q1 = self.q1
        q2 = self.q2
        energy = self.energy
        for sample in samples:
            x = float(sample)
            q1, q2 = c * q1 - q2 + x, q1
            energy += x * x
        return replace(self, q1=q1, q2=q2, energy=energy)

    @property
    def response(self) -> float:
        """Squared magnitude of the frequency bin."""
        return self.q1 * self.q1 + self.q2 * self.q2 - self.coefficient * self.q1 * self.q2

    @property
    def norm_response(self) -> float:
        """
        :attr:`response` divided by ``block_size * energy``.

        The result does not depend on the signal level or the block size.
        A lone bin-centred sinusoid filling the block scores 0.5, each tone
        of an equal-level pair about 0.25, and white noise about
        ``1 / block_size``. A silent block scores 0.
        """
        if self.energy == 0.0:
            return 0.0
        return self.response / (self.block_size * self.energy)
