"""
sources.py
----------
Sample sources standing in for the armband binding.

Each source exposes read() -> Sample, returning the current 8-channel EMG
vector on demand.
"""

from typing import Iterable, Optional, Sequence

import numpy as np

from .sample import CHANNEL_COUNT, Sample


class SyntheticEMGSource:
    """
    Random EMG-like readings in the signed 8-bit range the armband reports.

    Baseline noise is small; every `burst_every` reads a burst of
    `burst_length` samples with larger amplitude is produced on a random
    subset of channels, which gives the mock server something to classify.
    """

    MIN_VALUE = -128
    MAX_VALUE = 127

    def __init__(self, seed: Optional[int] = None, noise_std: float = 4.0,
                 burst_amplitude: float = 60.0, burst_every: int = 400,
                 burst_length: int = 150):
        self.rng = np.random.default_rng(seed)
        self.noise_std = noise_std
        self.burst_amplitude = burst_amplitude
        self.burst_every = burst_every
        self.burst_length = burst_length
        self._count = 0
        self._burst_mask = np.zeros(CHANNEL_COUNT)

    def read(self) -> Sample:
        phase = self._count % self.burst_every if self.burst_every > 0 else -1
        if phase == 0:
            self._burst_mask = (self.rng.random(CHANNEL_COUNT) > 0.5).astype(float)
        in_burst = 0 <= phase < self.burst_length

        values = self.rng.normal(0.0, self.noise_std, CHANNEL_COUNT)
        if in_burst:
            values += self._burst_mask * self.rng.normal(0.0, self.burst_amplitude, CHANNEL_COUNT)

        self._count += 1
        values = np.clip(np.rint(values), self.MIN_VALUE, self.MAX_VALUE).astype(int)
        return Sample.from_vector(values.tolist())


class ReplaySource:
    """Cycles over previously recorded vectors."""

    def __init__(self, vectors: Iterable[Sequence[int]]):
        self.samples = [Sample.from_vector(v) for v in vectors]
        if not self.samples:
            raise ValueError("ReplaySource needs at least one vector")
        self._idx = 0

    def read(self) -> Sample:
        sample = self.samples[self._idx]
        self._idx = (self._idx + 1) % len(self.samples)
        return sample
