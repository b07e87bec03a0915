"""
batcher.py
----------
Accumulates EMG samples into the pending window sent to the AI server.
"""

from typing import List, Tuple

from .sample import Sample


class SampleBatcher:
    """
    Ordered, unbounded pending window.

    Appending never drops or caps samples; the window only shrinks through
    snapshot(), which hands the whole window out and starts a new one.
    """

    def __init__(self):
        self._pending: List[Sample] = []

    def append(self, sample: Sample) -> int:
        self._pending.append(sample)
        return len(self._pending)

    def snapshot(self) -> Tuple[Sample, ...]:
        window = tuple(self._pending)
        self._pending = []
        return window

    def __len__(self):
        return len(self._pending)
