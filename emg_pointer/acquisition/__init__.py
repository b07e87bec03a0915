"""
Acquisition subpackage.

Sample type, sample sources and the pending-window batcher.
"""

from .sample import Sample, CHANNEL_COUNT, CHANNEL_NAMES
from .batcher import SampleBatcher
from .sources import SyntheticEMGSource, ReplaySource

__all__ = [
    "Sample",
    "CHANNEL_COUNT",
    "CHANNEL_NAMES",
    "SampleBatcher",
    "SyntheticEMGSource",
    "ReplaySource",
]
