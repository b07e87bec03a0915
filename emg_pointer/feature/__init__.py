"""
Feature subpackage.

Prediction item types and the majority-vote gesture smoother.
"""

from .predictions import (
    BufferingItem,
    PredictedItem,
    PredictionItem,
    TopKItem,
    STATUS_BUFFERING,
    STATUS_PREDICTED,
)
from .smoother import GestureSmoother, MemoryBuffer, MemoryEntry, majority_vote
from .state import GestureState

__all__ = [
    "BufferingItem",
    "PredictedItem",
    "PredictionItem",
    "TopKItem",
    "STATUS_BUFFERING",
    "STATUS_PREDICTED",
    "GestureSmoother",
    "MemoryBuffer",
    "MemoryEntry",
    "majority_vote",
    "GestureState",
]
