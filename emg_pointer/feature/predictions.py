from dataclasses import dataclass
from typing import Tuple, Union

STATUS_BUFFERING = "buffering"
STATUS_PREDICTED = "predicted"


@dataclass(frozen=True)
class TopKItem:
    label: str
    prob: float


@dataclass(frozen=True)
class BufferingItem:
    """Server is still warming up its window for this sample."""
    sample_index: int
    samples_needed: int
    buffer_size: int
    status: str = STATUS_BUFFERING


@dataclass(frozen=True)
class PredictedItem:
    sample_index: int
    label: str
    prob: float
    topk: Tuple[TopKItem, ...] = ()
    status: str = STATUS_PREDICTED


PredictionItem = Union[BufferingItem, PredictedItem]
