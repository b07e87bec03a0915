"""
smoother.py
-----------
Majority-vote smoothing of the per-sample predictions returned by the AI
server.

A gesture is only reported once it holds at least half of the recent
prediction memory; otherwise the label falls back to "Unknown".
"""

from collections import Counter, deque
from typing import Deque, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from ..utils.logging_cfg import get_logger
from .predictions import BufferingItem, PredictedItem, PredictionItem
from .state import GestureState

log = get_logger(__name__)


class MemoryEntry(NamedTuple):
    label: str
    prob: float


class MemoryBuffer:
    """Bounded FIFO of the last `capacity` accepted predictions."""

    def __init__(self, capacity: int = 6):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._entries: Deque[MemoryEntry] = deque(maxlen=capacity)

    def push(self, label: str, prob: float):
        self._entries.append(MemoryEntry(label, float(prob)))

    def clear(self):
        self._entries.clear()

    def entries(self) -> Tuple[MemoryEntry, ...]:
        return tuple(self._entries)

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(tuple(self._entries))


def majority_vote(entries: Sequence[MemoryEntry]) -> Optional[Tuple[str, int, float]]:
    """
    Return (label, count, mean_prob) of the most frequent label.

    Ties on count go to the lexicographically smallest label.
    """
    if not entries:
        return None

    counts = Counter(e.label for e in entries)
    label, count = min(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    probs = [e.prob for e in entries if e.label == label]
    return label, count, sum(probs) / len(probs)


class GestureSmoother:
    """
    Turns batches of PredictionItems into a stable GestureState.

    States:
      Buffering - initial, or the last response carried no predictions
      Deciding  - majority vote over the memory runs on every response
    """

    def __init__(self, memory_size: int = 6, recent_predictions: int = 3,
                 buffering_log_every: int = 5):
        self.memory = MemoryBuffer(memory_size)
        self.recent_predictions = recent_predictions
        self.buffering_log_every = buffering_log_every
        self._state = GestureState.initial()

    # --------------------------------------------------
    # Read surface
    # --------------------------------------------------
    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def current_label(self) -> str:
        return self._state.label

    @property
    def current_confidence(self) -> str:
        return self._state.confidence

    @property
    def is_buffering(self) -> bool:
        return self._state.is_buffering

    @property
    def threshold(self) -> int:
        return self.memory.capacity // 2

    # --------------------------------------------------
    def update(self, predictions: Iterable[PredictionItem]) -> GestureState:
        predictions = list(predictions)
        predicted: List[PredictedItem] = [p for p in predictions if isinstance(p, PredictedItem)]

        if not predicted:
            buffering = [p for p in predictions if isinstance(p, BufferingItem)]
            if buffering:
                self._enter_buffering(buffering[-1])
            return self._state

        if self._state.is_buffering:
            log.info("Buffer filled, predictions active")

        # Only the most recent predictions of the batch, oldest first
        for item in predicted[-self.recent_predictions:]:
            self.memory.push(item.label, item.prob)

        self._state = self._vote()
        log.debug("Memory %s -> %s (%s)",
                  [e.label for e in self.memory], self._state.label, self._state.confidence)
        return self._state

    def reset(self) -> GestureState:
        self.memory.clear()
        self._state = GestureState.initial()
        return self._state

    # --------------------------------------------------
    def _enter_buffering(self, latest: BufferingItem):
        self._state = GestureState.buffering()
        if latest.buffer_size % self.buffering_log_every == 0:
            log.info("Buffering... %d samples collected", latest.buffer_size)

    def _vote(self) -> GestureState:
        winner = majority_vote(self.memory.entries())
        if winner is None:
            return GestureState.undecided()

        label, count, mean_prob = winner
        if count >= self.threshold:
            return GestureState.decided(label, mean_prob)
        return GestureState.undecided()
