from dataclasses import dataclass
from typing import Optional

UNKNOWN_LABEL = "Unknown"
NEUTRAL_LABEL = "Neutral"
UNCERTAIN = "Uncertain"
BUFFERING = "Buffering"


@dataclass(frozen=True)
class GestureState:
    """
    Snapshot of what the host should show on the current tick.

    Replaced as a whole on every update so a reader always sees a matching
    (label, confidence, is_buffering) triple.
    """
    label: str = UNKNOWN_LABEL
    confidence: str = UNCERTAIN
    is_buffering: bool = True
    confidence_value: Optional[float] = None  # None while confidence is a sentinel

    @classmethod
    def initial(cls) -> "GestureState":
        return cls()

    @classmethod
    def buffering(cls) -> "GestureState":
        return cls(label=NEUTRAL_LABEL, confidence=BUFFERING, is_buffering=True)

    @classmethod
    def undecided(cls) -> "GestureState":
        return cls(label=UNKNOWN_LABEL, confidence=UNCERTAIN, is_buffering=False)

    @classmethod
    def decided(cls, label: str, mean_prob: float) -> "GestureState":
        return cls(
            label=label,
            confidence=f"{mean_prob:.2f}",
            is_buffering=False,
            confidence_value=round(mean_prob, 2),
        )
