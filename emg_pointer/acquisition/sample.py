from dataclasses import dataclass
from numbers import Integral, Real
from typing import Dict, Iterable, Tuple

CHANNEL_COUNT = 8
CHANNEL_NAMES = tuple(f"EMG{i + 1}" for i in range(CHANNEL_COUNT))


def _as_reading(value) -> int:
    """Whole-number readings only; 3.0 is accepted, 3.7 is not."""
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Real) and float(value).is_integer():
        return int(value)
    raise ValueError(f"Invalid channel reading: {value!r} (Expected an integer)")


@dataclass(frozen=True)
class Sample:
    """One reading of the 8 EMG channels of the armband."""
    channels: Tuple[int, ...]

    def __post_init__(self):
        channels = tuple(_as_reading(v) for v in self.channels)
        if len(channels) != CHANNEL_COUNT:
            raise ValueError(
                f"Invalid sample length: {len(channels)} (Expected {CHANNEL_COUNT})"
            )
        # Frozen dataclass, so bypass __setattr__ to store the normalized tuple
        object.__setattr__(self, "channels", channels)

    @classmethod
    def from_vector(cls, vector: Iterable[int]) -> "Sample":
        # Copy the vector so later writes by the device binding don't leak in
        return cls(channels=tuple(vector))

    def to_dict(self) -> Dict[str, int]:
        return dict(zip(CHANNEL_NAMES, self.channels))
