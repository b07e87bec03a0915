"""
schemas.py
----------
Wire format of the windowed batch prediction endpoint.

Request:
    {"batch": [{"EMG1": int, ..., "EMG8": int}, ...], "session_id": str}

Response:
    {"session_id": str, "total_samples": int, "buffer_ready": bool,
     "predictions": [{"status": "buffering", ...} | {"status": "predicted", ...}]}
"""

from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, Sequence, Tuple

from ..acquisition.sample import Sample
from ..feature.predictions import (
    STATUS_BUFFERING,
    STATUS_PREDICTED,
    BufferingItem,
    PredictedItem,
    PredictionItem,
    TopKItem,
)
from .errors import ResponseParseError


@dataclass(frozen=True)
class BatchWindowedResponse:
    session_id: str
    total_samples: int
    buffer_ready: bool
    predictions: Tuple[PredictionItem, ...]


def build_batch_payload(window: Sequence[Sample], session_id: str) -> Dict[str, Any]:
    """Samples stay in chronological order."""
    return {
        "batch": [sample.to_dict() for sample in window],
        "session_id": session_id,
    }


# -----------------------------------------------------
# PARSING HELPERS
# -----------------------------------------------------
def _as_int(item: dict, key: str) -> int:
    val = item.get(key)
    if val is None:
        return 0
    if isinstance(val, bool) or not isinstance(val, Real):
        raise ResponseParseError(f"Field '{key}' must be a number, got {val!r}")
    return int(val)


def _as_bool(item: dict, key: str) -> bool:
    val = item.get(key)
    if val is None:
        return False
    if not isinstance(val, bool):
        raise ResponseParseError(f"Field '{key}' must be a boolean, got {val!r}")
    return val


def _as_prob(item: dict, key: str = "prob") -> float:
    val = item.get(key)
    if isinstance(val, bool) or not isinstance(val, Real):
        raise ResponseParseError(f"Field '{key}' must be a number, got {val!r}")
    return float(val)


def _as_label(item: dict) -> str:
    label = item.get("label")
    if not isinstance(label, str):
        raise ResponseParseError(f"Field 'label' must be a string, got {label!r}")
    return label


def _parse_topk(raw) -> Tuple[TopKItem, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ResponseParseError("Field 'topk' must be a list")

    out = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise ResponseParseError("topk entries must be objects")
        out.append(TopKItem(label=_as_label(entry), prob=_as_prob(entry)))
    return tuple(out)


def parse_prediction_item(item: Any) -> PredictionItem:
    if not isinstance(item, dict):
        raise ResponseParseError(f"Prediction item must be an object, got {type(item).__name__}")

    status = item.get("status")
    if status == STATUS_BUFFERING:
        return BufferingItem(
            sample_index=_as_int(item, "sample_index"),
            samples_needed=_as_int(item, "samples_needed"),
            buffer_size=_as_int(item, "buffer_size"),
        )
    if status == STATUS_PREDICTED:
        return PredictedItem(
            sample_index=_as_int(item, "sample_index"),
            label=_as_label(item),
            prob=_as_prob(item),
            topk=_parse_topk(item.get("topk")),
        )
    raise ResponseParseError(f"Unknown prediction status: {status!r}")


def parse_batch_response(payload: Any) -> BatchWindowedResponse:
    """
    Convert decoded JSON into a BatchWindowedResponse.

    Raises ResponseParseError on any unexpected shape. Missing counters
    default to 0 and a missing or null 'predictions' list is empty.
    """
    if not isinstance(payload, dict):
        raise ResponseParseError(f"Response must be a JSON object, got {type(payload).__name__}")

    raw_predictions = payload.get("predictions")
    if raw_predictions is None:
        raw_predictions = []
    if not isinstance(raw_predictions, list):
        raise ResponseParseError("Field 'predictions' must be a list")

    session_id = payload.get("session_id", "")
    if not isinstance(session_id, str):
        raise ResponseParseError("Field 'session_id' must be a string")

    return BatchWindowedResponse(
        session_id=session_id,
        total_samples=_as_int(payload, "total_samples"),
        buffer_ready=_as_bool(payload, "buffer_ready"),
        predictions=tuple(parse_prediction_item(p) for p in raw_predictions),
    )
