"""
mock_server.py
--------------
Development stand-in for the AI server.

Implements the two endpoints the client talks to:
    POST /batch_predict_windowed   {"batch": [...], "session_id": "..."}
    POST /clear_session?session_id=...

Each session keeps a rolling buffer of samples. Until `warmup` samples have
been seen every sample is answered with a "buffering" item; afterwards a fake
label is derived from the EMG amplitude of the buffer. There is no model here.

Run:
    emg-pointer-mock --port 8000
"""

import argparse
from collections import deque
from typing import Deque, Dict, List

import numpy as np
import uvicorn
from fastapi import FastAPI, HTTPException

from ..acquisition.sample import CHANNEL_NAMES
from ..utils.logging_cfg import get_logger

log = get_logger(__name__)

DEFAULT_WARMUP = 20
LABELS = ("Rest", "WaveIn", "WaveOut")
REST_LEVEL = 10.0  # mean |EMG| below this counts as rest


class MockGestureModel:
    """Per-session buffers and the fake amplitude classifier."""

    def __init__(self, warmup: int = DEFAULT_WARMUP):
        self.warmup = warmup
        self.sessions: Dict[str, Deque[List[int]]] = {}

    def _scores(self, buffer) -> np.ndarray:
        data = np.abs(np.asarray(buffer, dtype=float))
        level = data.mean()
        inner = data[:, :4].mean()
        outer = data[:, 4:].mean()
        raw = np.array([
            REST_LEVEL / (level + 1e-6),
            inner / (outer + 1e-6),
            outer / (inner + 1e-6),
        ])
        exp = np.exp(raw - raw.max())
        return exp / exp.sum()

    def predict_batch(self, session_id: str, batch: List[dict]) -> dict:
        buffer = self.sessions.setdefault(session_id, deque(maxlen=self.warmup))
        predictions = []

        for idx, sample in enumerate(batch):
            buffer.append([int(sample.get(name, 0)) for name in CHANNEL_NAMES])

            if len(buffer) < self.warmup:
                predictions.append({
                    "status": "buffering",
                    "sample_index": idx,
                    "samples_needed": self.warmup - len(buffer),
                    "buffer_size": len(buffer),
                })
                continue

            probs = self._scores(buffer)
            order = np.argsort(probs)[::-1]
            predictions.append({
                "status": "predicted",
                "sample_index": idx,
                "label": LABELS[order[0]],
                "prob": round(float(probs[order[0]]), 4),
                "topk": [{"label": LABELS[i], "prob": round(float(probs[i]), 4)} for i in order[:3]],
            })

        return {
            "session_id": session_id,
            "total_samples": len(batch),
            "buffer_ready": len(buffer) >= self.warmup,
            "predictions": predictions,
        }

    def clear(self, session_id: str) -> bool:
        return self.sessions.pop(session_id, None) is not None


def create_app(warmup: int = DEFAULT_WARMUP) -> FastAPI:
    app = FastAPI(title="EMG Pointer Mock AI Server")
    model = MockGestureModel(warmup)
    app.state.model = model

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.post("/batch_predict_windowed")
    async def batch_predict_windowed(payload: dict):
        batch = payload.get("batch")
        session_id = payload.get("session_id")
        if not isinstance(batch, list) or not isinstance(session_id, str):
            raise HTTPException(status_code=422, detail="expected 'batch' list and 'session_id' string")
        return model.predict_batch(session_id, batch)

    @app.post("/clear_session")
    async def clear_session(session_id: str):
        existed = model.clear(session_id)
        log.info("Cleared session %s (existed=%s)", session_id, existed)
        return {"status": "cleared", "session_id": session_id}

    return app


def main(argv=None):
    parser = argparse.ArgumentParser(description="Mock AI server for the EMG pointer client")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--warmup", type=int, default=DEFAULT_WARMUP,
                        help="Samples per session before predictions start")
    args = parser.parse_args(argv)

    uvicorn.run(create_app(args.warmup), host=args.host, port=args.port, reload=False)


if __name__ == "__main__":
    main()
