"""
prediction_client.py
--------------------
Sends EMG windows to the AI server's windowed batch prediction endpoint.

The blocking requests call runs through asyncio.to_thread so the event loop
(and with it the sample producer) keeps running while the window is in
transit. The configured timeout caps the whole round trip, not just each
socket read. Every failure is terminal for that window: it is logged and
dropped, never retried, and never raised to the caller.
"""

import asyncio
from typing import Callable, Optional, Sequence

import requests

from ..acquisition.sample import Sample
from ..feature.predictions import PredictionItem
from ..utils.logging_cfg import get_logger
from .errors import ResponseParseError, TransportError
from .schemas import BatchWindowedResponse, build_batch_payload, parse_batch_response

log = get_logger(__name__)

PredictionHandler = Callable[[Sequence[PredictionItem]], object]


class PredictionClient:
    def __init__(self, url: str, on_predictions: PredictionHandler,
                 timeout: float = 10.0, http: Optional[requests.Session] = None):
        self.url = url
        self.on_predictions = on_predictions
        self.timeout = timeout
        self.http = http or requests.Session()
        self.windows_sent = 0
        self.windows_dropped = 0

    # --------------------------------------------------
    def _post(self, payload: dict) -> requests.Response:
        """Blocking round trip; runs in a worker thread."""
        try:
            response = self.http.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

    @staticmethod
    def _decode(response: requests.Response) -> BatchWindowedResponse:
        try:
            payload = response.json()
        except ValueError as e:
            raise ResponseParseError(f"invalid JSON: {e}") from e
        return parse_batch_response(payload)

    # --------------------------------------------------
    async def submit(self, window: Sequence[Sample], session_id: str) -> Optional[BatchWindowedResponse]:
        """
        Send one window and feed the predictions to the handler.

        Returns the parsed response, or None when the window was lost.
        """
        payload = build_batch_payload(window, session_id)
        self.windows_sent += 1
        log.debug("Sending window of %d samples", len(window))

        try:
            response = await asyncio.wait_for(asyncio.to_thread(self._post, payload), self.timeout)
        except asyncio.TimeoutError:
            # requests only bounds each socket read, this bounds the whole round trip
            self.windows_dropped += 1
            log.warning("Batch windowed prediction error: no response within %.1fs", self.timeout)
            return None
        except TransportError as e:
            self.windows_dropped += 1
            log.warning("Batch windowed prediction error: %s", e)
            return None

        try:
            result = self._decode(response)
        except ResponseParseError as e:
            self.windows_dropped += 1
            log.warning("Failed to parse batch windowed response: %s (%.200s)", e, response.text)
            return None

        if not result.predictions:
            return result

        try:
            self.on_predictions(result.predictions)
        except Exception:
            log.exception("Prediction handler failed")
        return result

    def close(self):
        self.http.close()
