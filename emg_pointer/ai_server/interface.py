"""
interface.py
------------
AIServerInterface - the single object the host control loop talks to.

Wires the pieces together:
    append_sample -> SampleBatcher -> RequestGovernor -> PredictionClient
                  -> GestureSmoother -> get_current_gesture() / ...

All methods must be called from the thread running the asyncio event loop.
"""

from typing import Iterable, Optional

import requests

from ..acquisition.batcher import SampleBatcher
from ..acquisition.sample import Sample
from ..feature.smoother import GestureSmoother
from ..feature.state import GestureState
from ..utils.logging_cfg import add_file_handler, get_logger
from .config_manager import ClientConfig
from .governor import RequestGovernor
from .prediction_client import PredictionClient
from .session_manager import SessionManager

log = get_logger(__name__)


class AIServerInterface:
    def __init__(self, config: Optional[ClientConfig] = None, source=None,
                 http: Optional[requests.Session] = None, session_id: Optional[str] = None):
        self.config = config or ClientConfig()
        self.source = source
        self.http = http or requests.Session()
        if self.config.log_file:
            add_file_handler(self.config.log_file)

        self.smoother = GestureSmoother(
            memory_size=self.config.memory_size,
            recent_predictions=self.config.recent_predictions,
            buffering_log_every=self.config.buffering_log_every,
        )
        self.session = SessionManager(
            self.config.clear_session_url,
            self.smoother,
            http=self.http,
            timeout=self.config.request_timeout,
            prefix=self.config.session_prefix,
            session_id=session_id,
        )
        self.client = PredictionClient(
            self.config.predict_url,
            self.smoother.update,
            timeout=self.config.request_timeout,
            http=self.http,
        )
        self.batcher = SampleBatcher()
        self.governor = RequestGovernor(self.batcher, self._submit, self.config.batch_size)

    @property
    def session_id(self) -> str:
        return self.session.session_id

    async def _submit(self, window):
        # Session id is read at dispatch time
        return await self.client.submit(window, self.session.session_id)

    # --------------------------------------------------
    # Producer side
    # --------------------------------------------------
    def append_sample(self, vector: Iterable[int]):
        """
        Add one 8-channel reading to the pending window and dispatch the
        window if it is due. Returns the dispatch task, if one was started.
        """
        sample = vector if isinstance(vector, Sample) else Sample.from_vector(vector)
        self.batcher.append(sample)
        return self.governor.evaluate()

    def tick(self):
        """Read the current sample from the configured source and append it."""
        if self.source is None:
            raise RuntimeError("AIServerInterface has no sample source")
        return self.append_sample(self.source.read())

    async def clear_session(self) -> bool:
        return await self.session.reset()

    # --------------------------------------------------
    # Read surface
    # --------------------------------------------------
    @property
    def state(self) -> GestureState:
        return self.smoother.state

    def get_current_gesture(self) -> str:
        return self.smoother.current_label

    def get_current_gesture_prob(self) -> str:
        return self.smoother.current_confidence

    def is_buffering(self) -> bool:
        return self.smoother.is_buffering

    # --------------------------------------------------
    async def aclose(self):
        """Let an outstanding request settle, then release the HTTP session."""
        await self.governor.wait_idle()
        self.http.close()
        log.debug("Closed (sent=%d, dropped=%d)",
                  self.client.windows_sent, self.client.windows_dropped)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
