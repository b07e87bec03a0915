import asyncio
import uuid
from typing import Optional

import requests

from ..feature.smoother import GestureSmoother
from ..utils.logging_cfg import get_logger
from .errors import TransportError

log = get_logger(__name__)


def new_session_id(prefix: str = "emg_pointer") -> str:
    return f"{prefix}_{uuid.uuid4()}"


class SessionManager:
    """
    Owns the session id the AI server keys its per-client buffer on.

    The id is fixed for the lifetime of the client; reset() clears the
    server-side buffer for it and, only if that succeeded, the local
    smoothing state.
    """

    def __init__(self, clear_url: str, smoother: GestureSmoother,
                 http: Optional[requests.Session] = None, timeout: float = 10.0,
                 prefix: str = "emg_pointer", session_id: Optional[str] = None):
        self.clear_url = clear_url
        self.smoother = smoother
        self.http = http or requests.Session()
        self.timeout = timeout
        self.session_id = session_id or new_session_id(prefix)
        log.info("Session ID: %s", self.session_id)

    def _clear_remote(self):
        try:
            response = self.http.post(
                self.clear_url,
                params={"session_id": self.session_id},
                data=b"",
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

    async def reset(self) -> bool:
        """Returns True when both server and local state were cleared."""
        try:
            await asyncio.wait_for(asyncio.to_thread(self._clear_remote), self.timeout)
        except asyncio.TimeoutError:
            log.warning("Failed to clear session: no response within %.1fs", self.timeout)
            return False
        except TransportError as e:
            log.warning("Failed to clear session: %s", e)
            return False

        self.smoother.reset()
        log.info("Session cleared successfully")
        return True
