"""
governor.py
-----------
Keeps at most one prediction request in flight.

While a request is outstanding the batcher keeps growing; the first append
after the request settles ships the whole (possibly oversized) window.
"""

import asyncio
from typing import Awaitable, Callable, Optional, Sequence

from ..acquisition.batcher import SampleBatcher
from ..acquisition.sample import Sample
from ..utils.logging_cfg import get_logger

log = get_logger(__name__)

Submitter = Callable[[Sequence[Sample]], Awaitable[object]]


class RequestGovernor:
    def __init__(self, batcher: SampleBatcher, submit: Submitter, batch_size: int = 10):
        self.batcher = batcher
        self.submit = submit
        self.batch_size = batch_size
        self._in_flight = False
        self._task: Optional[asyncio.Task] = None
        self.dispatch_count = 0

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def pending_task(self) -> Optional[asyncio.Task]:
        return self._task

    def evaluate(self) -> Optional[asyncio.Task]:
        """
        Dispatch the pending window if it is full and nothing is in flight.

        Must be called from the event loop thread. The check and the flag
        set happen without yielding, so a second request can never start
        while one is outstanding. Without a running loop RuntimeError is
        raised before any state changes, so the window is kept.
        """
        if len(self.batcher) < self.batch_size or self._in_flight:
            return None

        loop = asyncio.get_running_loop()
        self._in_flight = True
        window = self.batcher.snapshot()
        self.dispatch_count += 1
        if len(window) > self.batch_size:
            log.debug("Dispatching oversized window (%d > %d)", len(window), self.batch_size)

        self._task = loop.create_task(self._run(window))
        return self._task

    async def _run(self, window: Sequence[Sample]):
        try:
            await self.submit(window)
        except Exception:
            log.exception("Window submission failed")
        finally:
            self._in_flight = False

    async def wait_idle(self):
        """Wait for the outstanding request, if any, to settle."""
        task = self._task
        if task is not None and not task.done():
            await asyncio.gather(task, return_exceptions=True)
