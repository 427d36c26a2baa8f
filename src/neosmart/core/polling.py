from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class PollingTask:
    """Fire ``callback`` every ``interval`` seconds until stopped.

    Each firing runs as its own task, so a slow refresh never delays the next
    one, and a failing refresh is logged without ending the schedule.
    """

    def __init__(
        self,
        name: str,
        interval: float,
        callback: Callable[[], Awaitable[None]],
    ) -> None:
        self.name = name
        self.interval = interval
        self._callback = callback
        self._task: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[None]] = set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=f"poll:{self.name}")
        logger.debug("Polling %s every %.1fs", self.name, self.interval)

    async def stop(self) -> None:
        tasks = list(self._inflight)
        if self._task is not None:
            tasks.append(self._task)
            self._task = None
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._inflight.clear()
        logger.debug("Stopped polling %s", self.name)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            task = asyncio.create_task(self._fire())
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)

    async def _fire(self) -> None:
        try:
            await self._callback()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("Refresh of %s failed: %s", self.name, exc)
