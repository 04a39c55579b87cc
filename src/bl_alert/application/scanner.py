"""Periodic derive-and-alert scan.

Runs the same pass the pool read path runs, on a fixed interval, so overdue
alerts show up even when nobody is browsing pools. Started and stopped by
the FastAPI lifespan.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from src.bl_common.database import StoreSession, StoreSessionFactory

logger = logging.getLogger(__name__)

ScanFn = Callable[[StoreSession], Awaitable[int]]


class PeriodicScanner:
    def __init__(
        self,
        session_factory: StoreSessionFactory,
        scan: ScanFn,
        interval_seconds: float = 60.0,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._session_factory = session_factory
        self._scan = scan
        self._interval = interval_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        async with self._session_factory() as session:
            return await self._scan(session)

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                raised = await self.run_once()
            except Exception:
                # One failed pass must not kill the loop
                logger.exception("System scan failed")
                continue
            if raised:
                logger.info("System scan raised %d alert(s)", raised)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name="bl-system-scan")
        logger.info("System scan started (every %.0fs)", self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("System scan stopped")
