"""
Per-domain politeness: concurrency cap plus minimum spacing between fetch starts.
"""
from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from link_harvester.errors import CrawlCancelled
from link_harvester.logger import site_logger

__all__ = ("PolitenessGovernor",)


class PolitenessGovernor:
    """
    Limits fetches to one domain.

    At most *parallelism* fetches run at once and two fetch starts are never
    closer than *delay* seconds. Each crawler owns its own instance, so
    governors of different sites never contend.
    """

    def __init__(
        self,
        domain: str,
        parallelism: int = 2,
        delay: float = 1.0,
        stop_event: Optional[asyncio.Event] = None,
    ) -> None:
        if parallelism < 1:
            raise ValueError("parallelism must be >= 1")
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.domain = domain
        self.parallelism = parallelism
        self.delay = delay
        self._stop_event = stop_event
        self._slots = asyncio.Semaphore(parallelism)
        self._start_lock = asyncio.Lock()
        self._last_start = float("-inf")
        self._in_flight = 0
        self.logger = site_logger(domain)

    @property
    def in_flight(self) -> int:
        return self._in_flight

    def _check_stopped(self) -> None:
        if self._stop_event is not None and self._stop_event.is_set():
            raise CrawlCancelled(f"crawl of {self.domain} stopped")

    async def _wait_for_turn(self) -> None:
        async with self._start_lock:
            self._check_stopped()
            wait = self.delay - (time.monotonic() - self._last_start)
            if wait > 0:
                self.logger.debug("Throttling %s for %.2f s", self.domain, wait)
                await asyncio.sleep(wait)
                self._check_stopped()
            self._last_start = time.monotonic()

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """Hold one fetch slot for the duration of the ``async with`` block."""
        self._check_stopped()
        async with self._slots:
            await self._wait_for_turn()
            self._in_flight += 1
            try:
                yield
            finally:
                self._in_flight -= 1
