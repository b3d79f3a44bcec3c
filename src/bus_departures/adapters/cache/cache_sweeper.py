"""Background task that drops expired cache entries."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bus_departures.domain.contracts.timed_cache import TimedCacheProtocol

logger = logging.getLogger(__name__)


class CacheSweeper:
    """Periodically purges expired entries from a set of caches."""

    def __init__(
        self, caches: Sequence[TimedCacheProtocol], interval_seconds: float = 60.0
    ) -> None:
        """Initialize the sweeper.

        Args:
            caches: Caches to sweep.
            interval_seconds: Seconds between sweeps.
        """
        self.caches = list(caches)
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        """Start the sweep loop."""
        if self._task is not None and not self._task.done():
            logger.warning("Cache sweeper already running")
            return

        self._task = asyncio.create_task(self._sweep_loop())
        logger.info(f"Started cache sweeper (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the sweep loop."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Cache sweeper cancelled")
            logger.info("Stopped cache sweeper")

    def sweep(self) -> int:
        """Purge every cache once and return the number of entries removed."""
        return sum(cache.purge_expired() for cache in self.caches)

    async def _sweep_loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self.interval_seconds)
                removed = self.sweep()
                if removed:
                    logger.debug(f"Cache sweep removed {removed} expired entries")
        except asyncio.CancelledError:
            logger.info("Cache sweeper cancelled")
            raise
