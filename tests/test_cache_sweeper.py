"""Tests for CacheSweeper."""

import asyncio

import pytest

from bus_departures.adapters.cache import CacheSweeper, TimedCache
from tests.test_timed_cache import FakeClock


class TestCacheSweeper:
    """Tests for periodic cache purging."""

    def test_sweep_purges_every_cache(self) -> None:
        """Given expired entries in two caches, when sweeping, then all are removed."""
        clock = FakeClock()
        timetables: TimedCache[str] = TimedCache("timetable", 300, clock=clock)
        live: TimedCache[str] = TimedCache("live", 30, clock=clock)
        timetables.set("stop_A", "x", ttl_seconds=60)
        timetables.set("stop_B", "y")
        live.set("vehicle_positions", "z")
        clock.advance(61)

        removed = CacheSweeper([timetables, live]).sweep()

        assert removed == 2
        assert timetables.stats().key_count == 1
        assert live.stats().key_count == 0

    @pytest.mark.asyncio
    async def test_start_and_stop_run_the_loop(self) -> None:
        """Given a short interval, when started, then sweeps run until stopped."""
        clock = FakeClock()
        cache: TimedCache[str] = TimedCache("live", 30, clock=clock)
        cache.set("a", "1")
        clock.advance(31)
        sweeper = CacheSweeper([cache], interval_seconds=0.01)

        await sweeper.start()
        await asyncio.sleep(0.05)
        await sweeper.stop()

        assert cache.purge_expired() == 0
        assert sweeper._task is not None
        assert sweeper._task.done()
