"""Tests for SingleFlight request coalescing."""

import asyncio

import pytest

from bus_departures.application.services import SingleFlight


class TestSingleFlight:
    """Tests for SingleFlight."""

    @pytest.mark.asyncio
    async def test_when_concurrent_calls_share_key_then_factory_runs_once(self) -> None:
        """Given concurrent callers for one key, when running, then the work happens once."""
        flight = SingleFlight()
        calls = 0
        release = asyncio.Event()

        async def work() -> str:
            nonlocal calls
            calls += 1
            await release.wait()
            return "done"

        first = asyncio.create_task(flight.run("stop_A", work))
        second = asyncio.create_task(flight.run("stop_A", work))
        await asyncio.sleep(0)
        assert flight.inflight_keys == {"stop_A"}

        release.set()
        results = await asyncio.gather(first, second)

        assert results == ["done", "done"]
        assert calls == 1
        assert flight.inflight_keys == set()

    @pytest.mark.asyncio
    async def test_when_keys_differ_then_both_run(self) -> None:
        """Given two keys, when running, then each gets its own task."""
        flight = SingleFlight()

        async def work(value: str) -> str:
            return value

        results = await asyncio.gather(
            flight.run("a", lambda: work("a")), flight.run("b", lambda: work("b"))
        )

        assert results == ["a", "b"]

    @pytest.mark.asyncio
    async def test_when_task_fails_then_every_waiter_sees_error_and_key_is_released(
        self,
    ) -> None:
        """Given a failing task, when awaited, then the error propagates and the key is freed."""
        flight = SingleFlight()

        async def fail() -> None:
            await asyncio.sleep(0)
            raise RuntimeError("boom")

        results = await asyncio.gather(
            flight.run("k", fail), flight.run("k", fail), return_exceptions=True
        )

        assert all(isinstance(r, RuntimeError) for r in results)
        assert flight.inflight_keys == set()

    @pytest.mark.asyncio
    async def test_when_waiter_cancelled_then_shared_task_completes(self) -> None:
        """Given a cancelled waiter, when the other waits, then it still gets the result."""
        flight = SingleFlight()
        release = asyncio.Event()

        async def work() -> int:
            await release.wait()
            return 42

        cancelled = asyncio.create_task(flight.run("k", work))
        survivor = asyncio.create_task(flight.run("k", work))
        await asyncio.sleep(0)

        cancelled.cancel()
        release.set()

        assert await survivor == 42
        with pytest.raises(asyncio.CancelledError):
            await cancelled
