"""Tests for TimedCache behavior."""

import pytest

from bus_departures.adapters.cache import TimedCache


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> TimedCache[str]:
    return TimedCache("test", default_ttl_seconds=300, clock=clock)


def test_when_key_missing_then_returns_none_and_counts_miss(cache: TimedCache[str]) -> None:
    """Given an empty cache, when getting, then None is returned and a miss recorded."""
    assert cache.get("stop_A") is None

    stats = cache.stats()
    assert stats.misses == 1
    assert stats.hits == 0


def test_when_key_set_then_returns_value_and_counts_hit(cache: TimedCache[str]) -> None:
    """Given a stored value, when getting, then it is returned and a hit recorded."""
    cache.set("stop_A", "value")

    assert cache.get("stop_A") == "value"
    assert cache.stats().hits == 1


def test_when_ttl_elapsed_then_entry_is_a_miss(cache: TimedCache[str], clock: FakeClock) -> None:
    """Given an entry, when the TTL elapses, then it is never returned."""
    cache.set("stop_A", "value")

    clock.advance(299.9)
    assert cache.get("stop_A") == "value"

    clock.advance(0.1)
    assert cache.get("stop_A") is None
    assert cache.stats().key_count == 0


def test_when_ttl_override_shorter_then_it_applies(
    cache: TimedCache[str], clock: FakeClock
) -> None:
    """Given a shorter TTL override, when it elapses, then the entry expires."""
    cache.set("stop_A", "fallback", ttl_seconds=60)

    clock.advance(60)

    assert cache.get("stop_A") is None


def test_when_ttl_override_longer_then_default_caps_it(
    cache: TimedCache[str], clock: FakeClock
) -> None:
    """Given a TTL override above the default, when the default elapses, then the entry expires."""
    cache.set("stop_A", "value", ttl_seconds=3_600)

    clock.advance(300)

    assert cache.get("stop_A") is None


def test_when_set_again_then_entry_is_replaced(cache: TimedCache[str], clock: FakeClock) -> None:
    """Given an existing entry, when set again, then value and expiry are replaced."""
    cache.set("stop_A", "old")
    clock.advance(200)
    cache.set("stop_A", "new")
    clock.advance(200)

    assert cache.get("stop_A") == "new"


def test_flush_all_drops_every_entry(cache: TimedCache[str]) -> None:
    """Given entries, when flushing, then the key count is zero."""
    cache.set("a", "1")
    cache.set("b", "2")

    cache.flush_all()

    assert cache.stats().key_count == 0
    assert cache.get("a") is None


def test_purge_expired_removes_only_expired(cache: TimedCache[str], clock: FakeClock) -> None:
    """Given expired and live entries, when purging, then only expired ones are removed."""
    cache.set("short", "1", ttl_seconds=10)
    cache.set("long", "2")
    clock.advance(30)

    removed = cache.purge_expired()

    assert removed == 1
    assert cache.stats().key_count == 1


def test_non_positive_default_ttl_is_rejected() -> None:
    """Given a zero TTL, when creating a cache, then ValueError is raised."""
    with pytest.raises(ValueError, match="positive"):
        TimedCache("bad", default_ttl_seconds=0)
