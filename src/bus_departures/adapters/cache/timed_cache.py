"""In-memory cache with per-entry time-to-live."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from bus_departures.domain.contracts.timed_cache import TimedCacheProtocol
from bus_departures.domain.models.cache_stats import CacheStats

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass(frozen=True)
class _CacheEntry(Generic[V]):
    value: V
    expires_at: float


class TimedCache(TimedCacheProtocol[V]):
    """Key-value store whose entries expire after a wall-clock TTL.

    Expiry is checked on every read, so an expired entry is never returned.
    ``purge_expired`` can additionally be called on a schedule to reclaim memory.
    Writers always replace whole entries.
    """

    def __init__(
        self,
        name: str,
        default_ttl_seconds: float,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the cache.

        Args:
            name: Name used in log messages.
            default_ttl_seconds: TTL applied when ``set`` is called without one.
            clock: Source of the current time in seconds.
        """
        if default_ttl_seconds <= 0:
            raise ValueError("default_ttl_seconds must be positive")
        self.name = name
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._entries: dict[str, _CacheEntry[V]] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> V | None:
        """Get a live entry, recording a hit or a miss.

        Args:
            key: The cache key.

        Returns:
            The cached value, or None if absent or expired.
        """
        entry = self._entries.get(key)
        if entry is not None and entry.expires_at <= self._clock():
            del self._entries[key]
            entry = None

        if entry is None:
            self._misses += 1
            return None

        self._hits += 1
        return entry.value

    def set(self, key: str, value: V, ttl_seconds: float | None = None) -> None:
        """Store a value.

        Args:
            key: The cache key.
            value: The value to cache.
            ttl_seconds: Optional TTL. It can shorten but never extend the default TTL.
        """
        ttl = self.default_ttl_seconds
        if ttl_seconds is not None:
            ttl = min(ttl_seconds, self.default_ttl_seconds)
        self._entries[key] = _CacheEntry(value=value, expires_at=self._clock() + ttl)

    def flush_all(self) -> None:
        """Drop every entry."""
        count = len(self._entries)
        self._entries = {}
        logger.info(f"{self.name} cache flushed ({count} entries)")

    def purge_expired(self) -> int:
        """Drop expired entries.

        Returns:
            Number of entries removed.
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"{self.name} cache purged {len(expired)} expired entries")
        return len(expired)

    def stats(self) -> CacheStats:
        """Get the number of live keys and the hit/miss counters."""
        self.purge_expired()
        return CacheStats(key_count=len(self._entries), hits=self._hits, misses=self._misses)
