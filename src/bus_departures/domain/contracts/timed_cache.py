"""Protocol for time-limited caching."""

from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from bus_departures.domain.models.cache_stats import CacheStats

V = TypeVar("V")


class TimedCacheProtocol(Protocol[V]):
    """Protocol for a key-value store whose entries expire after a TTL."""

    def get(self, key: str) -> V | None:
        """Get a live entry, recording a hit or a miss.

        Args:
            key: The cache key.

        Returns:
            The cached value, or None if absent or expired.
        """
        ...

    def set(self, key: str, value: V, ttl_seconds: float | None = None) -> None:
        """Store a value.

        Args:
            key: The cache key.
            value: The value to cache.
            ttl_seconds: Optional TTL, capped at the cache's default TTL.
        """
        ...

    def flush_all(self) -> None:
        """Drop every entry."""
        ...

    def purge_expired(self) -> int:
        """Drop expired entries and return how many were removed."""
        ...

    def stats(self) -> "CacheStats":
        """Get key count and hit/miss counters."""
        ...
