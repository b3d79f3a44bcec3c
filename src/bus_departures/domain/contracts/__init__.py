"""Contracts (protocols) for shared infrastructure used by the application layer."""

from bus_departures.domain.contracts.timed_cache import TimedCacheProtocol

__all__ = ["TimedCacheProtocol"]
