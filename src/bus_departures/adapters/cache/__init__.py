"""Cache adapters."""

from bus_departures.adapters.cache.cache_sweeper import CacheSweeper
from bus_departures.adapters.cache.timed_cache import TimedCache

__all__ = ["CacheSweeper", "TimedCache"]
