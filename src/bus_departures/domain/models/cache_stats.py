"""Cache statistics domain models."""

from pydantic import BaseModel, ConfigDict


class CacheStats(BaseModel):
    """Counters reported by a single timed cache."""

    model_config = ConfigDict(frozen=True)

    key_count: int = 0
    hits: int = 0
    misses: int = 0


class CacheStatsReport(BaseModel):
    """Statistics for both caches owned by the aggregator."""

    model_config = ConfigDict(frozen=True)

    timetable_cache: CacheStats
    live_cache: CacheStats
