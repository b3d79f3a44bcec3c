"""Wiring of the aggregation engine from configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bus_departures.adapters.bods_api import (
    BodsHttpClient,
    BodsTimetableRepository,
    BodsVehicleRepository,
    SiriVmParser,
    TransXChangeParser,
)
from bus_departures.adapters.cache import CacheSweeper, TimedCache
from bus_departures.application.services import ServiceAggregator

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from bus_departures.adapters.config import AppConfig
    from bus_departures.domain.models import Service, StopRegistry, VehicleObservation


@dataclass
class Engine:
    """The aggregator together with the caches it owns."""

    aggregator: ServiceAggregator
    timetable_cache: TimedCache[list[Service]]
    live_cache: TimedCache[list[VehicleObservation]]

    def create_cache_sweeper(self, interval_seconds: float) -> CacheSweeper:
        """Create a sweeper for both caches."""
        return CacheSweeper([self.timetable_cache, self.live_cache], interval_seconds)


def build_engine(config: AppConfig, registry: StopRegistry, session: ClientSession) -> Engine:
    """Build the aggregator against the BODS API.

    Args:
        config: Application configuration.
        registry: Registered stops.
        session: Shared aiohttp session.
    """
    feed_client = BodsHttpClient(
        session=session,
        api_key=config.bods_api_key,
        base_url=config.bods_base_url,
        timeout_seconds=config.bods_api_timeout,
    )
    timetable_cache: TimedCache[list[Service]] = TimedCache(
        "timetable", config.timetable_cache_ttl_seconds
    )
    live_cache: TimedCache[list[VehicleObservation]] = TimedCache(
        "live", config.live_cache_ttl_seconds
    )
    aggregator = ServiceAggregator(
        registry=registry,
        timetable_repository=BodsTimetableRepository(
            feed_client, TransXChangeParser(registry.frequency_for)
        ),
        vehicle_repository=BodsVehicleRepository(feed_client, SiriVmParser()),
        timetable_cache=timetable_cache,
        live_cache=live_cache,
        fallback_ttl_seconds=config.fallback_cache_ttl_seconds,
    )
    return Engine(aggregator=aggregator, timetable_cache=timetable_cache, live_cache=live_cache)
