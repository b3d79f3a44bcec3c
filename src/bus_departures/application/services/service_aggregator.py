"""Service aggregation: timetable, live tracking and fallback merged per stop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from functools import reduce
from typing import TYPE_CHECKING

from bus_departures.application.services.eta_estimator import SimulatedDistanceEtaEstimator
from bus_departures.application.services.fallback_synthesizer import (
    FallbackSynthesizer,
    sort_by_effective_time,
)
from bus_departures.application.services.single_flight import SingleFlight
from bus_departures.domain.errors import UpstreamFetchError
from bus_departures.domain.models.cache_stats import CacheStatsReport
from bus_departures.domain.models.service import Service, ServiceSource, ServiceStatus
from bus_departures.domain.models.stop_services import StopServices
from bus_departures.domain.ports.departure_board import DepartureBoard

if TYPE_CHECKING:
    from bus_departures.domain.contracts.timed_cache import TimedCacheProtocol
    from bus_departures.domain.models.scheduled_departure import ScheduledDeparture
    from bus_departures.domain.models.stop import Stop
    from bus_departures.domain.models.stop_registry import StopRegistry
    from bus_departures.domain.models.vehicle_observation import VehicleObservation
    from bus_departures.domain.ports.eta_estimator import EtaEstimator
    from bus_departures.domain.ports.timetable_repository import TimetableRepository
    from bus_departures.domain.ports.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)

VEHICLE_CACHE_KEY = "vehicle_positions"
LIVE_STOP_LIMIT = 8
DEFAULT_FALLBACK_TTL_SECONDS = 60.0

Timetable = dict[str, list["ScheduledDeparture"]]


def stop_cache_key(stop_id: str) -> str:
    """Timetable cache key for a stop's ranked services."""
    return f"stop_{stop_id}"


def merge_timetables(timetables: Iterable[Mapping[str, list[ScheduledDeparture]]]) -> Timetable:
    """Merge dataset timetables in order; a later dataset replaces a route's departures."""
    return reduce(lambda merged, timetable: {**merged, **timetable}, timetables, {})


class ServiceAggregator(DepartureBoard):
    """Produces ranked departures for the registered stops.

    Results are cached per stop in the timetable cache. The live vehicle
    snapshot is shared by all stops and cached separately with a short TTL.
    Upstream failures never reach the caller: a stop whose timetables cannot
    be fetched is answered with synthesized fallback departures.
    """

    def __init__(
        self,
        registry: StopRegistry,
        timetable_repository: TimetableRepository,
        vehicle_repository: VehicleRepository,
        timetable_cache: TimedCacheProtocol,
        live_cache: TimedCacheProtocol,
        fallback_synthesizer: FallbackSynthesizer | None = None,
        eta_estimator: EtaEstimator | None = None,
        clock: Callable[[], datetime] | None = None,
        fallback_ttl_seconds: float = DEFAULT_FALLBACK_TTL_SECONDS,
    ) -> None:
        """Initialize the aggregator.

        Args:
            registry: Registered stops and route lookup tables.
            timetable_repository: Source of parsed dataset timetables.
            vehicle_repository: Source of live vehicle observations.
            timetable_cache: Cache for ranked services per stop.
            live_cache: Cache for the shared vehicle snapshot.
            fallback_synthesizer: Generator for synthetic departures.
            eta_estimator: Estimator used for live-tracked services.
            clock: Returns the current time.
            fallback_ttl_seconds: TTL for cached fallback results.
        """
        self._registry = registry
        self._timetables = timetable_repository
        self._vehicles = vehicle_repository
        self._timetable_cache = timetable_cache
        self._live_cache = live_cache
        self._fallback = fallback_synthesizer or FallbackSynthesizer(registry)
        self._eta_estimator = eta_estimator or SimulatedDistanceEtaEstimator()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._fallback_ttl_seconds = fallback_ttl_seconds
        self._single_flight = SingleFlight()
        self._flush_generation = 0

    @property
    def registry(self) -> StopRegistry:
        """The registered stops."""
        return self._registry

    async def get_services_for_stop(self, stop_id: str) -> StopServices:
        """Get the ranked services for one stop.

        Args:
            stop_id: Registered stop ID.

        Returns:
            At most eight services sorted by effective time, and whether they came from cache.

        Raises:
            UnknownStopError: If the stop is not registered.
        """
        stop = self._registry.get(stop_id)
        cache_key = stop_cache_key(stop_id)

        cached = self._timetable_cache.get(cache_key)
        if cached is not None:
            logger.info(f"Cache hit for stop {stop_id}")
            return StopServices(stop_id=stop_id, services=list(cached), cache_hit=True)

        services = await self._single_flight.run(cache_key, lambda: self._refresh_stop(stop))
        return StopServices(stop_id=stop_id, services=list(services), cache_hit=False)

    async def get_all_stops_data(self) -> dict[str, list[Service]]:
        """Get services for every registered stop, fetched concurrently.

        A stop that fails is answered with fallback departures; this never raises.
        """
        logger.info(f"Fetching data for all {len(self._registry)} stops")
        results = await asyncio.gather(
            *(self.get_services_for_stop(stop.id) for stop in self._registry),
            return_exceptions=True,
        )

        all_data: dict[str, list[Service]] = {}
        for stop, result in zip(self._registry, results, strict=True):
            if isinstance(result, BaseException):
                logger.error(f"Failed to fetch data for stop {stop.id}: {result}")
                all_data[stop.id] = self._fallback.for_stop(stop, self._clock())
            else:
                all_data[stop.id] = result.services

        logger.info(f"Retrieved data for {len(all_data)} stops")
        return all_data

    async def get_next_global_departure(self) -> Service | None:
        """Get the earliest departure across all stops.

        Ties go to the service seen first in registry order.
        """
        all_data = await self.get_all_stops_data()

        next_service: Service | None = None
        for services in all_data.values():
            for service in services:
                if next_service is None or service.effective_time < next_service.effective_time:
                    next_service = service
        return next_service

    async def get_vehicle_observations(self) -> list[VehicleObservation]:
        """Get the shared live vehicle snapshot; empty on any upstream failure."""
        cached = self._live_cache.get(VEHICLE_CACHE_KEY)
        if cached is not None:
            logger.debug("Vehicle cache hit")
            return list(cached)

        try:
            vehicles = await self._single_flight.run(VEHICLE_CACHE_KEY, self._refresh_vehicles)
        except UpstreamFetchError as e:
            logger.warning(f"Failed to fetch vehicle positions: {e}")
            return []
        except Exception as e:
            logger.error(f"Unexpected error fetching vehicle positions: {e}", exc_info=True)
            return []
        return list(vehicles)

    def cache_stats(self) -> CacheStatsReport:
        """Get statistics for the timetable and live caches."""
        return CacheStatsReport(
            timetable_cache=self._timetable_cache.stats(),
            live_cache=self._live_cache.stats(),
        )

    def flush_caches(self) -> None:
        """Drop every entry from both caches.

        Refreshes already in flight still answer their callers but no longer write
        their results into the flushed caches.
        """
        self._flush_generation += 1
        self._timetable_cache.flush_all()
        self._live_cache.flush_all()

    async def _refresh_stop(self, stop: Stop) -> list[Service]:
        """Fetch, merge and cache fresh services for a stop."""
        logger.info(f"Fetching fresh data for {stop.display_name}")
        cache_key = stop_cache_key(stop.id)
        generation = self._flush_generation

        try:
            timetable, vehicles = await asyncio.gather(
                self._fetch_timetable(stop.dataset_ids),
                self.get_vehicle_observations(),
                return_exceptions=True,
            )
            if isinstance(timetable, BaseException):
                raise timetable
        except UpstreamFetchError as e:
            logger.warning(f"Upstream fetch failed for stop {stop.id}, using fallback: {e}")
            return self._cache_fallback(stop, cache_key, generation)
        except Exception as e:
            logger.error(f"Error fetching data for stop {stop.id}: {e}", exc_info=True)
            return self._cache_fallback(stop, cache_key, generation)

        if isinstance(vehicles, BaseException):
            vehicles = []
        services = self._build_services(stop, timetable, vehicles, self._clock())
        if generation == self._flush_generation:
            self._timetable_cache.set(cache_key, services)
        logger.info(f"Processed {len(services)} services for {stop.display_name}")
        return services

    def _cache_fallback(self, stop: Stop, cache_key: str, generation: int) -> list[Service]:
        fallback = self._fallback.for_stop(stop, self._clock())
        if generation == self._flush_generation:
            self._timetable_cache.set(cache_key, fallback, self._fallback_ttl_seconds)
        return fallback

    async def _fetch_timetable(self, dataset_ids: Iterable[str]) -> Timetable:
        """Fetch datasets one after another so the merge order is the declaration order."""
        timetables = [await self._timetables.get_timetable(dataset_id) for dataset_id in dataset_ids]
        return merge_timetables(timetables)

    async def _refresh_vehicles(self) -> list[VehicleObservation]:
        logger.info("Fetching real-time vehicle positions")
        generation = self._flush_generation
        vehicles = await self._vehicles.get_vehicle_observations(self._registry.live_bounds)
        if generation == self._flush_generation:
            self._live_cache.set(VEHICLE_CACHE_KEY, vehicles)
        return vehicles

    def _build_services(
        self,
        stop: Stop,
        timetable: Timetable,
        vehicles: list[VehicleObservation],
        now: datetime,
    ) -> list[Service]:
        """Combine timetable and fallback departures, then apply live tracking."""
        services: list[Service] = []
        for route_number in stop.route_numbers:
            departures = timetable.get(route_number)
            if not departures:
                services.extend(self._fallback.for_route(route_number, stop.primary_operator, now))
                continue

            destination = self._registry.destination_for(route_number)
            services.extend(
                Service(
                    route_number=route_number,
                    destination=destination,
                    operator=stop.primary_operator,
                    scheduled_time=departure.scheduled_time,
                    estimated_time=departure.estimated_time,
                    status=departure.status,
                    source=ServiceSource.TIMETABLE,
                )
                for departure in departures
            )

        enhanced = self._enhance_with_vehicle_data(services, vehicles, now)
        return sort_by_effective_time(enhanced)[:LIVE_STOP_LIMIT]

    def _enhance_with_vehicle_data(
        self, services: list[Service], vehicles: list[VehicleObservation], now: datetime
    ) -> list[Service]:
        """Replace estimates with live ETAs for services whose route has a tracked vehicle.

        The first matching vehicle wins; there is no proximity check.
        """
        if not vehicles:
            return services

        enhanced: list[Service] = []
        for service in services:
            vehicle = None
            if service.source != ServiceSource.VEHICLE_TRACKING:
                vehicle = next((v for v in vehicles if v.serves_route(service.route_number)), None)

            minutes = self._eta_estimator.estimate_minutes(vehicle) if vehicle else 0
            if minutes > 0:
                service = replace(
                    service,
                    estimated_time=now + timedelta(minutes=minutes),
                    status=ServiceStatus.LIVE,
                    source=ServiceSource.VEHICLE_TRACKING,
                )
            enhanced.append(service)
        return enhanced
