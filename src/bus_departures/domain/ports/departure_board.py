"""Departure board port."""

from typing import Protocol

from bus_departures.domain.models.cache_stats import CacheStatsReport
from bus_departures.domain.models.service import Service
from bus_departures.domain.models.stop_registry import StopRegistry
from bus_departures.domain.models.stop_services import StopServices
from bus_departures.domain.models.vehicle_observation import VehicleObservation


class DepartureBoard(Protocol):
    """Port exposing the aggregation engine to display adapters."""

    @property
    def registry(self) -> StopRegistry:
        """The registered stops."""
        ...

    async def get_services_for_stop(self, stop_id: str) -> StopServices:
        """Get ranked services for a stop; raises UnknownStopError for unknown ids."""
        ...

    async def get_all_stops_data(self) -> dict[str, list[Service]]:
        """Get ranked services for every registered stop."""
        ...

    async def get_next_global_departure(self) -> Service | None:
        """Get the earliest departure across all stops."""
        ...

    async def get_vehicle_observations(self) -> list[VehicleObservation]:
        """Get the current live vehicle snapshot."""
        ...

    def cache_stats(self) -> CacheStatsReport:
        """Get cache statistics."""
        ...

    def flush_caches(self) -> None:
        """Drop every cache entry."""
        ...
