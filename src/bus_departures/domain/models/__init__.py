"""Domain models for bus departures."""

from bus_departures.domain.models.bounding_box import BoundingBox
from bus_departures.domain.models.cache_stats import CacheStats, CacheStatsReport
from bus_departures.domain.models.dataset_metadata import DatasetMetadata
from bus_departures.domain.models.scheduled_departure import ScheduledDeparture
from bus_departures.domain.models.service import (
    Service,
    ServiceSource,
    ServiceStatus,
    classify_status,
)
from bus_departures.domain.models.stop import Stop
from bus_departures.domain.models.stop_registry import StopRegistry
from bus_departures.domain.models.stop_services import StopServices
from bus_departures.domain.models.vehicle_observation import VehicleObservation

__all__ = [
    "BoundingBox",
    "CacheStats",
    "CacheStatsReport",
    "DatasetMetadata",
    "ScheduledDeparture",
    "Service",
    "ServiceSource",
    "ServiceStatus",
    "Stop",
    "StopRegistry",
    "StopServices",
    "VehicleObservation",
    "classify_status",
]
