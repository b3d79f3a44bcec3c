"""JSON serialization of domain objects for the HTTP API."""

from datetime import datetime
from typing import Any

from bus_departures.domain.models.cache_stats import CacheStats
from bus_departures.domain.models.service import Service
from bus_departures.domain.models.stop import Stop
from bus_departures.domain.models.vehicle_observation import VehicleObservation


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def service_to_dict(service: Service) -> dict[str, Any]:
    """Serialize a service using the camelCase field names of the public API."""
    return {
        "routeNumber": service.route_number,
        "destination": service.destination,
        "operator": service.operator,
        "scheduledTime": _iso(service.scheduled_time),
        "estimatedTime": _iso(service.estimated_time),
        "status": service.status.value,
        "source": service.source.value,
    }


def services_to_list(services: list[Service]) -> list[dict[str, Any]]:
    return [service_to_dict(service) for service in services]


def vehicle_to_dict(vehicle: VehicleObservation) -> dict[str, Any]:
    return {
        "vehicleRef": vehicle.vehicle_ref,
        "lineRef": vehicle.line_ref,
        "routeNumber": vehicle.route_number,
        "destination": vehicle.destination,
        "latitude": vehicle.latitude,
        "longitude": vehicle.longitude,
        "timestamp": _iso(vehicle.observed_at),
    }


def stop_to_dict(stop: Stop) -> dict[str, Any]:
    return {
        "stopId": stop.id,
        "name": stop.display_name,
        "operators": list(stop.operators),
        "routes": list(stop.route_numbers),
        "datasets": list(stop.dataset_ids),
    }


def cache_stats_to_dict(stats: CacheStats) -> dict[str, int]:
    return {"keys": stats.key_count, "hits": stats.hits, "misses": stats.misses}
