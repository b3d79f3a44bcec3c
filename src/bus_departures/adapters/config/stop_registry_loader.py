"""Stop registry loader."""

import logging
from typing import Any

from bus_departures.adapters.config.app_config import AppConfig
from bus_departures.domain.models.bounding_box import BoundingBox
from bus_departures.domain.models.stop import Stop
from bus_departures.domain.models.stop_registry import (
    DEFAULT_DESTINATION,
    DEFAULT_FREQUENCY_MINUTES,
    StopRegistry,
)

logger = logging.getLogger(__name__)


def _string_tuple(value: Any) -> tuple[str, ...]:
    """Coerce a TOML list to a tuple of unique strings, keeping order."""
    if not isinstance(value, list):
        return ()
    items = [str(item) for item in value if isinstance(item, (str, int))]
    return tuple(dict.fromkeys(items))


class StopRegistryLoader:
    """Builds the stop registry from the TOML configuration."""

    @staticmethod
    def load(config: AppConfig) -> StopRegistry:
        """Load the registry from the configured TOML file."""
        return StopRegistryLoader.from_dict(config.load_toml_data())

    @staticmethod
    def from_dict(data: dict[str, Any]) -> StopRegistry:
        """Build a registry from parsed TOML data.

        Raises:
            ValueError: If a stop lacks an id or routes, ids repeat, or the live area is missing.
        """
        stops_data = data.get("stops", [])
        if not isinstance(stops_data, list):
            raise ValueError("TOML config 'stops' must be a list")

        stops = [StopRegistryLoader._parse_stop(stop_data) for stop_data in stops_data]
        ids = [stop.id for stop in stops]
        if len(ids) != len(set(ids)):
            duplicates = {i for i in ids if ids.count(i) > 1}
            raise ValueError(f"Stop ids must be unique. Duplicate ids found: {duplicates}")

        routes = data.get("routes", {})
        if not isinstance(routes, dict):
            raise ValueError("TOML config 'routes' must be a table")
        frequencies = {
            str(route): int(minutes) for route, minutes in routes.get("frequencies", {}).items()
        }
        destinations = {
            str(route): str(name) for route, name in routes.get("destinations", {}).items()
        }

        registry = StopRegistry(
            stops=tuple(stops),
            live_bounds=StopRegistryLoader._parse_bounds(data.get("live", {})),
            route_frequencies=frequencies,
            route_destinations=destinations,
            default_frequency_minutes=int(
                routes.get("default_frequency_minutes", DEFAULT_FREQUENCY_MINUTES)
            ),
            default_destination=str(routes.get("default_destination", DEFAULT_DESTINATION)),
        )
        logger.info(f"Loaded {len(registry)} stop(s): {', '.join(registry.stop_ids)}")
        return registry

    @staticmethod
    def _parse_stop(stop_data: Any) -> Stop:
        if not isinstance(stop_data, dict):
            raise ValueError("Each stop must be a table")

        stop_id = str(stop_data.get("stop_id", "")).strip()
        if not stop_id:
            raise ValueError("All stops must have a 'stop_id' field")

        route_numbers = _string_tuple(stop_data.get("routes"))
        if not route_numbers:
            raise ValueError(f"Stop {stop_id} must serve at least one route")

        return Stop(
            id=stop_id,
            display_name=str(stop_data.get("name") or stop_id),
            operators=_string_tuple(stop_data.get("operators")),
            route_numbers=route_numbers,
            dataset_ids=_string_tuple(stop_data.get("datasets")),
        )

    @staticmethod
    def _parse_bounds(live: dict[str, Any]) -> BoundingBox:
        box = live.get("bounding_box")
        if not isinstance(box, dict):
            raise ValueError("TOML config must define [live.bounding_box]")
        try:
            return BoundingBox(
                min_lat=float(box["min_lat"]),
                max_lat=float(box["max_lat"]),
                min_lon=float(box["min_lon"]),
                max_lon=float(box["max_lon"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid [live.bounding_box]: {e}") from e
