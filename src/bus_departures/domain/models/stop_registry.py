"""Stop registry domain model."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from bus_departures.domain.errors import UnknownStopError
from bus_departures.domain.models.bounding_box import BoundingBox
from bus_departures.domain.models.stop import Stop

DEFAULT_FREQUENCY_MINUTES = 30
DEFAULT_DESTINATION = "City Centre"


@dataclass(frozen=True)
class StopRegistry:
    """Read-only stop configuration together with the per-route lookup tables."""

    stops: tuple[Stop, ...]
    live_bounds: BoundingBox
    route_frequencies: Mapping[str, int] = field(default_factory=dict)
    route_destinations: Mapping[str, str] = field(default_factory=dict)
    default_frequency_minutes: int = DEFAULT_FREQUENCY_MINUTES
    default_destination: str = DEFAULT_DESTINATION

    def __post_init__(self) -> None:
        # Lookup tables are read-only views.
        object.__setattr__(self, "route_frequencies", MappingProxyType(dict(self.route_frequencies)))
        object.__setattr__(
            self, "route_destinations", MappingProxyType(dict(self.route_destinations))
        )

    def __iter__(self) -> Iterator[Stop]:
        return iter(self.stops)

    def __len__(self) -> int:
        return len(self.stops)

    def __contains__(self, stop_id: object) -> bool:
        return any(stop.id == stop_id for stop in self.stops)

    @property
    def stop_ids(self) -> list[str]:
        """Stop ids in declaration order."""
        return [stop.id for stop in self.stops]

    def get(self, stop_id: str) -> Stop:
        """Look up a stop by id.

        Raises:
            UnknownStopError: If the stop is not registered.
        """
        for stop in self.stops:
            if stop.id == stop_id:
                return stop
        raise UnknownStopError(stop_id)

    def frequency_for(self, route_number: str) -> int:
        """Estimated minutes between departures on a route."""
        return self.route_frequencies.get(route_number, self.default_frequency_minutes)

    def destination_for(self, route_number: str) -> str:
        """Destination label shown for a route."""
        return self.route_destinations.get(route_number, self.default_destination)
