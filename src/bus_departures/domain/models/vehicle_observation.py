"""Vehicle observation domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class VehicleObservation:
    """Position report for one tracked vehicle in a live feed snapshot."""

    vehicle_ref: str
    line_ref: str
    route_number: str
    destination: str
    latitude: float
    longitude: float
    observed_at: datetime

    def serves_route(self, route_number: str) -> bool:
        """Check whether this vehicle is running the given route."""
        return self.route_number == route_number or self.line_ref == route_number
