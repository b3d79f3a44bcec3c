"""Vehicle repository port."""

from typing import Protocol

from bus_departures.domain.models.bounding_box import BoundingBox
from bus_departures.domain.models.vehicle_observation import VehicleObservation


class VehicleRepository(Protocol):
    """Port for retrieving live vehicle positions."""

    async def get_vehicle_observations(self, bounds: BoundingBox) -> list[VehicleObservation]:
        """Get the vehicles currently tracked inside an area.

        Raises:
            UpstreamFetchError: If the live feed could not be fetched.
        """
        ...
