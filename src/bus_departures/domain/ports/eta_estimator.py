"""ETA estimator port."""

from typing import Protocol

from bus_departures.domain.models.vehicle_observation import VehicleObservation


class EtaEstimator(Protocol):
    """Port for estimating minutes until a tracked vehicle reaches the stop."""

    def estimate_minutes(self, vehicle: VehicleObservation) -> int:
        """Return a positive whole number of minutes."""
        ...
