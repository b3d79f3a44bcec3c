"""Default ETA estimator."""

import random

from bus_departures.domain.models.vehicle_observation import VehicleObservation
from bus_departures.domain.ports.eta_estimator import EtaEstimator

AVERAGE_URBAN_SPEED_KMH = 25.0
MAX_SIMULATED_DISTANCE_KM = 3.0


class SimulatedDistanceEtaEstimator(EtaEstimator):
    """Estimates arrival from a simulated distance at an average urban speed.

    This is a heuristic: no route geometry or traffic is taken into account.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        speed_kmh: float = AVERAGE_URBAN_SPEED_KMH,
        max_distance_km: float = MAX_SIMULATED_DISTANCE_KM,
    ) -> None:
        self._rng = rng or random.Random()
        self.speed_kmh = speed_kmh
        self.max_distance_km = max_distance_km

    def estimate_minutes(self, vehicle: VehicleObservation) -> int:  # noqa: ARG002
        """Return minutes until arrival, never less than one."""
        distance_km = self._rng.uniform(0, self.max_distance_km)
        return max(1, round(distance_km / self.speed_kmh * 60))
