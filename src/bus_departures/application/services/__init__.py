"""Application services."""

from bus_departures.application.services.eta_estimator import SimulatedDistanceEtaEstimator
from bus_departures.application.services.fallback_synthesizer import FallbackSynthesizer
from bus_departures.application.services.service_aggregator import (
    ServiceAggregator,
    merge_timetables,
)
from bus_departures.application.services.single_flight import SingleFlight

__all__ = [
    "FallbackSynthesizer",
    "ServiceAggregator",
    "SimulatedDistanceEtaEstimator",
    "SingleFlight",
    "merge_timetables",
]
