"""Domain layer - core business logic and models."""

from bus_departures.domain.errors import (
    BusDeparturesError,
    DocumentParseError,
    UnknownStopError,
    UpstreamFetchError,
)
from bus_departures.domain.models import (
    Service,
    Stop,
    StopRegistry,
    StopServices,
    VehicleObservation,
)
from bus_departures.domain.ports import (
    EtaEstimator,
    FeedClient,
    TimetableRepository,
    VehicleRepository,
)

__all__ = [
    "BusDeparturesError",
    "DocumentParseError",
    "EtaEstimator",
    "FeedClient",
    "Service",
    "Stop",
    "StopRegistry",
    "StopServices",
    "TimetableRepository",
    "UnknownStopError",
    "UpstreamFetchError",
    "VehicleObservation",
    "VehicleRepository",
]
