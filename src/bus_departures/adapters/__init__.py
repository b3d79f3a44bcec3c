"""Adapters layer - external system integrations."""

from bus_departures.adapters.bods_api import (
    BodsHttpClient,
    BodsTimetableRepository,
    BodsVehicleRepository,
)
from bus_departures.adapters.cache import TimedCache
from bus_departures.adapters.config import AppConfig

__all__ = [
    "AppConfig",
    "BodsHttpClient",
    "BodsTimetableRepository",
    "BodsVehicleRepository",
    "TimedCache",
]
