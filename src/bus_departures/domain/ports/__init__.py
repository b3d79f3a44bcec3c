"""Ports (interfaces) for the ports-and-adapters architecture."""

from bus_departures.domain.ports.departure_board import DepartureBoard
from bus_departures.domain.ports.eta_estimator import EtaEstimator
from bus_departures.domain.ports.feed_client import FeedClient
from bus_departures.domain.ports.timetable_repository import TimetableRepository
from bus_departures.domain.ports.vehicle_repository import VehicleRepository

__all__ = [
    "DepartureBoard",
    "EtaEstimator",
    "FeedClient",
    "TimetableRepository",
    "VehicleRepository",
]
