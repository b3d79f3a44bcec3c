"""Application layer - use cases orchestrating the domain."""

from bus_departures.application.services import ServiceAggregator

__all__ = ["ServiceAggregator"]
