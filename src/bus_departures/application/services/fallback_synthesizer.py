"""Fallback departure synthesis."""

import random
from datetime import datetime

from bus_departures.domain.models.service import Service, ServiceSource
from bus_departures.domain.models.stop import Stop
from bus_departures.domain.models.stop_registry import StopRegistry
from bus_departures.domain.synthesis import synthesize_departures

FALLBACK_DEPARTURES_PER_ROUTE = 4
FALLBACK_VARIANCE_MINUTES = 3.0
FALLBACK_STOP_LIMIT = 6


def sort_by_effective_time(services: list[Service]) -> list[Service]:
    """Sort services by estimated time, falling back to scheduled time."""
    return sorted(services, key=lambda s: s.effective_time)


class FallbackSynthesizer:
    """Generates plausible departures for routes without real data."""

    def __init__(self, registry: StopRegistry, rng: random.Random | None = None) -> None:
        """Initialize the synthesizer.

        Args:
            registry: Source of route frequencies and destinations.
            rng: Random source for the variance.
        """
        self._registry = registry
        self._rng = rng or random.Random()

    def for_route(self, route_number: str, operator: str, now: datetime) -> list[Service]:
        """Generate fallback departures for a single route.

        Every generated departure is kept, even one whose estimate is already past.
        """
        departures = synthesize_departures(
            now,
            self._registry.frequency_for(route_number),
            FALLBACK_DEPARTURES_PER_ROUTE,
            FALLBACK_VARIANCE_MINUTES,
            self._rng,
            keep_past=True,
        )
        destination = self._registry.destination_for(route_number)
        return [
            Service(
                route_number=route_number,
                destination=destination,
                operator=operator,
                scheduled_time=departure.scheduled_time,
                estimated_time=departure.estimated_time,
                status=departure.status,
                source=ServiceSource.FALLBACK,
            )
            for departure in departures
        ]

    def for_stop(self, stop: Stop, now: datetime) -> list[Service]:
        """Generate the ranked fallback board for a whole stop."""
        services: list[Service] = []
        for route_number in stop.route_numbers:
            services.extend(self.for_route(route_number, stop.primary_operator, now))
        return sort_by_effective_time(services)[:FALLBACK_STOP_LIMIT]
