"""Synthesis of plausible departure times around a route's frequency."""

import random
from datetime import datetime, timedelta

from bus_departures.domain.models.scheduled_departure import ScheduledDeparture


def synthesize_departures(
    start: datetime,
    frequency_minutes: int,
    count: int,
    variance_minutes: float,
    rng: random.Random,
    *,
    keep_past: bool = False,
) -> list[ScheduledDeparture]:
    """Generate evenly spaced departures with a uniform random perturbation.

    Args:
        start: First scheduled departure time, usually "now".
        frequency_minutes: Minutes between successive scheduled departures.
        count: Number of departures to generate.
        variance_minutes: Half-width of the uniform variance applied to each estimate.
        rng: Random source.
        keep_past: Keep departures whose estimate falls at or before ``start``.

    Returns:
        Departures in scheduled order.
    """
    departures: list[ScheduledDeparture] = []
    for i in range(count):
        scheduled = start + timedelta(minutes=frequency_minutes * i)
        estimated = scheduled + timedelta(minutes=rng.uniform(-variance_minutes, variance_minutes))
        if keep_past or estimated > start:
            departures.append(ScheduledDeparture(scheduled_time=scheduled, estimated_time=estimated))
    return departures
