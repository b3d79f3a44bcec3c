"""Result of a single stop query."""

from dataclasses import dataclass, field

from bus_departures.domain.models.service import Service


@dataclass(frozen=True)
class StopServices:
    """Ranked services for a stop, with whether they were served from cache."""

    stop_id: str
    services: list[Service] = field(default_factory=list)
    cache_hit: bool = False
