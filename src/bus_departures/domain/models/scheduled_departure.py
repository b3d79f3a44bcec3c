"""Scheduled departure domain model."""

from dataclasses import dataclass
from datetime import datetime

from bus_departures.domain.models.service import ServiceStatus, classify_status


@dataclass(frozen=True)
class ScheduledDeparture:
    """One departure derived from a timetable pattern."""

    scheduled_time: datetime
    estimated_time: datetime

    @property
    def status(self) -> ServiceStatus:
        """Status computed from the recorded time delta."""
        return classify_status(self.scheduled_time, self.estimated_time)
