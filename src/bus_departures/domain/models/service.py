"""Service domain model and status classification."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class ServiceStatus(StrEnum):
    """Punctuality of a departure."""

    ON_TIME = "onTime"
    DELAYED = "delayed"
    EARLY = "early"
    ESTIMATED = "estimated"
    LIVE = "live"


class ServiceSource(StrEnum):
    """Where a departure's times came from."""

    TIMETABLE = "timetable"
    VEHICLE_TRACKING = "vehicle_tracking"
    FALLBACK = "fallback"


def classify_status(scheduled: datetime, estimated: datetime) -> ServiceStatus:
    """Classify a departure from the difference between estimated and scheduled time.

    Args:
        scheduled: Timetabled departure time.
        estimated: Predicted departure time.

    Returns:
        ON_TIME within two minutes, DELAYED beyond five minutes late,
        EARLY beyond three minutes early and ESTIMATED otherwise.
    """
    delta_minutes = (estimated - scheduled).total_seconds() / 60
    if abs(delta_minutes) < 2:
        return ServiceStatus.ON_TIME
    if delta_minutes > 5:
        return ServiceStatus.DELAYED
    if delta_minutes < -3:
        return ServiceStatus.EARLY
    return ServiceStatus.ESTIMATED


@dataclass(frozen=True)
class Service:
    """A single upcoming departure as returned to callers."""

    route_number: str
    destination: str
    operator: str
    scheduled_time: datetime
    estimated_time: datetime | None
    status: ServiceStatus
    source: ServiceSource

    @property
    def effective_time(self) -> datetime:
        """Time used for ranking: the estimate when known, else the timetable."""
        return self.estimated_time or self.scheduled_time
