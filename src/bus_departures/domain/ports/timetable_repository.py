"""Timetable repository port."""

from typing import Protocol

from bus_departures.domain.models.scheduled_departure import ScheduledDeparture


class TimetableRepository(Protocol):
    """Port for retrieving the parsed timetable of a single dataset."""

    async def get_timetable(self, dataset_id: str) -> dict[str, list[ScheduledDeparture]]:
        """Get scheduled departures keyed by route number.

        Raises:
            UpstreamFetchError: If the dataset could not be fetched.
        """
        ...
