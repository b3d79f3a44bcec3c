"""BODS timetable repository adapter."""

import logging

from bus_departures.adapters.bods_api.transxchange_parser import TransXChangeParser
from bus_departures.domain.models.scheduled_departure import ScheduledDeparture
from bus_departures.domain.ports.feed_client import FeedClient
from bus_departures.domain.ports.timetable_repository import TimetableRepository

logger = logging.getLogger(__name__)


class BodsTimetableRepository(TimetableRepository):
    """Resolves a dataset's download URL, downloads it and parses the TransXChange."""

    def __init__(self, feed_client: FeedClient, parser: TransXChangeParser) -> None:
        self._feed_client = feed_client
        self._parser = parser

    async def get_timetable(self, dataset_id: str) -> dict[str, list[ScheduledDeparture]]:
        """Get scheduled departures for one dataset keyed by route number.

        Args:
            dataset_id: BODS dataset ID.

        Returns:
            Parsed timetable; empty if the document could not be parsed.

        Raises:
            UpstreamFetchError: If the metadata or the document could not be fetched.
        """
        logger.info(f"Fetching timetables from dataset {dataset_id}")
        metadata = await self._feed_client.fetch_dataset_metadata(dataset_id)
        body = await self._feed_client.fetch_dataset_body(metadata.download_url)
        return self._parser.parse(body)
