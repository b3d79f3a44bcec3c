"""Feed client port."""

from typing import Protocol

from bus_departures.domain.models.bounding_box import BoundingBox
from bus_departures.domain.models.dataset_metadata import DatasetMetadata


class FeedClient(Protocol):
    """Port for raw I/O against the upstream timetable and live-feed provider.

    Implementations do not retry. Every failure is raised as
    ``UpstreamFetchError``.
    """

    async def fetch_dataset_metadata(self, dataset_id: str) -> DatasetMetadata:
        """Fetch metadata, including the download URL, for a timetable dataset."""
        ...

    async def fetch_dataset_body(self, url: str) -> bytes:
        """Download a timetable document."""
        ...

    async def fetch_live_feed(self, bounds: BoundingBox) -> bytes:
        """Fetch the live vehicle-position document for an area."""
        ...
