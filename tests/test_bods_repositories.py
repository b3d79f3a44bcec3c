"""Tests for the BODS-backed repositories."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from bus_departures.adapters.bods_api import BodsTimetableRepository, BodsVehicleRepository
from bus_departures.domain.errors import UpstreamFetchError
from bus_departures.domain.models import BoundingBox, DatasetMetadata

BOUNDS = BoundingBox(54.57, 54.58, -1.27, -1.23)


@pytest.mark.asyncio
async def test_timetable_is_downloaded_from_metadata_url_and_parsed() -> None:
    """Given dataset metadata, when getting a timetable, then its download URL is fetched and parsed."""
    feed_client = MagicMock()
    feed_client.fetch_dataset_metadata = AsyncMock(
        return_value=DatasetMetadata(dataset_id="18509", download_url="https://x/tx.xml")
    )
    feed_client.fetch_dataset_body = AsyncMock(return_value=b"<TransXChange/>")
    parser = MagicMock()
    parser.parse.return_value = {"10": []}

    result = await BodsTimetableRepository(feed_client, parser).get_timetable("18509")

    assert result == {"10": []}
    feed_client.fetch_dataset_metadata.assert_awaited_once_with("18509")
    feed_client.fetch_dataset_body.assert_awaited_once_with("https://x/tx.xml")
    parser.parse.assert_called_once_with(b"<TransXChange/>")


@pytest.mark.asyncio
async def test_timetable_metadata_failure_propagates() -> None:
    """Given a failing metadata request, when getting a timetable, then the error propagates."""
    feed_client = MagicMock()
    feed_client.fetch_dataset_metadata = AsyncMock(side_effect=UpstreamFetchError("404"))
    feed_client.fetch_dataset_body = AsyncMock()

    with pytest.raises(UpstreamFetchError):
        await BodsTimetableRepository(feed_client, MagicMock()).get_timetable("1")

    feed_client.fetch_dataset_body.assert_not_awaited()


@pytest.mark.asyncio
async def test_vehicle_observations_come_from_live_feed() -> None:
    """Given a bounding box, when getting observations, then the live feed is parsed."""
    feed_client = MagicMock()
    feed_client.fetch_live_feed = AsyncMock(return_value=b"<Siri/>")
    parser = MagicMock()
    parser.parse.return_value = []

    result = await BodsVehicleRepository(feed_client, parser).get_vehicle_observations(BOUNDS)

    assert result == []
    feed_client.fetch_live_feed.assert_awaited_once_with(BOUNDS)
    parser.parse.assert_called_once_with(b"<Siri/>")
