"""HTTP client for BODS API requests.

Pure I/O: no retries and no parsing beyond the dataset metadata JSON. Every
failure is raised as UpstreamFetchError so callers can fall back explicitly.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from bus_departures.adapters.api_request_logger import log_api_request
from bus_departures.adapters.bods_api.constants import (
    API_KEY_PARAM,
    BODS_BASE_URL,
    BODS_DATAFEED_PATH,
    BODS_DATASET_PATH,
    DEFAULT_HEADERS,
)
from bus_departures.domain.errors import UpstreamFetchError
from bus_departures.domain.models.dataset_metadata import DatasetMetadata
from bus_departures.domain.ports.feed_client import FeedClient

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from bus_departures.domain.models.bounding_box import BoundingBox

logger = logging.getLogger(__name__)


class BodsHttpClient(FeedClient):
    """Feed client for the BODS timetable and SIRI-VM endpoints."""

    def __init__(
        self,
        session: ClientSession,
        api_key: str,
        base_url: str = BODS_BASE_URL,
        timeout_seconds: float = 10.0,
    ) -> None:
        """Initialize with a shared aiohttp session.

        Args:
            session: aiohttp ClientSession for HTTP requests.
            api_key: BODS API key.
            base_url: API base URL.
            timeout_seconds: Upper bound for each request, including the body read.
        """
        self._session = session
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def _get_bytes(self, url: str, params: dict[str, Any] | None = None) -> bytes:
        """GET a URL and return the body, raising UpstreamFetchError on any failure."""
        query = {**(params or {}), API_KEY_PARAM: self._api_key}
        log_api_request("GET", url, query)

        try:
            async with self._session.get(
                url, params=query, headers=DEFAULT_HEADERS, timeout=self._timeout
            ) as response:
                if response.status != 200:
                    raise UpstreamFetchError(
                        f"BODS API returned status {response.status} for {url}",
                        status_code=response.status,
                    )
                return await response.read()
        except asyncio.TimeoutError as e:
            raise UpstreamFetchError(f"Timed out fetching {url}") from e
        except aiohttp.ClientError as e:
            raise UpstreamFetchError(f"Error fetching {url}: {e}") from e

    async def fetch_dataset_metadata(self, dataset_id: str) -> DatasetMetadata:
        """Fetch dataset metadata from /dataset/{id}/.

        Args:
            dataset_id: BODS dataset ID.

        Returns:
            Metadata holding the timetable download URL.

        Raises:
            UpstreamFetchError: On transport failure, invalid JSON or a missing URL.
        """
        url = self._base_url + BODS_DATASET_PATH.format(dataset_id=dataset_id)
        body = await self._get_bytes(url)

        try:
            data = json.loads(body)
        except ValueError as e:
            raise UpstreamFetchError(f"Dataset {dataset_id} metadata is not valid JSON") from e

        download_url = data.get("url") if isinstance(data, dict) else None
        if not download_url:
            raise UpstreamFetchError(f"Dataset {dataset_id} metadata has no download URL")

        return DatasetMetadata(dataset_id=dataset_id, download_url=str(download_url))

    async def fetch_dataset_body(self, url: str) -> bytes:
        """Download a TransXChange document."""
        return await self._get_bytes(url)

    async def fetch_live_feed(self, bounds: BoundingBox) -> bytes:
        """Fetch the SIRI-VM document for vehicles inside a bounding box."""
        url = self._base_url + BODS_DATAFEED_PATH
        return await self._get_bytes(url, {"boundingBox": bounds.as_query_value()})
