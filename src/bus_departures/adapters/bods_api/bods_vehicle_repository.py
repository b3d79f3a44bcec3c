"""BODS live vehicle repository adapter."""

import logging

from bus_departures.adapters.bods_api.siri_vm_parser import SiriVmParser
from bus_departures.domain.models.bounding_box import BoundingBox
from bus_departures.domain.models.vehicle_observation import VehicleObservation
from bus_departures.domain.ports.feed_client import FeedClient
from bus_departures.domain.ports.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)


class BodsVehicleRepository(VehicleRepository):
    """Fetches the SIRI-VM feed for an area and parses it into observations."""

    def __init__(self, feed_client: FeedClient, parser: SiriVmParser) -> None:
        self._feed_client = feed_client
        self._parser = parser

    async def get_vehicle_observations(self, bounds: BoundingBox) -> list[VehicleObservation]:
        """Get vehicles currently tracked inside the bounding box.

        Raises:
            UpstreamFetchError: If the live feed could not be fetched.
        """
        body = await self._feed_client.fetch_live_feed(bounds)
        vehicles = self._parser.parse(body)
        logger.info(f"Found {len(vehicles)} vehicles in {bounds.as_query_value()}")
        return vehicles
