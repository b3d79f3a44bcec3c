"""Parser for SIRI-VM live vehicle documents."""

import logging
import xml.etree.ElementTree as ET
from collections.abc import Callable
from datetime import UTC, datetime

from bus_departures.adapters.bods_api.xml_utils import (
    child_text,
    children,
    parse_document,
    path,
)
from bus_departures.domain.errors import DocumentParseError
from bus_departures.domain.models.vehicle_observation import VehicleObservation

logger = logging.getLogger(__name__)

UNKNOWN_REF = "unknown"
UNKNOWN_DESTINATION = "Unknown"


class SiriVmParser:
    """Turns a SIRI-VM document into vehicle observations.

    Live data is optional, so malformed documents degrade to an empty list.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize the parser.

        Args:
            clock: Returns the current time, used when a record has no timestamp.
        """
        self._clock = clock or (lambda: datetime.now(UTC))

    def parse(self, data: bytes | str) -> list[VehicleObservation]:
        """Parse a SIRI-VM document.

        Args:
            data: Raw document.

        Returns:
            Observations in document order.
        """
        try:
            root = parse_document(data, "Siri")
        except DocumentParseError as e:
            logger.warning(f"Error parsing SIRI-VM: {e}")
            return []

        delivery = path(root, "ServiceDelivery", "VehicleMonitoringDelivery")
        if delivery is None:
            return []

        parsed_at = self._clock()
        vehicles: list[VehicleObservation] = []
        for activity in children(delivery, "VehicleActivity"):
            journey = path(activity, "MonitoredVehicleJourney")
            if journey is None:
                continue
            vehicles.append(self._parse_journey(activity, journey, parsed_at))
        return vehicles

    def _parse_journey(
        self, activity: ET.Element, journey: ET.Element, parsed_at: datetime
    ) -> VehicleObservation:
        line_ref = child_text(journey, "LineRef")
        location = path(journey, "VehicleLocation")
        recorded_at = child_text(activity, "RecordedAtTime") or child_text(
            journey, "RecordedAtTime"
        )

        return VehicleObservation(
            vehicle_ref=child_text(journey, "VehicleRef") or UNKNOWN_REF,
            line_ref=line_ref or UNKNOWN_REF,
            route_number=child_text(journey, "PublishedLineName") or line_ref or UNKNOWN_REF,
            destination=child_text(journey, "DestinationName") or UNKNOWN_DESTINATION,
            latitude=self._parse_coordinate(location, "Latitude"),
            longitude=self._parse_coordinate(location, "Longitude"),
            observed_at=self._parse_time(recorded_at) or parsed_at,
        )

    @staticmethod
    def _parse_coordinate(location: ET.Element | None, name: str) -> float:
        if location is None:
            return 0.0
        try:
            return float(child_text(location, name) or 0.0)
        except ValueError:
            return 0.0

    @staticmethod
    def _parse_time(time_str: str | None) -> datetime | None:
        """Parse ISO 8601 time string."""
        if not time_str:
            return None

        try:
            parsed = datetime.fromisoformat(time_str.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
