"""Parser for TransXChange timetable documents."""

import logging
import random
import xml.etree.ElementTree as ET
from collections.abc import Callable
from datetime import UTC, datetime

from bus_departures.adapters.bods_api.xml_utils import (
    child,
    child_text,
    children,
    descendants,
    parse_document,
    path,
)
from bus_departures.domain.errors import DocumentParseError
from bus_departures.domain.models.scheduled_departure import ScheduledDeparture
from bus_departures.domain.synthesis import synthesize_departures

logger = logging.getLogger(__name__)

# Departures generated per journey pattern
DEPARTURES_PER_PATTERN = 8
# Half-width of the random variance applied to timetable estimates
TIMETABLE_VARIANCE_MINUTES = 2.0


class TransXChangeParser:
    """Turns a TransXChange document into scheduled departures keyed by route number.

    Only the line and journey pattern structure is read; departure times are
    synthesized from the route's estimated frequency starting at "now".
    """

    def __init__(
        self,
        frequency_for: Callable[[str], int],
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the parser.

        Args:
            frequency_for: Returns the estimated minutes between departures for a route.
            rng: Random source for the timetable variance.
            clock: Returns the current time.
        """
        self._frequency_for = frequency_for
        self._rng = rng or random.Random()
        self._clock = clock or (lambda: datetime.now(UTC))

    def parse(self, data: bytes | str) -> dict[str, list[ScheduledDeparture]]:
        """Parse a TransXChange document.

        Malformed documents and documents without services produce an empty
        mapping; a warning is logged instead of raising.

        Args:
            data: Raw document.

        Returns:
            Scheduled departures keyed by line identifier.
        """
        try:
            root = parse_document(data, "TransXChange")
        except DocumentParseError as e:
            logger.warning(f"Error parsing TransXChange: {e}")
            return {}

        services_element = child(root, "Services")
        if services_element is None:
            logger.warning("TransXChange document has no Services")
            return {}

        now = self._clock()
        timetables: dict[str, list[ScheduledDeparture]] = {}
        for service in children(services_element, "Service"):
            for line in self._lines(service):
                line_ref = line.get("id") or child_text(line, "LineName")
                if not line_ref:
                    continue
                timetables[line_ref] = self._extract_service_times(service, line, line_ref, now)

        logger.info(f"Parsed {len(timetables)} services from TransXChange")
        return timetables

    @staticmethod
    def _lines(service: ET.Element) -> list[ET.Element]:
        lines = child(service, "Lines")
        return list(children(lines, "Line")) if lines is not None else []

    @staticmethod
    def _has_timing_links(pattern: ET.Element) -> bool:
        """Check whether a journey pattern references at least one timing link."""
        return next(descendants(pattern, "TimingLinkRef"), None) is not None

    def _extract_service_times(
        self, service: ET.Element, line: ET.Element, line_ref: str, now: datetime
    ) -> list[ScheduledDeparture]:
        """Synthesize departures for every journey pattern of a service."""
        standard_service = path(service, "StandardService")
        if standard_service is None:
            return []

        frequency = self._frequency_for(child_text(line, "LineName") or line_ref)
        times: list[ScheduledDeparture] = []
        for pattern in children(standard_service, "JourneyPattern"):
            if not self._has_timing_links(pattern):
                continue
            times.extend(
                synthesize_departures(
                    now,
                    frequency,
                    DEPARTURES_PER_PATTERN,
                    TIMETABLE_VARIANCE_MINUTES,
                    self._rng,
                )
            )
        return times
