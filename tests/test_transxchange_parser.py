"""Tests for TransXChangeParser."""

import random
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

from bus_departures.adapters.bods_api.transxchange_parser import (
    DEPARTURES_PER_PATTERN,
    TransXChangeParser,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)


class FixedOffsetRandom(random.Random):
    """Random source whose uniform() always returns the same offset."""

    def __init__(self, offset: float = 0.0) -> None:
        super().__init__(0)
        self.offset = offset

    def uniform(self, a: float, b: float) -> float:  # noqa: ARG002
        return self.offset


def make_document(services: str, namespace: bool = True) -> str:
    xmlns = ' xmlns="http://www.transxchange.org.uk/"' if namespace else ""
    return f'<?xml version="1.0"?><TransXChange{xmlns}><Services>{services}</Services></TransXChange>'


def make_service(line_id: str | None, line_name: str, patterns: int = 1, links: bool = True) -> str:
    id_attr = f' id="{line_id}"' if line_id else ""
    link = "<TimingLinkRef>TL1</TimingLinkRef>" if links else "<RouteRef>R1</RouteRef>"
    pattern_xml = "".join(
        f'<JourneyPattern id="JP{i}"><Sections>{link}</Sections></JourneyPattern>'
        for i in range(patterns)
    )
    return (
        f"<Service><Lines><Line{id_attr}><LineName>{line_name}</LineName></Line></Lines>"
        f"<StandardService>{pattern_xml}</StandardService></Service>"
    )


def make_parser(offset: float = 1.0, frequencies: dict[str, int] | None = None) -> TransXChangeParser:
    table = frequencies or {}
    return TransXChangeParser(
        frequency_for=lambda route: table.get(route, 30),
        rng=FixedOffsetRandom(offset),
        clock=lambda: NOW,
    )


class TestTransXChangeParser:
    """Tests for TransXChange parsing."""

    def test_when_line_has_id_then_keyed_by_id(self) -> None:
        """Given a Line with an id attribute, when parsing, then the id is the key."""
        parser = make_parser()

        result = parser.parse(make_document(make_service("L10", "10")))

        assert list(result) == ["L10"]
        assert len(result["L10"]) == DEPARTURES_PER_PATTERN

    def test_when_line_has_no_id_then_keyed_by_line_name(self) -> None:
        """Given a Line without an id, when parsing, then LineName is the key."""
        parser = make_parser()

        result = parser.parse(make_document(make_service(None, "17A")))

        assert list(result) == ["17A"]

    def test_departures_follow_route_frequency(self) -> None:
        """Given a known route frequency, when parsing, then departures are spaced by it."""
        parser = make_parser(offset=1.0, frequencies={"10": 20})

        departures = parser.parse(make_document(make_service(None, "10")))["10"]

        assert [d.scheduled_time for d in departures[:3]] == [
            NOW,
            NOW + timedelta(minutes=20),
            NOW + timedelta(minutes=40),
        ]
        assert departures[0].estimated_time == NOW + timedelta(minutes=1)

    def test_when_variance_puts_first_estimate_in_past_then_it_is_dropped(self) -> None:
        """Given a negative variance, when parsing, then departures estimated before now are dropped."""
        parser = make_parser(offset=-1.0)

        departures = parser.parse(make_document(make_service(None, "10")))["10"]

        assert len(departures) == DEPARTURES_PER_PATTERN - 1
        assert all(d.estimated_time > NOW for d in departures)

    def test_patterns_without_timing_links_are_ignored(self) -> None:
        """Given a pattern with no TimingLinkRef, when parsing, then it yields nothing."""
        parser = make_parser()

        result = parser.parse(make_document(make_service(None, "10", links=False)))

        assert result == {"10": []}

    def test_each_pattern_contributes_departures(self) -> None:
        """Given two journey patterns, when parsing, then both contribute departures."""
        parser = make_parser()

        result = parser.parse(make_document(make_service(None, "10", patterns=2)))

        assert len(result["10"]) == 2 * DEPARTURES_PER_PATTERN

    def test_later_service_for_same_line_replaces_earlier(self) -> None:
        """Given two services for one line, when parsing, then the later one wins."""
        parser = make_parser()
        services = make_service(None, "10", patterns=2) + make_service(None, "10", patterns=1)

        result = parser.parse(make_document(services))

        assert len(result["10"]) == DEPARTURES_PER_PATTERN

    def test_document_without_namespace_is_parsed(self) -> None:
        """Given an un-namespaced document, when parsing, then lines are still found."""
        parser = make_parser()

        result = parser.parse(make_document(make_service(None, "12"), namespace=False))

        assert "12" in result

    @patch("bus_departures.adapters.bods_api.transxchange_parser.logger")
    def test_when_document_malformed_then_empty_and_warns(self, mock_logger) -> None:
        """Given malformed XML, when parsing, then an empty mapping is returned."""
        parser = make_parser()

        assert parser.parse(b"<TransXChange><Services>") == {}
        mock_logger.warning.assert_called_once()

    def test_when_root_is_not_transxchange_then_empty(self) -> None:
        """Given a different root element, when parsing, then an empty mapping is returned."""
        parser = make_parser()

        assert parser.parse("<Siri/>") == {}

    def test_when_services_missing_then_empty(self) -> None:
        """Given no Services element, when parsing, then an empty mapping is returned."""
        parser = make_parser()

        assert parser.parse("<TransXChange/>") == {}
