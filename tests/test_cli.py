"""Tests for the command-line interface."""

import json
import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

from bus_departures import cli
from bus_departures.domain.models import (
    BoundingBox,
    Service,
    ServiceSource,
    ServiceStatus,
    Stop,
    StopRegistry,
    VehicleObservation,
)

EXAMPLE_CONFIG = Path(__file__).resolve().parent.parent / "config.example.toml"
NOW = datetime(2026, 10, 18, 12, 5, tzinfo=UTC)

SERVICE = Service(
    route_number="17A",
    destination="Stockton",
    operator="Arriva",
    scheduled_time=NOW,
    estimated_time=None,
    status=ServiceStatus.ON_TIME,
    source=ServiceSource.FALLBACK,
)


def test_format_service_shows_route_time_and_source() -> None:
    """Given a service, when formatting, then route, time and source are shown."""
    line = cli.format_service(SERVICE)

    assert "17A" in line
    assert "12:05" in line
    assert "(fallback)" in line


def test_print_services_json(capsys: pytest.CaptureFixture[str]) -> None:
    """Given services, when printing as JSON, then rows carry ISO times."""
    cli.print_services("Stand P", [SERVICE], format_json=True)

    rows = json.loads(capsys.readouterr().out)
    assert rows[0]["route"] == "17A"
    assert rows[0]["scheduled"] == NOW.isoformat()
    assert rows[0]["estimated"] is None


def test_print_services_empty_board(capsys: pytest.CaptureFixture[str]) -> None:
    """Given no services, when printing, then a placeholder line is shown."""
    cli.print_services("Next departure", [])

    assert "No departures" in capsys.readouterr().out


def test_print_vehicles_text(capsys: pytest.CaptureFixture[str]) -> None:
    """Given a vehicle, when printing, then its position is shown."""
    vehicle = VehicleObservation("ARR-1", "17A", "17A", "Stockton", 54.575, -1.25, NOW)

    cli.print_vehicles([vehicle])

    out = capsys.readouterr().out
    assert "1 vehicle(s)" in out
    assert "54.57500" in out


def test_print_stops_json(capsys: pytest.CaptureFixture[str]) -> None:
    """Given a registry, when printing as JSON, then every stop is listed."""
    registry = StopRegistry(
        stops=(Stop("A", "Stand A", ("Op",), ("1",), ("9",)),),
        live_bounds=BoundingBox(0, 1, 0, 1),
        route_frequencies={},
        route_destinations={},
    )

    cli.print_stops(registry, format_json=True)

    assert json.loads(capsys.readouterr().out)[0]["stop_id"] == "A"


class TestMain:
    """Tests for CLI argument handling."""

    @pytest.mark.asyncio
    async def test_stops_command_lists_configured_stops(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Given the example config, when running 'stops', then the stands are listed."""
        monkeypatch.setenv("CONFIG_FILE", str(EXAMPLE_CONFIG))
        monkeypatch.setattr(sys, "argv", ["bus-departures-cli", "stops"])

        await cli.main()

        out = capsys.readouterr().out
        assert "079073279A" in out
        assert "3 stop(s)" in out

    @pytest.mark.asyncio
    async def test_unknown_stop_exits_with_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Given an unknown stop, when running 'departures', then the CLI exits with status 1."""
        monkeypatch.setenv("CONFIG_FILE", str(EXAMPLE_CONFIG))
        monkeypatch.setattr(sys, "argv", ["bus-departures-cli", "departures", "NOPE"])

        with pytest.raises(SystemExit) as exc_info:
            await cli.main()

        assert exc_info.value.code == 1
        assert "Unknown stop ID: NOPE" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_missing_config_exits_with_error(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        tmp_path: Path,
    ) -> None:
        """Given a missing config file, when running, then the CLI exits with status 1."""
        monkeypatch.setenv("CONFIG_FILE", str(tmp_path / "nope.toml"))
        monkeypatch.setattr(sys, "argv", ["bus-departures-cli", "stops"])

        with pytest.raises(SystemExit):
            await cli.main()

        assert "Configuration file not found" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_no_command_prints_help(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Given no subcommand, when running, then the CLI exits with status 1."""
        monkeypatch.setattr(sys, "argv", ["bus-departures-cli"])

        with pytest.raises(SystemExit) as exc_info:
            await cli.main()

        assert exc_info.value.code == 1
