"""CLI for querying departures without running the web server."""

import asyncio
import json
import sys
from typing import Any

import aiohttp

from bus_departures.adapters.config import AppConfig, StopRegistryLoader
from bus_departures.bootstrap import build_engine
from bus_departures.domain.errors import UnknownStopError
from bus_departures.domain.models import Service, StopRegistry, VehicleObservation


def _service_row(service: Service) -> dict[str, Any]:
    return {
        "route": service.route_number,
        "destination": service.destination,
        "operator": service.operator,
        "scheduled": service.scheduled_time.isoformat(),
        "estimated": service.estimated_time.isoformat() if service.estimated_time else None,
        "status": service.status.value,
        "source": service.source.value,
    }


def format_service(service: Service) -> str:
    """Format a service as a single board line."""
    return (
        f"  {service.route_number:>4}  {service.destination:<32} "
        f"{service.effective_time:%H:%M}  {service.status.value:<9} ({service.source.value})"
    )


def print_stops(registry: StopRegistry, format_json: bool = False) -> None:
    """Print the registered stops."""
    if format_json:
        rows = [
            {
                "stop_id": stop.id,
                "name": stop.display_name,
                "operators": list(stop.operators),
                "routes": list(stop.route_numbers),
                "datasets": list(stop.dataset_ids),
            }
            for stop in registry
        ]
        print(json.dumps(rows, indent=2, ensure_ascii=False))
        return

    print(f"\n{len(registry)} stop(s):\n")
    for stop in registry:
        print(f"  {stop.display_name}")
        print(f"    ID: {stop.id}")
        print(f"    Routes: {', '.join(stop.route_numbers)}")
        print()


def print_services(title: str, services: list[Service], format_json: bool = False) -> None:
    """Print a departure board."""
    if format_json:
        print(json.dumps([_service_row(s) for s in services], indent=2, ensure_ascii=False))
        return

    print(f"\n{title}\n")
    if not services:
        print("  No departures")
    for service in services:
        print(format_service(service))
    print()


def print_vehicles(vehicles: list[VehicleObservation], format_json: bool = False) -> None:
    """Print the live vehicle snapshot."""
    if format_json:
        rows = [
            {
                "vehicle_ref": v.vehicle_ref,
                "line_ref": v.line_ref,
                "route": v.route_number,
                "destination": v.destination,
                "latitude": v.latitude,
                "longitude": v.longitude,
                "observed_at": v.observed_at.isoformat(),
            }
            for v in vehicles
        ]
        print(json.dumps(rows, indent=2, ensure_ascii=False))
        return

    print(f"\n{len(vehicles)} vehicle(s) tracked:\n")
    for v in vehicles:
        print(f"  {v.route_number:>4}  {v.vehicle_ref:<12} {v.destination}")
        print(f"        at {v.latitude:.5f}, {v.longitude:.5f} ({v.observed_at:%H:%M:%S})")
    print()


async def main() -> None:
    """Main CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Bus Departures CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List configured stops
  bus-departures-cli stops

  # Show the departure board for a stop
  bus-departures-cli departures 079073279B

  # Show the next departure across all stops
  bus-departures-cli next --json
        """,
    )
    parser.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")
    subparsers.add_parser("stops", help="List configured stops")
    departures_parser = subparsers.add_parser("departures", help="Show departures for a stop")
    departures_parser.add_argument("stop_id", help="Stop ID (e.g., 079073279A)")
    subparsers.add_parser("next", help="Show the next departure across all stops")
    subparsers.add_parser("vehicles", help="Show tracked vehicles in the live area")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config = AppConfig()
        registry = StopRegistryLoader.load(config)

        if args.command == "stops":
            print_stops(registry, format_json=args.json)
            return

        async with aiohttp.ClientSession() as session:
            aggregator = build_engine(config, registry, session).aggregator

            if args.command == "departures":
                result = await aggregator.get_services_for_stop(args.stop_id)
                stop = registry.get(args.stop_id)
                print_services(stop.display_name, result.services, format_json=args.json)

            elif args.command == "next":
                service = await aggregator.get_next_global_departure()
                print_services("Next departure", [service] if service else [], args.json)

            elif args.command == "vehicles":
                print_vehicles(await aggregator.get_vehicle_observations(), args.json)

    except UnknownStopError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
