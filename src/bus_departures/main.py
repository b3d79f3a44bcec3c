"""Main entry point for the bus departures service."""

import asyncio
import logging
import sys

import aiohttp

from bus_departures.adapters.config import AppConfig, StopRegistryLoader
from bus_departures.adapters.web import WebAdapter
from bus_departures.bootstrap import build_engine

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()

    try:
        registry = StopRegistryLoader.load(config)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid stop configuration: {e}")
        sys.exit(1)

    if not registry.stops:
        logger.error("No stops configured.")
        logger.error("Add [[stops]] entries to your config.toml file.")
        sys.exit(1)

    if not config.bods_api_key:
        logger.warning("BODS_API_KEY is not set; every stop will be served from fallback data")

    async with aiohttp.ClientSession() as session:
        engine = build_engine(config, registry, session)
        web_adapter = WebAdapter(
            engine.aggregator,
            config,
            cache_sweeper=engine.create_cache_sweeper(config.cache_sweep_interval_seconds),
        )

        try:
            await web_adapter.start()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            await web_adapter.stop()


def run() -> None:
    """Synchronous entry point for the server command."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
