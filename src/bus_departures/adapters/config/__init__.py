"""Configuration adapters."""

from bus_departures.adapters.config.app_config import AppConfig
from bus_departures.adapters.config.stop_registry_loader import StopRegistryLoader

__all__ = ["AppConfig", "StopRegistryLoader"]
