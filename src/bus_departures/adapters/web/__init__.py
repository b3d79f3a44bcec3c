"""Web adapter exposing the departure board over HTTP."""

from bus_departures.adapters.web.app import WebAdapter, create_app

__all__ = ["WebAdapter", "create_app"]
