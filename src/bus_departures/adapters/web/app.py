"""Starlette JSON API exposing the departure board."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from bus_departures.adapters.api_request_logger import mask_api_key
from bus_departures.adapters.web.rate_limit_middleware import RateLimitMiddleware
from bus_departures.adapters.web.security_headers_middleware import SecurityHeadersMiddleware
from bus_departures.adapters.web.serializers import (
    cache_stats_to_dict,
    service_to_dict,
    services_to_list,
    stop_to_dict,
    vehicle_to_dict,
)
from bus_departures.domain.errors import UnknownStopError

if TYPE_CHECKING:
    from bus_departures.adapters.cache.cache_sweeper import CacheSweeper
    from bus_departures.adapters.config.app_config import AppConfig
    from bus_departures.domain.ports.departure_board import DepartureBoard

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /api/stops",
    "GET /api/bus-times",
    "GET /api/bus-times/{stop_id}",
    "GET /api/next-bus",
    "GET /api/vehicles",
    "GET /api/cache/status",
    "POST /api/cache/clear",
    "GET /health",
]


def _timestamp() -> str:
    return datetime.now(UTC).isoformat()


def create_app(board: DepartureBoard, config: AppConfig) -> Starlette:
    """Build the ASGI application.

    Args:
        board: The aggregation engine.
        config: Application configuration.

    Returns:
        Starlette app with security headers, gzip, CORS and rate limiting middleware.
    """

    async def health(_request: Request) -> JSONResponse:
        stats = board.cache_stats()
        return JSONResponse(
            {
                "status": "healthy",
                "timestamp": _timestamp(),
                "cache": {
                    "timetables": stats.timetable_cache.key_count,
                    "vehicles": stats.live_cache.key_count,
                },
                "bodsApiKey": mask_api_key(config.bods_api_key),
            }
        )

    async def stops(_request: Request) -> JSONResponse:
        return JSONResponse(
            {"success": True, "stops": [stop_to_dict(stop) for stop in board.registry]}
        )

    async def bus_times(_request: Request) -> JSONResponse:
        all_data = await board.get_all_stops_data()
        return JSONResponse(
            {
                "success": True,
                "timestamp": _timestamp(),
                "data": {
                    stop_id: services_to_list(services) for stop_id, services in all_data.items()
                },
                "source": "BODS",
            }
        )

    async def bus_times_for_stop(request: Request) -> JSONResponse:
        stop_id = request.path_params["stop_id"]
        try:
            result = await board.get_services_for_stop(stop_id)
        except UnknownStopError as e:
            logger.warning(f"Request for unknown stop {stop_id}")
            return JSONResponse(
                {"success": False, "error": str(e), "stopId": stop_id}, status_code=404
            )

        return JSONResponse(
            {
                "success": True,
                "timestamp": _timestamp(),
                "stopId": stop_id,
                "data": services_to_list(result.services),
                "cached": result.cache_hit,
                "source": "BODS",
            }
        )

    async def next_bus(_request: Request) -> JSONResponse:
        service = await board.get_next_global_departure()
        highlighted = service is not None and service.route_number in config.highlight_routes
        return JSONResponse(
            {
                "success": True,
                "timestamp": _timestamp(),
                "nextBus": service_to_dict(service) if service else None,
                "isHighlighted": highlighted,
                "source": "BODS",
            }
        )

    async def vehicles(_request: Request) -> JSONResponse:
        observations = await board.get_vehicle_observations()
        return JSONResponse(
            {
                "success": True,
                "timestamp": _timestamp(),
                "vehicles": [vehicle_to_dict(v) for v in observations],
                "count": len(observations),
                "source": "BODS_SIRI",
            }
        )

    async def cache_status(_request: Request) -> JSONResponse:
        stats = board.cache_stats()
        return JSONResponse(
            {
                "timetables": cache_stats_to_dict(stats.timetable_cache),
                "vehicles": cache_stats_to_dict(stats.live_cache),
            }
        )

    async def cache_clear(_request: Request) -> JSONResponse:
        board.flush_caches()
        return JSONResponse({"message": "Cache cleared successfully"})

    async def not_found(_request: Request, exc: HTTPException) -> JSONResponse:
        if exc.status_code != 404:
            return JSONResponse({"success": False, "error": exc.detail}, status_code=exc.status_code)
        return JSONResponse(
            {
                "success": False,
                "error": "Endpoint not found",
                "availableEndpoints": AVAILABLE_ENDPOINTS,
            },
            status_code=404,
        )

    async def internal_error(_request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error: {exc}", exc_info=exc)
        return JSONResponse(
            {"success": False, "error": "Internal server error"},
            status_code=500,
        )

    routes = [
        Route("/health", health, methods=["GET"]),
        Route("/api/stops", stops, methods=["GET"]),
        Route("/api/bus-times", bus_times, methods=["GET"]),
        Route("/api/bus-times/{stop_id}", bus_times_for_stop, methods=["GET"]),
        Route("/api/next-bus", next_bus, methods=["GET"]),
        Route("/api/vehicles", vehicles, methods=["GET"]),
        Route("/api/cache/status", cache_status, methods=["GET"]),
        Route("/api/cache/clear", cache_clear, methods=["POST"]),
    ]
    middleware = [
        Middleware(SecurityHeadersMiddleware),
        Middleware(GZipMiddleware, minimum_size=config.gzip_minimum_size),
        Middleware(
            CORSMiddleware,
            allow_origins=[config.cors_origin],
            allow_credentials=config.cors_origin != "*",
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        ),
        Middleware(RateLimitMiddleware, requests_per_minute=config.rate_limit_per_minute),
    ]
    exception_handlers: dict[Any, Any] = {
        HTTPException: not_found,
        Exception: internal_error,
    }
    return Starlette(routes=routes, middleware=middleware, exception_handlers=exception_handlers)


class WebAdapter:
    """Serves the JSON API with uvicorn and runs the cache sweeper alongside it."""

    def __init__(
        self,
        board: DepartureBoard,
        config: AppConfig,
        cache_sweeper: CacheSweeper | None = None,
    ) -> None:
        """Initialize the web adapter.

        Args:
            board: The aggregation engine.
            config: Application configuration.
            cache_sweeper: Optional sweeper started and stopped with the server.
        """
        self.board = board
        self.config = config
        self.cache_sweeper = cache_sweeper
        self.app = create_app(board, config)
        self._server: Any | None = None

    async def start(self) -> None:
        """Start the web server and block until it exits."""
        import uvicorn

        if self.cache_sweeper is not None:
            await self.cache_sweeper.start()

        logger.info(f"Bus departures API listening on {self.config.host}:{self.config.port}")
        logger.info(f"Using BODS API key: {mask_api_key(self.config.bods_api_key)}")
        logger.info(f"CORS origin: {self.config.cors_origin}")

        server_config = uvicorn.Config(
            self.app,
            host=self.config.host,
            port=self.config.port,
            log_level="info",
        )
        self._server = uvicorn.Server(server_config)
        try:
            await self._server.serve()
        finally:
            await self.stop()

    async def stop(self) -> None:
        """Stop the web server and the cache sweeper."""
        if self.cache_sweeper is not None:
            await self.cache_sweeper.stop()

        if self._server:
            self._server.should_exit = True
