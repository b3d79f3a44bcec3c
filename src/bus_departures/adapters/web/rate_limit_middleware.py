"""Rate limiting middleware for Starlette using throttled-py."""

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from throttled import RateLimiterType, Throttled, rate_limiter, store

logger = logging.getLogger(__name__)


def extract_client_ip(request: Request) -> str:
    """Extract client IP address from request, supporting X-Forwarded-For header.

    The first address of an X-Forwarded-For chain is the original client.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()
        if client_ip:
            return client_ip

    if request.client and request.client.host:
        return request.client.host

    logger.warning("Could not determine client IP, using 'unknown'")
    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-IP token bucket limit on API requests; exempt paths are never limited."""

    def __init__(
        self,
        app: Callable,
        requests_per_minute: int = 100,
        exempt_paths: Iterable[str] = ("/health",),
    ) -> None:
        """Initialize rate limiting middleware.

        Args:
            app: The ASGI application to wrap.
            requests_per_minute: Maximum requests per IP per minute; 0 disables limiting.
            exempt_paths: Paths that bypass the limit, such as health checks.
        """
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.exempt_paths = frozenset(exempt_paths)
        self.rate_limiter_store = store.MemoryStore()
        if requests_per_minute <= 0:
            self.quota = None
            logger.info("Rate limiting disabled")
            return
        self.quota = rate_limiter.per_min(requests_per_minute, burst=requests_per_minute)
        logger.info(f"Rate limiting enabled: {requests_per_minute} requests per minute per IP")

    @staticmethod
    def _extract_retry_after(result: Any) -> float:
        """Read retry_after from a throttled-py result, defaulting to a minute."""
        state = getattr(result, "state", None)
        retry_after = getattr(state if state else result, "retry_after", None)
        return float(retry_after) if retry_after else 60.0

    @staticmethod
    def _create_rate_limit_response(client_ip: str, retry_after: float) -> Response:
        logger.warning(f"Rate limit exceeded for IP {client_ip}, retry after {retry_after}s")
        return JSONResponse(
            {"success": False, "error": "Rate limit exceeded. Please try again later."},
            status_code=429,
            headers={"Retry-After": str(int(retry_after))},
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request and enforce rate limiting."""
        if self.quota is None or request.url.path in self.exempt_paths:
            return await call_next(request)

        client_ip = extract_client_ip(request)
        throttle = Throttled(
            key=client_ip,
            using=RateLimiterType.TOKEN_BUCKET.value,
            quota=self.quota,
            store=self.rate_limiter_store,
        )

        result = throttle.limit()
        if result.limited:
            return self._create_rate_limit_response(
                client_ip, self._extract_retry_after(result)
            )

        return await call_next(request)
