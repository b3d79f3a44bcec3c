"""Utility for logging upstream requests when BODS_LOG_REQUESTS is enabled."""

import logging
import os
from typing import Any

from bus_departures.adapters.bods_api.constants import API_KEY_PARAM

logger = logging.getLogger(__name__)

REDACTED = "***REDACTED***"


def should_log_requests() -> bool:
    """Check if request logging is enabled via BODS_LOG_REQUESTS environment variable."""
    return os.getenv("BODS_LOG_REQUESTS", "").lower() == "true"


def _redact_params(params: dict[str, Any]) -> dict[str, Any]:
    """Hide the API key from logged query parameters."""
    return {k: REDACTED if k == API_KEY_PARAM else v for k, v in params.items()}


def _build_url_with_params(url: str, params: dict[str, Any] | None) -> str:
    """Build full URL with query parameters."""
    if not params:
        return url
    param_str = "&".join(f"{k}={v}" for k, v in sorted(params.items()))
    return f"{url}?{param_str}" if "?" not in url else f"{url}&{param_str}"


def mask_api_key(api_key: str, visible: int = 8) -> str:
    """Show only the first characters of an API key."""
    if not api_key:
        return ""
    return f"{api_key[:visible]}..."


def log_api_request(method: str, url: str, params: dict[str, Any] | None = None) -> None:
    """Log upstream request details if BODS_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL.
        params: Query parameters; the API key is redacted.
    """
    if not should_log_requests():
        return

    safe_params = _redact_params(params) if params else None
    logger.info(f"API Request: {method} {_build_url_with_params(url, safe_params)}")
