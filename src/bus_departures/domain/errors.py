"""Domain error taxonomy."""


class BusDeparturesError(Exception):
    """Base class for errors raised by the departures engine."""


class UnknownStopError(BusDeparturesError, LookupError):
    """Raised when a caller asks for a stop that is not registered."""

    def __init__(self, stop_id: str) -> None:
        super().__init__(f"Unknown stop ID: {stop_id}")
        self.stop_id = stop_id


class UpstreamFetchError(BusDeparturesError):
    """Raised when an upstream request fails, times out or returns a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DocumentParseError(BusDeparturesError):
    """Raised when an upstream document cannot be decoded."""
