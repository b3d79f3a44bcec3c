"""Bounding box domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    """Geographic area the live vehicle feed is scoped to."""

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def as_query_value(self) -> str:
        """Format as the ``minLon,minLat,maxLon,maxLat`` query value."""
        return f"{self.min_lon},{self.min_lat},{self.max_lon},{self.max_lat}"
