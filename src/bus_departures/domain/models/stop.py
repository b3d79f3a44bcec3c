"""Stop domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Stop:
    """A physical boarding stand and the routes served from it."""

    id: str
    display_name: str
    operators: tuple[str, ...]
    route_numbers: tuple[str, ...]
    dataset_ids: tuple[str, ...]

    @property
    def primary_operator(self) -> str:
        """Operator reported on every service emitted for this stop."""
        return self.operators[0] if self.operators else "Unknown"
