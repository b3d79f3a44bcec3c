"""Dataset metadata domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DatasetMetadata:
    """Upstream description of a timetable dataset."""

    dataset_id: str
    download_url: str
