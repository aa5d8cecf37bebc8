"""Data ingestors for the live map backend."""

from .aircraft_api import AircraftAPIClient, FetchError
from .poller import SnapshotPoller, SnapshotSource

__all__ = [
    "AircraftAPIClient",
    "FetchError",
    "SnapshotPoller",
    "SnapshotSource",
]
