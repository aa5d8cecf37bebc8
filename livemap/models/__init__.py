"""Pydantic models for the live map backend."""

from .aircraft import AircraftRecord, TrackPosition
from .live import (
    DetailedTrackResponse,
    LiveAircraft,
    LiveAircraftResponse,
    LiveMapSettings,
    MapCenter,
    PollerStatus,
    SettingsUpdate,
    TrackBufferResponse,
)

__all__ = [
    "AircraftRecord",
    "DetailedTrackResponse",
    "LiveAircraft",
    "LiveAircraftResponse",
    "LiveMapSettings",
    "MapCenter",
    "PollerStatus",
    "SettingsUpdate",
    "TrackBufferResponse",
    "TrackPosition",
]
