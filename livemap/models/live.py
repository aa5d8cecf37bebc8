"""Response and settings models for the live map API."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from livemap.config import MAX_AGE_MAX, MAX_AGE_MIN, REFRESH_INTERVAL_MAX, REFRESH_INTERVAL_MIN
from livemap.models.aircraft import AircraftRecord


class MapCenter(BaseModel):
    longitude: float
    latitude: float
    zoom: int


class LiveAircraft(AircraftRecord):
    """Aircraft record decorated with its age-based marker color."""

    color: str = Field(..., description="CSS rgb() color derived from the record age")
    label: str = Field(..., description="Cleaned callsign or ICAO address")


class LiveAircraftResponse(BaseModel):
    """Aircraft considered live for display, plus polling status."""

    aircraft: list[LiveAircraft] = Field(default_factory=list)
    count: int = Field(..., description="Number of live aircraft")
    max_age_minutes: int = Field(..., description="Staleness threshold applied")
    last_update: Optional[datetime] = Field(
        default=None, description="Time of the last successful snapshot"
    )
    error: Optional[str] = Field(
        default=None, description="Reason the most recent fetch failed, if it did"
    )
    center: Optional[MapCenter] = Field(
        default=None, description="Mean position of live aircraft for initial centering"
    )


class TrackBufferResponse(BaseModel):
    """In-memory track history for every aircraft with a buffer."""

    show_tracks: bool
    tracks: dict[str, list[tuple[float, float, int]]] = Field(
        default_factory=dict,
        description="icao24 -> [[longitude, latitude, timestamp_ms], ...]",
    )
    geojson: dict[str, Any] = Field(default_factory=dict)


class DetailedTrackResponse(BaseModel):
    """Detailed single-aircraft history from the upstream API."""

    icao24: str
    positions: int = Field(..., description="Number of positions returned upstream")
    line: dict[str, Any]
    points: dict[str, Any]


class PollerStatus(BaseModel):
    running: bool
    loading: bool = Field(..., description="True until the first fetch settles")
    refresh_interval: float
    last_update: Optional[datetime] = None
    error: Optional[str] = None
    snapshot_size: int = 0


class LiveMapSettings(BaseModel):
    refresh_interval: int = Field(
        ..., ge=REFRESH_INTERVAL_MIN, le=REFRESH_INTERVAL_MAX,
        description="Polling interval in seconds",
    )
    max_age_minutes: int = Field(
        ..., ge=MAX_AGE_MIN, le=MAX_AGE_MAX,
        description="Staleness threshold in minutes",
    )
    show_tracks: bool = False


class SettingsUpdate(BaseModel):
    """Partial settings update; unset fields are left unchanged."""

    refresh_interval: Optional[int] = Field(
        default=None, ge=REFRESH_INTERVAL_MIN, le=REFRESH_INTERVAL_MAX,
    )
    max_age_minutes: Optional[int] = Field(
        default=None, ge=MAX_AGE_MIN, le=MAX_AGE_MAX,
    )
    show_tracks: Optional[bool] = None


__all__ = [
    "DetailedTrackResponse",
    "LiveAircraft",
    "LiveAircraftResponse",
    "LiveMapSettings",
    "MapCenter",
    "PollerStatus",
    "SettingsUpdate",
    "TrackBufferResponse",
]
