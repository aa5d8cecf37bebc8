"""Models for aircraft snapshots received from the upstream ADS-B API."""

from __future__ import annotations

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _coerce_coordinate(value: Any) -> float | None:
    """Return a finite float or None; 0 is a valid coordinate."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = float(value)
        return value if math.isfinite(value) else None
    return None


class AircraftRecord(BaseModel):
    """One entry of a snapshot, as reported by the upstream API."""

    icao24: str = Field(..., min_length=1, description="24-bit ICAO address (hex)")
    latitude: Optional[float] = Field(
        default=None, description="Latitude in decimal degrees"
    )
    longitude: Optional[float] = Field(
        default=None, description="Longitude in decimal degrees"
    )
    lastseen: Optional[float] = Field(
        default=None, description="Unix timestamp (seconds) of the last observation"
    )
    callsign: Optional[str] = Field(default=None, description="Aircraft callsign")
    registration: Optional[str] = Field(default=None, description="Tail number")
    typecode: Optional[str] = Field(default=None, description="ICAO type code")
    type_description: Optional[str] = Field(
        default=None, description="Human-readable aircraft type"
    )
    altitude: Optional[float] = Field(default=None, description="Altitude in feet")
    groundspeed: Optional[float] = Field(
        default=None, description="Ground speed in knots"
    )
    vertical_rate: Optional[float] = Field(
        default=None, description="Vertical rate in feet per minute"
    )
    track: Optional[float] = Field(
        default=None, description="Track angle in degrees, 0 is north"
    )
    squawk: Optional[str] = Field(default=None, description="Transponder code")

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def normalize_coordinate(cls, value: Any) -> float | None:
        return _coerce_coordinate(value)

    @field_validator("squawk", mode="before")
    @classmethod
    def squawk_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return f"{value:04d}"
        return value

    @property
    def has_position(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def display_name(self) -> str:
        """Callsign without trailing underscores, falling back to the address."""

        cleaned = (self.callsign or "").rstrip("_").strip()
        return cleaned or self.icao24


class TrackPosition(BaseModel):
    """A point of the detailed history served by the upstream track endpoint."""

    longitude: Optional[float] = Field(default=None)
    latitude: Optional[float] = Field(default=None)
    timestamp: Optional[float] = Field(
        default=None, description="Unix timestamp (seconds) of the position"
    )

    model_config = ConfigDict(extra="ignore")

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def normalize_coordinate(cls, value: Any) -> float | None:
        return _coerce_coordinate(value)


__all__ = ["AircraftRecord", "TrackPosition"]
