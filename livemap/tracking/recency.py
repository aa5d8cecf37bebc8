"""Age-based filtering and coloring of aircraft for display."""

from __future__ import annotations

import math
from typing import Iterable, Optional

from livemap.config import INITIAL_ZOOM
from livemap.models.aircraft import AircraftRecord

FRESH_COLOR = (231, 76, 60)  # #e74c3c
STALE_COLOR = (255, 179, 168)  # #ffb3a8


def is_recent(record: AircraftRecord, now_s: float, max_age_minutes: float) -> bool:
    # Unknown age counts as live
    if record.lastseen is None:
        return True
    age_minutes = (now_s - record.lastseen) / 60
    return age_minutes <= max_age_minutes


def filter_recent(
    snapshot: Iterable[AircraftRecord], now_s: float, max_age_minutes: float
) -> list[AircraftRecord]:
    """Return the records seen within ``max_age_minutes``, in input order."""

    return [record for record in snapshot if is_recent(record, now_s, max_age_minutes)]


def with_position(snapshot: Iterable[AircraftRecord]) -> list[AircraftRecord]:
    return [record for record in snapshot if record.has_position]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def age_color(
    lastseen: Optional[float], now_s: float, max_age_minutes: float
) -> str:
    """Interpolate the marker color from fresh red to faded red by age.

    The ratio saturates at ``max_age_minutes``; a missing timestamp gives the
    fresh color.
    """

    if lastseen is None:
        ratio = 0.0
    else:
        age_minutes = (now_s - lastseen) / 60
        ratio = min(max(age_minutes / max_age_minutes, 0.0), 1.0)

    r, g, b = (
        _round_half_up(fresh + (stale - fresh) * ratio)
        for fresh, stale in zip(FRESH_COLOR, STALE_COLOR)
    )
    return f"rgb({r}, {g}, {b})"


def map_center(records: Iterable[AircraftRecord]) -> dict | None:
    positioned = with_position(records)
    if not positioned:
        return None
    return {
        "longitude": sum(r.longitude for r in positioned) / len(positioned),
        "latitude": sum(r.latitude for r in positioned) / len(positioned),
        "zoom": INITIAL_ZOOM,
    }


__all__ = [
    "FRESH_COLOR",
    "STALE_COLOR",
    "age_color",
    "filter_recent",
    "is_recent",
    "map_center",
    "with_position",
]
