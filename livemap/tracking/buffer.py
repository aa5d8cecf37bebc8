"""Bounded, deduplicated per-aircraft track history.

Each snapshot yields a new buffer mapping; the previous mapping is never
modified. Buffers are keyed by ICAO address only, so the order in which
identifiers are visited has no effect on the result.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Callable, Iterable, Mapping

from livemap.config import MAX_TRACK_POINTS, TRACK_MIN_DISTANCE_CHANGE
from livemap.models.aircraft import AircraftRecord

logger = logging.getLogger("livemap.tracking.buffer")


@dataclass(frozen=True)
class TrackPoint:
    """Position recorded at ingestion time (not the aircraft's lastseen)."""

    longitude: float
    latitude: float
    timestamp_ms: int

    def as_list(self) -> list[float | int]:
        return [self.longitude, self.latitude, self.timestamp_ms]


TrackBuffers = dict[str, tuple[TrackPoint, ...]]


def _has_moved(last: TrackPoint, point: TrackPoint, min_move: float) -> bool:
    return (
        abs(last.longitude - point.longitude) > min_move
        or abs(last.latitude - point.latitude) > min_move
    )


def update_tracks(
    buffers: Mapping[str, tuple[TrackPoint, ...]],
    snapshot: Iterable[AircraftRecord],
    now_ms: int,
    now_s: float,
    max_age_minutes: float,
    *,
    max_points: int = MAX_TRACK_POINTS,
    min_move: float = TRACK_MIN_DISTANCE_CHANGE,
) -> TrackBuffers:
    """Return the buffers that result from applying ``snapshot``.

    Positioned records start or extend their buffer when they moved more than
    ``min_move`` degrees on either axis; buffers are capped at ``max_points``
    keeping the newest. Buffers for identifiers missing from the snapshot are
    dropped once their last point is older than twice ``max_age_minutes``.
    Identifiers present in the snapshot are never dropped here, whatever
    their ``lastseen`` says.
    """

    updated: TrackBuffers = dict(buffers)
    present: set[str] = set()

    for record in snapshot:
        present.add(record.icao24)
        if not record.has_position:
            continue

        point = TrackPoint(record.longitude, record.latitude, now_ms)
        existing = updated.get(record.icao24)
        if not existing:
            updated[record.icao24] = (point,)
            continue

        if not _has_moved(existing[-1], point, min_move):
            continue

        extended = existing + (point,)
        if len(extended) > max_points:
            extended = extended[-max_points:]
        updated[record.icao24] = extended

    max_age_seconds = max_age_minutes * 60 * 2
    expired = [
        icao24
        for icao24, points in updated.items()
        if icao24 not in present
        and now_s - points[-1].timestamp_ms / 1000 > max_age_seconds
    ]
    for icao24 in expired:
        del updated[icao24]

    if expired:
        logger.debug("Evicted %s stale track buffers", len(expired))
    return updated


class TrackBufferManager:
    """Single owner of the current track buffers.

    ``apply`` swaps in a freshly computed mapping, so readers holding the
    previous ``buffers`` never observe a half-applied snapshot.
    """

    def __init__(
        self,
        *,
        max_points: int = MAX_TRACK_POINTS,
        min_move: float = TRACK_MIN_DISTANCE_CHANGE,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.max_points = max_points
        self.min_move = min_move
        self._clock = clock
        self._buffers: TrackBuffers = {}

    @property
    def buffers(self) -> TrackBuffers:
        return self._buffers

    def apply(
        self,
        snapshot: Iterable[AircraftRecord],
        max_age_minutes: float,
        now: float | None = None,
    ) -> TrackBuffers:
        now_s = self._clock() if now is None else now
        self._buffers = update_tracks(
            self._buffers,
            snapshot,
            int(now_s * 1000),
            now_s,
            max_age_minutes,
            max_points=self.max_points,
            min_move=self.min_move,
        )
        return self._buffers

    def get(self, icao24: str) -> tuple[TrackPoint, ...]:
        return self._buffers.get(icao24, ())

    def clear(self) -> None:
        self._buffers = {}


__all__ = ["TrackBufferManager", "TrackBuffers", "TrackPoint", "update_tracks"]
