"""Live map state: latest snapshot, track buffers and display settings."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from livemap.config import settings
from livemap.ingestors import AircraftAPIClient, SnapshotPoller
from livemap.models import (
    AircraftRecord,
    DetailedTrackResponse,
    LiveAircraft,
    LiveAircraftResponse,
    LiveMapSettings,
    PollerStatus,
    TrackBufferResponse,
)
from livemap.tracking import (
    TrackBufferManager,
    age_color,
    filter_recent,
    map_center,
    track_line_geojson,
    track_points_geojson,
    tracks_to_geojson,
    with_position,
)

logger = logging.getLogger("livemap.live_map")


class LiveMapService:
    """Orchestrates polling, track history and the live display subset."""

    def __init__(
        self,
        *,
        client: Optional[AircraftAPIClient] = None,
        refresh_interval: int | None = None,
        max_age_minutes: int | None = None,
        show_tracks: bool | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.client = client or AircraftAPIClient()
        self.max_age_minutes = max_age_minutes or settings.max_age_minutes
        self.show_tracks = settings.show_tracks if show_tracks is None else show_tracks
        self._clock = clock
        self.tracks = TrackBufferManager(clock=clock)
        self.poller = SnapshotPoller(
            source=self.client,
            interval=refresh_interval or settings.refresh_interval,
            on_snapshot=self.handle_snapshot,
        )

    @property
    def refresh_interval(self) -> int:
        return int(self.poller.interval)

    def start(self) -> None:
        self.poller.start()

    async def stop(self) -> None:
        await self.poller.stop()

    def handle_snapshot(self, snapshot: list[AircraftRecord]) -> None:
        buffers = self.tracks.apply(snapshot, self.max_age_minutes)
        logger.debug(
            "Applied snapshot of %s aircraft; %s track buffers",
            len(snapshot),
            len(buffers),
        )

    def live_view(self, now: float | None = None) -> LiveAircraftResponse:
        now_s = self._clock() if now is None else now
        recent = with_position(
            filter_recent(self.poller.snapshot, now_s, self.max_age_minutes)
        )
        aircraft = [
            LiveAircraft(
                **record.model_dump(),
                color=age_color(record.lastseen, now_s, self.max_age_minutes),
                label=record.display_name,
            )
            for record in recent
        ]
        return LiveAircraftResponse(
            aircraft=aircraft,
            count=len(aircraft),
            max_age_minutes=self.max_age_minutes,
            last_update=self.poller.last_update,
            error=self.poller.error,
            center=map_center(recent),
        )

    def tracks_view(self, include_hidden: bool = False) -> TrackBufferResponse:
        visible = self.show_tracks or include_hidden
        buffers = self.tracks.buffers if visible else {}
        return TrackBufferResponse(
            show_tracks=self.show_tracks,
            tracks={
                icao24: [point.as_list() for point in points]
                for icao24, points in buffers.items()
            },
            geojson=tracks_to_geojson(buffers),
        )

    async def get_aircraft(self, icao24: str) -> AircraftRecord:
        return await self.client.get_aircraft(icao24)

    async def get_track(self, icao24: str) -> DetailedTrackResponse:
        positions = await self.client.get_track(icao24)
        return DetailedTrackResponse(
            icao24=icao24,
            positions=len(positions),
            line=track_line_geojson(icao24, positions),
            points=track_points_geojson(icao24, positions),
        )

    def status(self) -> PollerStatus:
        return PollerStatus(
            running=self.poller.running,
            loading=self.poller.loading,
            refresh_interval=self.poller.interval,
            last_update=self.poller.last_update,
            error=self.poller.error,
            snapshot_size=len(self.poller.snapshot),
        )

    def current_settings(self) -> LiveMapSettings:
        return LiveMapSettings(
            refresh_interval=self.refresh_interval,
            max_age_minutes=self.max_age_minutes,
            show_tracks=self.show_tracks,
        )

    def update_settings(
        self,
        *,
        refresh_interval: int | None = None,
        max_age_minutes: int | None = None,
        show_tracks: bool | None = None,
    ) -> LiveMapSettings:
        """Apply new settings; values are expected to be range-checked already."""

        if refresh_interval is not None:
            self.poller.set_interval(refresh_interval)
        if max_age_minutes is not None:
            self.max_age_minutes = max_age_minutes
        if show_tracks is not None:
            self.show_tracks = show_tracks
        return self.current_settings()


__all__ = ["LiveMapService"]
