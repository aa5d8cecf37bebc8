"""Live aircraft and track history endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from livemap.api.dependencies import get_live_map
from livemap.ingestors import FetchError
from livemap.models import (
    AircraftRecord,
    DetailedTrackResponse,
    LiveAircraftResponse,
    PollerStatus,
    TrackBufferResponse,
)
from livemap.services import LiveMapService

router = APIRouter(prefix="/api/v1", tags=["aircraft"])

logger = logging.getLogger("livemap.api.aircraft")

_ICAO_PATTERN = r"^[0-9a-fA-F]{6}$"


def _upstream_unavailable(exc: FetchError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Aircraft API unavailable: {exc}",
    )


@router.get(
    "/aircraft",
    response_model=LiveAircraftResponse,
    summary="Aircraft seen within the staleness threshold",
)
def list_live_aircraft(
    live_map: LiveMapService = Depends(get_live_map),
) -> LiveAircraftResponse:
    return live_map.live_view()


@router.get(
    "/aircraft/{icao24}",
    response_model=AircraftRecord,
    summary="Fetch a single aircraft from the upstream API",
)
async def get_aircraft(
    icao24: str = Path(..., pattern=_ICAO_PATTERN),
    live_map: LiveMapService = Depends(get_live_map),
) -> AircraftRecord:
    try:
        return await live_map.get_aircraft(icao24)
    except FetchError as exc:
        logger.warning("Aircraft lookup for %s failed: %s", icao24, exc)
        raise _upstream_unavailable(exc) from exc


@router.get(
    "/tracks",
    response_model=TrackBufferResponse,
    summary="Recent track history kept in memory",
)
def list_tracks(
    include_hidden: bool = Query(
        default=False, description="Return tracks even when the track toggle is off"
    ),
    live_map: LiveMapService = Depends(get_live_map),
) -> TrackBufferResponse:
    return live_map.tracks_view(include_hidden=include_hidden)


@router.get(
    "/tracks/{icao24}",
    response_model=DetailedTrackResponse,
    summary="Detailed track for one aircraft",
)
async def get_track(
    icao24: str = Path(..., pattern=_ICAO_PATTERN),
    live_map: LiveMapService = Depends(get_live_map),
) -> DetailedTrackResponse:
    """Proxy the upstream track history as GeoJSON line and points."""

    try:
        return await live_map.get_track(icao24)
    except FetchError as exc:
        logger.warning("Track lookup for %s failed: %s", icao24, exc)
        raise _upstream_unavailable(exc) from exc


@router.get("/status", response_model=PollerStatus, summary="Polling status")
def get_status(live_map: LiveMapService = Depends(get_live_map)) -> PollerStatus:
    return live_map.status()


@router.post("/refresh", response_model=PollerStatus, summary="Poll now")
async def refresh(live_map: LiveMapService = Depends(get_live_map)) -> PollerStatus:
    await live_map.poller.refresh()
    return live_map.status()
