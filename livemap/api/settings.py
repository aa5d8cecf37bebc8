"""Runtime settings and front-end configuration endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from livemap.api.dependencies import get_live_map
from livemap.config import (
    DEFAULT_MAP_CENTER,
    INITIAL_ZOOM,
    MAX_AGE_MAX,
    MAX_AGE_MIN,
    MAX_TRACK_POINTS,
    REFRESH_INTERVAL_MAX,
    REFRESH_INTERVAL_MIN,
    TRACK_MIN_DISTANCE_CHANGE,
    settings,
)
from livemap.models import LiveMapSettings, SettingsUpdate
from livemap.services import LiveMapService

router = APIRouter(prefix="/api/v1", tags=["settings"])

logger = logging.getLogger("livemap.api.settings")


@router.get("/settings", response_model=LiveMapSettings, summary="Current settings")
def get_settings(live_map: LiveMapService = Depends(get_live_map)) -> LiveMapSettings:
    return live_map.current_settings()


@router.put("/settings", response_model=LiveMapSettings, summary="Update settings")
async def update_settings(
    update: SettingsUpdate,
    live_map: LiveMapService = Depends(get_live_map),
) -> LiveMapSettings:
    """Apply a partial settings update; ranges are enforced by the request model."""

    result = live_map.update_settings(**update.model_dump(exclude_none=True))
    logger.info(
        "Settings updated: interval=%ss max_age=%smin show_tracks=%s",
        result.refresh_interval,
        result.max_age_minutes,
        result.show_tracks,
    )
    return result


@router.get("/config", summary="Front-end map configuration")
def get_frontend_config() -> dict[str, Any]:
    return {
        "mapbox_token": settings.mapbox_token,
        "default_map_center": DEFAULT_MAP_CENTER,
        "initial_zoom": INITIAL_ZOOM,
        "max_track_points": MAX_TRACK_POINTS,
        "track_min_distance_change": TRACK_MIN_DISTANCE_CHANGE,
        "refresh_interval_range": [REFRESH_INTERVAL_MIN, REFRESH_INTERVAL_MAX],
        "max_age_range": [MAX_AGE_MIN, MAX_AGE_MAX],
    }
