"""Configuration settings for the live map backend."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger("livemap.config")

# Track buffer limits
MAX_TRACK_POINTS = 500
TRACK_MIN_DISTANCE_CHANGE = 0.001  # ~100 meters in degrees

# Map defaults handed to the front end
DEFAULT_MAP_CENTER = {"longitude": -123.0, "latitude": 38.0, "zoom": 7}
INITIAL_ZOOM = 8

# Value ranges for caller-side validation
REFRESH_INTERVAL_MIN = 1
REFRESH_INTERVAL_MAX = 60
MAX_AGE_MIN = 1
MAX_AGE_MAX = 60


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


@lru_cache(maxsize=1)
def get_mapbox_token_from_ssm(parameter_name: str) -> str:
    """Fetch the Mapbox token from AWS SSM Parameter Store.

    The value is cached in-memory to avoid repeated SSM calls. Any failure to
    retrieve the token results in a runtime error for the caller to handle.
    """

    client = boto3.client(
        "ssm",
        region_name=os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or "us-east-1",
    )
    try:
        response = client.get_parameter(Name=parameter_name, WithDecryption=True)
        value = response.get("Parameter", {}).get("Value")
    except (ClientError, BotoCoreError) as exc:  # pragma: no cover - AWS error passthrough
        logger.error("Failed to load Mapbox token from SSM: %s", exc)
        raise RuntimeError("Unable to load Mapbox token from SSM") from exc

    if not value:
        logger.error("Received empty Mapbox token from SSM")
        raise RuntimeError("Mapbox token not configured in SSM")

    return value


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    livemap_env: str = os.getenv("LIVEMAP_ENV", "local")
    log_level: str = os.getenv("LIVEMAP_LOG_LEVEL", "INFO")

    # Upstream aircraft API
    adsb_api_url: str = os.getenv("ADSB_API_URL", "http://localhost:8000")
    adsb_api_timeout: float = float(os.getenv("ADSB_API_TIMEOUT", "10.0"))

    # Polling and display defaults
    refresh_interval: int = int(os.getenv("LIVEMAP_REFRESH_INTERVAL", "1"))
    max_age_minutes: int = int(os.getenv("LIVEMAP_MAX_AGE_MINUTES", "5"))
    show_tracks: bool = _get_bool("LIVEMAP_SHOW_TRACKS", default=False)
    poller_enabled: bool = _get_bool("LIVEMAP_POLLER_ENABLED", default=True)

    # Map front end
    mapbox_token: str = os.getenv("MAPBOX_TOKEN", "")
    mapbox_token_ssm_parameter: str | None = os.getenv("MAPBOX_TOKEN_SSM_PARAMETER")


settings = Settings()

# Only reach out to SSM when no token was supplied directly
if not settings.mapbox_token and settings.mapbox_token_ssm_parameter:
    try:
        settings.mapbox_token = get_mapbox_token_from_ssm(
            settings.mapbox_token_ssm_parameter
        )
    except RuntimeError:
        logger.warning("Mapbox token not available at import time")

__all__ = [
    "DEFAULT_MAP_CENTER",
    "INITIAL_ZOOM",
    "MAX_AGE_MAX",
    "MAX_AGE_MIN",
    "MAX_TRACK_POINTS",
    "REFRESH_INTERVAL_MAX",
    "REFRESH_INTERVAL_MIN",
    "Settings",
    "TRACK_MIN_DISTANCE_CHANGE",
    "get_mapbox_token_from_ssm",
    "settings",
]
