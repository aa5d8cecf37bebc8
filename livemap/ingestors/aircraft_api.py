"""Client for the upstream ADS-B aircraft API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from livemap.config import settings
from livemap.models.aircraft import AircraftRecord, TrackPosition

logger = logging.getLogger("livemap.ingestors.aircraft_api")


class FetchError(RuntimeError):
    """Raised when the upstream API cannot be read; the message is user-facing."""


def _describe(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


def _parse_record(entry: Any) -> Optional[AircraftRecord]:
    if not isinstance(entry, dict):
        return None
    try:
        return AircraftRecord.model_validate(entry)
    except ValidationError as exc:
        logger.debug("Skipping malformed aircraft entry %s: %s", entry.get("icao24"), exc)
        return None


class AircraftAPIClient:
    """Fetch snapshots and single-aircraft details from the aircraft API."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.adsb_api_url).rstrip("/")
        self.timeout = timeout or settings.adsb_api_timeout
        self.transport = transport

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(path, params=params)
        except httpx.TimeoutException as exc:
            logger.warning("Aircraft API request timed out: %s", exc)
            raise FetchError(_describe(exc)) from exc
        except httpx.RequestError as exc:
            logger.warning("Aircraft API request failed: %s", exc)
            raise FetchError(_describe(exc)) from exc

        if response.status_code == 429:
            logger.warning("Aircraft API rate limit encountered: %s", response.text)
        if response.is_error:
            logger.warning(
                "Aircraft API returned HTTP %s for %s", response.status_code, path
            )
            raise FetchError(f"HTTP error! status: {response.status_code}")

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("Failed to parse aircraft API JSON response: %s", exc)
            raise FetchError("Invalid JSON in aircraft API response") from exc

    async def get_all_aircraft(self) -> list[AircraftRecord]:
        payload = await self._get_json("/all")
        if not isinstance(payload, list):
            raise FetchError("Unexpected aircraft API response: expected a list")

        records: list[AircraftRecord] = []
        for entry in payload:
            record = _parse_record(entry)
            if record:
                records.append(record)

        logger.debug("Fetched %s aircraft (%s entries)", len(records), len(payload))
        return records

    async def get_aircraft(self, icao24: str) -> AircraftRecord:
        payload = await self._get_json(f"/aircraft/{icao24}")
        record = _parse_record(payload)
        if record is None:
            raise FetchError(f"Unexpected aircraft API response for {icao24}")
        return record

    async def get_track(self, icao24: str) -> list[TrackPosition]:
        """Return the detailed history the API holds for one aircraft."""

        payload = await self._get_json("/track", params={"icao24": icao24})
        if not isinstance(payload, list):
            raise FetchError(f"Unexpected track response for {icao24}")

        positions: list[TrackPosition] = []
        for entry in payload:
            if not isinstance(entry, dict):
                continue
            try:
                positions.append(TrackPosition.model_validate(entry))
            except ValidationError as exc:
                logger.debug("Skipping malformed track position: %s", exc)
        return positions


__all__ = ["AircraftAPIClient", "FetchError"]
