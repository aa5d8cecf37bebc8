"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from livemap.services import LiveMapService


def get_live_map(request: Request) -> LiveMapService:
    """Return the service created during application startup."""

    service: LiveMapService | None = getattr(request.app.state, "live_map", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Live map service not started",
        )
    return service
