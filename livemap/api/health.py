"""Liveness endpoint reporting environment and polling state."""

from fastapi import APIRouter, Request

from livemap.config import settings

router = APIRouter()


@router.get("/healthz", summary="Health check")
def health_check(request: Request) -> dict[str, str]:
    live_map = getattr(request.app.state, "live_map", None)
    if live_map is None:
        poller = "not-started"
    else:
        poller = "running" if live_map.poller.running else "idle"
    return {"status": "ok", "env": settings.livemap_env, "poller": poller}
