from __future__ import annotations

import contextlib
import logging
import time

from fastapi import FastAPI, Request

from livemap.api import api_router
from livemap.config import settings
from livemap.services import LiveMapService

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("livemap")


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Start polling on startup and cancel it on shutdown."""

    app.state.live_map = LiveMapService()
    if settings.poller_enabled:
        app.state.live_map.start()
        logger.info("Polling %s every %ss", settings.adsb_api_url, settings.refresh_interval)
    else:
        logger.warning("Aircraft polling disabled by configuration")

    try:
        yield
    finally:
        await app.state.live_map.stop()


app = FastAPI(title="ADS-B Live Map Backend", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log basic request information for observability."""

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "HTTP %s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.include_router(api_router)


@app.get("/", summary="Root")
def read_root() -> dict[str, str]:
    """Basic root endpoint for quick verification."""

    return {"message": "ADS-B live map backend is running"}
