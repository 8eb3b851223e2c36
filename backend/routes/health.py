"""Health and readiness check routes."""

import logging
import time

from fastapi import APIRouter, Depends, Request

from envelope import success
from errors import UpstreamError
from routes.dependencies import get_station_id, get_station_service
from services.station import StationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_started_at = time.monotonic()


@router.get("/ready")
@router.get("/health/ready")
async def ready(request: Request) -> dict:
    """Lightweight readiness check — no external calls."""
    return success({"status": "ok", "service": "radio-station-api", "commit": request.app.state.settings.git_sha})


@router.get("/health/live")
async def live() -> dict:
    return success({"status": "alive"})


@router.get("/health")
async def health(
    request: Request,
    service: StationService = Depends(get_station_service),
    station_id: str = Depends(get_station_id),
) -> dict:
    """Deep health check that verifies AzuraCast connectivity.

    Goes through the station cache, so frequent probes don't add upstream load.
    """
    result = {
        "status": "ok",
        "service": "radio-station-api",
        "commit": request.app.state.settings.git_sha,
        "uptime_seconds": round(time.monotonic() - _started_at, 1),
        "upstream": "not_tested",
    }

    try:
        snapshot = await service.get_now_playing(station_id)
        result["upstream"] = "connected"
        result["station"] = snapshot.station.name
    except UpstreamError as e:
        logger.warning("AzuraCast health check failed: %s", e)
        result["upstream"] = "error"
        result["upstream_error"] = e.message

    return success(result)
