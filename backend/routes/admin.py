"""Admin-only station maintenance routes."""

import logging

from fastapi import APIRouter, Depends

from envelope import success
from routes.dependencies import get_station_service, require_admin
from services.auth import Identity
from services.station import StationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.delete("/station/cache")
async def clear_station_cache(
    admin: Identity = Depends(require_admin),
    service: StationService = Depends(get_station_service),
) -> dict:
    """Drop every cached station resource."""
    service.clear_cache()
    logger.info("Station cache cleared by admin %s", admin.user_id)
    return success({"cleared": True})
