"""Station routes: cached proxy over the AzuraCast API.

GET  /api/station/now-playing                    public
GET  /api/station/playlists                      public
GET  /api/station/playlists/{playlist_id}/songs  public
POST /api/station/requests                       bearer token required
"""

import logging
import re

from fastapi import APIRouter, Body, Depends, Path, Query

from envelope import success
from errors import BadRequestError
from models import SongRequestBody
from routes.dependencies import get_station_id, get_station_service, require_user
from services.auth import Identity
from services.station import StationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/station", tags=["Station"])

DEFAULT_PAGE_LIMIT = 50

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@router.get("/now-playing")
async def now_playing(
    service: StationService = Depends(get_station_service),
    station_id: str = Depends(get_station_id),
) -> dict:
    """Current track, listeners, live status and recent history."""
    snapshot = await service.get_now_playing(station_id)
    return success(snapshot.model_dump(mode="json"))


@router.get("/playlists")
async def playlists(
    service: StationService = Depends(get_station_service),
    station_id: str = Depends(get_station_id),
) -> dict:
    result = await service.get_playlists(station_id)
    return success([p.model_dump(mode="json") for p in result])


@router.get("/playlists/{playlist_id}/songs")
async def playlist_songs(
    playlist_id: int = Path(..., description="Playlist id"),
    limit: str | None = Query(None),
    offset: str | None = Query(None),
    service: StationService = Depends(get_station_service),
    station_id: str = Depends(get_station_id),
) -> dict:
    """Paging is lenient: unparseable or zero values fall back to the defaults."""
    songs = await service.get_playlist_songs(
        station_id,
        playlist_id,
        limit=_paging_value(limit, DEFAULT_PAGE_LIMIT),
        offset=_paging_value(offset, 0),
    )
    return success([s.model_dump(mode="json") for s in songs])


@router.post("/requests")
async def request_song(
    body: SongRequestBody = Body(...),
    user: Identity = Depends(require_user),
    service: StationService = Depends(get_station_service),
    station_id: str = Depends(get_station_id),
) -> dict:
    """Submit a listener song request; invalidates the now-playing cache."""
    if body.song_id is None or str(body.song_id).strip() == "":
        raise BadRequestError("Missing songId")

    logger.info("User %s requesting song %s", user.user_id, body.song_id)
    result = await service.request_song(station_id, str(body.song_id))
    return success(result.model_dump())


def _paging_value(raw: str | None, default: int) -> int:
    """Leading integer of ``raw``; missing, unparseable or zero gives ``default``."""
    match = _LEADING_INT.match(raw or "")
    value = int(match.group(1)) if match else 0
    return value or default
