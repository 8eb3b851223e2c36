"""AzuraCast station API client.

One pooled httpx.AsyncClient per process. Every call is a single round trip
bounded by the configured timeout; failures are translated into
UpstreamError subclasses and never retried here. The station service decides
what to do with them.

Endpoints (relative to {base_url}/api):
    GET  /nowplaying/{station_id}
    GET  /stations/{station_id}/playlists
    GET  /stations/{station_id}/playlists/{playlist_id}/songs?limit=&offset=
    POST /stations/{station_id}/requests   {"song_id": ...}
"""

import asyncio
import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from errors import (
    SongRequestRejected,
    UpstreamHttpError,
    UpstreamMalformedResponse,
    UpstreamTimeout,
    UpstreamUnreachable,
)
from models import NowPlayingSnapshot, PlaylistSong, PlaylistSummary, SongRequestResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0

_playlists_adapter = TypeAdapter(list[PlaylistSummary])
_playlist_songs_adapter = TypeAdapter(list[PlaylistSong])


class AzuraCastClient:
    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Accept": "application/json"}
        if api_key:
            headers["X-API-Key"] = api_key
        # httpx applies its timeout per connect/read/write phase; this one
        # bounds the whole call, including a slowly trickled body.
        self._timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/api",
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_now_playing(self, station_id: str | int) -> NowPlayingSnapshot:
        data = await self._request("getNowPlaying", "GET", f"/nowplaying/{station_id}")
        return _parse("getNowPlaying", NowPlayingSnapshot.model_validate, data)

    async def fetch_playlists(self, station_id: str | int) -> list[PlaylistSummary]:
        data = await self._request("getPlaylists", "GET", f"/stations/{station_id}/playlists")
        return _parse("getPlaylists", _playlists_adapter.validate_python, data)

    async def fetch_playlist_songs(
        self,
        station_id: str | int,
        playlist_id: int,
        limit: int = 50,
        offset: int = 0,
    ) -> list[PlaylistSong]:
        data = await self._request(
            "getPlaylistSongs",
            "GET",
            f"/stations/{station_id}/playlists/{playlist_id}/songs",
            params={"limit": limit, "offset": offset},
        )
        return _parse("getPlaylistSongs", _playlist_songs_adapter.validate_python, data)

    async def submit_song_request(self, station_id: str | int, song_id: str) -> SongRequestResult:
        data = await self._request(
            "requestSong",
            "POST",
            f"/stations/{station_id}/requests",
            json={"song_id": song_id},
        )
        # AzuraCast answers {"success": bool, "message": str}; a 2xx with
        # success=false is still a refusal.
        if isinstance(data, dict) and data.get("success") is False:
            detail = data.get("message") or "request rejected"
            logger.error("AzuraCast API error [requestSong]: rejected (%s)", detail)
            raise SongRequestRejected("requestSong", detail)
        return SongRequestResult(accepted=True)

    async def _request(self, operation: str, method: str, path: str, **kwargs) -> Any:
        """Perform one upstream call and return the decoded JSON body."""
        try:
            resp = await asyncio.wait_for(self._client.request(method, path, **kwargs), self._timeout)
            resp.raise_for_status()
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.error("AzuraCast API error [%s]: timed out after %ss (%s)", operation, self._timeout, type(e).__name__)
            raise UpstreamTimeout(operation, "request timed out") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            detail = _error_detail(e.response)
            logger.error("AzuraCast API error [%s]: status=%s message=%s", operation, status, detail)
            raise UpstreamHttpError(operation, detail, http_status=status) from e
        except httpx.RequestError as e:
            logger.error("AzuraCast API error [%s]: %s", operation, e)
            raise UpstreamUnreachable(operation, str(e) or type(e).__name__) from e

        try:
            return resp.json()
        except ValueError as e:
            logger.error("AzuraCast API error [%s]: response is not JSON", operation)
            raise UpstreamMalformedResponse(operation, "response body is not valid JSON") from e


def _parse(operation: str, validate, data: Any):
    try:
        return validate(data)
    except ValidationError as e:
        logger.error("AzuraCast API error [%s]: unexpected response shape: %s", operation, e)
        raise UpstreamMalformedResponse(operation, "unexpected response shape") from e


def _error_detail(response: httpx.Response) -> str:
    """Prefer the upstream's own error message, fall back to the HTTP reason."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code} {response.reason_phrase}".strip()
