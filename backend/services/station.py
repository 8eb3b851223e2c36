"""Station proxy: cache in front of the AzuraCast client.

This is the only place that decides cache keys, TTLs and invalidation.
Upstream failures propagate unchanged and nothing is cached for them; an
expired entry is never served as a fallback, because stale "live" data is
worse than an explicit error.

Concurrent misses for the same key each call upstream and the last write
wins. That is fine on a single event loop since both fetches return
equivalent fresh data.
"""

import logging

from models import NowPlayingSnapshot, PlaylistSong, PlaylistSummary, SongRequestResult
from services.azuracast import AzuraCastClient
from services.cache import TTLCache

logger = logging.getLogger(__name__)


def now_playing_key(station_id: str | int) -> str:
    return f"now-playing:{station_id}"


def playlists_key(station_id: str | int) -> str:
    return f"playlists:{station_id}"


def playlist_songs_key(station_id: str | int, playlist_id: int, offset: int) -> str:
    # limit is not part of the key: two pages with the same offset share an
    # entry until it expires.
    return f"playlist:{station_id}:{playlist_id}:{offset}"


class StationService:
    def __init__(self, cache: TTLCache, client: AzuraCastClient, ttl_seconds: float | None = None):
        self.cache = cache
        self.client = client
        self.ttl_seconds = cache.default_ttl if ttl_seconds is None else ttl_seconds

    async def get_now_playing(self, station_id: str | int) -> NowPlayingSnapshot:
        key = now_playing_key(station_id)
        cached = self._lookup(key)
        if cached is not None:
            return cached

        snapshot = await self.client.fetch_now_playing(station_id)
        self.cache.set(key, snapshot, self.ttl_seconds)
        return snapshot

    async def get_playlists(self, station_id: str | int) -> list[PlaylistSummary]:
        key = playlists_key(station_id)
        cached = self._lookup(key)
        if cached is not None:
            return cached

        playlists = await self.client.fetch_playlists(station_id)
        self.cache.set(key, playlists, self.ttl_seconds)
        return playlists

    async def get_playlist_songs(
        self,
        station_id: str | int,
        playlist_id: int,
        limit: int = 50,
        offset: int = 0,
    ) -> list[PlaylistSong]:
        key = playlist_songs_key(station_id, playlist_id, offset)
        cached = self._lookup(key)
        if cached is not None:
            return cached

        songs = await self.client.fetch_playlist_songs(station_id, playlist_id, limit, offset)
        self.cache.set(key, songs, self.ttl_seconds)
        return songs

    async def request_song(self, station_id: str | int, song_id: str) -> SongRequestResult:
        """Submit a listener request and drop the now-playing entry.

        A request perturbs the play queue, so the next now-playing poll must
        go upstream even if the cached snapshot is still within its TTL.
        """
        result = await self.client.submit_song_request(station_id, song_id)
        self.cache.clear(now_playing_key(station_id))
        logger.info("Song %s requested on station %s; now-playing cache invalidated", song_id, station_id)
        return result

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("Station cache cleared")

    def _lookup(self, key: str):
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
        else:
            logger.info("Cache miss: %s", key)
        return cached
