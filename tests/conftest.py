"""
Pytest configuration and fixtures.
"""
import copy
import os
import time

import httpx
import jwt
import pytest

# Settings are read at import time, so the environment must be in place first
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("AZURACAST_BASE_URL", "https://radio.example.com")
os.environ.setdefault("AZURACAST_STATION_ID", "1")
os.environ.setdefault("CACHE_TTL_SECONDS", "60")

JWT_SECRET = os.environ["JWT_SECRET"]

SONG = {
    "id": "123456",
    "art": "https://example.com/cover.jpg",
    "text": "Artist Name - Song Title",
    "artist": "Artist Name",
    "title": "Song Title",
    "album": "Album Name",
    "genre": "Pop",
    "lyrics": "Song lyrics here...",
}

NOW_PLAYING = {
    "station": {
        "id": 1,
        "name": "Radio Cesar",
        "shortcode": "radiocesar",
        "description": "Community radio station",
        "frontend_type": "shoutcast",
        "backend_type": "liquidsoap",
        "listen_url": "http://radiocesar.local:8000/live",
        "is_public": True,
        "is_master_station": True,
    },
    "is_online": True,
    "listeners": {"total": 1500, "unique": 850, "current": 125},
    "live": {
        "is_live": True,
        "streamer_name": "DJ Roberto",
        "broadcast_start": 1700000000,
        "art": "https://example.com/dj.jpg",
    },
    "now_playing": {
        "sh_id": 1,
        "played_at": 1700003600,
        "duration": 240,
        "playlist": "Default Playlist",
        "streamer": "",
        "is_request": False,
        "song": SONG,
        "elapsed": 120,
        "remaining": 120,
    },
    "playing_next": None,
    "song_history": [],
}

PLAYLISTS = [
    {"id": 1, "name": "Default Playlist", "is_enabled": True, "songs_count": 500, "is_jingle": False, "is_request": False},
    {"id": 2, "name": "Jingles", "is_enabled": True, "songs_count": 25, "is_jingle": True, "is_request": False},
]

PLAYLIST_SONGS = [
    {"id": 1001, "song_id": "123456", "playlist_id": 1, "position": 0, "weight": 1, "played_at": 1700003600, "song": SONG},
]


def now_playing_payload(title: str = "Song Title", elapsed: int = 120) -> dict:
    payload = copy.deepcopy(NOW_PLAYING)
    payload["now_playing"]["song"]["title"] = title
    payload["now_playing"]["elapsed"] = elapsed
    return payload


class FakeClock:
    """Controllable wall clock in epoch milliseconds."""

    def __init__(self, start_ms: float = 1_700_000_000_000):
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, seconds: float) -> None:
        self.now_ms += seconds * 1000


class FakeUpstream:
    """Scripted AzuraCast server for httpx.MockTransport.

    Routes are keyed by (method, path); values are either an httpx.Response,
    a callable taking the request, or an exception instance to raise.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], object] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, result) -> None:
        self.routes[(method, path)] = result

    def calls(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.url.path == path)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.routes.get((request.method, request.url.path))
        if result is None:
            return httpx.Response(404, json={"message": "Not found"})
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(request)
        # Fresh copy so a scripted response can be served more than once
        return httpx.Response(result.status_code, headers=result.headers, content=result.content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def make_token(user_id=7, role="listener", secret=JWT_SECRET, expires_in=3600, **extra) -> str:
    claims = {"id": user_id, "email": "listener@example.com", "role": role, "exp": int(time.time()) + expires_in}
    claims.update(extra)
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def upstream():
    server = FakeUpstream()
    server.on("GET", "/api/nowplaying/1", httpx.Response(200, json=NOW_PLAYING))
    server.on("GET", "/api/stations/1/playlists", httpx.Response(200, json=PLAYLISTS))
    server.on("GET", "/api/stations/1/playlists/5/songs", httpx.Response(200, json=PLAYLIST_SONGS))
    server.on("POST", "/api/stations/1/requests", httpx.Response(200, json={"success": True, "message": "Requested"}))
    return server
