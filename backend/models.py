"""Pydantic models for station data returned by AzuraCast.

Field names follow the upstream payload. The models cover the fields the
frontend reads; anything else AzuraCast sends is dropped.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

# Recent plays kept in a snapshot, most recent first
SONG_HISTORY_LIMIT = 10


class _Upstream(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class Song(_Upstream):
    id: str
    title: str = ""
    artist: str = ""
    album: str = ""
    art: str | None = None
    text: str = ""
    genre: str = ""
    lyrics: str = ""


class Station(_Upstream):
    id: int
    name: str
    shortcode: str = ""
    description: str = ""
    listen_url: str | None = None
    is_public: bool = True


class Listeners(_Upstream):
    current: int = 0
    unique: int = 0
    total: int = 0


class LiveStatus(_Upstream):
    is_live: bool = False
    streamer_name: str = ""
    broadcast_start: int | None = None
    art: str | None = None


class PlayedTrack(_Upstream):
    """A track in the now-playing slot, the queue, or the history."""
    song: Song
    sh_id: int | None = None
    played_at: int | None = None
    duration: int | None = None
    elapsed: int | None = None
    remaining: int | None = None
    playlist: str | None = None
    streamer: str = ""
    cued_at: int | None = None
    is_request: bool = False


class NowPlayingSnapshot(_Upstream):
    station: Station
    is_online: bool | None = None
    listeners: Listeners = Field(default_factory=Listeners)
    live: LiveStatus = Field(default_factory=LiveStatus)
    now_playing: PlayedTrack
    playing_next: PlayedTrack | None = None
    song_history: list[PlayedTrack] = Field(default_factory=list)

    @field_validator("song_history")
    @classmethod
    def _bound_history(cls, history: list[PlayedTrack]) -> list[PlayedTrack]:
        return history[:SONG_HISTORY_LIMIT]


class PlaylistSummary(_Upstream):
    id: int
    name: str
    is_enabled: bool = True
    songs_count: int = 0
    is_jingle: bool = False
    is_request: bool = False


class PlaylistSong(_Upstream):
    id: int
    song_id: str
    playlist_id: int | None = None
    position: int | None = None
    weight: int | None = None
    played_at: int | None = None
    song: Song | None = None


class SongRequestResult(BaseModel):
    accepted: bool


class SongRequestBody(BaseModel):
    """Inbound body for POST /api/station/requests."""
    song_id: StrictStr | StrictInt | None = Field(default=None, alias="songId")
