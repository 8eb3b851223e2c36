"""Simple in-memory TTL cache. No Redis needed for MVP.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
station data may be fetched twice (once per worker). All access happens on
the worker's event loop and no method awaits, so the store needs no lock.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable

DEFAULT_TTL_SECONDS = 60


def wall_clock_ms() -> float:
    return time.time() * 1000


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    expires_at_ms: float


class TTLCache:
    def __init__(
        self,
        default_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = wall_clock_ms,
    ):
        self._store: dict[str, CacheEntry] = {}
        self._default_ttl = float(default_ttl_seconds)
        self._clock = clock

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        # An entry read exactly at its expiry instant is still valid
        if self._clock() > entry.expires_at_ms:
            del self._store[key]
            return None
        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        self._store[key] = CacheEntry(value=value, expires_at_ms=self._clock() + ttl * 1000)

    def clear(self, key: str | None = None) -> None:
        if key is None:
            self._store.clear()
        else:
            self._store.pop(key, None)

    def set_default_ttl(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"TTL must be non-negative, got {seconds}")
        self._default_ttl = float(seconds)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._store)
