"""In-memory key/value cache with per-entry TTL."""

import time
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Hashable, Optional


@dataclass
class _CacheEntry:
    value: Any
    expires_at: float


class TTLCache:
    """
    Thread-safe TTL cache.

    Entries expire ``ttl_seconds`` after they were set and are evicted on read.
    The clock is injectable so callers (and tests) control time.
    """

    def __init__(
        self,
        ttl_seconds: float = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        self._data: dict[Hashable, _CacheEntry] = {}
        self._lock = Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the cached value, or ``default`` if missing or expired."""
        now = self._clock()
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return default
            if entry.expires_at <= now:
                del self._data[key]
                return default
            return entry.value

    def set(self, key: Hashable, value: Any, ttl_seconds: Optional[float] = None) -> None:
        """Store a value, optionally overriding the default TTL."""
        ttl = self._ttl if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._data[key] = _CacheEntry(value=value, expires_at=self._clock() + ttl)

    def invalidate(self, key: Hashable) -> None:
        """Drop a single key if present."""
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __contains__(self, key: Hashable) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel

    def __len__(self) -> int:
        now = self._clock()
        with self._lock:
            return sum(1 for entry in self._data.values() if entry.expires_at > now)
