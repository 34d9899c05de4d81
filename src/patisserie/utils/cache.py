"""Process-local TTL cache for read-heavy, rarely changing data.

Used for the public category list and the shop open/closed status. Values
expire after ``ttl`` seconds; expired entries are dropped lazily on read and
in bulk by :meth:`MemoryCache.clean_expired`.
"""

import threading
import time
from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class MemoryCache:
    def __init__(self, default_ttl: int = 300) -> None:
        self.default_ttl = default_ttl
        self._entries: dict[str, tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            value, expires_at = entry
            if expires_at < time.monotonic():
                del self._entries[key]
                return None

            return value

    def set(self, key: str, value: Any, ttl: int | None = None) -> Any:
        ttl = self.default_ttl if ttl is None else ttl
        with self._lock:
            self._entries[key] = (value, time.monotonic() + ttl)
        return value

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        return len(self._entries)

    def clean_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = time.monotonic()
        with self._lock:
            expired = [key for key, (_, expires_at) in self._entries.items() if expires_at < now]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.debug("Cache cleanup", removed=len(expired), size=self.size())
        return len(expired)

    def get_or_set(self, key: str, factory: Callable[[], Any], ttl: int | None = None) -> Any:
        value = self.get(key)
        if value is None:
            value = self.set(key, factory(), ttl)
        return value


cache = MemoryCache()
