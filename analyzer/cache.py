"""
Minimal in-memory TTL cache for analysis results.
"""
import hashlib
import threading
import time
from typing import Any, Optional


def make_cache_key(*parts) -> str:
    """
    Key a result by everything that shapes it: backend, sampling settings,
    label enforcement and the exact contract text.
    """
    digest = hashlib.sha256()
    for part in parts:
        digest.update(str(part).encode('utf-8'))
        digest.update(b'\0')
    return digest.hexdigest()


class TTLCache:
    """
    Time-To-Live cache with dict storage of {key: (expires_at, value)}.
    Purges expired entries on get/set operations.
    """

    def __init__(self):
        self._storage = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """
        Retrieve value from cache.

        Returns:
            Cached value if found and not expired, otherwise None.
        """
        with self._lock:
            self._purge_expired()
            entry = self._storage.get(key)
            return entry[1] if entry else None

    def set(self, key: str, value: Any, ttl: int) -> None:
        """Store value in cache for ttl seconds. A ttl of zero or less stores nothing."""
        if ttl <= 0:
            return
        with self._lock:
            self._purge_expired()
            self._storage[key] = (time.monotonic() + ttl, value)

    def clear(self) -> None:
        with self._lock:
            self._storage.clear()

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired()
            return len(self._storage)

    def _purge_expired(self) -> None:
        now = time.monotonic()
        expired_keys = [
            key for key, (expires_at, _) in self._storage.items()
            if now >= expires_at
        ]
        for key in expired_keys:
            del self._storage[key]


# Module-level instance
analysis_cache = TTLCache()
