"""In-memory key/value store with per-entry expiry."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    value: Any
    expires_at: float


class TTLCache:
    """
    Key/value store where every entry expires after its own TTL.

    Expired entries are dropped lazily on read and in bulk by evict_expired(),
    which the application lifespan schedules periodically. One instance is
    created per process and injected wherever caching is needed.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize an empty cache.

        Args:
            clock: Monotonic time source in seconds (injectable for tests)
        """
        self._clock = clock
        self._store: dict[str, _Entry] = {}

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if missing or expired."""
        entry = self._store.get(key)
        if entry is None:
            return None

        if self._clock() > entry.expires_at:
            del self._store[key]
            return None

        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float = 60) -> None:
        self._store[key] = _Entry(value=value, expires_at=self._clock() + ttl_seconds)

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()

    def stats(self) -> dict[str, int]:
        """Count live and expired entries without evicting anything."""
        now = self._clock()
        expired = sum(1 for entry in self._store.values() if now > entry.expires_at)
        return {
            "total_entries": len(self._store),
            "active_entries": len(self._store) - expired,
            "expired_entries": expired,
        }

    def evict_expired(self) -> int:
        """
        Remove every expired entry.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired_keys = [key for key, entry in self._store.items() if now > entry.expires_at]
        for key in expired_keys:
            del self._store[key]

        if expired_keys:
            logger.info(f"Cache cleaned up {len(expired_keys)} expired entries")
        return len(expired_keys)
