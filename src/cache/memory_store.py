# src/cache/memory_store.py — v1
"""In-process cache store (CACHE_BACKEND=memory).

Lives for the lifetime of the process only. The clock is injectable so
expiry can be exercised without waiting.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping

from incidentsync.cache.base_cache_store import BaseCacheStore


class MemoryCacheStore(BaseCacheStore):
    """Dictionary-backed cache store with per-entry expiry."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    async def get(self, key: str) -> str | None:
        item = self._entries.get(key)
        if item is None:
            return None
        value, expires_at = item
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def put_all(self, values: Mapping[str, str], ttl_seconds: int) -> None:
        expires_at = self._clock() + ttl_seconds
        for key, value in values.items():
            self._entries[key] = (value, expires_at)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def keys(self) -> list[str]:
        """Keys currently held, expired ones included."""
        return list(self._entries)
