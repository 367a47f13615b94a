# src/cache/json_store.py — v2
"""JSON file-based cache store (default CACHE_BACKEND=json).

Stores each key as an individual JSON file under CACHE_ROOT holding the
value and its absolute expiry time.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Mapping
from pathlib import Path

from incidentsync.cache.base_cache_store import BaseCacheStore

logger = logging.getLogger(__name__)


class JsonCacheStore(BaseCacheStore):
    """File-based cache store using JSON files."""

    def __init__(
        self, cache_root: Path | str, clock: Callable[[], float] = time.time
    ) -> None:
        self._root = Path(cache_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)
        self._clock = clock

    async def get(self, key: str) -> str | None:
        """Retrieve a value by key."""
        path = self._entry_path(key)
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            value = data["value"]
            expires_at = float(data["expires_at"])
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Failed to read cache entry %s: %s", key, e)
            return None
        if self._clock() >= expires_at:
            path.unlink(missing_ok=True)
            return None
        return value

    async def put_all(self, values: Mapping[str, str], ttl_seconds: int) -> None:
        """Store values with a shared expiry time."""
        expires_at = self._clock() + ttl_seconds
        for key, value in values.items():
            path = self._entry_path(key)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps({"value": value, "expires_at": expires_at}),
                encoding="utf-8",
            )

    async def delete(self, key: str) -> None:
        """Remove a value."""
        path = self._entry_path(key)
        if path.exists():
            path.unlink()

    def _entry_path(self, key: str) -> Path:
        """Return file path for a cache key."""
        safe_key = key.replace("/", "_").replace("\\", "_").replace(":", "_")
        return self._root / f"{safe_key}.json"
