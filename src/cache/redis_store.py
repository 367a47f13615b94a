# src/cache/redis_store.py — v2
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable when several machines run the passes against shared folders.
Expiry is delegated to Redis (SET ... EX).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from incidentsync.cache.base_cache_store import BaseCacheStore

logger = logging.getLogger(__name__)

_KEY_PREFIX = "incidentsync:cache:"


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store for shared deployments."""

    def __init__(self, redis_url: str) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)

    async def get(self, key: str) -> str | None:
        """Retrieve a value by key."""
        return self._client.get(f"{_KEY_PREFIX}{key}")

    async def put_all(self, values: Mapping[str, str], ttl_seconds: int) -> None:
        """Store values in one pipeline, each with its own expiry."""
        pipe = self._client.pipeline()
        for key, value in values.items():
            pipe.set(f"{_KEY_PREFIX}{key}", value, ex=ttl_seconds)
        pipe.execute()

    async def delete(self, key: str) -> None:
        """Remove a value."""
        self._client.delete(f"{_KEY_PREFIX}{key}")

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
