# src/cache/base_cache_store.py — v2
"""Abstract key-value cache store interface.

Values are opaque strings. Every write carries a time-to-live; expired
entries read as missing. No multi-key atomicity is assumed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None if missing or expired."""

    @abstractmethod
    async def put_all(self, values: Mapping[str, str], ttl_seconds: int) -> None:
        """Store several values, each expiring after ttl_seconds."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a value."""

    def close(self) -> None:
        """Release backend resources. No-op for stores that hold none."""
