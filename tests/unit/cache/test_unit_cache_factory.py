# tests/unit/cache/test_unit_cache_factory.py — v1
"""Tests for cache/cache_factory.py."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from incidentsync.cache.cache_factory import create_cache_store
from incidentsync.cache.json_store import JsonCacheStore
from incidentsync.cache.memory_store import MemoryCacheStore
from incidentsync.cache.sqlite_store import SqliteCacheStore
from incidentsync.config.settings import Settings


class TestCreateCacheStore:
    def test_json_backend(self, tmp_path):
        s = Settings(_env_file=None, cache_backend="json", cache_root=tmp_path)
        assert isinstance(create_cache_store(s), JsonCacheStore)

    def test_sqlite_backend(self, tmp_path):
        s = Settings(_env_file=None, cache_backend="sqlite", cache_root=tmp_path)
        store = create_cache_store(s)
        assert isinstance(store, SqliteCacheStore)
        assert (tmp_path / "incidentsync_cache.db").exists()
        store.close()

    def test_memory_backend(self):
        s = Settings(_env_file=None, cache_backend="memory")
        assert isinstance(create_cache_store(s), MemoryCacheStore)

    def test_disabled_uses_memory(self, tmp_path):
        s = Settings(
            _env_file=None, cache_enabled=False, cache_backend="json", cache_root=tmp_path,
        )
        assert isinstance(create_cache_store(s), MemoryCacheStore)

    def test_redis_backend(self):
        s = Settings(
            _env_file=None, cache_backend="redis", cache_redis_url="redis://localhost:6379/0",
        )
        with patch("redis.Redis.from_url") as from_url:
            store = create_cache_store(s)
        from_url.assert_called_once_with("redis://localhost:6379/0", decode_responses=True)
        assert store.__class__.__name__ == "RedisCacheStore"

    def test_redis_without_url(self):
        s = Settings(_env_file=None, cache_backend="memory")
        s.cache_backend = "redis"
        with pytest.raises(ValueError, match="CACHE_REDIS_URL"):
            create_cache_store(s)

    def test_unknown_backend(self):
        s = Settings(_env_file=None, cache_backend="memory")
        s.cache_backend = "nope"  # type: ignore[assignment]
        with pytest.raises(ValueError, match="Unsupported"):
            create_cache_store(s)
