# tests/unit/cache/test_unit_sqlite_store.py — v1
"""Tests for cache/sqlite_store.py — full functional tests (stdlib sqlite3)."""

from __future__ import annotations

import pytest

from incidentsync.cache.sqlite_store import SqliteCacheStore


@pytest.fixture
def store(tmp_path, clock):
    s = SqliteCacheStore(db_path=tmp_path / "test_cache.db", clock=clock)
    yield s
    s.close()


class TestSqliteCacheStore:
    @pytest.mark.asyncio
    async def test_put_all_and_get(self, store):
        await store.put_all({"data_1": "a", "metadata_1": "b"}, ttl_seconds=60)
        assert await store.get("data_1") == "a"
        assert await store.get("metadata_1") == "b"

    @pytest.mark.asyncio
    async def test_get_missing(self, store):
        assert await store.get("nope") is None

    @pytest.mark.asyncio
    async def test_replace_existing(self, store):
        await store.put_all({"k": "old"}, ttl_seconds=60)
        await store.put_all({"k": "new"}, ttl_seconds=60)
        assert await store.get("k") == "new"

    @pytest.mark.asyncio
    async def test_expiry(self, store, clock):
        await store.put_all({"k": "v"}, ttl_seconds=21600)
        clock.advance(21599)
        assert await store.get("k") == "v"
        clock.advance(1)
        assert await store.get("k") is None

    @pytest.mark.asyncio
    async def test_expired_rows_purged_on_write(self, store, clock):
        await store.put_all({"old": "v"}, ttl_seconds=10)
        clock.advance(20)
        await store.put_all({"new": "v"}, ttl_seconds=10)
        rows = store._conn.execute("SELECT key FROM cache_entries").fetchall()
        assert rows == [("new",)]

    @pytest.mark.asyncio
    async def test_delete(self, store):
        await store.put_all({"k": "v"}, ttl_seconds=60)
        await store.delete("k")
        assert await store.get("k") is None
