# src/cache/sqlite_store.py — v2
"""SQLite-based cache store (CACHE_BACKEND=sqlite).

Uses stdlib sqlite3 — no external dependency.
Expired rows are filtered on read and purged on write.
"""

from __future__ import annotations

import logging
import sqlite3
import time
from collections.abc import Callable, Mapping
from pathlib import Path

from incidentsync.cache.base_cache_store import BaseCacheStore

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS cache_entries (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    expires_at REAL NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_expires_at ON cache_entries(expires_at);
"""


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed cache store."""

    def __init__(
        self, db_path: Path | str, clock: Callable[[], float] = time.time
    ) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._clock = clock
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def get(self, key: str) -> str | None:
        """Retrieve an unexpired value by key."""
        cursor = self._conn.execute(
            "SELECT value FROM cache_entries WHERE key = ? AND expires_at > ?",
            (key, self._clock()),
        )
        row = cursor.fetchone()
        return None if row is None else row[0]

    async def put_all(self, values: Mapping[str, str], ttl_seconds: int) -> None:
        """Upsert values in one transaction."""
        now = self._clock()
        expires_at = now + ttl_seconds
        with self._conn:
            self._conn.execute(
                "DELETE FROM cache_entries WHERE expires_at <= ?", (now,)
            )
            self._conn.executemany(
                """INSERT OR REPLACE INTO cache_entries (key, value, expires_at)
                   VALUES (?, ?, ?)""",
                [(key, value, expires_at) for key, value in values.items()],
            )

    async def delete(self, key: str) -> None:
        """Remove a value."""
        self._conn.execute("DELETE FROM cache_entries WHERE key = ?", (key,))
        self._conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
