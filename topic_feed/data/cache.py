"""SQLite key-value cache for the normalized topic dataset."""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Protocol

from topic_feed.errors import TopicFeedError


logger = logging.getLogger(__name__)


class CacheReadError(TopicFeedError):
    """Cached payload could not be read or parsed."""


class CacheWriteError(TopicFeedError):
    """Payload could not be serialized or written to the cache."""


class KeyValueStore(Protocol):
    """Minimal string store the data service persists into."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class DataCache:
    """SQLite-backed key-value store, one row per key."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection with row factory."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS slots (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, or None if the slot is empty."""
        try:
            with self._get_connection() as conn:
                row = conn.execute(
                    "SELECT value FROM slots WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as e:
            raise CacheReadError(f"Could not read cache slot {key!r}: {e}") from e
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        """Replace the value stored under a key."""
        try:
            with self._get_connection() as conn:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO slots (key, value, updated_at)
                    VALUES (?, ?, ?)
                    """,
                    (key, value, datetime.now().isoformat()),
                )
        except sqlite3.Error as e:
            raise CacheWriteError(f"Could not write cache slot {key!r}: {e}") from e
        logger.debug(f"Stored {len(value)} bytes in cache slot {key!r}")

    def delete(self, key: str) -> bool:
        """Remove a slot. Returns True if something was deleted."""
        try:
            with self._get_connection() as conn:
                cursor = conn.execute("DELETE FROM slots WHERE key = ?", (key,))
        except sqlite3.Error as e:
            raise CacheWriteError(f"Could not clear cache slot {key!r}: {e}") from e
        return cursor.rowcount > 0

    def get_cache_status(self) -> dict[str, dict]:
        """Get size and last update time for each stored slot."""
        try:
            with self._get_connection() as conn:
                rows = conn.execute("""
                    SELECT key, LENGTH(value) AS size, updated_at
                    FROM slots
                    ORDER BY key
                """).fetchall()
        except sqlite3.Error as e:
            raise CacheReadError(f"Could not read cache status: {e}") from e

        return {
            row["key"]: {
                "size": row["size"],
                "updated_at": row["updated_at"],
            }
            for row in rows
        }
