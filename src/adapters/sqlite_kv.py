"""
SQLite Key-Value Store Adapter.

Implements KeyValueStorePort on a single SQLite table. Values are stored
as JSON text. Each call opens its own connection and commits before
returning, so every get/put/delete is atomic on its own and nothing spans
calls (matching the remote store contract: no transactions across keys).

sqlite3 errors are wrapped in StoreUnavailableError and propagated.
"""

from __future__ import annotations

import json
import os
import sqlite3
from pathlib import Path

from src.core.ports.kv import JsonValue, StoreUnavailableError, ValueEncodingError

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_entries (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


class SQLiteKeyValueStore:
    """SQLite implementation of KeyValueStorePort."""

    def __init__(self, db_path: str | Path, *, create_schema: bool = True) -> None:
        self.db_path = str(db_path)
        if create_schema:
            self.init_schema()

    def _get_conn(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def init_schema(self) -> None:
        """Create the kv_entries table if it doesn't exist."""
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StoreUnavailableError("connect", "*", str(e)) from e
        try:
            conn.executescript(SCHEMA)
            conn.commit()
        except sqlite3.Error as e:
            raise StoreUnavailableError("init", "*", str(e)) from e
        finally:
            conn.close()

    def get(self, key: str) -> JsonValue | None:
        try:
            conn = self._get_conn()
            try:
                row = conn.execute(
                    "SELECT value FROM kv_entries WHERE key = ?", (key,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreUnavailableError("get", key, str(e)) from e

        if row is None:
            return None
        return json.loads(row[0])

    def put(self, key: str, value: JsonValue) -> None:
        try:
            encoded = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise ValueEncodingError(key, str(e)) from e

        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO kv_entries (key, value) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value=excluded.value
                    """,
                    (key, encoded),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreUnavailableError("put", key, str(e)) from e

    def delete(self, key: str) -> None:
        try:
            conn = self._get_conn()
            try:
                conn.execute("DELETE FROM kv_entries WHERE key = ?", (key,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreUnavailableError("delete", key, str(e)) from e

    def keys(self, prefix: str = "") -> list[str]:
        """List stored keys starting with prefix (sorted)."""
        try:
            conn = self._get_conn()
            try:
                rows = conn.execute(
                    "SELECT key FROM kv_entries WHERE substr(key, 1, ?) = ? ORDER BY key",
                    (len(prefix), prefix),
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreUnavailableError("list", prefix, str(e)) from e
        return [r[0] for r in rows]


def create_sqlite_store(
    db_path: str | Path | None = None,
    *,
    env_var: str = "GALLERY_DATA_DIR",
    default_dir: str = "./data",
    filename: str = "gallery.db",
) -> SQLiteKeyValueStore:
    """
    Factory function to create SQLiteKeyValueStore from config.

    Args:
        db_path: Explicit database path (overrides env var)
        env_var: Environment variable naming the data directory
        default_dir: Data directory if env var is not set
        filename: Database file name inside the data directory

    Returns:
        Configured SQLiteKeyValueStore instance
    """
    if db_path is None:
        data_dir = Path(os.environ.get(env_var, default_dir))
        data_dir.mkdir(parents=True, exist_ok=True)
        db_path = data_dir / filename

    return SQLiteKeyValueStore(db_path)
