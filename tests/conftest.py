from pathlib import Path

import pytest

from src.adapters.sqlite_kv import SQLiteKeyValueStore


@pytest.fixture
def sqlite_store(tmp_path: Path) -> SQLiteKeyValueStore:
    """SQLite store in a temporary directory."""
    return SQLiteKeyValueStore(tmp_path / "gallery.db")
