"""
In-Memory Key-Value Store Adapter.

Implements KeyValueStorePort with a plain dict. Values are stored as JSON
text so that every get() returns a fresh copy, the same way a remote
store hands back a decoded document on each read. Mutating a list read
from the store therefore never changes what is stored until put() is
called.

Used by unit tests and by the CLI when `storage.backend` is `memory`.
"""

from __future__ import annotations

import json
from typing import Any

from src.core.ports.kv import JsonValue, ValueEncodingError


class InMemoryKeyValueStore:
    """Dict-backed implementation of KeyValueStorePort."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.put(key, value)

    def get(self, key: str) -> JsonValue | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def put(self, key: str, value: JsonValue) -> None:
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise ValueEncodingError(key, str(e)) from e

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        """List stored keys, optionally filtered by prefix (sorted)."""
        return sorted(k for k in self._data if k.startswith(prefix))

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
