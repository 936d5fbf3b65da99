"""
Item record repository over the key-value store.

Records live under `<prefix>:<id>` (default `img:<id>`) as
{"msgId": int, "filePath": str}, separate from the index keys.
"""

from __future__ import annotations

from pydantic import ValidationError

from src.core.entities import ItemRecord
from src.core.ports.kv import KeyValueStorePort


class ItemRecordError(Exception):
    """Raised when a stored item record can't be decoded."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid item record at {key}: {reason}")


class KVItemRecordRepo:
    def __init__(self, store: KeyValueStorePort, key_prefix: str = "img"):
        self.store = store
        self.key_prefix = key_prefix

    def _key(self, item_id: str) -> str:
        return f"{self.key_prefix}:{item_id}"

    def get(self, item_id: str) -> ItemRecord | None:
        key = self._key(item_id)
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return ItemRecord.model_validate(raw)
        except ValidationError as e:
            raise ItemRecordError(key, str(e)) from e

    def save(self, item_id: str, record: ItemRecord) -> None:
        self.store.put(self._key(item_id), record.to_record())

    def delete(self, item_id: str) -> None:
        self.store.delete(self._key(item_id))
