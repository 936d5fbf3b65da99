"""
Gallery component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from src.core.entities import ItemRecord
from src.core.ports.blobs import BlobStorePort


class ItemRecordRepoPort(Protocol):
    """Repository interface for item records (`img:<id>`)."""

    def get(self, item_id: str) -> ItemRecord | None:
        """Get the record for item_id, or None if unknown."""
        ...

    def save(self, item_id: str, record: ItemRecord) -> None:
        """Save or overwrite the record."""
        ...

    def delete(self, item_id: str) -> None:
        """Delete the record (no-op if absent)."""
        ...


__all__ = ["BlobStorePort", "ItemRecordRepoPort"]
