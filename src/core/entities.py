"""
Domain Entities for the gallery index.

- IndexMeta: control record for the paginated index (`INDEX:meta`)
- ItemRecord: reference to an item's bytes at the blob provider (`img:<id>`)

Both are stored as JSON documents in the key-value store. Field aliases
match the stored document keys (`pageSize`, `msgId`, `filePath`), so
documents written by earlier deployments load unchanged.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "IndexMeta",
    "ItemRecord",
]


# --- Index metadata ---


class IndexMeta(BaseModel):
    """
    Paginated index control record.

    Invariants:
    - count >= 0 (decrements are floored at zero)
    - page_size > 0, fixed at first use and never changed afterwards

    `count` is maintained independently of the page contents. Removing
    an id that isn't indexed still decrements it.
    """

    count: int = Field(default=0, ge=0)
    page_size: int = Field(alias="pageSize", gt=0)

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_record(self) -> dict[str, Any]:
        """Serialize to the stored document shape."""
        return self.model_dump(by_alias=True)


# --- Item record ---


class ItemRecord(BaseModel):
    """Blob provider reference for one gallery item."""

    message_id: int = Field(alias="msgId")
    file_path: str = Field(alias="filePath")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
