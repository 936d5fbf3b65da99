"""
Gallery component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.components.gallery_index import CompactionReport, RemovalReport
from src.core.entities import IndexMeta


@dataclass(frozen=True)
class RegisterItemInput:
    """Input for registering an uploaded item."""

    message_id: int
    file_path: str


@dataclass(frozen=True)
class RegisterItemOutput:
    """Output from registering an item."""

    item_id: str
    meta: IndexMeta


@dataclass(frozen=True)
class DeleteItemsInput:
    """Input for deleting a batch of items."""

    item_ids: tuple[str, ...]


@dataclass(frozen=True)
class DeleteItemsOutput:
    """Output from deleting a batch of items."""

    removal: RemovalReport
    compaction: CompactionReport
    deleted: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ListPageInput:
    """Input for listing one gallery page (1-based; lower values clamp to 1)."""

    page: int = 1

