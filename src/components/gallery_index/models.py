"""
Gallery index component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.core.entities import IndexMeta


@dataclass(frozen=True)
class AddToIndexInput:
    """Input for inserting an id at the head of the index."""

    item_id: str


@dataclass(frozen=True)
class AddToIndexOutput:
    """Output from an insertion."""

    meta: IndexMeta
    pages_written: int


@dataclass(frozen=True)
class RemoveFromIndexInput:
    """Input for removing a batch of ids."""

    item_ids: frozenset[str]


@dataclass(frozen=True)
class RemovalReport:
    """Output from a removal scan."""

    meta: IndexMeta
    pages_scanned: int = 0
    pages_rewritten: int = 0
    ids_removed: int = 0


@dataclass(frozen=True)
class CompactIndexInput:
    """Input for a compaction pass."""

    pass


@dataclass(frozen=True)
class CompactionReport:
    """Output from a compaction pass."""

    pages_read: int = 0
    pages_written: int = 0
    pages_deleted: int = 0
    ids_moved: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.pages_written or self.pages_deleted)


@dataclass(frozen=True)
class FetchPageInput:
    """Input for reading one logical (presentation) page."""

    page_number: int
    logical_page_size: int


@dataclass(frozen=True)
class FetchPageOutput:
    """Output from reading one logical page."""

    page_number: int
    total_pages: int
    item_ids: list[str] = field(default_factory=list)

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages
