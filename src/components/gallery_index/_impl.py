"""
IndexManager - Paginated gallery index over a key-value store.

Keeps an ordered, newest-first list of item ids split across fixed-size
pages, so no operation ever loads the whole collection.

Storage layout:
- `<prefix>:meta`    -> {"count": int, "pageSize": int}
- `<prefix>:page:<n>` -> [id, ...] for n = 0, 1, 2, ...

Key behaviors:
- Insertion puts the id at the front of page 0 and carries the oldest id
  of every full page down into the next one (one new page at most)
- Removal filters ids out page by page and leaves holes for compaction
- Compaction refills underfull pages from the pages after them and drops
  the pages it empties, keeping page indices contiguous from 0
- A missing page index ends every sequential scan
- Page size is write-once; the stored value always wins

No locking: every multi-page operation is a plain sequence of store
calls. Callers must keep to a single writer for add/remove/compact.
Store errors are not caught here.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from src.core.entities import IndexMeta

from .models import CompactionReport, RemovalReport
from .ports import IndexStorePort

if TYPE_CHECKING:
    from src.rules.models import IndexRules

logger = logging.getLogger(__name__)


# --- Configuration ---


@dataclass(frozen=True)
class IndexConfig:
    """Index configuration from rules."""

    key_prefix: str = "INDEX"
    default_page_size: int = 200


DEFAULT_CONFIG = IndexConfig()


# --- Errors ---


class GalleryIndexError(Exception):
    """Base class for gallery index errors."""


class PageSizeChangeError(GalleryIndexError):
    """Raised when a write would change the stored page size."""

    def __init__(self, stored: int, requested: int) -> None:
        self.stored = stored
        self.requested = requested
        super().__init__(
            f"Page size is fixed at {stored}; refusing to store page size {requested}"
        )


class CorruptIndexError(GalleryIndexError):
    """Raised when a stored index document doesn't have the expected shape."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Corrupt index record at {key}: {reason}")


# --- Metadata Store ---


class MetadataStore:
    """Reads and writes the index control record."""

    def __init__(self, store: IndexStorePort, key: str, default_page_size: int) -> None:
        if default_page_size <= 0:
            raise ValueError(f"default_page_size must be positive, got {default_page_size}")
        self._store = store
        self.key = key
        self.default_page_size = default_page_size
        # Page size seen in the store; None until first read/write
        self._fixed_page_size: int | None = None

    def _parse(self, raw: Any) -> IndexMeta:
        if not isinstance(raw, dict):
            raise CorruptIndexError(self.key, f"expected an object, got {type(raw).__name__}")
        try:
            return IndexMeta.model_validate(raw)
        except ValidationError as e:
            raise CorruptIndexError(self.key, str(e)) from e

    def read_or_init(self) -> IndexMeta:
        """
        Return the stored record, creating the default one if absent.

        The default is count=0 with the configured page size.
        """
        raw = self._store.get(self.key)
        if raw is None:
            meta = IndexMeta(count=0, page_size=self.default_page_size)
            self._store.put(self.key, meta.to_record())
            self._fixed_page_size = meta.page_size
            logger.info("Initialized index metadata (page size %d)", meta.page_size)
            return meta

        meta = self._parse(raw)
        if self._fixed_page_size is None:
            self._fixed_page_size = meta.page_size
            if meta.page_size != self.default_page_size:
                logger.warning(
                    "Stored page size %d differs from configured %d; using stored value",
                    meta.page_size,
                    self.default_page_size,
                )
        return meta

    def persist(self, meta: IndexMeta) -> None:
        """Overwrite the stored record. The page size may never change."""
        if self._fixed_page_size is None:
            raw = self._store.get(self.key)
            if raw is not None:
                self._fixed_page_size = self._parse(raw).page_size

        if self._fixed_page_size is not None and meta.page_size != self._fixed_page_size:
            raise PageSizeChangeError(self._fixed_page_size, meta.page_size)

        self._store.put(self.key, meta.to_record())
        self._fixed_page_size = meta.page_size


# --- Page Store ---


class PageStore:
    """Maps page index -> ordered list of ids."""

    def __init__(self, store: IndexStorePort, key_prefix: str) -> None:
        self._store = store
        self.key_prefix = key_prefix

    def key(self, page_index: int) -> str:
        return f"{self.key_prefix}:page:{page_index}"

    def load(self, page_index: int) -> list[str] | None:
        """Load a page; None means the index ends before page_index."""
        key = self.key(page_index)
        raw = self._store.get(key)
        if raw is None:
            return None
        if not isinstance(raw, list):
            raise CorruptIndexError(key, f"expected a list, got {type(raw).__name__}")
        return list(raw)

    def save(self, page_index: int, ids: list[str]) -> None:
        self._store.put(self.key(page_index), ids)
        logger.debug("Wrote page %d (%d ids)", page_index, len(ids))

    def drop(self, page_index: int) -> None:
        self._store.delete(self.key(page_index))
        logger.debug("Deleted page %d", page_index)


# --- Index Manager ---


class IndexManager:
    """
    Single entry point for all index reads and writes.

    Owns every `<prefix>:*` key. Nothing else in the codebase touches the
    metadata or page documents directly.
    """

    def __init__(
        self,
        store: IndexStorePort,
        config: IndexConfig = DEFAULT_CONFIG,
    ) -> None:
        self.config = config
        self.meta_store = MetadataStore(
            store, f"{config.key_prefix}:meta", config.default_page_size
        )
        self.pages = PageStore(store, config.key_prefix)

    def read_meta(self) -> IndexMeta:
        """Current metadata (created with defaults if absent)."""
        return self.meta_store.read_or_init()

    # --- Insertion ---

    def add_to_index(self, item_id: str) -> tuple[IndexMeta, int]:
        """
        Insert item_id at rank 0 of page 0.

        Each full page hands its oldest id to the next page until one
        absorbs it. The loop ends at the latest on the first missing page,
        which is created holding the single carried id.

        Returns:
            (updated metadata, number of pages written)
        """
        meta = self.meta_store.read_or_init()
        page_size = meta.page_size

        carried = item_id
        page_index = 0
        while True:
            page = self.pages.load(page_index) or []
            page.insert(0, carried)
            if len(page) <= page_size:
                self.pages.save(page_index, page)
                break
            carried = page.pop()
            self.pages.save(page_index, page)
            page_index += 1

        meta = meta.model_copy(update={"count": meta.count + 1})
        self.meta_store.persist(meta)

        pages_written = page_index + 1
        if pages_written > 1:
            logger.info("Indexed %s (cascaded through %d pages)", item_id, pages_written)
        else:
            logger.info("Indexed %s", item_id)
        return meta, pages_written

    # --- Deletion ---

    def remove_from_index(self, item_ids: Iterable[str]) -> RemovalReport:
        """
        Remove every occurrence of the given ids from all pages.

        Pages are rewritten only if something was removed from them.
        Emptied or underfull pages stay in place until compact_index().
        count drops by the number of distinct ids requested, whether or
        not they were indexed, and never below zero.
        """
        targets = frozenset(item_ids)
        meta = self.meta_store.read_or_init()

        page_index = 0
        rewritten = 0
        removed = 0
        while True:
            page = self.pages.load(page_index)
            if page is None:
                break
            kept = [i for i in page if i not in targets]
            if len(kept) != len(page):
                self.pages.save(page_index, kept)
                rewritten += 1
                removed += len(page) - len(kept)
            page_index += 1

        meta = meta.model_copy(update={"count": max(0, meta.count - len(targets))})
        self.meta_store.persist(meta)

        if removed != len(targets):
            logger.info(
                "Removed %d ids from index (%d requested, count now %d)",
                removed,
                len(targets),
                meta.count,
            )
        else:
            logger.info("Removed %d ids from index (count now %d)", removed, meta.count)

        return RemovalReport(
            meta=meta,
            pages_scanned=page_index,
            pages_rewritten=rewritten,
            ids_removed=removed,
        )

    # --- Compaction ---

    def compact_index(self) -> CompactionReport:
        """
        Repack pages so that every page but the last one is full.

        Walks target pages from 0 upward. An underfull target takes ids
        from the front of the next non-empty page; empty pages met on
        the way are deleted. Slots emptied this way are refilled when the
        walk reaches them, so page indices stay contiguous. Pages that
        need no change are not rewritten, which makes a second pass a
        no-op.

        `count` is left alone.
        """
        page_size = self.meta_store.read_or_init().page_size

        written = deleted = moved = 0
        # Distinct page indices loaded, as a source or a target
        loaded: set[int] = set()
        page_index = 0
        # Lowest index not yet taken as a target or fully drained.
        # Slots strictly between page_index and next_unread are deleted.
        next_unread = 0
        exhausted = False

        while True:
            if page_index == next_unread:
                page = self.pages.load(page_index)
                if page is None:
                    break
                loaded.add(page_index)
                next_unread += 1
                existed = True
                changed = False
            else:
                if exhausted:
                    break
                page = []
                existed = False
                changed = True

            while len(page) < page_size and not exhausted:
                source = self.pages.load(next_unread)
                while source is not None and not source:
                    loaded.add(next_unread)
                    self.pages.drop(next_unread)
                    deleted += 1
                    next_unread += 1
                    source = self.pages.load(next_unread)
                if source is None:
                    exhausted = True
                    break
                loaded.add(next_unread)

                wanted = page_size - len(page)
                page.extend(source[:wanted])
                rest = source[wanted:]
                moved += len(source) - len(rest)
                changed = True
                if rest:
                    self.pages.save(next_unread, rest)
                    written += 1
                else:
                    self.pages.drop(next_unread)
                    deleted += 1
                    next_unread += 1

            if not page:
                # Nothing left at or after this slot
                if existed:
                    self.pages.drop(page_index)
                    deleted += 1
                break

            if changed:
                self.pages.save(page_index, page)
                written += 1
            page_index += 1

        report = CompactionReport(
            pages_read=len(loaded),
            pages_written=written,
            pages_deleted=deleted,
            ids_moved=moved,
        )
        if report.changed:
            logger.info(
                "Compacted index: %d pages written, %d deleted, %d ids moved",
                written,
                deleted,
                moved,
            )
        else:
            logger.debug("Compaction found nothing to do (%d pages read)", len(loaded))
        return report

    # --- Reading ---

    def fetch_logical_page(self, page_number: int, logical_page_size: int) -> list[str]:
        """
        Return the ids for a 1-based presentation page of fixed size.

        The window starts at physical page
        floor((page_number - 1) * L / page_size), at offset
        ((page_number - 1) * L) mod page_size. When the window runs past
        the end of that page, the following pages are read too, until L
        ids are collected or the index ends.

        Positions assume a compacted index (all pages but the last full).
        """
        if page_number < 1:
            raise ValueError(f"page_number must be >= 1, got {page_number}")
        if logical_page_size < 1:
            raise ValueError(f"logical_page_size must be >= 1, got {logical_page_size}")

        page_size = self.meta_store.read_or_init().page_size
        start = (page_number - 1) * logical_page_size
        page_index, offset = divmod(start, page_size)

        ids: list[str] = []
        while len(ids) < logical_page_size:
            page = self.pages.load(page_index)
            if page is None:
                break
            ids.extend(page[offset : offset + logical_page_size - len(ids)])
            offset = 0
            page_index += 1
        return ids

    def total_logical_pages(self, logical_page_size: int) -> int:
        """Number of presentation pages for the current count (at least 1)."""
        if logical_page_size < 1:
            raise ValueError(f"logical_page_size must be >= 1, got {logical_page_size}")
        count = self.meta_store.read_or_init().count
        return max(1, math.ceil(count / logical_page_size))

    def iter_ids(self) -> Iterator[str]:
        """Yield every indexed id newest-first, one page in memory at a time."""
        page_index = 0
        while True:
            page = self.pages.load(page_index)
            if page is None:
                return
            yield from page
            page_index += 1

    def page_lengths(self) -> list[int]:
        """Length of each stored page, in index order."""
        lengths = []
        page_index = 0
        while True:
            page = self.pages.load(page_index)
            if page is None:
                return lengths
            lengths.append(len(page))
            page_index += 1


# --- Factory ---


def create_index_manager(
    store: IndexStorePort,
    rules: IndexRules | None = None,
) -> IndexManager:
    """Build an IndexManager, taking prefix and page size from rules if given."""
    if rules is None:
        return IndexManager(store)
    config = IndexConfig(
        key_prefix=rules.key_prefix,
        default_page_size=rules.default_page_size,
    )
    return IndexManager(store, config)
