"""
GalleryService - item lifecycle on top of the gallery index.

Ties the item record keyspace (`img:<id>`), the external blob provider
and the paginated index together.

Key behaviors:
- Registering an item writes its record first, then indexes the new id
- Deleting items drops provider messages and records for the ids that
  have one, then removes all requested ids from the index and compacts
- Ids without a record are skipped for provider/record cleanup but are
  still passed to the index removal (count drift is accepted)
- Listing clamps the page number to 1; pages past the end are empty

Any store or provider failure aborts the call where it happens. Nothing
already written is rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import uuid4

from src.components.gallery_index import (
    FetchPageInput,
    FetchPageOutput,
    IndexManager,
    run_fetch_page,
)
from src.core.entities import IndexMeta, ItemRecord

from .models import DeleteItemsOutput
from .ports import BlobStorePort, ItemRecordRepoPort

logger = logging.getLogger(__name__)

DEFAULT_LOGICAL_PAGE_SIZE = 20


class GalleryService:
    def __init__(
        self,
        index: IndexManager,
        items: ItemRecordRepoPort,
        blobs: BlobStorePort,
        logical_page_size: int = DEFAULT_LOGICAL_PAGE_SIZE,
    ):
        if logical_page_size < 1:
            raise ValueError(f"logical_page_size must be >= 1, got {logical_page_size}")
        self.index = index
        self.items = items
        self.blobs = blobs
        self.logical_page_size = logical_page_size

    def register_item(self, message_id: int, file_path: str) -> tuple[str, IndexMeta]:
        """
        Record an upload already stored at the blob provider and index it.

        Returns the new item id and the updated index metadata.
        """
        item_id = str(uuid4())
        self.items.save(item_id, ItemRecord(message_id=message_id, file_path=file_path))
        meta, _ = self.index.add_to_index(item_id)
        return item_id, meta

    def get_item(self, item_id: str) -> ItemRecord | None:
        return self.items.get(item_id)

    def delete_items(self, item_ids: Sequence[str]) -> DeleteItemsOutput:
        """Delete items from the provider, the record store and the index."""
        deleted: list[str] = []
        missing: list[str] = []

        for item_id in dict.fromkeys(item_ids):
            record = self.items.get(item_id)
            if record is None:
                missing.append(item_id)
                continue

            if not self.blobs.delete_message(record.message_id):
                logger.warning(
                    "Blob provider did not confirm deletion of message %d (item %s)",
                    record.message_id,
                    item_id,
                )
            self.items.delete(item_id)
            deleted.append(item_id)

        if missing:
            logger.info("No record for %d of %d ids", len(missing), len(deleted) + len(missing))

        removal = self.index.remove_from_index(item_ids)
        compaction = self.index.compact_index()

        return DeleteItemsOutput(
            removal=removal,
            compaction=compaction,
            deleted=deleted,
            missing=missing,
        )

    def list_page(self, page: int = 1) -> FetchPageOutput:
        """Ids and pager data for one gallery page."""
        return run_fetch_page(
            FetchPageInput(page_number=max(1, page), logical_page_size=self.logical_page_size),
            self.index,
        )
