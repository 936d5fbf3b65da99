"""
Gallery component - item registration, deletion and listing.
"""

from __future__ import annotations

from src.adapters.kv_items import KVItemRecordRepo
from src.components.gallery_index import FetchPageOutput, create_index_manager
from src.core.ports.kv import KeyValueStorePort
from src.rules.models import Rules

from ._impl import GalleryService
from .models import (
    DeleteItemsInput,
    DeleteItemsOutput,
    ListPageInput,
    RegisterItemInput,
    RegisterItemOutput,
)
from .ports import BlobStorePort


def create_gallery_service(
    store: KeyValueStorePort,
    blobs: BlobStorePort,
    rules: Rules | None = None,
) -> GalleryService:
    """Wire a GalleryService onto a key-value store using the given rules."""
    rules = rules or Rules()
    return GalleryService(
        index=create_index_manager(store, rules.index),
        items=KVItemRecordRepo(store, rules.items.key_prefix),
        blobs=blobs,
        logical_page_size=rules.index.logical_page_size,
    )


def run_register(inp: RegisterItemInput, service: GalleryService) -> RegisterItemOutput:
    """Register an uploaded item and put it at the head of the gallery."""
    item_id, meta = service.register_item(inp.message_id, inp.file_path)
    return RegisterItemOutput(item_id=item_id, meta=meta)


def run_delete(inp: DeleteItemsInput, service: GalleryService) -> DeleteItemsOutput:
    """Delete a batch of items and compact the index."""
    return service.delete_items(inp.item_ids)


def run_list(inp: ListPageInput, service: GalleryService) -> FetchPageOutput:
    """List one gallery page."""
    return service.list_page(inp.page)


def run(
    inp: RegisterItemInput | DeleteItemsInput | ListPageInput,
    service: GalleryService,
) -> RegisterItemOutput | DeleteItemsOutput | FetchPageOutput:
    """
    Main entry point for the gallery component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, RegisterItemInput):
        return run_register(inp, service)
    elif isinstance(inp, DeleteItemsInput):
        return run_delete(inp, service)
    elif isinstance(inp, ListPageInput):
        return run_list(inp, service)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
