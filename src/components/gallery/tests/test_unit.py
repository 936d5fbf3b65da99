"""
Gallery component unit tests.

Item registration, batch deletion (provider, records, index, compaction)
and page listing.
"""

from __future__ import annotations

from uuid import UUID

import pytest

from src.adapters.memory_kv import InMemoryKeyValueStore
from src.components.gallery import (
    DeleteItemsInput,
    DeleteItemsOutput,
    GalleryService,
    ListPageInput,
    RegisterItemInput,
    RegisterItemOutput,
    create_gallery_service,
    run,
    run_delete,
    run_list,
    run_register,
)
from src.core.entities import ItemRecord
from src.core.ports.blobs import BlobStoreError
from src.rules.models import IndexRules, Rules

# --- Mock Blob Provider ---


class MockBlobStore:
    """Records deleted provider messages."""

    def __init__(self, acknowledge: bool = True, fail_on: int | None = None) -> None:
        self.acknowledge = acknowledge
        self.fail_on = fail_on
        self.deleted: list[int] = []

    def delete_message(self, message_id: int) -> bool:
        if message_id == self.fail_on:
            raise BlobStoreError(message_id, "provider timeout")
        self.deleted.append(message_id)
        return self.acknowledge


# --- Fixtures ---


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def blobs() -> MockBlobStore:
    return MockBlobStore()


@pytest.fixture
def rules() -> Rules:
    return Rules(index=IndexRules(default_page_size=3, logical_page_size=2))


@pytest.fixture
def service(store: InMemoryKeyValueStore, blobs: MockBlobStore, rules: Rules) -> GalleryService:
    return create_gallery_service(store, blobs, rules)


def register_many(service: GalleryService, n: int) -> list[str]:
    """Register n items with message ids 1..n; returns ids oldest first."""
    return [service.register_item(m, f"photos/{m}.jpg")[0] for m in range(1, n + 1)]


# --- Registration Tests ---


class TestRegisterItem:
    """Upload registration."""

    def test_register_writes_record_and_indexes(
        self, service: GalleryService, store: InMemoryKeyValueStore
    ) -> None:
        item_id, meta = service.register_item(42, "photos/file_1.jpg")

        assert UUID(item_id).version == 4
        assert store.get(f"img:{item_id}") == {"msgId": 42, "filePath": "photos/file_1.jpg"}
        assert store.get("INDEX:page:0") == [item_id]
        assert meta.count == 1

    def test_get_item(self, service: GalleryService) -> None:
        item_id, _ = service.register_item(7, "photos/7.jpg")

        record = service.get_item(item_id)

        assert record == ItemRecord(message_id=7, file_path="photos/7.jpg")
        assert service.get_item("unknown") is None

    def test_newest_item_listed_first(self, service: GalleryService) -> None:
        ids = register_many(service, 3)

        page = service.list_page(1)

        assert page.item_ids == [ids[2], ids[1]]

    def test_run_register(self, service: GalleryService) -> None:
        out = run_register(RegisterItemInput(message_id=1, file_path="a.jpg"), service)

        assert isinstance(out, RegisterItemOutput)
        assert out.meta.count == 1


# --- Deletion Tests ---


class TestDeleteItems:
    """Batch deletion."""

    def test_delete_cleans_provider_records_and_index(
        self, service: GalleryService, store: InMemoryKeyValueStore, blobs: MockBlobStore
    ) -> None:
        ids = register_many(service, 7)

        out = service.delete_items([ids[4], ids[2]])

        assert blobs.deleted == [5, 3]
        assert f"img:{ids[4]}" not in store
        assert f"img:{ids[2]}" not in store
        assert out.deleted == [ids[4], ids[2]]
        assert out.missing == []
        assert out.removal.ids_removed == 2
        assert list(service.index.iter_ids()) == [ids[6], ids[5], ids[3], ids[1], ids[0]]

    def test_delete_compacts_index(
        self, service: GalleryService, store: InMemoryKeyValueStore
    ) -> None:
        ids = register_many(service, 7)

        service.delete_items([ids[3], ids[2], ids[1]])

        assert service.index.page_lengths() == [3, 1]
        assert "INDEX:page:2" not in store

    def test_unknown_ids_skipped_but_still_counted(
        self, service: GalleryService, blobs: MockBlobStore
    ) -> None:
        ids = register_many(service, 3)

        out = service.delete_items([ids[0], "ghost"])

        assert out.deleted == [ids[0]]
        assert out.missing == ["ghost"]
        assert blobs.deleted == [1]
        # count drift: the unknown id is still subtracted
        assert out.removal.meta.count == 1
        assert service.index.page_lengths() == [2]

    def test_repeated_ids_deleted_once(
        self, service: GalleryService, blobs: MockBlobStore
    ) -> None:
        ids = register_many(service, 2)

        out = service.delete_items([ids[0], ids[0]])

        assert blobs.deleted == [1]
        assert out.removal.meta.count == 1

    def test_unacknowledged_provider_delete_still_removes(
        self, store: InMemoryKeyValueStore, rules: Rules
    ) -> None:
        service = create_gallery_service(store, MockBlobStore(acknowledge=False), rules)
        item_id, _ = service.register_item(9, "x.jpg")

        out = service.delete_items([item_id])

        assert out.deleted == [item_id]
        assert service.get_item(item_id) is None

    def test_provider_failure_propagates(
        self, store: InMemoryKeyValueStore, rules: Rules
    ) -> None:
        service = create_gallery_service(store, MockBlobStore(fail_on=2), rules)
        ids = register_many(service, 3)

        with pytest.raises(BlobStoreError):
            service.delete_items([ids[0], ids[1]])

        # First record already gone, index untouched
        assert service.get_item(ids[0]) is None
        assert service.get_item(ids[1]) is not None
        assert service.index.read_meta().count == 3

    def test_run_delete(self, service: GalleryService) -> None:
        ids = register_many(service, 1)

        out = run_delete(DeleteItemsInput(item_ids=(ids[0],)), service)

        assert isinstance(out, DeleteItemsOutput)
        assert out.compaction.pages_deleted == 1


# --- Listing Tests ---


class TestListPage:
    """Gallery pages with pager data."""

    def test_pager_data(self, service: GalleryService) -> None:
        ids = register_many(service, 5)

        page = service.list_page(2)

        assert page.item_ids == [ids[2], ids[1]]
        assert page.total_pages == 3
        assert page.has_previous is True
        assert page.has_next is True

    def test_page_clamped_to_one(self, service: GalleryService) -> None:
        ids = register_many(service, 1)

        page = service.list_page(0)

        assert page.page_number == 1
        assert page.item_ids == ids
        assert page.has_previous is False
        assert page.has_next is False

    def test_empty_gallery_has_one_page(self, service: GalleryService) -> None:
        page = run_list(ListPageInput(), service)

        assert page.item_ids == []
        assert page.total_pages == 1

    def test_run_dispatch(self, service: GalleryService) -> None:
        out = run(RegisterItemInput(message_id=1, file_path="a.jpg"), service)
        assert isinstance(out, RegisterItemOutput)

        with pytest.raises(ValueError):
            run(object(), service)  # type: ignore[arg-type]

    def test_invalid_logical_page_size(self, service: GalleryService) -> None:
        with pytest.raises(ValueError):
            GalleryService(service.index, service.items, service.blobs, logical_page_size=0)
