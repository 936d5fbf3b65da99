"""
Gallery component - item lifecycle over the paginated gallery index.
"""

from ._impl import DEFAULT_LOGICAL_PAGE_SIZE, GalleryService
from .component import (
    create_gallery_service,
    run,
    run_delete,
    run_list,
    run_register,
)
from .models import (
    DeleteItemsInput,
    DeleteItemsOutput,
    ListPageInput,
    RegisterItemInput,
    RegisterItemOutput,
)
from .ports import BlobStorePort, ItemRecordRepoPort

__all__ = [
    # Entry points
    "run",
    "run_delete",
    "run_list",
    "run_register",
    # Input models
    "DeleteItemsInput",
    "ListPageInput",
    "RegisterItemInput",
    # Output models
    "DeleteItemsOutput",
    "RegisterItemOutput",
    # Ports
    "BlobStorePort",
    "ItemRecordRepoPort",
    # Service
    "DEFAULT_LOGICAL_PAGE_SIZE",
    "GalleryService",
    "create_gallery_service",
]
