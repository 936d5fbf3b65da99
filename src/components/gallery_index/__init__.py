"""
Gallery index component - paginated, newest-first id index in a key-value store.
"""

from ._impl import (
    DEFAULT_CONFIG,
    CorruptIndexError,
    GalleryIndexError,
    IndexConfig,
    IndexManager,
    MetadataStore,
    PageSizeChangeError,
    PageStore,
    create_index_manager,
)
from .component import (
    run,
    run_add,
    run_compact,
    run_fetch_page,
    run_remove,
)
from .models import (
    AddToIndexInput,
    AddToIndexOutput,
    CompactIndexInput,
    CompactionReport,
    FetchPageInput,
    FetchPageOutput,
    RemovalReport,
    RemoveFromIndexInput,
)
from .ports import IndexStorePort

__all__ = [
    # Entry points
    "run",
    "run_add",
    "run_compact",
    "run_fetch_page",
    "run_remove",
    # Input models
    "AddToIndexInput",
    "CompactIndexInput",
    "FetchPageInput",
    "RemoveFromIndexInput",
    # Output models
    "AddToIndexOutput",
    "CompactionReport",
    "FetchPageOutput",
    "RemovalReport",
    # Ports
    "IndexStorePort",
    # _impl re-exports
    "DEFAULT_CONFIG",
    "CorruptIndexError",
    "GalleryIndexError",
    "IndexConfig",
    "IndexManager",
    "MetadataStore",
    "PageSizeChangeError",
    "PageStore",
    "create_index_manager",
]
