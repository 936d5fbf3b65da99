# gallery-index: Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from src.core.ports.blobs import BlobStoreError, BlobStorePort
from src.core.ports.kv import (
    JsonValue,
    KeyValueStoreError,
    KeyValueStorePort,
    StoreUnavailableError,
    ValueEncodingError,
)

__all__ = [
    # Blob provider
    "BlobStoreError",
    "BlobStorePort",
    # Key-value store
    "JsonValue",
    "KeyValueStoreError",
    "KeyValueStorePort",
    "StoreUnavailableError",
    "ValueEncodingError",
]
