"""
Key-Value Store Port Interface.

Protocol-based interface for the remote key-value store that holds the
gallery index and item records.
Implementations: in-memory (tests, dev), SQLite (single-node).

Contract:
- get() returns None for a missing key; it never raises for absence
- put() is an unconditional overwrite
- delete() of a missing key is a no-op
- Each call is atomic on its own; there are no multi-key transactions
  and no compare-and-swap
"""

from __future__ import annotations

from typing import Any, Protocol

# JSON-compatible structure (dict, list, str, int, float, bool, None)
JsonValue = Any


class KeyValueStorePort(Protocol):
    """Key-value store port interface."""

    def get(self, key: str) -> JsonValue | None:
        """
        Read the structured value stored under key.

        Returns:
            The decoded value, or None if the key doesn't exist

        Raises:
            StoreUnavailableError: If the backend cannot be reached
        """
        ...

    def put(self, key: str, value: JsonValue) -> None:
        """
        Store value under key, replacing any previous value.

        Raises:
            StoreUnavailableError: If the backend cannot be reached
        """
        ...

    def delete(self, key: str) -> None:
        """
        Remove key. Missing keys are ignored.

        Raises:
            StoreUnavailableError: If the backend cannot be reached
        """
        ...


class KeyValueStoreError(Exception):
    """Base class for key-value store errors."""


class StoreUnavailableError(KeyValueStoreError):
    """Raised when a store operation fails (I/O error, backend down)."""

    def __init__(self, operation: str, key: str, reason: str = "") -> None:
        self.operation = operation
        self.key = key
        self.reason = reason
        message = f"Store {operation} failed for key: {key}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ValueEncodingError(KeyValueStoreError):
    """Raised when a value can't be encoded as JSON for storage."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Value for key {key} is not JSON-serializable: {reason}")
