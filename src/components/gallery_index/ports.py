"""
Gallery index component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol


class IndexStorePort(Protocol):
    """Key-value store as seen by the index (get/put/delete only)."""

    def get(self, key: str) -> Any | None:
        """Get the decoded value under key, or None if absent."""
        ...

    def put(self, key: str, value: Any) -> None:
        """Overwrite the value under key."""
        ...

    def delete(self, key: str) -> None:
        """Remove key (no-op if absent)."""
        ...
