"""
Blob Store Port Interface.

Item bytes live with an external blob provider (a chat-bot file host in
the reference deployment). The gallery only keeps a reference to each
upload: the provider's message id and its file path. Uploading and
proxying bytes are handled outside this codebase; the gallery only needs
to ask the provider to drop a message when an item is deleted.
"""

from __future__ import annotations

from typing import Protocol


class BlobStorePort(Protocol):
    """External blob provider interface."""

    def delete_message(self, message_id: int) -> bool:
        """
        Delete the provider message that carries an item's bytes.

        Returns:
            True if the provider acknowledged the deletion

        Raises:
            BlobStoreError: If the provider can't be reached
        """
        ...


class BlobStoreError(Exception):
    """Raised when the blob provider call fails."""

    def __init__(self, message_id: int, reason: str) -> None:
        self.message_id = message_id
        self.reason = reason
        super().__init__(f"Blob provider failed for message {message_id}: {reason}")
