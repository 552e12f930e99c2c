"""Storage backend interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class OptionStorage(ABC):
    """
    Key/value store for named configuration blobs.

    Each blob is a mapping saved and loaded as a whole, like a single row of
    an options table.
    """

    @abstractmethod
    def load_blob(self, key: str) -> dict[str, Any] | None:
        """
        Load a blob.

        Returns:
            The stored mapping, or None if nothing is stored under ``key``

        Raises:
            StorageError: If the backend cannot be read
        """
        ...

    @abstractmethod
    def save_blob(self, key: str, data: dict[str, Any]) -> None:
        """
        Replace the blob stored under ``key``.

        Raises:
            StorageError: If the backend cannot be written
        """
        ...

    @abstractmethod
    def delete_blob(self, key: str) -> bool:
        """Delete a blob. Returns True if it existed."""
        ...

    def keys(self) -> list[str]:
        """List stored blob keys."""
        return []
