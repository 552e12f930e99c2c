"""In-memory storage backend."""

from __future__ import annotations

import copy
import threading
from typing import Any

from .base import OptionStorage


class MemoryStorage(OptionStorage):
    """
    Dict-backed storage, mostly for tests and ephemeral services.

    Blobs are deep-copied in and out so callers never share state with the
    store. ``reads`` and ``writes`` count backend calls.
    """

    def __init__(self, initial: dict[str, dict[str, Any]] | None = None):
        self._blobs: dict[str, dict[str, Any]] = copy.deepcopy(initial or {})
        self._lock = threading.Lock()
        self.reads = 0
        self.writes = 0

    def load_blob(self, key: str) -> dict[str, Any] | None:
        with self._lock:
            self.reads += 1
            blob = self._blobs.get(key)
            return copy.deepcopy(blob) if blob is not None else None

    def save_blob(self, key: str, data: dict[str, Any]) -> None:
        with self._lock:
            self.writes += 1
            self._blobs[key] = copy.deepcopy(data)

    def delete_blob(self, key: str) -> bool:
        with self._lock:
            return self._blobs.pop(key, None) is not None

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._blobs)
