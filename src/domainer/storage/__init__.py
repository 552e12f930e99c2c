"""
Options Storage

Backends that persist named configuration blobs: in memory, as YAML files,
or as rows of a SQLite options table.
"""

from __future__ import annotations

from ..config import StorageConfig
from ..errors import ConfigurationError
from .base import OptionStorage
from .memory import MemoryStorage
from .sqlite import SqliteStorage
from .yaml_file import YamlFileStorage


def create_storage(config: StorageConfig) -> OptionStorage:
    """Build the storage backend named by the config."""
    backend = config.backend.lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "yaml":
        return YamlFileStorage(config.directory)
    if backend == "sqlite":
        return SqliteStorage(config.db_path)
    raise ConfigurationError(f"Unknown storage backend: {config.backend}")


__all__ = [
    "OptionStorage",
    "MemoryStorage",
    "YamlFileStorage",
    "SqliteStorage",
    "create_storage",
]
