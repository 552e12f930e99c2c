"""YAML file storage backend - one file per blob."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

from ..errors import StorageError
from .base import OptionStorage

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class YamlFileStorage(OptionStorage):
    """
    Stores each blob as ``<directory>/<key>.yaml``.

    Output format:
        # Domainer: domainer_domains
        example.com:
          blog_id: 2
          primary: true
          ...
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise StorageError(f"Invalid blob key: {key!r}", key=key)
        return self.directory / f"{key}.yaml"

    def load_blob(self, key: str) -> dict[str, Any] | None:
        path = self._path(key)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise StorageError(f"Failed to read {path}: {e}", key=key) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise StorageError(f"Expected a mapping in {path}, got {type(data).__name__}", key=key)
        return data

    def save_blob(self, key: str, data: dict[str, Any]) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".yaml.tmp")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(f"# Domainer: {key}\n\n")
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
            os.replace(tmp_path, path)
        except (OSError, yaml.YAMLError) as e:
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to write {path}: {e}", key=key) from e

        logger.debug(f"Saved blob '{key}' to {path}")

    def delete_blob(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}", key=key) from e
        return True

    def keys(self) -> list[str]:
        if not self.directory.exists():
            return []
        return sorted(p.stem for p in self.directory.glob("*.yaml"))
