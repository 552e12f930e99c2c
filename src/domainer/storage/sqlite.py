"""SQLite storage backend - a host-style options table."""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

from ..errors import StorageError
from .base import OptionStorage

logger = logging.getLogger(__name__)

# Default database path
DEFAULT_DB_PATH = "domainer.db"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS options (
    option_name TEXT PRIMARY KEY,
    option_value TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


class SqliteStorage(OptionStorage):
    """
    Stores each blob as a JSON-encoded row of an ``options`` table.

    A connection is opened per call, so one instance may be shared across
    threads.
    """

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        with self._connect() as conn:
            conn.executescript(SCHEMA_SQL)

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Cannot open database {self.db_path}: {e}") from e

        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"Database error on {self.db_path}: {e}") from e
        finally:
            conn.close()

    def load_blob(self, key: str) -> dict[str, Any] | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT option_value FROM options WHERE option_name = ?", (key,)
            ).fetchone()

        if row is None:
            return None

        try:
            data = json.loads(row["option_value"])
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt value for option '{key}': {e}", key=key) from e

        if not isinstance(data, dict):
            raise StorageError(f"Expected a mapping for option '{key}'", key=key)
        return data

    def save_blob(self, key: str, data: dict[str, Any]) -> None:
        try:
            encoded = json.dumps(data, sort_keys=True)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cannot encode option '{key}': {e}", key=key) from e

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO options (option_name, option_value) VALUES (?, ?)
                ON CONFLICT(option_name) DO UPDATE SET
                    option_value = excluded.option_value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, encoded),
            )
        logger.debug(f"Saved option '{key}' to {self.db_path}")

    def delete_blob(self, key: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM options WHERE option_name = ?", (key,))
            return cursor.rowcount > 0

    def keys(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT option_name FROM options ORDER BY option_name").fetchall()
        return [row["option_name"] for row in rows]
