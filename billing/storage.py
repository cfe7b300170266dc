"""Key-value storage backends for persisted app state."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when a storage read, write or remove fails."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class SQLiteKeyValueStore:
    """Single-table SQLite store, one row per key."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._schema_ready = False

    def _connect(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.path)
        if not self._schema_ready:
            self._bootstrap_schema(conn)
            self._schema_ready = True
        return conn

    @staticmethod
    def _bootstrap_schema(conn: sqlite3.Connection) -> None:
        with conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def get(self, key: str) -> str | None:
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            logger.error("storage get failed key=%r path=%s error=%r", key, self.path, exc)
            raise StorageError(f"Could not read {key!r}: {exc}") from exc
        if row is None:
            return None
        return str(row[0])

    def set(self, key: str, value: str) -> None:
        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute(
                        """
                        INSERT INTO kv_store (key, value) VALUES (?, ?)
                        ON CONFLICT(key) DO UPDATE SET value = excluded.value
                        """,
                        (key, value),
                    )
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            logger.error("storage set failed key=%r path=%s error=%r", key, self.path, exc)
            raise StorageError(f"Could not write {key!r}: {exc}") from exc

    def remove(self, key: str) -> None:
        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            logger.error("storage remove failed key=%r path=%s error=%r", key, self.path, exc)
            raise StorageError(f"Could not remove {key!r}: {exc}") from exc
