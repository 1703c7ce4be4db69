"""Durable key-value backends for profile persistence.

The profile store keeps its whole state in two string values (the JSON
profile list and the active profile name), so any backend only needs
get/set/delete on string keys.

Backends:
    SQLiteKeyValueStore: Single-table SQLite store, the default on disk.
    InMemoryKeyValueStore: Dictionary-backed store for tests and previews.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Generator, Protocol, runtime_checkable

from spell_prep.core.exceptions import StorageError
from spell_prep.core.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal string key-value interface used by the profile store."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous value in full."""
        ...

    def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it existed."""
        ...


class InMemoryKeyValueStore:
    """Dictionary-backed key-value store.

    Example:
        >>> store = InMemoryKeyValueStore({"profiles": "[]"})
        >>> store.get("profiles")
        '[]'
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self.write_count = 0

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self.write_count += 1

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        return sorted(self._data)


class SQLiteKeyValueStore:
    """SQLite-backed key-value store.

    Each call opens its own connection and commits before returning, so a
    ``set`` either fully replaces the stored value or leaves the previous
    one in place.

    Database location defaults to ~/.spell_prep/spell_prep.db
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize database.

        Args:
            db_path: Path to database file. If None, uses default location.
        """
        if db_path is None:
            self.db_path = self._get_default_path()
        else:
            self.db_path = Path(db_path)

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

        logger.info("Key-value store initialized", path=str(self.db_path))

    @staticmethod
    def _get_default_path() -> Path:
        return Path.home() / ".spell_prep" / "spell_prep.db"

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise StorageError(
                f"Cannot open database: {exc}",
                details={"path": str(self.db_path)},
            ) from exc
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        try:
            with self._get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS schema_version (
                        version INTEGER PRIMARY KEY
                    )
                """)
                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                """)
                cursor.execute("""
                    INSERT OR REPLACE INTO schema_version (version) VALUES (?)
                """, (self.SCHEMA_VERSION,))
        except sqlite3.Error as exc:
            raise StorageError(
                f"Cannot initialize database schema: {exc}",
                details={"path": str(self.db_path)},
            ) from exc

    def get(self, key: str) -> str | None:
        try:
            with self._get_connection() as conn:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Read failed: {exc}", key=key) from exc
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            with self._get_connection() as conn:
                conn.execute("""
                    INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                """, (key, value, datetime.now().isoformat()))
        except sqlite3.Error as exc:
            raise StorageError(f"Write failed: {exc}", key=key) from exc
        logger.debug("Stored value", key=key, size=len(value))

    def delete(self, key: str) -> bool:
        try:
            with self._get_connection() as conn:
                cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                deleted = cursor.rowcount > 0
        except sqlite3.Error as exc:
            raise StorageError(f"Delete failed: {exc}", key=key) from exc
        return deleted

    def keys(self) -> list[str]:
        """All stored keys, sorted."""
        try:
            with self._get_connection() as conn:
                rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"Read failed: {exc}") from exc
        return [row[0] for row in rows]


__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
]
