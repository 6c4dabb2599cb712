"""Key-value storage media backing the translation cache.

The cache treats storage as an opaque string-to-string store. Implementations may be synchronous
or asynchronous; TranslationCacheManager awaits whatever comes back if it is awaitable.
"""

from __future__ import annotations

import json
import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Self

from transcache.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Awaitable

__all__: list[str] = [
    "STORAGE_BACKENDS",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "SQLiteStorage",
    "StorageError",
    "create_storage",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class StorageError(Exception):
    """The storage medium could not complete a read or write."""


class KeyValueStorage(ABC):
    """Opaque key-value medium.

    ``get_item`` returns None for a missing key. Either method may return an awaitable.
    """

    @abstractmethod
    def get_item(self, key: str) -> str | None | Awaitable[str | None]:
        raise NotImplementedError

    @abstractmethod
    def set_item(self, key: str, value: str) -> None | Awaitable[None]:
        raise NotImplementedError

    def close(self) -> None:  # noqa: B027
        """Release resources held by the medium. Default is a no-op."""


class MemoryStorage(KeyValueStorage):
    """Process-local dict storage, lost on exit."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class JsonFileStorage(KeyValueStorage):
    """All keys stored as one JSON object in a single UTF-8 file.

    Attributes:
        path (Path): Location of the JSON document.
    """

    def __init__(self, path: str | Path) -> None:
        if not str(path).strip():
            msg: str = "The storage file path is empty."
            raise RuntimeError(msg)
        self.path: Path = Path(path)
        logger.debug("JSON storage path set to: %s", self.path)

    def _read_document(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            document: Any = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as err:
            msg = f"Failed to read storage file '{self.path}': {err}"
            raise StorageError(msg) from err
        except json.JSONDecodeError as err:
            msg = f"Storage file '{self.path}' is not valid JSON: {err}"
            raise StorageError(msg) from err
        if not isinstance(document, dict):
            msg = f"Storage file '{self.path}' does not contain a JSON object"
            raise StorageError(msg)
        return document

    def get_item(self, key: str) -> str | None:
        value: Any = self._read_document().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        try:
            document: dict[str, Any] = self._read_document()
        except StorageError:
            logger.warning("Replacing unreadable storage file: %s", self.path)
            document = {}
        document[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as err:
            msg = f"Failed to write storage file '{self.path}': {err}"
            raise StorageError(msg) from err


class SQLiteStorage(KeyValueStorage):
    """SQLite-backed storage, one row per key.

    Attributes:
        db_path (Path): Path to the SQLite database file.
    """

    def __init__(self, db_path: str | Path) -> None:
        """Set the database path; the connection is opened lazily.

        Raises:
            RuntimeError: If the database path is empty.
        """
        if not str(db_path).strip():
            msg: str = "The database path is empty."
            raise RuntimeError(msg)

        self.db_path: Path = Path(db_path)
        self._connection: sqlite3.Connection | None = None
        logger.debug("Database path set to: %s", self.db_path)

    def __enter__(self) -> Self:
        self._initialize_database()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        self.close()

    def _initialize_database(self) -> None:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
                isolation_level=None,  # Autocommit mode
            )
            self._connection.execute("PRAGMA journal_mode=WAL")
            self._connection.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
        except (sqlite3.Error, OSError) as err:
            self._connection = None
            msg: str = f"Database initialization failed: {err}"
            raise StorageError(msg) from err
        logger.debug("Database initialized successfully")

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            self._initialize_database()
        if self._connection is None:
            msg = "Database connection is not initialized."
            raise StorageError(msg)
        return self._connection

    def get_item(self, key: str) -> str | None:
        try:
            row = self.connection.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as err:
            msg = f"Failed to read key '{key}': {err}"
            raise StorageError(msg) from err
        return None if row is None else row[0]

    def set_item(self, key: str, value: str) -> None:
        try:
            self.connection.execute("INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", (key, value))
        except sqlite3.Error as err:
            msg = f"Failed to write key '{key}': {err}"
            raise StorageError(msg) from err

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.debug("Database connection closed")


STORAGE_BACKENDS: dict[str, type[KeyValueStorage]] = {
    "json": JsonFileStorage,
    "memory": MemoryStorage,
    "sqlite": SQLiteStorage,
}


def create_storage(backend: str, path: str | Path = "") -> KeyValueStorage:
    """Create a storage medium by backend name.

    Args:
        backend (str): One of the keys of STORAGE_BACKENDS (case-insensitive).
        path (str | Path): File location for file-based backends; ignored for "memory".

    Raises:
        ValueError: If the backend name is unknown.
    """
    cls: type[KeyValueStorage] | None = STORAGE_BACKENDS.get(backend.lower())
    if cls is None:
        msg: str = f"Unknown cache backend '{backend}'. Choose from: {', '.join(STORAGE_BACKENDS)}"
        raise ValueError(msg)
    if cls is MemoryStorage:
        return MemoryStorage()
    return cls(path)
