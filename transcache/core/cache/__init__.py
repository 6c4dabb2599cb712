"""Translation cache package.

Provides the persisted translation cache, its storage media, and optional in-flight request sharing.
"""

from __future__ import annotations

from transcache.core.cache.inflight_manager import InFlightManager
from transcache.core.cache.manager import DEFAULT_STORAGE_KEY, TranslationCacheManager
from transcache.core.cache.storage import (
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
    SQLiteStorage,
    StorageError,
    create_storage,
)

__all__: list[str] = [
    "DEFAULT_STORAGE_KEY",
    "InFlightManager",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "SQLiteStorage",
    "StorageError",
    "TranslationCacheManager",
    "create_storage",
]
