# ruff: noqa: BLE001
"""Translation cache manager.

Keeps translated strings per (language, fingerprint) in a single JSON blob stored under one key of a
key-value medium. Every lookup loads the whole blob and every registration rewrites it.

Failures never leave this module: unreadable or corrupt blobs behave as an empty cache, failed writes
are logged and dropped.

Concurrent registrations are not serialized here. With a medium that does not serialize its own calls,
two overlapping read-modify-write cycles can lose one of the updates.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Final

from transcache.models.cache_models import CacheStatistics, TranslationCache
from transcache.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from transcache.core.cache.storage import KeyValueStorage

__all__: list[str] = ["DEFAULT_STORAGE_KEY", "TranslationCacheManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEFAULT_STORAGE_KEY: Final[str] = "aiTranslationCache"


class TranslationCacheManager:
    """Manager for the persisted translation cache.

    Attributes:
        storage (KeyValueStorage): Backing medium.
        storage_key (str): Key holding the serialized cache.
    """

    def __init__(self, storage: KeyValueStorage, storage_key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage: KeyValueStorage = storage
        self.storage_key: str = storage_key
        logger.debug("TranslationCacheManager instance created (key: '%s')", storage_key)

    async def load_cache(self) -> TranslationCache:
        """Load the whole cache from storage.

        Returns:
            TranslationCache: Stored cache, or an empty one when the read fails or the blob is corrupt.
        """
        try:
            raw: str | None = self.storage.get_item(self.storage_key)
            if inspect.isawaitable(raw):
                raw = await raw
        except Exception as err:
            logger.error("Error reading translation cache: %s", err)
            return TranslationCache()
        return TranslationCache.from_json(raw)

    async def save_cache(self, cache: TranslationCache) -> bool:
        """Write the whole cache to storage.

        Returns:
            bool: True if the write succeeded, False if it was dropped.
        """
        try:
            written = self.storage.set_item(self.storage_key, cache.to_json())
            if inspect.isawaitable(written):
                await written
        except Exception as err:
            logger.error("Error writing translation cache, update lost: %s", err)
            return False
        return True

    async def search_translation_cache(self, language: str, fingerprint: str) -> str | None:
        """Look up a cached translation.

        Args:
            language (str): Target language code.
            fingerprint (str): Fingerprint of the source text.

        Returns:
            str | None: Cached value (which may be a fallback marker), None on miss.
        """
        cached: str | None = (await self.load_cache()).get(language, fingerprint)
        if cached is None:
            logger.debug("Cache miss for %s/%s", language, fingerprint)
        else:
            logger.debug("Cache hit for %s/%s", language, fingerprint)
        return cached

    async def register_translation_cache(self, language: str, fingerprint: str, value: str) -> bool:
        """Insert or overwrite a single entry with a full read-modify-write.

        Args:
            language (str): Target language code.
            fingerprint (str): Fingerprint of the source text.
            value (str): Translated text or fallback marker.

        Returns:
            bool: True if persisted, False if the write failed.
        """
        cache: TranslationCache = await self.load_cache()
        cache.set(language, fingerprint, value)
        success: bool = await self.save_cache(cache)
        if success:
            logger.debug("Translation cached for %s/%s", language, fingerprint)
        return success

    async def get_cache_statistics(self) -> CacheStatistics:
        """Get entry counts for the whole cache."""
        return (await self.load_cache()).statistics()
