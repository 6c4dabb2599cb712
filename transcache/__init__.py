"""On-demand, cached text translation.

Typical use::

    storage = MemoryStorage()
    manager = TransManager(Config(), TranslationCacheManager(storage))
    manager.provider.set_provider(my_async_translate)
    hook = manager.use_translation()
    hook.set_language("es")
    text = await hook.t("Hello")
"""

from transcache.core.cache import (
    InFlightManager,
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
    SQLiteStorage,
    TranslationCacheManager,
    create_storage,
)
from transcache.core.trans import TransManager, TransProvider, engine_provider
from transcache.core.version import VERSION
from transcache.models import Config, TranslationHook
from transcache.utils.string_utils import StringUtils

fingerprint = StringUtils.fingerprint

__all__: list[str] = [
    "VERSION",
    "Config",
    "InFlightManager",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "SQLiteStorage",
    "TransManager",
    "TransProvider",
    "TranslationCacheManager",
    "TranslationHook",
    "create_storage",
    "engine_provider",
    "fingerprint",
]
