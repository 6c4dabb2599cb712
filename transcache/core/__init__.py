"""Core managers for transcache.

This package contains the translation cache and its storage media, and the translation coordinator with
its provider indirection.
"""

from transcache.core.cache import TranslationCacheManager
from transcache.core.trans import TransManager, TransProvider
from transcache.core.version import VERSION

__all__: list[str] = [
    "VERSION",
    "TransManager",
    "TransProvider",
    "TranslationCacheManager",
]
