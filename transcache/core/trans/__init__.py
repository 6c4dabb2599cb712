"""Translation coordination and provider indirection.

This package resolves translations through the cache and a single swappable provider function, with
optional ready-made engines (Google Translate, DeepL) that can fill the provider slot.
"""

from transcache.core.trans.interface import (
    NotSupportedLanguagesError,
    Result,
    TransInterface,
    TranslateExceptionError,
    TranslationQuotaExceededError,
    TranslationRateLimitError,
)
from transcache.core.trans.manager import TransManager
from transcache.core.trans.provider import ProviderFunc, TransProvider, engine_provider

__all__: list[str] = [
    "NotSupportedLanguagesError",
    "ProviderFunc",
    "Result",
    "TransInterface",
    "TransManager",
    "TransProvider",
    "TranslateExceptionError",
    "TranslationQuotaExceededError",
    "TranslationRateLimitError",
    "engine_provider",
]
