"""Data models for transcache.

This package contains dataclass definitions for configuration, the persisted translation cache,
and the transient translation request/response types.
"""

from __future__ import annotations

from transcache.models.cache_models import CacheStatistics, TranslationCache
from transcache.models.config_models import Config
from transcache.models.translation_models import (
    PLACEHOLDER_SOURCE_LANGUAGE,
    TranslationHook,
    TranslationRequest,
    TranslationResponse,
)

__all__: list[str] = [
    "PLACEHOLDER_SOURCE_LANGUAGE",
    "CacheStatistics",
    "Config",
    "TranslationCache",
    "TranslationHook",
    "TranslationRequest",
    "TranslationResponse",
]
