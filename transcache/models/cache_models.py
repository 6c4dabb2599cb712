"""Models for translation cache data.

Defines the in-memory form of the persisted cache blob and the statistics derived from it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from transcache.utils.logger_utils import LoggerUtils
from transcache.utils.string_utils import StringUtils

__all__: list[str] = ["CacheStatistics", "TranslationCache"]

logger = LoggerUtils.get_logger(__name__)


@dataclass
class TranslationCache:
    """Whole translation cache, ``language -> fingerprint -> translated text``.

    The JSON layout on the storage medium is exactly the nested mapping held in ``entries``.
    """

    entries: dict[str, dict[str, str]] = field(default_factory=dict)

    def get(self, language: str, fingerprint: str) -> str | None:
        return self.entries.get(language, {}).get(fingerprint)

    def set(self, language: str, fingerprint: str, value: str) -> None:
        self.entries.setdefault(language, {})[fingerprint] = value

    def __len__(self) -> int:
        return sum(len(per_language) for per_language in self.entries.values())

    @classmethod
    def from_dict(cls, data: Any) -> TranslationCache:
        """Build a cache from decoded JSON, dropping anything that does not fit the layout.

        Args:
            data (Any): Decoded JSON value.

        Returns:
            TranslationCache: Cache holding only well-formed entries; empty if ``data`` is not a mapping.
        """
        if not isinstance(data, dict):
            logger.warning("Cache blob is not an object (%s); starting with an empty cache", type(data).__name__)
            return cls()

        entries: dict[str, dict[str, str]] = {}
        for language, per_language in data.items():
            if not isinstance(per_language, dict):
                logger.warning("Dropping malformed cache section for language '%s'", language)
                continue
            valid: dict[str, str] = {
                str(fingerprint): value for fingerprint, value in per_language.items() if isinstance(value, str)
            }
            if len(valid) != len(per_language):
                logger.warning(
                    "Dropped %d malformed cache entries for language '%s'", len(per_language) - len(valid), language
                )
            entries[str(language)] = valid
        return cls(entries=entries)

    @classmethod
    def from_json(cls, raw: str | bytes | None) -> TranslationCache:
        """Deserialize a stored blob. Missing or corrupt blobs yield an empty cache."""
        if not raw:
            return cls()
        try:
            data: Any = json.loads(raw)
        except (ValueError, TypeError, RecursionError) as err:
            logger.warning("Failed to decode cache blob, starting with an empty cache: %s", err)
            return cls()
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {language: dict(per_language) for language, per_language in self.entries.items()}

    def to_json(self) -> str:
        return json.dumps(self.entries, ensure_ascii=False, separators=(",", ":"))

    def statistics(self) -> CacheStatistics:
        """Count entries per language and the fallback markers among them."""
        language_distribution: dict[str, int] = {}
        fallback_entries: int = 0
        for language, per_language in self.entries.items():
            language_distribution[language] = len(per_language)
            fallback_entries += sum(1 for value in per_language.values() if StringUtils.is_fallback(value, language))
        return CacheStatistics(
            total_entries=sum(language_distribution.values()),
            fallback_entries=fallback_entries,
            language_distribution=language_distribution,
        )


@dataclass
class CacheStatistics:
    """Cache usage statistics.

    Attributes:
        total_entries (int): Total number of cached translations across languages.
        fallback_entries (int): Entries that are still fallback markers awaiting a real translation.
        language_distribution (dict[str, int]): Number of entries per language.
    """

    total_entries: int = 0
    fallback_entries: int = 0
    language_distribution: dict[str, int] = field(default_factory=dict)

    @property
    def trusted_entries(self) -> int:
        return self.total_entries - self.fallback_entries
