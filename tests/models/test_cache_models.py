from __future__ import annotations

import json

from transcache.models.cache_models import CacheStatistics, TranslationCache


def test_from_json_empty_inputs() -> None:
    assert len(TranslationCache.from_json(None)) == 0
    assert len(TranslationCache.from_json("")) == 0


def test_from_json_corrupt_blob_is_empty() -> None:
    cache: TranslationCache = TranslationCache.from_json("{not json")

    assert cache.entries == {}


def test_from_json_non_object_is_empty() -> None:
    assert TranslationCache.from_json("[1, 2, 3]").entries == {}
    assert TranslationCache.from_json('"text"').entries == {}


def test_from_json_drops_malformed_entries() -> None:
    raw: str = json.dumps({"es": {"1": "Hola", "2": 5, "3": None}, "fr": "not a mapping", "de": {"4": "Hallo"}})

    cache: TranslationCache = TranslationCache.from_json(raw)

    assert cache.entries == {"es": {"1": "Hola"}, "de": {"4": "Hallo"}}


def test_get_and_set() -> None:
    cache = TranslationCache()

    cache.set("es", "69609650", "[es] Hello")
    cache.set("es", "69609650", "Hola")

    assert cache.get("es", "69609650") == "Hola"
    assert cache.get("fr", "69609650") is None
    assert len(cache) == 1


def test_json_layout_is_nested_mapping() -> None:
    cache = TranslationCache()
    cache.set("es", "1", "Hola")
    cache.set("ja", "1", "こんにちは")

    assert json.loads(cache.to_json()) == {"es": {"1": "Hola"}, "ja": {"1": "こんにちは"}}
    assert "こんにちは" in cache.to_json()
    assert TranslationCache.from_json(cache.to_json()).to_dict() == cache.to_dict()


def test_statistics_counts_fallback_markers() -> None:
    cache = TranslationCache()
    cache.set("es", "1", "Hola")
    cache.set("es", "2", "[es] Goodbye")
    cache.set("fr", "1", "[es] not a marker for fr")

    stats: CacheStatistics = cache.statistics()

    assert stats.total_entries == 3
    assert stats.fallback_entries == 1
    assert stats.trusted_entries == 2
    assert stats.language_distribution == {"es": 2, "fr": 1}


def test_from_json_deeply_nested_blob_is_empty() -> None:
    cache: TranslationCache = TranslationCache.from_json("[" * 200000)

    assert cache.entries == {}
