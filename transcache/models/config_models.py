"""Configuration data models.

Each dataclass maps to one section of the INI file. Field defaults double as the type hints
the loader uses when coercing string values.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = ["Cache", "Config", "General", "Translation"]


@dataclass
class General:
    DEBUG: bool = False
    LOG_FILE: str = ""
    SCRIPT_NAME: str = ""


@dataclass
class Translation:
    ENGINE: list[str] = field(default_factory=list)
    SOURCE_LANGUAGE: str = "en"
    TARGET_LANGUAGE: str = "en"
    GOOGLE_SUFFIX: str = "com"
    SINGLE_FLIGHT: bool = False


@dataclass
class Cache:
    BACKEND: str = "sqlite"
    PATH: str = "translation_cache.db"
    STORAGE_KEY: str = "aiTranslationCache"


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    TRANSLATION: Translation = field(default_factory=Translation)
    CACHE: Cache = field(default_factory=Cache)
