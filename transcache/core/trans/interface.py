"""Abstract base class for external translation engines and related exceptions.

Engines are optional: a host can register any async function as provider. The engines here are the
ready-made ones, adapted into a provider function by ``engine_provider``.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from transcache.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from transcache.models.config_models import Config

__all__: list[str] = [
    "NotSupportedLanguagesError",
    "Result",
    "TransInterface",
    "TranslateExceptionError",
    "TranslationQuotaExceededError",
    "TranslationRateLimitError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


@dataclass
class Result:
    """Translation result returned by an engine.

    Attributes:
        text (str | None): Translated text. None if translation fails.
        detected_source_lang (str | None): Source language reported by the engine.
        metadata (dict[str, str] | None): Engine-specific metadata.
    """

    text: str | None = None
    detected_source_lang: str | None = None
    metadata: dict[str, str] | None = None

    def __str__(self) -> str:
        if self.text is None:
            return ""
        return self.text


class TranslateExceptionError(Exception):
    """An error occurred during the translation process."""


class NotSupportedLanguagesError(TranslateExceptionError):
    """An unsupported language code was specified."""


class TranslationQuotaExceededError(TranslateExceptionError):
    """The translatable character quota has been exceeded."""


class TranslationRateLimitError(TranslateExceptionError):
    """The translation request was rate-limited by the API."""


class TransInterface(ABC):
    """Abstract base class for translation engines.

    Subclasses register themselves under ``fetch_engine_name()`` when defined, so that the engine named
    in the configuration can be looked up in ``registered``.

    Attributes:
        registered (ClassVar[dict[str, type[TransInterface]]]): Engine classes keyed by name.
    """

    registered: ClassVar[dict[str, type[TransInterface]]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        name = cls.fetch_engine_name()
        if not isinstance(name, str) or name == "":
            return  # Nameless engines (test doubles) are not registered.

        if name in cls.registered:
            msg: str = f"A translation engine with the name '{name}' is already registered."
            raise ValueError(msg)

        cls.registered[name] = cls

    @property
    def engine_name(self) -> str:
        return self.fetch_engine_name()

    @property
    def is_available(self) -> bool:
        """Whether the engine can currently accept requests."""
        return True

    @staticmethod
    @abstractmethod
    def fetch_engine_name() -> str:
        """Distinguished engine name. Called at class definition time for registration."""
        raise NotImplementedError

    @abstractmethod
    def initialize(self, config: Config) -> None:
        """Prepare the engine for use.

        Raises:
            RuntimeError: If the client cannot be created.
            TranslateExceptionError: If authentication fails.
        """
        raise NotImplementedError

    @abstractmethod
    async def translation(self, content: str, tgt_lang: str, src_lang: str | None = None) -> Result:
        """Translate input text to the target language.

        Args:
            content (str): Text to be translated.
            tgt_lang (str): Target language code.
            src_lang (str | None): Source language code. If None, auto-detect.

        Returns:
            Result: Translation result.

        Raises:
            NotSupportedLanguagesError: If the specified language is not supported.
            TranslationQuotaExceededError: If the character quota has been exceeded.
            TranslationRateLimitError: If the request is rate-limited by the API.
            TranslateExceptionError: If translation fails.
        """
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        raise NotImplementedError

    def get_authentication_key(self) -> str:
        """Read the API key from ``<ENGINE_NAME>_API_OAUTH``, e.g. ``DEEPL_API_OAUTH``.

        Returns:
            str: The key, or an empty string if the variable is not set.
        """
        return os.getenv(f"{self.fetch_engine_name().upper()}_API_OAUTH", "")
