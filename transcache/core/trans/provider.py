# ruff: noqa: BLE001
"""Provider indirection.

Holds the single host-supplied translation function and turns its outcome into a TranslationResponse.
Whatever the provider does, ``translate`` returns a response: on failure, or with no provider at all,
the text comes back as the ``"[<lang>] <text>"`` fallback marker.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, TypeAlias

from transcache.core.trans.interface import TranslateExceptionError
from transcache.models.translation_models import (
    PLACEHOLDER_SOURCE_LANGUAGE,
    TranslationRequest,
    TranslationResponse,
)
from transcache.utils.logger_utils import LoggerUtils
from transcache.utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Awaitable, Callable

    from transcache.core.trans.interface import Result, TransInterface

__all__: list[str] = ["ProviderFunc", "TransProvider", "engine_provider"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

ProviderFunc: TypeAlias = "Callable[[str, str], Awaitable[str]]"


class TransProvider:
    """Slot for the active provider function.

    Replacing the provider is destructive: calls already awaiting the old function finish against it,
    new calls use the new one.
    """

    def __init__(self, provider: ProviderFunc | None = None) -> None:
        self._provider: ProviderFunc | None = provider

    @property
    def provider(self) -> ProviderFunc | None:
        return self._provider

    @property
    def has_provider(self) -> bool:
        return self._provider is not None

    def set_provider(self, provider: ProviderFunc | None) -> None:
        """Register the sole active provider, discarding any previous one. None unregisters."""
        if self._provider is not None and provider is not None:
            logger.debug("Replacing translation provider")
        self._provider = provider
        logger.info("Translation provider %s", "registered" if provider is not None else "cleared")

    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        """Translate through the registered provider, falling back to the marker text.

        Args:
            request (TranslationRequest): Text and target language.

        Returns:
            TranslationResponse: Provider result, or the fallback marker.
        """
        provider: ProviderFunc | None = self._provider
        if provider is not None:
            try:
                translated = await provider(request.text, request.target_language)
            except asyncio.CancelledError:
                raise
            except Exception as err:
                logger.warning("Provider raised an error, falling back to marker text: %s", err)
            else:
                if isinstance(translated, str):
                    return TranslationResponse(
                        translated_text=translated,
                        detected_source_language=PLACEHOLDER_SOURCE_LANGUAGE,
                    )
                logger.warning("Provider returned %s instead of str, falling back", type(translated).__name__)

        logger.warning("Fallback translation used for language '%s'", request.target_language)
        return TranslationResponse(
            translated_text=StringUtils.make_fallback(request.text, request.target_language),
            detected_source_language=PLACEHOLDER_SOURCE_LANGUAGE,
        )


def engine_provider(engine: TransInterface, src_lang: str | None = None) -> ProviderFunc:
    """Adapt a translation engine into a provider function.

    Engine errors propagate as TranslateExceptionError so that TransProvider falls back. An empty
    engine result is also treated as an error.

    Args:
        engine (TransInterface): Initialized engine.
        src_lang (str | None): Source language passed to the engine; None lets it auto-detect.
    """

    async def _provider(text: str, target_language: str) -> str:
        result: Result = await engine.translation(text, tgt_lang=target_language, src_lang=src_lang)
        if result.text is None:
            msg = f"Engine '{engine.engine_name}' returned no text"
            raise TranslateExceptionError(msg)
        return result.text

    return _provider
