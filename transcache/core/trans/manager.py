"""Translation coordinator.

Resolves text into the current target language: trusted cache entries are returned as is, misses and
cached fallback markers go through the provider indirection and the result is written back. A cached
fallback marker therefore acts as a tombstone: it is replaced on the next access once a provider works.

``translate`` never raises for provider or storage failures; it always resolves to some string.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from transcache.core.trans.engines import (
    DeeplTranslation,  # noqa: F401
    GoogleTranslation,  # noqa: F401
)
from transcache.core.trans.interface import TransInterface, TranslateExceptionError
from transcache.core.trans.provider import TransProvider, engine_provider
from transcache.models.translation_models import TranslationHook, TranslationRequest, TranslationResponse
from transcache.utils.logger_utils import LoggerUtils
from transcache.utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging

    from transcache.core.cache.inflight_manager import InFlightManager
    from transcache.core.cache.manager import TranslationCacheManager
    from transcache.models.cache_models import CacheStatistics
    from transcache.models.config_models import Config


__all__: list[str] = ["DEFAULT_SOURCE_LANGUAGE", "TransManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEFAULT_SOURCE_LANGUAGE: str = "en"


class TransManager:
    """Coordinates cache lookups, provider calls and cache write-back for one target language.

    Attributes:
        config (Config): Loaded configuration.
        cache_manager (TranslationCacheManager): Persisted cache.
        provider (TransProvider): Provider slot; injected so hosts and tests control it.
        inflight_manager (InFlightManager | None): Shares provider calls among concurrent misses when set.
    """

    def __init__(
        self,
        config: Config,
        cache_manager: TranslationCacheManager,
        provider: TransProvider | None = None,
        inflight_manager: InFlightManager | None = None,
    ) -> None:
        self.config: Config = config
        self.cache_manager: TranslationCacheManager = cache_manager
        self.provider: TransProvider = provider if provider is not None else TransProvider()
        self.inflight_manager: InFlightManager | None = inflight_manager
        self.source_language: str = config.TRANSLATION.SOURCE_LANGUAGE or DEFAULT_SOURCE_LANGUAGE
        self._language: str = config.TRANSLATION.TARGET_LANGUAGE or self.source_language
        self._trans_instance: dict[str, TransInterface] = {}
        self._trans_engine: list[str] = []
        logger.debug("Registered translation engines: %s", TransInterface.registered)

    @property
    def language(self) -> str:
        return self._language

    def set_language(self, language: str) -> None:
        """Change the target language used by subsequent translations."""
        language = language.strip()
        if not language:
            logger.warning("Ignoring empty target language")
            return
        if language != self._language:
            logger.info("Target language changed: '%s' -> '%s'", self._language, language)
        self._language = language

    async def initialize(self) -> None:
        """Build the configured engines and register them, in configured order, as the provider.

        Engines that fail to initialize are logged and skipped. With no usable engine the provider slot is
        left as it is, so a host-registered function is kept.
        """
        logger.info("TransManager initialization started")

        self._trans_engine.clear()
        for _name in self.config.TRANSLATION.ENGINE:
            _cls: type[TransInterface] | None = TransInterface.registered.get(_name)
            if _cls is None:
                logger.critical("Translation class not found: '%s'", _name)
                continue
            _instance: TransInterface = _cls()
            try:
                _instance.initialize(self.config)
            except RuntimeError as err:
                logger.critical("RuntimeError in '%s' translation setup: %s", _name, err)
                continue
            except TranslateExceptionError as err:
                logger.critical("Exception in '%s' translation setup: %s", _name, err)
                continue
            self._trans_instance[_name] = _instance
            self._trans_engine.append(_name)
            logger.info("Translation engine initialized: '%s'", _name)

        if self._trans_engine:
            self.provider.set_provider(self.translate_with_engines)
            logger.info("Translation engines registered as provider: %s", self._trans_engine)
        else:
            logger.warning("No translation engine available; provider slot left unchanged")

    def fetch_engine_names(self) -> list[str]:
        return self._trans_engine

    def refresh_active_engine_list(self) -> None:
        """Drop engines that report themselves unavailable, e.g. after their quota ran out."""
        for name in [n for n in self._trans_engine if not self._trans_instance[n].is_available]:
            self._trans_engine.remove(name)
            logger.error("Translation engine disabled: '%s'", name)

    async def translate_with_engines(self, text: str, target_language: str) -> str:
        """Provider function backed by the configured engines, tried in priority order.

        Raises:
            TranslateExceptionError: If no engine produced a result; the provider slot turns it into the
                fallback marker.
        """
        self.refresh_active_engine_list()
        last_error: TranslateExceptionError | None = None
        for name in list(self._trans_engine):
            try:
                return await engine_provider(self._trans_instance[name], src_lang=self.source_language)(
                    text, target_language
                )
            except TranslateExceptionError as err:
                logger.warning("Translation engine '%s' failed: %s", name, err)
                last_error = err
        msg = "No translation engine produced a result"
        raise TranslateExceptionError(msg) from last_error

    async def translate(self, text: str) -> str:
        """Translate text into the current target language.

        Args:
            text (str): Exact source text; whitespace is significant.

        Returns:
            str: Trusted cached value, a fresh provider result, or the ``"[<lang>] <text>"`` fallback marker.
        """
        language: str = self._language
        if language == self.source_language:
            return text

        fingerprint: str = StringUtils.fingerprint(text)
        cached: str | None = await self.cache_manager.search_translation_cache(language, fingerprint)
        # an empty cached string counts as a miss
        if cached and not StringUtils.is_fallback(cached, language):
            logger.debug("Trusted cache entry used for %s/%s", language, fingerprint)
            return cached
        if cached:
            logger.debug("Cached fallback marker for %s/%s, retrying provider", language, fingerprint)

        response: TranslationResponse = await self._resolve(text, language, fingerprint)
        await self.cache_manager.register_translation_cache(language, fingerprint, response.translated_text)
        return response.translated_text

    async def _resolve(self, text: str, language: str, fingerprint: str) -> TranslationResponse:
        """Call the provider, sharing the call with concurrent misses when single-flight is enabled."""
        request = TranslationRequest(text=text, target_language=language)
        if self.inflight_manager is None:
            return await self.provider.translate(request)

        key: str = self.inflight_manager.build_key(language, fingerprint)
        try:
            shared: TranslationResponse | None = await self.inflight_manager.mark_inflight_start(key)
        except TimeoutError:
            logger.warning("In-flight translation unavailable for key %s, calling provider directly", key)
            return await self.provider.translate(request)
        if shared is not None:
            logger.debug("Reused in-flight translation for key %s", key)
            return shared

        try:
            response: TranslationResponse = await self.provider.translate(request)
        except BaseException:
            await self.inflight_manager.discard_inflight(key)
            raise
        await self.inflight_manager.store_inflight_result(key, response)
        return response

    def use_translation(self) -> TranslationHook:
        """Accessor for host code: ``t`` translates, ``set_language`` switches the target language."""
        return TranslationHook(t=self.translate, language=self._language, set_language=self.set_language)

    async def get_cache_statistics(self) -> CacheStatistics:
        return await self.cache_manager.get_cache_statistics()

    async def shutdown_engines(self) -> None:
        """Shut down all initialized translation engines."""
        logger.info("Class '%s' termination process started.", self.__class__.__name__)
        for _inst in self._trans_instance.values():
            await _inst.close()
        self._trans_instance.clear()
        self._trans_engine.clear()
        logger.info("Class '%s' termination process completed.", self.__class__.__name__)
