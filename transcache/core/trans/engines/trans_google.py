"""Google Translate engine backed by the aiohttp web client."""

from __future__ import annotations

from typing import TYPE_CHECKING

from transcache.core.trans.engines.async_google_translate import (
    AsyncTranslator,
    GoogleError,
    HTTPConnectionError,
    HTTPError,
    HTTPTimeoutError,
    HTTPTooManyRequests,
    ResponseFormatError,
    TextResult,
)
from transcache.core.trans.interface import (
    Result,
    TransInterface,
    TranslateExceptionError,
    TranslationRateLimitError,
)
from transcache.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from transcache.models.config_models import Config

__all__: list[str] = ["GoogleTranslation"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class GoogleTranslation(TransInterface):
    def __init__(self) -> None:
        self.__inst: AsyncTranslator | None = None

    @property
    def _inst(self) -> AsyncTranslator:
        if self.__inst is None:
            msg = "The google instance is not initialised"
            raise TranslateExceptionError(msg)
        return self.__inst

    @staticmethod
    def fetch_engine_name() -> str:
        return "google"

    def initialize(self, config: Config) -> None:
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        try:
            self.__inst = AsyncTranslator(url_suffix=config.TRANSLATION.GOOGLE_SUFFIX)
        except (AttributeError, ValueError) as err:
            logger.critical(err)
            msg = "an error occurred in instance creation"
            raise RuntimeError(msg) from err

    async def translation(self, content: str, tgt_lang: str, src_lang: str | None = None) -> Result:
        logger.debug("'content': '%s', 'src_lang': '%s', 'tgt_lang': '%s'", content, src_lang, tgt_lang)
        try:
            result: TextResult = await self._inst.translate(content, tgt_lang, src_lang)
        except HTTPTooManyRequests as err:
            msg = "Google rate limit reached"
            raise TranslationRateLimitError(msg) from err
        except (GoogleError, ResponseFormatError, HTTPConnectionError, HTTPError, HTTPTimeoutError) as err:
            msg = f"an anomaly occurred during translation at Google: {err}"
            raise TranslateExceptionError(msg) from err

        logger.info("translation completed (%s > %s)", src_lang, tgt_lang)
        return Result(text=result.text, detected_source_lang=result.detected_source_lang, metadata=result.metadata)

    async def close(self) -> None:
        if self.__inst is not None:
            await self.__inst.close()
        logger.info("'%s' process termination", self.__class__.__name__)
