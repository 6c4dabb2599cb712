from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, ClassVar

from deepl import DeepLClient, Language, TextResult
from deepl.exceptions import (
    AuthorizationException,
    ConnectionException,
    DeepLException,
    QuotaExceededException,
    TooManyRequestsException,
)

from transcache.core.trans.interface import (
    NotSupportedLanguagesError,
    Result,
    TransInterface,
    TranslateExceptionError,
    TranslationQuotaExceededError,
    TranslationRateLimitError,
)
from transcache.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from transcache.models.config_models import Config


__all__: list[str] = ["DeeplTranslation"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class DeeplTranslation(TransInterface):
    _source_codes: ClassVar[dict[str, str]] = {}  # language code -> DeepL source code
    _target_codes: ClassVar[dict[str, str]] = {}  # language code -> DeepL target code

    def __init__(self) -> None:
        super().__init__()
        self.__inst: DeepLClient | None = None
        self.__available: bool = False
        self._generate_langcode_mappings()

    def _generate_langcode_mappings(self) -> None:
        """Map lowercase base codes ('en', 'ja', ...) to the uppercase codes DeepL expects.

        Chinese variants collapse to DeepL's unified 'ZH'.
        """
        language_constants: dict[str, str] = {
            name: value for name, value in vars(Language).items() if isinstance(value, str) and name.isupper()
        }

        for code in language_constants.values():
            base_code: str = code.split("-")[0].lower()
            DeeplTranslation._source_codes[base_code] = base_code.upper()
            DeeplTranslation._target_codes[base_code] = code.upper()

        for zh_variant in ("zh-CN", "zh-TW"):
            DeeplTranslation._source_codes[zh_variant] = "ZH"
            DeeplTranslation._target_codes[zh_variant] = "ZH"

        logger.debug("Language code mapping generated for DeepL.")

    @property
    def _inst(self) -> DeepLClient:
        if self.__inst is None:
            msg = "The DeepL instance is not initialised"
            raise TranslateExceptionError(msg)
        return self.__inst

    @property
    def is_available(self) -> bool:
        return self.__available

    @staticmethod
    def fetch_engine_name() -> str:
        return "deepl"

    def initialize(self, config: Config) -> None:
        """Create the DeepL client from the key in ``DEEPL_API_OAUTH``.

        Raises:
            RuntimeError: If the client cannot be created.
            TranslateExceptionError: If the key is missing or rejected.
        """
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        _ = config

        auth_key: str = self.get_authentication_key()
        if not auth_key:
            msg = "DeepL authentication key is not set (DEEPL_API_OAUTH)"
            raise TranslateExceptionError(msg)
        try:
            # The key is only checked by the server on the first request.
            self.__inst = DeepLClient(auth_key)
        except (AttributeError, ValueError) as err:
            logger.critical(err)
            msg = "An error occurred while creating the DeepL client instance"
            raise RuntimeError(msg) from err
        except AuthorizationException:
            self.__inst = None
            msg = "Authorisation failed. Please check your authentication key"
            raise TranslateExceptionError(msg) from None
        self.__available = True

    async def translation(self, content: str, tgt_lang: str, src_lang: str | None = None) -> Result:
        """Translate through DeepL; the blocking client call runs in a worker thread.

        Raises:
            NotSupportedLanguagesError: If DeepL does not support the language pair.
            TranslationQuotaExceededError: If the character quota is used up.
            TranslationRateLimitError: If DeepL rejects the request with 429.
            TranslateExceptionError: For any other DeepL failure.
        """
        logger.debug("'content': '%s', 'src_lang': '%s', 'tgt_lang': '%s'", content, src_lang, tgt_lang)
        try:
            _src_lang: str | None = DeeplTranslation._source_codes[src_lang] if src_lang else None
            _tgt_lang: str = DeeplTranslation._target_codes[tgt_lang]
        except KeyError:
            msg: str = (
                f"Languages not supported by DeepL. Source language: '{src_lang}'. Target language: '{tgt_lang}'."
            )
            raise NotSupportedLanguagesError(msg) from None

        try:
            results: TextResult | list[TextResult] = await asyncio.to_thread(
                self._inst.translate_text,
                content,
                source_lang=_src_lang,
                target_lang=_tgt_lang,
            )
        except QuotaExceededException as err:
            self.__available = False
            raise TranslationQuotaExceededError(err) from None
        except AuthorizationException:
            msg = "Authorisation failed. Please check your authentication key"
            raise TranslateExceptionError(msg) from None
        except TooManyRequestsException as err:
            msg = "DeepL rate limit reached"
            raise TranslationRateLimitError(msg) from err
        except ConnectionException:
            msg = "An error occurred when connecting to the DeepL server"
            raise TranslateExceptionError(msg) from None
        except (DeepLException, ValueError, TypeError):
            msg = "An anomaly occurred during the translation process at DeepL"
            raise TranslateExceptionError(msg) from None

        logger.info("translation completed (%s > %s)", _src_lang, _tgt_lang)
        return self._build_result(results)

    def _build_result(self, results: TextResult | list[TextResult]) -> Result:
        if isinstance(results, list):
            if not results:
                msg = "DeepL returned an empty result list"
                raise TranslateExceptionError(msg)
            result: TextResult = results[0]
        elif isinstance(results, TextResult):
            result = results
        else:
            msg = "An anomaly occurred during the translation process at DeepL"
            raise TranslateExceptionError(msg)

        return Result(
            text=result.text,
            detected_source_lang=result.detected_source_lang.lower(),
            metadata={"engine": "deepl"},
        )

    async def close(self) -> None:
        self.__available = False
        self.__inst = None
        logger.debug("'%s' process termination", self.__class__.__name__)
