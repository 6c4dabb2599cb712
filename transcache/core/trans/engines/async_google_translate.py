"""Minimal asynchronous client for the public Google Translate web endpoint.

Note:
    The endpoint is undocumented; the response layout may change without notice, in which case
    ResponseFormatError is raised.
"""

from __future__ import annotations

import json
from json import JSONDecodeError
from typing import TYPE_CHECKING, Any, Final
from urllib.parse import quote

import aiohttp

from transcache.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

__all__: list[str] = [
    "AsyncTranslator",
    "GoogleError",
    "HTTPConnectionError",
    "HTTPError",
    "HTTPTimeoutError",
    "HTTPTooManyRequests",
    "ResponseFormatError",
    "TextResult",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

URL_SUFFIX_DEFAULT: Final[str] = "com"
RPC_ID: Final[str] = "MkEWBc"
MAX_TEXT_LENGTH: Final[int] = 5000


class GoogleException(Exception):  # noqa: N818
    pass


class GoogleError(GoogleException):
    pass


class ResponseFormatError(GoogleException):
    """The response could not be decoded; the format has changed or the body was cut short."""


class HTTPException(GoogleException):
    pass


class HTTPConnectionError(HTTPException):
    pass


class HTTPTimeoutError(HTTPException):
    pass


class HTTPError(HTTPException):
    """HTTP 3xx/4xx/5xx status."""


class HTTPTooManyRequests(HTTPException):
    """HTTP 429 Too Many Requests."""


class TextResult:
    def __init__(self, text: str, detected_source_lang: str | None, metadata: dict[str, str] | None = None) -> None:
        self.text: str = text
        self.detected_source_lang: str | None = detected_source_lang
        self.metadata: dict[str, str] | None = metadata

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"<TextResult text={self.text} detected_source_lang={self.detected_source_lang}>"


class AsyncTranslator:
    def __init__(self, url_suffix: str = URL_SUFFIX_DEFAULT, timeout: float = 10.0) -> None:
        self.url_suffix: str = url_suffix.strip() or URL_SUFFIX_DEFAULT
        self.url: str = f"https://translate.google.{self.url_suffix}/_/TranslateWebserverUi/data/batchexecute"
        self.timeout: float = timeout
        self.__session: aiohttp.ClientSession | None = None

    @property
    def _session(self) -> aiohttp.ClientSession:
        """Current session; created on first use or after it was closed."""
        if self.__session is None or self.__session.closed:
            self.__session = aiohttp.ClientSession()
        return self.__session

    async def close(self) -> None:
        if self.__session is not None and not self.__session.closed:
            await self.__session.close()
        self.__session = None
        logger.debug("'%s': 'session closed'", self.__class__.__name__)

    @staticmethod
    def _package_rpc(text: str, lang_src: str, lang_tgt: str) -> str:
        parameter: list[Any] = [[text.strip(), lang_src, lang_tgt, True], [1]]
        rpc: list[Any] = [[[RPC_ID, json.dumps(parameter, separators=(",", ":")), None, "generic"]]]
        return f"f.req={quote(json.dumps(rpc, separators=(',', ':')))}&"

    def _build_headers(self) -> dict[str, str]:
        return {
            "Referer": f"https://translate.google.{self.url_suffix}/",
            "User-Agent": (
                "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
                "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
            ),
            "Content-Type": "application/x-www-form-urlencoded;charset=utf-8",
        }

    async def _post(self, data: str) -> str:
        try:
            async with self._session.post(
                url=self.url,
                data=data,
                headers=self._build_headers(),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                body: str = await response.text()
                if response.status == 429:
                    msg = f"HTTP 429 {response.reason} from {self.url}"
                    raise HTTPTooManyRequests(msg)
                if response.status >= 300:
                    msg = f"HTTP {response.status} {response.reason} from {self.url}"
                    raise HTTPError(msg)
                return body
        except TimeoutError:
            msg = "Timeout occurred for aiohttp.ClientSession"
            raise HTTPTimeoutError(msg) from None
        except aiohttp.ClientConnectionError as err:
            raise HTTPConnectionError(err) from None

    async def translate(self, text: str, lang_tgt: str, lang_src: str | None = None) -> TextResult:
        if not text:
            msg = "No characters to translate"
            raise GoogleError(msg)
        if len(text) >= MAX_TEXT_LENGTH:
            msg = f"Can only translate less than {MAX_TEXT_LENGTH} characters"
            raise GoogleError(msg)

        body: str = await self._post(self._package_rpc(text, (lang_src or "auto").lower(), lang_tgt.lower()))
        return self._process_response(body)

    @staticmethod
    def _process_response(body: str) -> TextResult:
        for line in body.splitlines():
            if RPC_ID not in line:
                continue
            try:
                decoded: Any = json.loads(json.loads(line)[0][2])
                detected_lang: str | None = decoded[1][3]
                sentences: Any = decoded[1][0][0][5]
            except JSONDecodeError as err:
                msg = "failed to decode response"
                raise ResponseFormatError(msg) from err
            except (IndexError, TypeError) as err:
                msg = "invalid response format"
                raise ResponseFormatError(msg) from err

            if not sentences:
                # URL-like input comes back untranslated without sentence data
                return TextResult(decoded[1][0][0][0], "und", metadata={"engine": "google", "type": "url"})

            text: str = " ".join(sentence[0].strip() for sentence in sentences)
            return TextResult(text, detected_lang, metadata={"engine": "google"})

        msg = "unknown response format"
        raise ResponseFormatError(msg)
