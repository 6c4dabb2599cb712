"""Translation engine implementations.

Concrete TransInterface engines for external services. Each one can be wired in as the provider with
``engine_provider``.

Modules:
- AsyncTranslator: Asynchronous client for the public Google Translate web endpoint.
- DeeplTranslation: Implementation for DeepL translation service.
- GoogleTranslation: Implementation for Google Translate service.
"""

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
from transcache.core.trans.engines.trans_deepl import DeeplTranslation
from transcache.core.trans.engines.trans_google import GoogleTranslation

__all__: list[str] = [
    "AsyncTranslator",
    "DeeplTranslation",
    "GoogleError",
    "GoogleTranslation",
    "HTTPConnectionError",
    "HTTPError",
    "HTTPTimeoutError",
    "HTTPTooManyRequests",
    "ResponseFormatError",
    "TextResult",
]
