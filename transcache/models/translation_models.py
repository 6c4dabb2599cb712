"""Models for translation-related data.

Defines the transient request/response pair exchanged with the provider indirection, and the hook
object handed to host applications.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from dataclasses_json import DataClassJsonMixin, LetterCase, dataclass_json

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

__all__: list[str] = [
    "PLACEHOLDER_SOURCE_LANGUAGE",
    "TranslationHook",
    "TranslationRequest",
    "TranslationResponse",
]

# No detection is performed by the core; every response reports this value.
PLACEHOLDER_SOURCE_LANGUAGE: Final[str] = "en"


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class TranslationRequest(DataClassJsonMixin):
    """Single source text and the language to translate it into."""

    text: str
    target_language: str


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class TranslationResponse(DataClassJsonMixin):
    """Result of the provider indirection.

    Attributes:
        translated_text (str): Real translation, or the ``"[<lang>] <text>"`` fallback marker.
        detected_source_language (str | None): Always the placeholder value in this version.
    """

    translated_text: str
    detected_source_language: str | None = PLACEHOLDER_SOURCE_LANGUAGE

    def __str__(self) -> str:
        return self.translated_text


@dataclass
class TranslationHook:
    """Accessor handed to host code.

    Attributes:
        t (Callable[[str], Awaitable[str]]): Translate text into the current language.
        language (str): Target language at the time the hook was created.
        set_language (Callable[[str], None] | None): Change the coordinator's target language.
    """

    t: Callable[[str], Awaitable[str]]
    language: str
    set_language: Callable[[str], None] | None = None
