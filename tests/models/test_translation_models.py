from __future__ import annotations

from transcache.models.translation_models import (
    PLACEHOLDER_SOURCE_LANGUAGE,
    TranslationRequest,
    TranslationResponse,
)


def test_response_defaults_to_placeholder_language() -> None:
    response = TranslationResponse(translated_text="Hola")

    assert response.detected_source_language == PLACEHOLDER_SOURCE_LANGUAGE == "en"
    assert str(response) == "Hola"


def test_request_serializes_with_camel_case_keys() -> None:
    request = TranslationRequest(text="Hello", target_language="es")

    assert request.to_dict() == {"text": "Hello", "targetLanguage": "es"}


def test_response_round_trip_from_camel_case() -> None:
    response: TranslationResponse = TranslationResponse.from_dict(
        {"translatedText": "Hola", "detectedSourceLanguage": "en"}
    )

    assert response.translated_text == "Hola"
    assert response.detected_source_language == "en"
