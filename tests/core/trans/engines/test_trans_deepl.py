from __future__ import annotations

from types import SimpleNamespace
from typing import TYPE_CHECKING, cast

import pytest
from deepl.exceptions import ConnectionException, QuotaExceededException, TooManyRequestsException

from transcache.core.trans.engines import trans_deepl as trans_deepl_module
from transcache.core.trans.interface import (
    NotSupportedLanguagesError,
    Result,
    TranslateExceptionError,
    TranslationQuotaExceededError,
    TranslationRateLimitError,
)

if TYPE_CHECKING:
    from transcache.models.config_models import Config


class DummyLanguage:
    EN: str = "en"
    ES: str = "es"
    JA: str = "ja"
    EN_US: str = "en-US"


class DummyTextResult:
    def __init__(self, text: str, detected_source_lang: str) -> None:
        self.text: str = text
        self.detected_source_lang: str = detected_source_lang


class DummyClient:
    translate_result: DummyTextResult | list[DummyTextResult] = DummyTextResult("ok", "EN")
    translate_error: Exception | None = None

    def __init__(self, auth_key: str) -> None:
        self.auth_key: str = auth_key
        self.calls: list[tuple[str, str | None, str]] = []

    def translate_text(
        self, content: str, source_lang: str | None, target_lang: str
    ) -> DummyTextResult | list[DummyTextResult]:
        self.calls.append((content, source_lang, target_lang))
        err: Exception | None = type(self).translate_error
        if err is not None:
            raise err
        return type(self).translate_result


@pytest.fixture(autouse=True)
def setup_deepl_module(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(trans_deepl_module, "Language", DummyLanguage)
    monkeypatch.setattr(trans_deepl_module, "TextResult", DummyTextResult)
    monkeypatch.setattr(trans_deepl_module, "DeepLClient", DummyClient)
    monkeypatch.setenv("DEEPL_API_OAUTH", "dummy-key")

    monkeypatch.setattr(trans_deepl_module.DeeplTranslation, "_source_codes", {})
    monkeypatch.setattr(trans_deepl_module.DeeplTranslation, "_target_codes", {})
    DummyClient.translate_result = DummyTextResult("ok", "EN")
    DummyClient.translate_error = None


@pytest.fixture
def config() -> Config:
    return cast("Config", SimpleNamespace(TRANSLATION=SimpleNamespace()))


@pytest.fixture
def engine(config: Config) -> trans_deepl_module.DeeplTranslation:
    instance = trans_deepl_module.DeeplTranslation()
    instance.initialize(config)
    return instance


def test_language_code_mapping() -> None:
    trans_deepl_module.DeeplTranslation()

    assert trans_deepl_module.DeeplTranslation._source_codes["en"] == "EN"
    assert trans_deepl_module.DeeplTranslation._target_codes["en"] == "EN-US"
    assert trans_deepl_module.DeeplTranslation._target_codes["zh-CN"] == "ZH"


def test_initialize_without_key_raises(monkeypatch: pytest.MonkeyPatch, config: Config) -> None:
    monkeypatch.delenv("DEEPL_API_OAUTH", raising=False)
    instance = trans_deepl_module.DeeplTranslation()

    with pytest.raises(TranslateExceptionError):
        instance.initialize(config)
    assert instance.is_available is False


def test_initialize_creates_client(engine: trans_deepl_module.DeeplTranslation) -> None:
    assert engine.is_available is True
    assert engine._inst.auth_key == "dummy-key"  # type: ignore[attr-defined]


@pytest.mark.asyncio
async def test_translation_returns_result(engine: trans_deepl_module.DeeplTranslation) -> None:
    result: Result = await engine.translation("hello", tgt_lang="es", src_lang="en")

    assert result.text == "ok"
    assert result.detected_source_lang == "en"
    assert result.metadata == {"engine": "deepl"}
    assert engine._inst.calls == [("hello", "EN", "ES")]  # type: ignore[attr-defined]


@pytest.mark.asyncio
async def test_translation_uses_first_of_list(engine: trans_deepl_module.DeeplTranslation) -> None:
    DummyClient.translate_result = [DummyTextResult("first", "EN"), DummyTextResult("second", "EN")]

    result: Result = await engine.translation("hello", tgt_lang="es")

    assert result.text == "first"


@pytest.mark.asyncio
async def test_translation_unsupported_language(engine: trans_deepl_module.DeeplTranslation) -> None:
    with pytest.raises(NotSupportedLanguagesError):
        await engine.translation("hello", tgt_lang="xx")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (QuotaExceededException("quota"), TranslationQuotaExceededError),
        (TooManyRequestsException("429"), TranslationRateLimitError),
        (ConnectionException("down"), TranslateExceptionError),
        (ValueError("bad"), TranslateExceptionError),
    ],
)
async def test_translation_maps_errors(
    engine: trans_deepl_module.DeeplTranslation, error: Exception, expected: type[Exception]
) -> None:
    DummyClient.translate_error = error

    with pytest.raises(expected):
        await engine.translation("hello", tgt_lang="es")


@pytest.mark.asyncio
async def test_quota_exceeded_marks_unavailable(engine: trans_deepl_module.DeeplTranslation) -> None:
    DummyClient.translate_error = QuotaExceededException("quota")

    with pytest.raises(TranslationQuotaExceededError):
        await engine.translation("hello", tgt_lang="es")
    assert engine.is_available is False


@pytest.mark.asyncio
async def test_close_resets_client(engine: trans_deepl_module.DeeplTranslation) -> None:
    await engine.close()

    assert engine.is_available is False
    with pytest.raises(TranslateExceptionError):
        _ = engine._inst
