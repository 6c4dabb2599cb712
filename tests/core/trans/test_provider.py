from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from transcache.core.trans.interface import Result, TransInterface, TranslateExceptionError
from transcache.core.trans.provider import TransProvider, engine_provider
from transcache.models.translation_models import TranslationRequest, TranslationResponse


class NamelessEngine(TransInterface):
    """Engine double; an empty name keeps it out of the registry."""

    def __init__(self, result: Result | None = None, error: Exception | None = None) -> None:
        self.result: Result = result or Result(text="translated")
        self.error: Exception | None = error
        self.calls: list[tuple[str, str, str | None]] = []

    @staticmethod
    def fetch_engine_name() -> str:
        return ""

    def initialize(self, config) -> None:
        _ = config

    async def translation(self, content: str, tgt_lang: str, src_lang: str | None = None) -> Result:
        self.calls.append((content, tgt_lang, src_lang))
        if self.error is not None:
            raise self.error
        return self.result

    async def close(self) -> None:
        pass


@pytest.fixture
def request_es() -> TranslationRequest:
    return TranslationRequest(text="Hello", target_language="es")


@pytest.mark.asyncio
async def test_no_provider_returns_fallback(request_es: TranslationRequest) -> None:
    provider = TransProvider()

    response: TranslationResponse = await provider.translate(request_es)

    assert response.translated_text == "[es] Hello"
    assert response.detected_source_language == "en"


@pytest.mark.asyncio
async def test_registered_provider_result_is_wrapped(request_es: TranslationRequest) -> None:
    fn = AsyncMock(return_value="Hola")
    provider = TransProvider()
    provider.set_provider(fn)

    response: TranslationResponse = await provider.translate(request_es)

    fn.assert_awaited_once_with("Hello", "es")
    assert response.translated_text == "Hola"
    assert response.detected_source_language == "en"


@pytest.mark.asyncio
async def test_raising_provider_returns_fallback(request_es: TranslationRequest) -> None:
    provider = TransProvider(AsyncMock(side_effect=RuntimeError("service down")))

    response: TranslationResponse = await provider.translate(request_es)

    assert response.translated_text == "[es] Hello"


@pytest.mark.asyncio
async def test_non_string_result_returns_fallback(request_es: TranslationRequest) -> None:
    provider = TransProvider(AsyncMock(return_value={"text": "Hola"}))

    response: TranslationResponse = await provider.translate(request_es)

    assert response.translated_text == "[es] Hello"


@pytest.mark.asyncio
async def test_cancellation_propagates(request_es: TranslationRequest) -> None:
    provider = TransProvider(AsyncMock(side_effect=asyncio.CancelledError()))

    with pytest.raises(asyncio.CancelledError):
        await provider.translate(request_es)


@pytest.mark.asyncio
async def test_set_provider_replaces_previous(request_es: TranslationRequest) -> None:
    first = AsyncMock(return_value="Hola")
    second = AsyncMock(return_value="Buenas")
    provider = TransProvider(first)

    provider.set_provider(second)
    response: TranslationResponse = await provider.translate(request_es)

    assert response.translated_text == "Buenas"
    first.assert_not_awaited()


@pytest.mark.asyncio
async def test_in_flight_call_finishes_on_old_provider(request_es: TranslationRequest) -> None:
    gate = asyncio.Event()

    async def slow(text: str, target_language: str) -> str:
        await gate.wait()
        return f"old:{target_language}:{text}"

    provider = TransProvider(slow)
    task: asyncio.Task[TranslationResponse] = asyncio.create_task(provider.translate(request_es))
    await asyncio.sleep(0)

    provider.set_provider(AsyncMock(return_value="new"))
    gate.set()

    assert (await task).translated_text == "old:es:Hello"
    assert (await provider.translate(request_es)).translated_text == "new"


@pytest.mark.asyncio
async def test_set_provider_none_unregisters(request_es: TranslationRequest) -> None:
    provider = TransProvider(AsyncMock(return_value="Hola"))

    provider.set_provider(None)

    assert provider.has_provider is False
    assert (await provider.translate(request_es)).translated_text == "[es] Hello"


@pytest.mark.asyncio
async def test_engine_provider_calls_engine() -> None:
    engine = NamelessEngine(result=Result(text="Hola", detected_source_lang="en"))
    fn = engine_provider(engine, src_lang="en")

    assert await fn("Hello", "es") == "Hola"
    assert engine.calls == [("Hello", "es", "en")]


@pytest.mark.asyncio
async def test_engine_provider_empty_result_raises() -> None:
    fn = engine_provider(NamelessEngine(result=Result(text=None)))

    with pytest.raises(TranslateExceptionError):
        await fn("Hello", "es")


@pytest.mark.asyncio
async def test_engine_error_is_absorbed_by_provider(request_es: TranslationRequest) -> None:
    engine = NamelessEngine(error=TranslateExceptionError("quota"))
    provider = TransProvider(engine_provider(engine))

    response: TranslationResponse = await provider.translate(request_es)

    assert response.translated_text == "[es] Hello"
