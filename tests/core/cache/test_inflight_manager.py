"""Tests for InFlightManager."""

from __future__ import annotations

import asyncio

import pytest

from transcache.core.cache.inflight_manager import InFlightManager
from transcache.models.translation_models import TranslationResponse


@pytest.fixture
def inflight_manager() -> InFlightManager:
    return InFlightManager()


def test_build_key() -> None:
    assert InFlightManager.build_key("es", "69609650") == "es:69609650"


@pytest.mark.asyncio
async def test_first_caller_becomes_producer(inflight_manager: InFlightManager) -> None:
    assert await inflight_manager.mark_inflight_start("key") is None
    assert inflight_manager.pending == 1


@pytest.mark.asyncio
async def test_waiter_receives_producer_result(inflight_manager: InFlightManager) -> None:
    key = "es:1"
    assert await inflight_manager.mark_inflight_start(key) is None

    waiter: asyncio.Task[TranslationResponse | None] = asyncio.create_task(inflight_manager.mark_inflight_start(key))
    await asyncio.sleep(0)
    await inflight_manager.store_inflight_result(key, TranslationResponse(translated_text="Hola"))

    result: TranslationResponse | None = await waiter
    assert result is not None
    assert result.translated_text == "Hola"
    assert inflight_manager.pending == 0


@pytest.mark.asyncio
async def test_timeout_does_not_cancel_shared_future(inflight_manager: InFlightManager) -> None:
    key = "timeout-key"
    original_timeout: float = InFlightManager.INFLIGHT_TIMEOUT_SEC
    InFlightManager.INFLIGHT_TIMEOUT_SEC = 0.01

    try:
        assert await inflight_manager.mark_inflight_start(key) is None
        shared_future: asyncio.Future[TranslationResponse] = inflight_manager._inflight[key]  # noqa: SLF001

        with pytest.raises(TimeoutError):
            await inflight_manager.mark_inflight_start(key)

        assert shared_future.cancelled() is False
    finally:
        InFlightManager.INFLIGHT_TIMEOUT_SEC = original_timeout


@pytest.mark.asyncio
async def test_discard_converts_to_timeout_for_waiters(inflight_manager: InFlightManager) -> None:
    key = "discard-key"
    assert await inflight_manager.mark_inflight_start(key) is None

    waiter: asyncio.Task[TranslationResponse | None] = asyncio.create_task(inflight_manager.mark_inflight_start(key))
    await asyncio.sleep(0)
    await inflight_manager.discard_inflight(key)

    with pytest.raises(TimeoutError, match="discarded"):
        await waiter
    assert inflight_manager.pending == 0


@pytest.mark.asyncio
async def test_store_without_pending_key_is_noop(inflight_manager: InFlightManager) -> None:
    await inflight_manager.store_inflight_result("unknown", TranslationResponse(translated_text="x"))

    assert inflight_manager.pending == 0


@pytest.mark.asyncio
async def test_clear_releases_all_keys(inflight_manager: InFlightManager) -> None:
    await inflight_manager.mark_inflight_start("a")
    await inflight_manager.mark_inflight_start("b")

    await inflight_manager.clear()

    assert inflight_manager.pending == 0
