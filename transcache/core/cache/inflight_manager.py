from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, ClassVar

from transcache.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from transcache.models.translation_models import TranslationResponse


__all__: list[str] = ["InFlightManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class InFlightManager:
    """Shares one provider call among concurrent cache misses for the same key.

    The first caller for a key becomes the producer and gets None from ``mark_inflight_start``; later
    callers wait on the producer's future. Only used when single-flight is enabled, since it changes
    how often the provider is called.

    Attributes:
        INFLIGHT_TIMEOUT_SEC (float): How long a waiter blocks before giving up on the producer.
    """

    INFLIGHT_TIMEOUT_SEC: ClassVar[float] = 10.0

    def __init__(self) -> None:
        self._inflight: dict[str, asyncio.Future[TranslationResponse]] = {}
        self._lock: asyncio.Lock = asyncio.Lock()

    @staticmethod
    def build_key(language: str, fingerprint: str) -> str:
        return f"{language}:{fingerprint}"

    @property
    def pending(self) -> int:
        return len(self._inflight)

    async def mark_inflight_start(self, key: str) -> TranslationResponse | None:
        """Register as producer for a key, or wait for the current producer.

        Args:
            key (str): Key from ``build_key``.

        Returns:
            TranslationResponse | None: The producer's result, or None if the caller is now the producer.

        Raises:
            TimeoutError: If the producer did not finish in time or was discarded.
        """
        async with self._lock:
            if key not in self._inflight:
                self._inflight[key] = asyncio.get_running_loop().create_future()
                logger.debug("Marked in-flight start for key: %s", key)
                return None
            fut: asyncio.Future[TranslationResponse] = self._inflight[key]
            logger.debug("In-flight translation detected for key: %s", key)

        try:
            # shield: a waiter timing out must not cancel the producer's future
            return await asyncio.wait_for(asyncio.shield(fut), timeout=self.INFLIGHT_TIMEOUT_SEC)
        except TimeoutError:
            logger.warning("In-flight translation timeout for key: %s", key)
            async with self._lock:
                if self._inflight.get(key) is fut:
                    self._inflight.pop(key, None)
            msg: str = f"In-flight translation timed out for key: {key}"
            raise TimeoutError(msg) from None
        except asyncio.CancelledError:
            if not fut.cancelled():
                raise
            logger.warning("In-flight translation discarded for key: %s", key)
            msg = f"In-flight translation discarded for key: {key}"
            raise TimeoutError(msg) from None

    async def store_inflight_result(self, key: str, result: TranslationResponse) -> None:
        """Publish the producer's result to all waiters and release the key."""
        async with self._lock:
            fut: asyncio.Future[TranslationResponse] | None = self._inflight.pop(key, None)
            if fut is not None and not fut.done():
                fut.set_result(result)
                logger.debug("Set in-flight translation result for key: %s", key)
            else:
                logger.debug("No pending in-flight future for key: %s", key)

    async def discard_inflight(self, key: str) -> None:
        """Release a key without a result; waiters get TimeoutError and translate on their own."""
        async with self._lock:
            fut: asyncio.Future[TranslationResponse] | None = self._inflight.pop(key, None)
            if fut is not None and not fut.done():
                fut.cancel()
                logger.debug("Discarded in-flight future for key: %s", key)

    async def clear(self) -> None:
        """Discard every pending key."""
        async with self._lock:
            for fut in self._inflight.values():
                if not fut.done():
                    fut.cancel()
            self._inflight.clear()
        logger.info("In-flight state cleared")
