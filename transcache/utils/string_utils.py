from __future__ import annotations

from typing import Final

__all__: list[str] = ["StringUtils"]

_INT32_MASK: Final[int] = 0xFFFFFFFF
_INT32_SIGN: Final[int] = 0x80000000


class StringUtils:
    """Utility class for string handling shared by the cache and translation layers."""

    @staticmethod
    def to_int32(value: int) -> int:
        """Truncate an integer to the signed 32-bit range (two's complement wraparound)."""
        value &= _INT32_MASK
        return value - 0x100000000 if value & _INT32_SIGN else value

    @staticmethod
    def utf16_code_units(text: str) -> list[int]:
        """Split text into UTF-16 code units.

        Characters outside the BMP become a surrogate pair, two units.
        """
        data: bytes = text.encode("utf-16-le", errors="surrogatepass")
        return [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]

    @staticmethod
    def fingerprint(text: str) -> str:
        """Derive the cache key for a source text.

        Rolling ``acc = acc * 31 + code`` over UTF-16 code units, truncated to signed 32 bits at each
        step. Not collision-free and not meant to be; stable across runs and cheap.

        Args:
            text (str): Exact source text.

        Returns:
            str: Decimal form of the accumulator, e.g. ``"69609650"`` for ``"Hello"``.
        """
        acc: int = 0
        for code in StringUtils.utf16_code_units(text):
            acc = StringUtils.to_int32((acc << 5) - acc + code)
        return str(acc)

    @staticmethod
    def fallback_prefix(language: str) -> str:
        """Prefix carried by a synthetic fallback translation for the given language."""
        return f"[{language}] "

    @staticmethod
    def make_fallback(text: str, language: str) -> str:
        """Build the fallback marker ``"[<lang>] <text>"``."""
        return StringUtils.fallback_prefix(language) + text

    @staticmethod
    def is_fallback(value: str, language: str) -> bool:
        """Check whether a cached value has the fallback marker shape for the language.

        A genuine translation that happens to start with the same prefix is also reported as a
        fallback; such entries are refetched on every access.
        """
        return value.startswith(StringUtils.fallback_prefix(language))
