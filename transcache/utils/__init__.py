"""Utility modules for transcache.

This package provides logging setup and the string helpers used for cache keys and fallback markers.
"""

from transcache.utils.logger_utils import LoggerUtils
from transcache.utils.string_utils import StringUtils

__all__: list[str] = ["LoggerUtils", "StringUtils"]
