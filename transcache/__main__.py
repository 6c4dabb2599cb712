"""Command-line front end for transcache.

Translates the given texts into a language through the configured cache and engines, or prints cache
statistics with ``--stats``.

This is a console-only application; logging goes to the file named in the configuration, if any.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final, NoReturn

from transcache.config.loader import ConfigFileNotFoundError, ConfigLoader, ConfigLoaderError
from transcache.core.cache.inflight_manager import InFlightManager
from transcache.core.cache.manager import TranslationCacheManager
from transcache.core.cache.storage import KeyValueStorage, StorageError, create_storage
from transcache.core.trans.manager import TransManager
from transcache.models.config_models import Config
from transcache.models.translation_models import TranslationRequest, TranslationResponse
from transcache.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from transcache.models.cache_models import CacheStatistics

CFG_FILE: Final[str] = "transcache.ini"


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(2)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = _ArgumentParser(
        prog="transcache",
        description="Translate text through the persistent translation cache",
        epilog='Example: python -m transcache --lang es "Hello" "Good morning"',
    )
    parser.add_argument("texts", nargs="*", metavar="TEXT", help="Texts to translate")
    parser.add_argument("--lang", dest="lang", metavar="LANG", help="Override target language")
    parser.add_argument("--config", dest="config", metavar="FILE", default=CFG_FILE, help="Configuration file")
    parser.add_argument("--debug", dest="debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--stats", dest="stats", action="store_true", help="Print cache statistics and exit")
    parser.add_argument("--json", dest="json", action="store_true", help="Print one JSON object per text")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Load the configuration file and apply CLI overrides.

    A missing default file is not an error; built-in defaults are used instead.

    Raises:
        ConfigLoaderError: If the file exists but cannot be loaded, or an explicitly named file is missing.
    """
    script_name: str = Path(sys.argv[0]).stem
    try:
        return ConfigLoader(
            config_filename=args.config, script_name=script_name, lang=args.lang, debug=args.debug
        ).config
    except ConfigFileNotFoundError:
        if args.config != CFG_FILE:
            raise
    config = Config()
    if args.lang is not None:
        config.TRANSLATION.TARGET_LANGUAGE = args.lang.strip().lower()
    config.GENERAL.DEBUG = bool(args.debug)
    return config


def format_statistics(stats: CacheStatistics) -> str:
    lines: list[str] = [
        f"Total entries:    {stats.total_entries}",
        f"Trusted entries:  {stats.trusted_entries}",
        f"Fallback entries: {stats.fallback_entries}",
    ]
    lines.extend(f"  {language}: {count}" for language, count in sorted(stats.language_distribution.items()))
    return "\n".join(lines)


def format_result(text: str, language: str, translated: str) -> str:
    """Request and response merged into one camelCase JSON object."""
    record: dict[str, str | None] = TranslationRequest(text=text, target_language=language).to_dict()
    record.update(TranslationResponse(translated_text=translated).to_dict())
    return json.dumps(record, ensure_ascii=False)


async def run(config: Config, args: argparse.Namespace) -> int:
    storage: KeyValueStorage = create_storage(config.CACHE.BACKEND, config.CACHE.PATH)
    cache_manager = TranslationCacheManager(storage, storage_key=config.CACHE.STORAGE_KEY)
    try:
        if args.stats:
            print(format_statistics(await cache_manager.get_cache_statistics()))
            return 0

        if not args.texts:
            print("No text given.", file=sys.stderr)
            return 2

        inflight: InFlightManager | None = InFlightManager() if config.TRANSLATION.SINGLE_FLIGHT else None
        trans_manager = TransManager(config, cache_manager, inflight_manager=inflight)
        await trans_manager.initialize()
        try:
            results: list[str] = await asyncio.gather(*(trans_manager.translate(text) for text in args.texts))
        finally:
            await trans_manager.shutdown_engines()
        for text, result in zip(args.texts, results, strict=True):
            print(format_result(text, trans_manager.language, result) if args.json else result)
        return 0
    finally:
        storage.close()


def main(argv: list[str] | None = None) -> int:
    args: argparse.Namespace = parse_arguments(argv)
    try:
        config: Config = load_config(args)
    except ConfigLoaderError as err:
        print("\nError: Failed to load configuration file.", file=sys.stderr)
        print(f"Details: {err}", file=sys.stderr)
        return 1

    LoggerUtils.from_config(config.GENERAL)

    try:
        return asyncio.run(run(config, args))
    except (StorageError, ValueError, RuntimeError) as err:
        print(f"\nError: {err}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nCancelled by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
