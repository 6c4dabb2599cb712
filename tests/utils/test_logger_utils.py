from __future__ import annotations

import logging
import warnings
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

import pytest

from transcache.models.config_models import General
from transcache.utils.logger_utils import DEFAULT_NAMESPACE, LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture
def fresh_logger_utils(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Reset the singleton and strip handlers so each test configures from scratch."""
    root: logging.Logger = logging.getLogger(DEFAULT_NAMESPACE)
    saved_handlers: list[logging.Handler] = list(root.handlers)
    saved_level: int = root.level
    monkeypatch.setattr(LoggerUtils, "_instance", None)
    monkeypatch.setattr(LoggerUtils, "_configured", False)
    monkeypatch.setattr(warnings, "showwarning", warnings.showwarning)
    root.handlers.clear()
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_get_logger_is_namespaced() -> None:
    assert LoggerUtils.get_logger("transcache.core").name == f"{DEFAULT_NAMESPACE}.transcache.core"
    assert LoggerUtils.get_logger().name == DEFAULT_NAMESPACE


@pytest.mark.usefixtures("fresh_logger_utils")
def test_console_and_file_handlers(tmp_path: Path) -> None:
    log_file: Path = tmp_path / "transcache.log"

    utils = LoggerUtils(log_file)
    utils.set_level("DEBUG")
    LoggerUtils.get_logger("test").debug("written to file")

    handlers: list[logging.Handler] = utils.root_logger.handlers
    assert any(type(h) is logging.StreamHandler for h in handlers)
    assert any(isinstance(h, RotatingFileHandler) for h in handlers)
    for handler in handlers:
        handler.flush()
    assert "written to file" in log_file.read_text(encoding="utf-8")


@pytest.mark.usefixtures("fresh_logger_utils")
def test_second_instantiation_is_noop() -> None:
    first = LoggerUtils(use_null_console=True)
    count: int = len(first.root_logger.handlers)

    second = LoggerUtils(use_null_console=True)

    assert second is first
    assert len(second.root_logger.handlers) == count


@pytest.mark.usefixtures("fresh_logger_utils")
def test_unknown_level_falls_back_to_info() -> None:
    utils = LoggerUtils(use_null_console=True)

    utils.set_level("chatty")

    assert utils.get_level().name == "INFO"


@pytest.mark.usefixtures("fresh_logger_utils")
def test_initialize_after_configuration_raises() -> None:
    LoggerUtils(use_null_console=True)

    with pytest.raises(RuntimeError):
        LoggerUtils.initialize("Other")


@pytest.mark.usefixtures("fresh_logger_utils")
def test_from_config_applies_general_section(tmp_path: Path) -> None:
    log_file: Path = tmp_path / "from_config.log"
    general = General(DEBUG=True, LOG_FILE=str(log_file))

    utils = LoggerUtils.from_config(general, use_null_console=True)

    assert utils.get_level().name == "DEBUG"
    assert any(isinstance(h, RotatingFileHandler) for h in utils.root_logger.handlers)


@pytest.mark.usefixtures("fresh_logger_utils")
def test_from_config_without_debug_uses_info() -> None:
    utils = LoggerUtils.from_config(General(), use_null_console=True)

    assert utils.get_level().name == "INFO"
    assert not any(isinstance(h, RotatingFileHandler) for h in utils.root_logger.handlers)
