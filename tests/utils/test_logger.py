"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

from pom_cli.utils.logger import get_logger


def test_get_logger_creates_log_file(tmp_path):
    """Logger creates the log file inside user_log_dir."""
    with patch("pom_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = get_logger()

    assert (tmp_path / "pom.log").exists(), "Log file should be created on first use"
    assert isinstance(logger, logging.Logger)
    assert logger.name == "pom_cli"
    assert logger.propagate is False


def test_get_logger_returns_singleton():
    """Repeated calls return the same logger instance."""
    assert get_logger() is get_logger()


def test_file_handler_added_next_to_foreign_handlers(isolated_dirs):
    """A handler attached by someone else does not suppress the log file."""
    app_logger = logging.getLogger("pom_cli")
    foreign = logging.NullHandler()
    app_logger.addHandler(foreign)

    logger = get_logger()
    logger.error("persist failed")

    assert foreign in logger.handlers
    assert any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
    )
    content = (isolated_dirs / "logs" / "pom.log").read_text()
    assert "persist failed" in content


def test_file_handler_not_duplicated(isolated_dirs):
    """Re-initialising the singleton reuses the existing file handler."""
    import pom_cli.utils.logger as logger_mod

    get_logger()
    logger_mod._logger = None
    logger = get_logger()

    file_handlers = [
        h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1


def test_get_logger_writes_message(isolated_dirs):
    """Messages written to the logger appear in the log file."""
    logger = get_logger()
    logger.info("hello from test")
    for handler in logger.handlers:
        handler.flush()

    content = (isolated_dirs / "logs" / "pom.log").read_text()
    assert "hello from test" in content
    assert "[pom_cli]" in content


def test_get_logger_creates_parent_dirs(tmp_path):
    """Logger creates nested directories if they do not exist."""
    nested = tmp_path / "a" / "b" / "c"
    with patch("pom_cli.utils.logger.user_log_dir", return_value=str(nested)):
        get_logger()

    assert nested.is_dir()
