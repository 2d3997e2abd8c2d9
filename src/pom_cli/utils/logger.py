"""Application-wide logger writing to platformdirs user_log_dir."""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "pom_cli"
_LOG_FILE = "pom.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def get_logger() -> logging.Logger:
    """Return the application logger, initialising the file handler on first call.

    The timer owns the terminal while it runs, so nothing is ever logged to
    stdout/stderr; everything goes to a rotating file instead. Handlers that
    other code attached to the logger are left in place.
    """
    global _logger
    if _logger is None:
        log_dir = Path(user_log_dir(_APP_NAME))
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = os.path.abspath(log_dir / _LOG_FILE)

        logger = logging.getLogger(_APP_NAME)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        if not _has_file_handler(logger, log_path):
            handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=_MAX_BYTES,
                backupCount=_BACKUP_COUNT,
                encoding="utf-8",
            )
            handler.setFormatter(
                logging.Formatter(
                    fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                    datefmt="%Y-%m-%dT%H:%M:%S",
                )
            )
            logger.addHandler(handler)

        _logger = logger

    return _logger


def _has_file_handler(logger: logging.Logger, log_path: str) -> bool:
    return any(
        isinstance(h, logging.handlers.RotatingFileHandler) and h.baseFilename == log_path
        for h in logger.handlers
    )
