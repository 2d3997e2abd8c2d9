"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config, data and log
directories.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point every platformdirs lookup at *tmp_path*.

    Also resets the logger singleton and the cached ConfigService so each
    test starts from a clean slate.
    """
    import pom_cli.utils.logger as logger_mod
    from pom_cli.services.config_service import get_config_service

    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    log_dir = tmp_path / "logs"

    logger_mod._logger = None
    get_config_service.cache_clear()
    with (
        patch("pom_cli.utils.logger.user_log_dir", return_value=str(log_dir)),
        patch(
            "pom_cli.services.config_service.user_config_dir",
            return_value=str(config_dir),
        ),
        patch(
            "pom_cli.models.focus.history.user_data_dir", return_value=str(data_dir)
        ),
    ):
        yield tmp_path

    app_logger = logging.getLogger("pom_cli")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
    logger_mod._logger = None
    get_config_service.cache_clear()


@pytest.fixture()
def tmp_config():
    """Provide the real ConfigService backed by the isolated config dir."""
    from pom_cli.services.config_service import get_config_service

    return get_config_service()

