# tests/conftest.py

from collections.abc import Iterator

import pytest

import windcfg.logs as mod_logs
from tests.utils import DEFAULT_TEST_LOG_LEVEL
from tests.utils.log_fixtures import module_logger


__all__ = ["module_logger"]  # fixtures pytest must see


@pytest.fixture(autouse=True)
def _pin_app_log_level() -> Iterator[None]:
    # resolve_config() changes the shared package logger level
    logger = mod_logs.getAppLogger()
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)
    yield
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)
