# src/windcfg/logs.py
"""Package logger wiring.

Every module logs through `getAppLogger()`. The level comes from
WINDCFG_LOG_LEVEL, then LOG_LEVEL, then the package default.
"""

import logging
from typing import cast

from apathetic_logging import (
    Logger,
    registerDefaultLogLevel,
    registerLogger,
    registerLogLevelEnvVars,
)

from .constants import DEFAULT_ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL
from .meta import PROGRAM_ENV, PROGRAM_PACKAGE


class AppLogger(Logger):
    """Logger class for windcfg (TRACE and SILENT levels included)."""


def _configure_logging() -> AppLogger:
    # order matters: the class and the env lookup must be in place before
    # the package logger is first created
    logging.setLoggerClass(AppLogger)
    AppLogger.extendLoggingModule()

    env_names = [f"{PROGRAM_ENV}_{DEFAULT_ENV_LOG_LEVEL}", DEFAULT_ENV_LOG_LEVEL]
    registerLogLevelEnvVars(env_names)
    registerDefaultLogLevel(DEFAULT_LOG_LEVEL)
    registerLogger(PROGRAM_PACKAGE)

    return cast("AppLogger", logging.getLogger(PROGRAM_PACKAGE))


_APP_LOGGER = _configure_logging()


def getAppLogger() -> AppLogger:  # noqa: N802
    """Return the windcfg package logger."""
    return _APP_LOGGER
