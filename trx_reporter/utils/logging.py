# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Logging configuration for trx-reporter."""

import logging
import sys
from enum import Enum

import errorhandler

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


class VerbosityLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def configure_logging(
    level: str | VerbosityLevel,
    error_handler: errorhandler.ErrorHandler | None = None,
) -> None:
    """Configure the root logger with a stderr handler.

    Args:
        level: Verbosity level name
        error_handler: Optional error handler, reset so that only errors logged
            from now on make it fire

    Raises:
        ValueError: If the level is not a known verbosity level.
    """
    verbosity = VerbosityLevel(str(getattr(level, "value", level)).upper())
    logging_level = getattr(logging, verbosity.value)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, logging.StreamHandler) and getattr(
            handler, "_trx_reporter", False
        ):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._trx_reporter = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(logging_level)

    if error_handler is not None:
        error_handler.reset()
