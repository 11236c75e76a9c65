# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Unit tests for logging configuration."""

import logging

import errorhandler
import pytest

from trx_reporter.utils.logging import VerbosityLevel, configure_logging


def _trx_handlers(root: logging.Logger) -> list[logging.Handler]:
    return [h for h in root.handlers if getattr(h, "_trx_reporter", False)]


def test_sets_root_level(restore_root_logger: logging.Logger) -> None:
    configure_logging(VerbosityLevel.INFO)

    assert restore_root_logger.level == logging.INFO
    assert len(_trx_handlers(restore_root_logger)) == 1


def test_accepts_lower_case_names(restore_root_logger: logging.Logger) -> None:
    configure_logging("debug")

    assert restore_root_logger.level == logging.DEBUG


def test_reconfiguring_replaces_handler(restore_root_logger: logging.Logger) -> None:
    configure_logging(VerbosityLevel.DEBUG)
    configure_logging(VerbosityLevel.ERROR)

    assert restore_root_logger.level == logging.ERROR
    assert len(_trx_handlers(restore_root_logger)) == 1


def test_unknown_level(restore_root_logger: logging.Logger) -> None:
    with pytest.raises(ValueError):
        configure_logging("chatty")


def test_resets_error_handler(restore_root_logger: logging.Logger) -> None:
    # installs itself on the root logger, removed again by restore_root_logger
    handler = errorhandler.ErrorHandler()
    logging.getLogger("trx_reporter.test").error("earlier failure")
    assert handler.fired

    configure_logging(VerbosityLevel.WARNING, handler)

    assert not handler.fired
