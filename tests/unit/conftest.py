# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Shared fixtures for unit tests."""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from lxml import etree as ET

from trx_reporter.core.emitter import ReportEmitter
from trx_reporter.core.options import ReporterOptions


@pytest.fixture
def reporter_options() -> ReporterOptions:
    """Options reading screenshots from <cwd>/shots/ and writing to <cwd>/out."""
    return ReporterOptions(
        input_screenshot_path="shots/",
        output_path="out",
        output_screenshot_folder="screenshots",
    )


@pytest.fixture
def make_emitter(
    tmp_path: Path, reporter_options: ReporterOptions
) -> Callable[..., ReportEmitter]:
    """Factory for emitters rooted in tmp_path with a fixed host and user."""

    def _make(options: ReporterOptions | None = None) -> ReportEmitter:
        return ReportEmitter(
            options or reporter_options,
            cwd=tmp_path,
            computer_name="build-agent",
            user_name="ci",
        )

    return _make


@pytest.fixture
def parse_trx() -> Callable[[Path], Any]:
    """Parse a written TRX file and return its root element."""

    def _parse(path: Path) -> Any:
        return ET.parse(str(path)).getroot()

    return _parse


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    """Undo handler and level changes made by configure_logging()."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
