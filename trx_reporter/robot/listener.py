# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Robot Framework listener writing a TRX report at the end of the run.

Usage:
    robot --listener "trx_reporter.TrxListener:output_path=results:exclude_pending=true" tests/

Arguments are reporter option names (snake_case or the camelCase spellings,
e.g. ``inputscreenshotpath``) plus an optional ``verbosity`` log level.
"""

import logging
from pathlib import Path
from typing import Any

from trx_reporter.core.aggregator import EventAggregator
from trx_reporter.core.emitter import ReportEmitter
from trx_reporter.core.options import ReporterOptions
from trx_reporter.core.types import FailureKind, TestState
from trx_reporter.robot.translation import (
    ScopeRegistry,
    apply_test_result,
    hook_failure,
)
from trx_reporter.utils.logging import configure_logging

logger = logging.getLogger(__name__)


class TrxListener:
    """Listener API v3 adapter feeding Robot events into the aggregator.

    Attributes:
        options: Parsed reporter options
        aggregator: Event aggregator for the current run
        report_path: Path of the written report once the run has ended
    """

    ROBOT_LISTENER_API_VERSION = 3

    def __init__(self, **arguments: str) -> None:
        verbosity = arguments.pop("verbosity", None)
        if verbosity:
            configure_logging(verbosity)
        self.options = ReporterOptions.from_mapping(arguments)
        self.aggregator = EventAggregator(ReportEmitter(self.options))
        self.report_path: Path | None = None
        self._registry = ScopeRegistry()

    def start_suite(self, data: Any, result: Any) -> None:
        if data.parent is None:
            self._registry = ScopeRegistry()
            self._registry.register(data)
            self.aggregator.run_begin()

    def start_test(self, data: Any, result: Any) -> None:
        self.aggregator.test_begin(self._registry.record(data))

    def end_test(self, data: Any, result: Any) -> None:
        record = self._registry.record(data)
        apply_test_result(record, result)
        if record.state is TestState.FAILED:
            self.aggregator.fail(FailureKind.TEST, record)
        self.aggregator.test_end(record)

    def end_keyword(self, data: Any, result: Any) -> None:
        failure = hook_failure(result, self._registry)
        if failure is not None:
            self.aggregator.fail(FailureKind.HOOK, failure)

    def end_suite(self, data: Any, result: Any) -> None:
        scope = self._registry.scope(data)
        if scope is not None:
            self.aggregator.scope_end(scope)
        if data.parent is None:
            self.report_path = self.aggregator.run_end()
            if self.report_path is not None:
                logger.info(f"TRX report: {self.report_path}")
