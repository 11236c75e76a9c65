# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Replay of a finished Robot Framework run into the aggregator.

Walks the result tree of an output.xml with Robot's ResultVisitor API and
emits the same lifecycle events the listener emits during a live run, using
the recorded start and end times instead of the current time.
"""

import logging
from pathlib import Path
from typing import Any

from robot.api import ExecutionResult
from robot.result import ResultVisitor

from trx_reporter.core.aggregator import EventAggregator
from trx_reporter.core.types import FailureKind, TestState
from trx_reporter.robot.translation import (
    ScopeRegistry,
    apply_test_result,
    hook_failure,
)

logger = logging.getLogger(__name__)


class ResultReplayer(ResultVisitor):
    """Visitor translating a Robot result tree into aggregator events.

    Attributes:
        aggregator: Event aggregator receiving the events
        report_path: Path of the written report after the root suite ended
    """

    def __init__(self, aggregator: EventAggregator) -> None:
        self.aggregator = aggregator
        self.report_path: Path | None = None
        self._registry = ScopeRegistry()

    def start_suite(self, suite: Any) -> None:
        if suite.parent is None:
            self._registry = ScopeRegistry()
            self._registry.register(suite)
            self.aggregator.run_begin()

    def end_keyword(self, keyword: Any) -> None:
        failure = hook_failure(keyword, self._registry)
        if failure is not None:
            self.aggregator.fail(FailureKind.HOOK, failure)

    def visit_test(self, test: Any) -> None:
        # Keywords inside tests are not visited, test failures are taken
        # from the test status.
        record = self._registry.record(test)
        self.aggregator.test_begin(record, at=test.start_time)
        apply_test_result(record, test)
        if record.state is TestState.FAILED:
            self.aggregator.fail(FailureKind.TEST, record)
        self.aggregator.test_end(record, at=test.end_time)

    def end_suite(self, suite: Any) -> None:
        scope = self._registry.scope(suite)
        if scope is not None:
            self.aggregator.scope_end(scope)
        if suite.parent is None:
            self.report_path = self.aggregator.run_end()


def replay_output(output_xml: Path, aggregator: EventAggregator) -> Path | None:
    """Replay an output.xml file and write its report.

    Args:
        output_xml: Robot Framework output.xml
        aggregator: Aggregator wired to a ReportEmitter

    Returns:
        Path of the written report, or None if it could not be written.

    Raises:
        FileNotFoundError: If output.xml doesn't exist
        robot.errors.DataError: If the file is not a valid Robot result
    """
    if not output_xml.exists():
        raise FileNotFoundError(f"output.xml not found: {output_xml}")

    logger.info(f"Replaying Robot results from {output_xml}")
    result = ExecutionResult(str(output_xml))
    replayer = ResultReplayer(aggregator)
    result.visit(replayer)
    return replayer.report_path
