# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Event aggregation for a single test run.

The aggregator consumes the lifecycle events of the host runner, keeps the
set of test records retained for the report and synthesizes failures for
tests that could not run because a hook guarding their scope failed.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from trx_reporter.core.models import (
    ErrorDetail,
    HookFailure,
    RunStats,
    Scope,
    TestRecord,
)
from trx_reporter.core.types import FailureKind, TestState

logger = logging.getLogger(__name__)


class RunReceiver(Protocol):
    """Receives the frozen records once the run has ended."""

    def emit(self, records: list[TestRecord], stats: RunStats) -> Path | None: ...


def _now() -> datetime:
    return datetime.now(timezone.utc)


class EventAggregator:
    """Builds the authoritative set of test records from runner events.

    Events are delivered synchronously on one thread. The retained records and
    the unresolved hook failure are owned by the aggregator for the duration
    of the run.

    Attributes:
        receiver: Consumer of the frozen records at run end, usually a
            ReportEmitter
    """

    def __init__(self, receiver: RunReceiver) -> None:
        self.receiver = receiver
        self._retained: dict[tuple[str, str], TestRecord] = {}
        self._failed_hook: HookFailure | None = None

    @property
    def records(self) -> list[TestRecord]:
        """Retained records in first-insertion order."""
        return list(self._retained.values())

    @property
    def failed_hook(self) -> HookFailure | None:
        return self._failed_hook

    def run_begin(self) -> None:
        self._retained = {}
        self._failed_hook = None

    def test_begin(self, record: TestRecord, at: datetime | None = None) -> None:
        record.start = at or _now()

    def test_end(self, record: TestRecord, at: datetime | None = None) -> None:
        record.end = at or _now()
        self._retain(record)

    def fail(self, kind: FailureKind, subject: TestRecord | HookFailure) -> None:
        """Handle a failure event.

        Hook failures become the unresolved hook failure until their scope
        ends. A failed test without a terminal state is marked failed.
        """
        if kind is FailureKind.HOOK:
            if not isinstance(subject, HookFailure):
                raise TypeError(f"Hook failure expected, got {type(subject).__name__}")
            if self._failed_hook is not None:
                logger.debug(
                    f"Replacing unresolved {self._failed_hook.title} failure on "
                    f'"{self._failed_hook.scope.full_title}"'
                )
            self._failed_hook = subject
            logger.debug(f'{subject.title} failed on "{subject.scope.full_title}"')
        elif isinstance(subject, TestRecord) and subject.state is None:
            subject.state = TestState.FAILED

    def scope_end(self, scope: Scope) -> None:
        """Reconcile the tests of a scope whose hook failed.

        Every pending or unsettled test of the scope gets an error naming the
        hook and is retained. Tests with a terminal state are left alone.
        """
        hook = self._failed_hook
        if hook is None or hook.scope is not scope:
            return

        message = f'Not executed due to {hook.title} on "{scope.full_title}"'
        if hook.error.message:
            message = f"{message}: {hook.error.message}"

        for record in scope.each_test():
            if not record.pending and record.state is not None:
                continue
            record.error = ErrorDetail(message=message, stack=hook.error.stack)
            if record.state is None:
                record.state = TestState.FAILED
            self._retain(record)

        self._failed_hook = None

    def run_end(self) -> Path | None:
        """Freeze the retained records and hand them to the receiver.

        Returns:
            Whatever the receiver returns, the report path for a ReportEmitter.
        """
        records = self.records
        for record in records:
            record.freeze()
        stats = RunStats.from_records(records)
        logger.debug(f"Run ended with {len(records)} retained tests")
        try:
            return self.receiver.emit(records, stats)
        finally:
            self._retained = {}
            self._failed_hook = None

    def _retain(self, record: TestRecord) -> None:
        self._retained.setdefault(record.identity, record)
