# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Translation of Robot Framework model objects into aggregator inputs.

Works with both the running model (listener callbacks) and the result model
(output.xml replay); only attributes the two share are used.
"""

import logging
import re
from typing import Any

from robot import result as robot_result

from trx_reporter.core.models import ErrorDetail, HookFailure, Scope, TestRecord
from trx_reporter.core.types import TestState

logger = logging.getLogger(__name__)

# Robot's test timeout failure, e.g. "Test timeout 1 second exceeded."
_TIMEOUT_PATTERN = re.compile(r"^Test timeout .+ exceeded\.", re.IGNORECASE)

_PENDING_STATUSES = frozenset({"SKIP", "NOT RUN"})


class ScopeRegistry:
    """Scopes and test records of one run, keyed by Robot's item ids.

    The whole suite tree is registered when the run starts so that a scope
    knows all of its tests, including those that never get to run.
    """

    def __init__(self) -> None:
        self.scopes: dict[str, Scope] = {}
        self.records: dict[str, TestRecord] = {}

    def register(self, suite: Any) -> Scope:
        scope = Scope(title=suite.name, full_title=suite.full_name)
        self.scopes[suite.id] = scope
        for test in suite.tests:
            scope.tests.append(self._create_record(test))
        for child in suite.suites:
            scope.scopes.append(self.register(child))
        return scope

    def scope(self, suite: Any) -> Scope | None:
        return self.scopes.get(suite.id)

    def record(self, test: Any) -> TestRecord:
        """Fetch the record of a test, creating it for unregistered tests."""
        record = self.records.get(test.id)
        if record is None:
            record = self._create_record(test)
            parent = self.scopes.get(test.parent.id) if test.parent else None
            if parent is not None:
                parent.tests.append(record)
        return record

    def _create_record(self, test: Any) -> TestRecord:
        record = TestRecord(
            title=test.name,
            full_title=test.full_name,
            file=str(test.source) if test.source else None,
        )
        self.records[test.id] = record
        return record


def _failed_children(item: Any) -> list[Any]:
    children: list[Any] = []
    if getattr(item, "has_setup", False):
        children.append(item.setup)
    children.extend(getattr(item, "body", ()))
    if getattr(item, "has_teardown", False):
        children.append(item.teardown)
    return [child for child in children if getattr(child, "failed", False)]


def failure_trace(item: Any) -> str:
    """Describe the chain of failed keywords below ``item``, outermost first."""
    lines: list[str] = []
    depth = 0
    current: Any = item
    while current is not None:
        label = (
            getattr(current, "full_name", None)
            or getattr(current, "name", None)
            or current.type
        )
        if current is not item or isinstance(current, robot_result.Keyword):
            lines.append(f"{'  ' * depth}{label} [{current.type}]")
            depth += 1
        failed = _failed_children(current)
        current = failed[0] if failed else None
    return "\n".join(lines)


def apply_test_result(record: TestRecord, test: Any) -> None:
    """Copy status, failure and timing of a finished Robot test onto a record."""
    status = test.status
    message = test.message or ""

    record.pending = status in _PENDING_STATUSES
    if status == "PASS":
        record.state = TestState.PASSED
    elif status == "FAIL":
        record.state = TestState.FAILED
        record.timed_out = bool(_TIMEOUT_PATTERN.match(message))
        record.error = ErrorDetail(message=message, stack=failure_trace(test))

    elapsed = getattr(test, "elapsed_time", None)
    if elapsed is not None:
        record.duration_ms = int(elapsed.total_seconds() * 1000)


def hook_failure(keyword: Any, registry: ScopeRegistry) -> HookFailure | None:
    """Return the hook failure for a failed suite setup or teardown keyword."""
    if keyword.type not in (keyword.SETUP, keyword.TEARDOWN):
        return None
    if not keyword.failed or not isinstance(keyword.parent, robot_result.TestSuite):
        return None

    scope = registry.scope(keyword.parent)
    if scope is None:
        logger.debug(f"Ignoring failed hook of unknown suite {keyword.parent.full_name}")
        return None

    return HookFailure(
        title=f'Suite {keyword.type.title()} "{keyword.name}"',
        scope=scope,
        error=ErrorDetail(message=keyword.message or "", stack=failure_trace(keyword)),
    )
