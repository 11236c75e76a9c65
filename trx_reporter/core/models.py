# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Data models for the result-aggregation pipeline.

Test records are collected while the run is in progress and frozen once the
run ends. Report entries and run metadata are the report-native projections
built from them.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from trx_reporter.core.types import Outcome, TestState


class FrozenRecordError(AttributeError):
    """Raised when a frozen test record is modified."""


@dataclass(frozen=True)
class ErrorDetail:
    """Failure message and stack trace attached to a test or hook."""

    message: str = ""
    stack: str = ""


@dataclass(eq=False)
class TestRecord:
    """One test case observed during a run.

    Records stay mutable while events arrive. ``freeze()`` is called when the
    run ends; from then on every attribute assignment raises
    ``FrozenRecordError`` and annotated copies are made with
    ``dataclasses.replace``.

    Attributes:
        title: Leaf name of the test
        full_title: Full hierarchical title, the identity of the test
        file: Source file of the test, if known
        start: Instant the test began
        end: Instant the test ended
        state: Terminal state, ``None`` while unset
        pending: Test was skipped or marked pending
        timed_out: Test was stopped by a timeout
        error: Failure detail, if any
        artifact: Basename of the relocated failure screenshot
        duration_ms: Elapsed time reported by the runner
    """

    __test__ = False

    title: str
    full_title: str
    file: str | None = None
    start: datetime | None = None
    end: datetime | None = None
    state: TestState | None = None
    pending: bool = False
    timed_out: bool = False
    error: ErrorDetail | None = None
    artifact: str | None = None
    duration_ms: int | None = None
    _frozen: bool = field(default=False, init=False, repr=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if self._frozen:
            raise FrozenRecordError(
                f"Test record '{self.full_title}' is frozen, cannot set '{name}'"
            )
        super().__setattr__(name, value)

    def freeze(self) -> None:
        """Make the record immutable."""
        object.__setattr__(self, "_frozen", True)

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def identity(self) -> tuple[str, str]:
        """Stable key used to deduplicate records within a run."""
        return (self.file or "", self.full_title)

    @property
    def is_failed(self) -> bool:
        """Failed and not pending."""
        return not self.pending and self.state is TestState.FAILED

    @property
    def elapsed_ms(self) -> int:
        """Elapsed time in whole milliseconds.

        Prefers the runner-reported duration, falls back to end - start, and
        is 0 when neither is available.
        """
        if self.duration_ms is not None:
            return max(self.duration_ms, 0)
        if self.start is not None and self.end is not None:
            try:
                delta = self.end - self.start
            except TypeError:
                # naive and aware datetimes mixed
                return 0
            return max(int(delta.total_seconds() * 1000), 0)
        return 0


@dataclass(eq=False)
class Scope:
    """A suite of tests and nested scopes sharing setup/teardown hooks."""

    title: str
    full_title: str
    tests: list[TestRecord] = field(default_factory=list)
    scopes: list["Scope"] = field(default_factory=list)

    def each_test(self) -> Iterator[TestRecord]:
        """Yield every test of this scope and its child scopes, depth-first."""
        yield from self.tests
        for child in self.scopes:
            yield from child.each_test()


@dataclass(frozen=True)
class HookFailure:
    """A failed setup/teardown hook and the scope it guards."""

    title: str
    scope: Scope
    error: ErrorDetail


@dataclass(frozen=True)
class RunStats:
    """Timing window of a run, aggregated over the retained records."""

    start: datetime | None = None
    end: datetime | None = None

    @classmethod
    def from_records(cls, records: list[TestRecord]) -> "RunStats":
        # astimezone() makes naive (local) and aware instants comparable
        starts = [r.start.astimezone() for r in records if r.start is not None]
        ends = [r.end.astimezone() for r in records if r.end is not None]
        return cls(
            start=min(starts) if starts else None,
            end=max(ends) if ends else None,
        )


@dataclass(frozen=True)
class RunMetadata:
    """Run-level report metadata."""

    name: str
    run_user: str
    run_id: str
    creation: datetime
    start: datetime
    finish: datetime
    deployment_root: str


@dataclass(frozen=True)
class ReportEntry:
    """Report-native form of one test record."""

    test_name: str
    code_base: str
    method_name: str
    class_name: str
    computer_name: str
    outcome: Outcome
    duration: str
    start_time: str
    end_time: str
    error_message: str
    error_stacktrace: str
    execution_id: str
    result_files: tuple[str, ...] = ()
