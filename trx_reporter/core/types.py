# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Core enumerations for trx-reporter."""

from enum import Enum


class TestState(str, Enum):
    """Terminal state of a test as reported by the runner.

    A test without a terminal state (it never ran, or the runner never
    settled it) is represented by ``None`` on the record.
    """

    __test__ = False

    PASSED = "passed"
    FAILED = "failed"


class Outcome(str, Enum):
    """Closed TRX outcome vocabulary assigned to every report entry."""

    PASSED = "Passed"
    FAILED = "Failed"
    TIMEOUT = "Timeout"
    PENDING = "Pending"
    NOT_EXECUTED = "NotExecuted"
    INCONCLUSIVE = "Inconclusive"


class FailureKind(str, Enum):
    """Subject of a failure event: a test itself or a hook guarding a scope."""

    TEST = "test"
    HOOK = "hook"
