# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Result-aggregation and report-materialization pipeline."""

from trx_reporter.core.aggregator import EventAggregator
from trx_reporter.core.emitter import ReportEmitter
from trx_reporter.core.models import (
    ErrorDetail,
    FrozenRecordError,
    HookFailure,
    ReportEntry,
    RunMetadata,
    RunStats,
    Scope,
    TestRecord,
)
from trx_reporter.core.options import ReporterOptions
from trx_reporter.core.types import FailureKind, Outcome, TestState

__all__ = [
    # Pipeline
    "EventAggregator",
    "ReportEmitter",
    "ReporterOptions",
    # Models
    "ErrorDetail",
    "FrozenRecordError",
    "HookFailure",
    "ReportEntry",
    "RunMetadata",
    "RunStats",
    "Scope",
    "TestRecord",
    # Types
    "FailureKind",
    "Outcome",
    "TestState",
]
