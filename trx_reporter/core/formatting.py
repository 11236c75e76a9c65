# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Mapping of test records onto TRX outcomes, durations and timestamps."""

from datetime import datetime, timezone

from trx_reporter.core.models import TestRecord
from trx_reporter.core.options import ReporterOptions
from trx_reporter.core.types import Outcome, TestState

_MS_PER_HOUR = 3_600_000
_MS_PER_MINUTE = 60_000
_MS_PER_SECOND = 1_000


def format_outcome(record: TestRecord, options: ReporterOptions | None = None) -> Outcome:
    """Transform a test record into a TRX outcome.

    Timed out tests are always ``Timeout``. Pending tests are ``Pending``, or
    ``NotExecuted`` when ``treat_pending_as_not_executed`` is set, unless an
    error is attached, which makes them ``Failed``. Otherwise the state maps:

    State     | TRX outcome
    --------------------------
    passed    | Passed
    failed    | Failed
    None      | Inconclusive
    """
    options = options or ReporterOptions()
    if record.timed_out:
        return Outcome.TIMEOUT
    if record.pending:
        if record.error is not None:
            return Outcome.FAILED
        if options.treat_pending_as_not_executed:
            return Outcome.NOT_EXECUTED
        return Outcome.PENDING
    if record.state is TestState.PASSED:
        return Outcome.PASSED
    if record.state is TestState.FAILED:
        return Outcome.FAILED
    return Outcome.INCONCLUSIVE


def format_duration(milliseconds: int) -> str:
    """Format an elapsed time as a TRX duration.

    input     | output
    ---------------------------
    2         | '00:00:00.002'
    61001     | '00:01:01.001'
    """
    remaining = max(int(milliseconds), 0)
    hours, remaining = divmod(remaining, _MS_PER_HOUR)
    minutes, remaining = divmod(remaining, _MS_PER_MINUTE)
    seconds, millis = divmod(remaining, _MS_PER_SECOND)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def format_timestamp(instant: datetime | None) -> str:
    """Format an instant as UTC ISO-8601 with milliseconds.

    Naive datetimes are taken as local time. ``None`` yields an empty string.
    """
    if instant is None:
        return ""
    return instant.astimezone(timezone.utc).isoformat(timespec="milliseconds")
