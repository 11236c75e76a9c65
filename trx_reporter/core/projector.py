# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Projection of frozen test records onto TRX report entries."""

import os

from trx_reporter.core.constants import NONE_PLACEHOLDER
from trx_reporter.core.formatting import (
    format_duration,
    format_outcome,
    format_timestamp,
)
from trx_reporter.core.models import ReportEntry, TestRecord
from trx_reporter.core.options import ReporterOptions


def _relative_code_base(file: str | None, cwd: str | None) -> str:
    if not file:
        return NONE_PLACEHOLDER
    try:
        return os.path.relpath(file, cwd or os.curdir)
    except ValueError:
        # No relative path exists, e.g. different drives on Windows
        return file


def project_result(
    record: TestRecord,
    computer_name: str,
    cwd: str | None,
    options: ReporterOptions | None,
    execution_id: str,
) -> ReportEntry:
    """Transform a test record into a TRX report entry.

    Args:
        record: Frozen test record
        computer_name: Host the run executed on
        cwd: Base directory the code base path is made relative to
        options: Reporter options, used for the outcome mapping
        execution_id: Identifier shared by all entries of the run

    Returns:
        The report entry. Missing data degrades to placeholders: ``none`` for
        the code base, empty strings for timestamps and error fields.
    """
    error = record.error
    return ReportEntry(
        test_name=record.full_title,
        code_base=_relative_code_base(record.file, cwd),
        method_name=NONE_PLACEHOLDER,
        class_name=NONE_PLACEHOLDER,
        computer_name=computer_name,
        outcome=format_outcome(record, options),
        duration=format_duration(record.elapsed_ms),
        start_time=format_timestamp(record.start),
        end_time=format_timestamp(record.end),
        error_message=error.message if error else "",
        error_stacktrace=error.stack if error else "",
        execution_id=execution_id,
        result_files=(str(record.artifact),) if record.artifact else (),
    )
