# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Report emission at the end of a run.

Given the frozen records, the emitter relocates the failure screenshots,
projects the records onto report entries and writes the TRX document:

    <output_path>/<execution id>.trx
    <output_path>/<output_screenshot_folder>/In/<execution id>/<screenshot>
"""

import getpass
import logging
import os
import socket
import uuid
from datetime import datetime, timezone
from pathlib import Path

from trx_reporter.core.artifacts import ArtifactCorrelator, build_search_pattern
from trx_reporter.core.constants import RELOCATED_ARTIFACTS_DIRNAME, TRX_EXTENSION
from trx_reporter.core.models import RunMetadata, RunStats, TestRecord
from trx_reporter.core.options import ReporterOptions
from trx_reporter.core.projector import project_result
from trx_reporter.reporting.trx_document import TrxDocument
from trx_reporter.utils.asyncio_utils import run_to_completion

logger = logging.getLogger(__name__)


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        # No passwd entry and no USER/LOGNAME variables, e.g. in containers
        return "unknown"


def build_run_name(user_name: str, computer_name: str, now: datetime) -> str:
    """Run name as ``<user>@<host> YYYY-MM-DD HH:MM:SS`` in local time."""
    return f"{user_name}@{computer_name} {now.astimezone():%Y-%m-%d %H:%M:%S}"


class ReportEmitter:
    """Writes the TRX report and relocated screenshots for a finished run.

    Attributes:
        options: Reporter options
        cwd: Base directory for all configured paths and for code base paths
        computer_name: Host name recorded in every result
        user_name: User recorded as the run user
    """

    def __init__(
        self,
        options: ReporterOptions,
        cwd: Path | str | None = None,
        computer_name: str | None = None,
        user_name: str | None = None,
    ) -> None:
        self.options = options
        self.cwd = str(cwd) if cwd is not None else os.getcwd()
        self.computer_name = computer_name or socket.gethostname()
        self.user_name = user_name or _current_user()

    @property
    def input_screenshot_path(self) -> str:
        # os.path.join keeps a trailing separator, the search pattern relies on it
        return os.path.join(self.cwd, self.options.input_screenshot_path)

    @property
    def output_dir(self) -> Path:
        return Path(self.cwd) / self.options.output_path

    def screenshot_dir(self, execution_id: str) -> Path:
        return (
            self.output_dir
            / self.options.output_screenshot_folder
            / RELOCATED_ARTIFACTS_DIRNAME
            / execution_id
        )

    def report_path(self, execution_id: str) -> Path:
        return self.output_dir / f"{execution_id}{TRX_EXTENSION}"

    def emit(self, records: list[TestRecord], stats: RunStats) -> Path | None:
        """Write the report for a finished run.

        I/O failures are logged and never raised: a screenshot that cannot be
        copied is left out, a report that cannot be written yields None.

        Args:
            records: Frozen records in report order
            stats: Timing window of the run

        Returns:
            Path of the written report, or None if writing failed.
        """
        execution_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc)
        screenshot_dir = self.screenshot_dir(execution_id)
        report_path = self.report_path(execution_id)

        logger.debug(
            f"Emitting report - execution id: {execution_id}, "
            f"screenshots from: {self.input_screenshot_path}, "
            f"screenshots to: {screenshot_dir}"
        )

        try:
            screenshot_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create screenshot directory {screenshot_dir}: {e}")

        metadata = RunMetadata(
            name=build_run_name(self.user_name, self.computer_name, now),
            run_user=self.user_name,
            run_id=str(uuid.uuid4()),
            creation=now,
            start=stats.start or now,
            finish=stats.end or now,
            deployment_root=self.options.output_screenshot_folder,
        )

        correlator = ArtifactCorrelator(
            self.options, build_search_pattern(self.input_screenshot_path)
        )
        correlation = run_to_completion(correlator.correlate(records, screenshot_dir))

        entries = [
            project_result(
                record, self.computer_name, self.cwd, self.options, execution_id
            )
            for record in correlation.records
        ]

        logger.debug(f"Writing test report to {report_path}")
        try:
            return TrxDocument(metadata, entries).write(report_path)
        except OSError as e:
            logger.error(f"Failed to write report {report_path}: {e}")
            return None
