# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Correlation of failure screenshots with failed test records.

Screenshots are matched to tests by file name only: a failed test owns the
first discovered file whose name ends with ``"<full title> (failed).png"``.
The convention is ambiguous (several files may end with the same suffix and
titles are not escaped); the first match in discovery order wins and no
error is raised for ties.
"""

import asyncio
import dataclasses
import glob
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import aiofiles  # type: ignore[import-untyped]

from trx_reporter.core.constants import FAILED_SCREENSHOT_SUFFIX, SCREENSHOT_GLOB
from trx_reporter.core.models import TestRecord
from trx_reporter.core.options import ReporterOptions
from trx_reporter.utils.terminal import terminal

logger = logging.getLogger(__name__)


def build_search_pattern(input_path: str) -> str:
    """Build the recursive glob for screenshots below ``input_path``.

    Backslashes are turned into forward slashes and the glob is appended as
    is, without inserting a separator, so ``input_path`` is expected to end
    with one.
    """
    return input_path.replace("\\", "/") + SCREENSHOT_GLOB


async def discover_artifacts(pattern: str) -> list[str]:
    """Find all screenshot files matching ``pattern``.

    The search runs in a worker thread. Failures are logged and result in an
    empty list, so failed tests are simply reported without a screenshot.
    """
    try:
        files = await asyncio.to_thread(glob.glob, pattern, recursive=True)
    except OSError as e:
        logger.error(f"Screenshot search failed for '{pattern}': {e}")
        return []
    files.sort()
    logger.debug(f"Screenshots found: {files}")
    return files


def find_artifact(files: list[str], full_title: str) -> str | None:
    """Return the first file named after the failed test, if any."""
    suffix = full_title + FAILED_SCREENSHOT_SUFFIX
    return next((f for f in files if f.endswith(suffix)), None)


async def copy_artifact(source: str, target_dir: Path) -> str | None:
    """Copy a screenshot into ``target_dir`` keeping its base name.

    Returns:
        The base name of the copy, or None if copying failed.
    """
    source_path = os.path.normpath(source)
    basename = os.path.basename(source_path)
    target = target_dir / basename
    logger.debug(f"Copying screenshot from '{source_path}' to '{target}'")
    try:
        async with aiofiles.open(source_path, "rb") as src:
            content = await src.read()
        async with aiofiles.open(target, "wb") as dst:
            await dst.write(content)
    except OSError as e:
        logger.error(f"Failed to copy screenshot from '{source_path}' to '{target}': {e}")
        return None
    return basename


@dataclass
class CorrelationResult:
    """Records to project, annotated with screenshots, and the excluded count."""

    records: list[TestRecord] = field(default_factory=list)
    excluded_pending: int = 0


def excluded_pending_message(count: int) -> str:
    if count == 1:
        return "Excluded 1 test because it is marked as Pending."
    return f"Excluded {count} tests because they are marked as Pending."


class ArtifactCorrelator:
    """Attaches relocated failure screenshots to failed test records.

    Attributes:
        options: Reporter options (pending exclusion and warning)
        search_pattern: Glob used to discover screenshots
    """

    def __init__(self, options: ReporterOptions, search_pattern: str) -> None:
        self.options = options
        self.search_pattern = search_pattern

    async def correlate(
        self, records: list[TestRecord], target_dir: Path
    ) -> CorrelationResult:
        """Select the records to report and attach their screenshots.

        Pending records are dropped when ``exclude_pending`` is set. Each
        failed record with a matching screenshot is copied into ``target_dir``
        and replaced by an annotated copy; records are frozen, so they are not
        modified in place.

        Args:
            records: Frozen records in report order
            target_dir: Existing directory receiving the screenshot copies

        Returns:
            The records to project and the number of excluded pending tests.
        """
        files = await discover_artifacts(self.search_pattern)
        result = CorrelationResult()

        for record in records:
            if record.pending and self.options.exclude_pending:
                result.excluded_pending += 1
                continue

            if record.is_failed:
                record = await self._attach(record, files, target_dir)

            result.records.append(record)

        if self.options.warn_excluded_pending and result.excluded_pending > 0:
            terminal.pipeline_warning(excluded_pending_message(result.excluded_pending))

        return result

    async def _attach(
        self, record: TestRecord, files: list[str], target_dir: Path
    ) -> TestRecord:
        logger.debug(f'Found failing test "{record.full_title}"')
        screenshot = find_artifact(files, record.full_title)
        if screenshot is None:
            logger.debug(
                f'No screenshot found ending with "{record.full_title}{FAILED_SCREENSHOT_SUFFIX}"'
            )
            return record

        logger.debug(f'Found screenshot "{screenshot}"')
        basename = await copy_artifact(screenshot, target_dir)
        if basename is None:
            return record
        return dataclasses.replace(record, artifact=basename)
