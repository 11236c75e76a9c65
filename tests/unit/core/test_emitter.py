# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Unit tests for report emission."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from trx_reporter.core.emitter import ReportEmitter, build_run_name
from trx_reporter.core.models import ErrorDetail, RunStats, TestRecord
from trx_reporter.core.options import ReporterOptions
from trx_reporter.core.types import TestState
from trx_reporter.reporting.trx_document import TRX_NAMESPACE

NS = {"t": TRX_NAMESPACE}
START = datetime(2025, 2, 1, 12, 0, 0, tzinfo=timezone.utc)
END = START + timedelta(seconds=30)


def _frozen(**kwargs: Any) -> TestRecord:
    record = TestRecord(**kwargs)
    record.freeze()
    return record


def test_build_run_name() -> None:
    now = datetime(2025, 2, 1, 12, 34, 56, 789000).astimezone()
    assert build_run_name("ci", "build-agent", now) == "ci@build-agent 2025-02-01 12:34:56"


def test_paths_follow_options(
    tmp_path: Path, make_emitter: Callable[..., ReportEmitter]
) -> None:
    emitter = make_emitter()

    assert emitter.input_screenshot_path == f"{tmp_path}/shots/"
    assert emitter.report_path("exec-1") == tmp_path / "out" / "exec-1.trx"
    assert (
        emitter.screenshot_dir("exec-1")
        == tmp_path / "out" / "screenshots" / "In" / "exec-1"
    )


def test_emit_writes_report_and_relocates_screenshot(
    tmp_path: Path,
    make_emitter: Callable[..., ReportEmitter],
    parse_trx: Callable[[Path], Any],
) -> None:
    shots = tmp_path / "shots"
    shots.mkdir()
    (shots / "Login fails (failed).png").write_bytes(b"png")
    records = [
        _frozen(
            title="Login fails",
            full_title="Login fails",
            file=str(tmp_path / "web.robot"),
            start=START,
            end=END,
            state=TestState.FAILED,
            error=ErrorDetail(message="Element not found"),
        ),
        _frozen(title="Logout", full_title="Logout", start=START, end=END, state=TestState.PASSED),
    ]

    report = make_emitter().emit(records, RunStats(start=START, end=END))

    assert report is not None
    assert report.parent == tmp_path / "out"
    assert report.suffix == ".trx"
    execution_id = report.stem
    copied = tmp_path / "out" / "screenshots" / "In" / execution_id / "Login fails (failed).png"
    assert copied.read_bytes() == b"png"

    root = parse_trx(report)
    assert root.get("runUser") == "ci"
    assert root.get("name").startswith("ci@build-agent ")
    assert root.find("t:Times", NS).get("start") == "2025-02-01T12:00:00.000+00:00"
    assert root.find("t:Times", NS).get("finish") == "2025-02-01T12:00:30.000+00:00"
    assert (
        root.find("t:TestSettings/t:Deployment", NS).get("runDeploymentRoot")
        == "screenshots"
    )

    results = root.findall("t:Results/t:UnitTestResult", NS)
    assert [r.get("testName") for r in results] == ["Login fails", "Logout"]
    assert {r.get("executionId") for r in results} == {execution_id}
    failed, passed = results
    assert failed.get("outcome") == "Failed"
    assert failed.get("computerName") == "build-agent"
    files = failed.findall("t:ResultFiles/t:ResultFile", NS)
    assert [f.get("path") for f in files] == ["Login fails (failed).png"]
    assert passed.find("t:ResultFiles", NS) is None

    definition = root.find("t:TestDefinitions/t:UnitTest/t:TestMethod", NS)
    assert definition.get("codeBase") == "web.robot"


def test_emit_empty_run_uses_current_time(
    make_emitter: Callable[..., ReportEmitter], parse_trx: Callable[[Path], Any]
) -> None:
    report = make_emitter().emit([], RunStats())

    assert report is not None
    times = parse_trx(report).find("t:Times", NS)
    assert times.get("start") == times.get("creation")
    assert times.get("finish") == times.get("creation")


def test_emit_excludes_pending(
    make_emitter: Callable[..., ReportEmitter],
    parse_trx: Callable[[Path], Any],
    capsys: pytest.CaptureFixture[str],
) -> None:
    options = ReporterOptions(
        output_path="out", exclude_pending=True, warn_excluded_pending=True
    )
    records = [
        _frozen(title="a", full_title="a", pending=True),
        _frozen(title="b", full_title="b", pending=True),
        _frozen(title="c", full_title="c", state=TestState.PASSED),
    ]

    report = make_emitter(options).emit(records, RunStats())

    assert report is not None
    results = parse_trx(report).findall("t:Results/t:UnitTestResult", NS)
    assert [r.get("testName") for r in results] == ["c"]
    assert (
        "Excluded 2 tests because they are marked as Pending."
        in capsys.readouterr().err
    )


def test_emit_write_failure_is_logged(
    make_emitter: Callable[..., ReportEmitter], caplog: pytest.LogCaptureFixture
) -> None:
    with (
        caplog.at_level(logging.ERROR),
        patch(
            "trx_reporter.core.emitter.TrxDocument.write",
            side_effect=OSError("disk full"),
        ),
    ):
        report = make_emitter().emit([], RunStats())

    assert report is None
    assert "Failed to write report" in caplog.text
    assert "disk full" in caplog.text


def test_emit_screenshot_dir_failure_is_logged(
    tmp_path: Path,
    make_emitter: Callable[..., ReportEmitter],
    caplog: pytest.LogCaptureFixture,
) -> None:
    # A file where the screenshot folder should be makes mkdir fail
    (tmp_path / "out").mkdir()
    (tmp_path / "out" / "screenshots").write_text("in the way")
    records = [_frozen(title="a", full_title="a", state=TestState.FAILED)]

    with caplog.at_level(logging.ERROR):
        report = make_emitter().emit(records, RunStats())

    assert report is not None
    assert "Failed to create screenshot directory" in caplog.text
