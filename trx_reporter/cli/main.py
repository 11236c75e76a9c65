# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

import logging
from pathlib import Path

import errorhandler
import typer
from robot.errors import DataError
from typing_extensions import Annotated

import trx_reporter
from trx_reporter.core.aggregator import EventAggregator
from trx_reporter.core.constants import (
    DEFAULT_INPUT_SCREENSHOT_PATH,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_OUTPUT_SCREENSHOT_FOLDER,
    EXIT_ERROR,
    EXIT_SUCCESS,
)
from trx_reporter.core.emitter import ReportEmitter
from trx_reporter.core.options import ReporterOptions
from trx_reporter.robot.replay import replay_output
from trx_reporter.utils.logging import VerbosityLevel, configure_logging
from trx_reporter.utils.terminal import terminal

app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)

error_handler = errorhandler.ErrorHandler()


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"trx-reporter, version {trx_reporter.__version__}")
        raise typer.Exit()


OutputXml = Annotated[
    Path,
    typer.Argument(
        exists=True,
        dir_okay=False,
        file_okay=True,
        help="Robot Framework output.xml to convert.",
    ),
]


OutputPath = Annotated[
    str,
    typer.Option(
        "-o",
        "--output-path",
        help="Directory receiving the TRX report, relative to the working directory.",
        envvar="TRX_REPORTER_OUTPUT_PATH",
    ),
]


InputScreenshotPath = Annotated[
    str,
    typer.Option(
        "--input-screenshot-path",
        help="Directory searched recursively for '<test> (failed).png' screenshots. "
        "Must end with a path separator.",
        envvar="TRX_REPORTER_INPUT_SCREENSHOT_PATH",
    ),
]


OutputScreenshotFolder = Annotated[
    str,
    typer.Option(
        "--output-screenshot-folder",
        help="Folder below the output path receiving relocated screenshots.",
        envvar="TRX_REPORTER_OUTPUT_SCREENSHOT_FOLDER",
    ),
]


TreatPendingAsNotExecuted = Annotated[
    bool,
    typer.Option(
        "--treat-pending-as-not-executed",
        help="Report skipped tests as NotExecuted instead of Pending.",
        envvar="TRX_REPORTER_TREAT_PENDING_AS_NOT_EXECUTED",
    ),
]


ExcludePending = Annotated[
    bool,
    typer.Option(
        "--exclude-pending",
        help="Leave skipped tests out of the report.",
        envvar="TRX_REPORTER_EXCLUDE_PENDING",
    ),
]


WarnExcludedPending = Annotated[
    bool,
    typer.Option(
        "--warn-excluded-pending",
        help="Print a pipeline warning with the number of excluded tests.",
        envvar="TRX_REPORTER_WARN_EXCLUDED_PENDING",
    ),
]


Verbosity = Annotated[
    VerbosityLevel,
    typer.Option(
        "-v",
        "--verbosity",
        help="Verbosity level.",
        envvar="TRX_REPORTER_VERBOSITY",
        is_eager=True,
    ),
]


Version = Annotated[
    bool,
    typer.Option(
        "--version",
        callback=version_callback,
        help="Display version number.",
        is_eager=True,
    ),
]


@app.command()
def main(
    output_xml: OutputXml,
    output_path: OutputPath = DEFAULT_OUTPUT_PATH,
    input_screenshot_path: InputScreenshotPath = DEFAULT_INPUT_SCREENSHOT_PATH,
    output_screenshot_folder: OutputScreenshotFolder = DEFAULT_OUTPUT_SCREENSHOT_FOLDER,
    treat_pending_as_not_executed: TreatPendingAsNotExecuted = False,
    exclude_pending: ExcludePending = False,
    warn_excluded_pending: WarnExcludedPending = False,
    verbosity: Verbosity = VerbosityLevel.WARNING,
    version: Version = False,
) -> None:
    """Convert a Robot Framework output.xml into a TRX report."""
    configure_logging(verbosity, error_handler)

    options = ReporterOptions(
        treat_pending_as_not_executed=treat_pending_as_not_executed,
        exclude_pending=exclude_pending,
        warn_excluded_pending=warn_excluded_pending,
        input_screenshot_path=input_screenshot_path,
        output_path=output_path,
        output_screenshot_folder=output_screenshot_folder,
    )
    aggregator = EventAggregator(ReportEmitter(options))

    try:
        report_path = replay_output(output_xml, aggregator)
    except DataError as e:
        typer.echo(terminal.error(f"Invalid Robot result file {output_xml}: {e}"), err=True)
        raise typer.Exit(EXIT_ERROR)

    if report_path is None:
        typer.echo(terminal.error("TRX report could not be written"), err=True)
        raise typer.Exit(EXIT_ERROR)

    typer.echo(terminal.success(f"TRX report: {report_path}"))
    exit()


def exit() -> None:
    if error_handler.fired:
        raise typer.Exit(EXIT_ERROR)
    else:
        raise typer.Exit(EXIT_SUCCESS)
