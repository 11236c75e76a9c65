# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Terminal output helpers for trx-reporter."""

import os
import re

import typer
from colorama import Fore, Style, init

from trx_reporter.core.constants import PIPELINE_WARNING_PREFIX

# autoreset=True means colors reset after each print
init(autoreset=True)


class TerminalColors:
    """Color scheme for console summaries.

    Colors are skipped when the NO_COLOR environment variable is set.
    """

    ERROR = Fore.RED
    WARNING = Fore.YELLOW
    SUCCESS = Fore.GREEN
    INFO = Fore.CYAN
    RESET = Style.RESET_ALL

    NO_COLOR = os.environ.get("NO_COLOR") is not None

    ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

    @classmethod
    def strip_ansi(cls, text: str) -> str:
        return cls.ANSI_ESCAPE_PATTERN.sub("", text)

    @classmethod
    def _paint(cls, color: str, text: str) -> str:
        if cls.NO_COLOR:
            return text
        return f"{color}{text}{cls.RESET}"

    @classmethod
    def error(cls, text: str) -> str:
        """Format error text in red."""
        return cls._paint(cls.ERROR, text)

    @classmethod
    def warning(cls, text: str) -> str:
        """Format warning text in yellow."""
        return cls._paint(cls.WARNING, text)

    @classmethod
    def success(cls, text: str) -> str:
        """Format success text in green."""
        return cls._paint(cls.SUCCESS, text)

    @classmethod
    def info(cls, text: str) -> str:
        """Format info text in cyan."""
        return cls._paint(cls.INFO, text)

    @staticmethod
    def pipeline_warning(message: str) -> None:
        """Print a CI pipeline warning line to stderr.

        The line starts with the Azure DevOps ``##[warning]`` logging command
        and is never colored, so that the pipeline agent can pick it up.
        """
        typer.echo(f"{PIPELINE_WARNING_PREFIX}{message}", err=True)


# Single instance for use across the codebase
terminal = TerminalColors()
