# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Reporter options and their parsing from listener arguments."""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from trx_reporter.core.constants import (
    DEFAULT_INPUT_SCREENSHOT_PATH,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_OUTPUT_SCREENSHOT_FOLDER,
)

_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0", ""})

# Option spellings accepted in addition to the snake_case field names
_ALIASES = {
    "treatpendingasnotexecuted": "treat_pending_as_not_executed",
    "excludepending": "exclude_pending",
    "warnexcludedpending": "warn_excluded_pending",
    "inputscreenshotpath": "input_screenshot_path",
    "outputpath": "output_path",
    "outputscreenshotfolder": "output_screenshot_folder",
}


def parse_bool(value: Any) -> bool:
    """Interpret a listener argument as a boolean.

    Args:
        value: A bool or one of true/false, yes/no, on/off, 1/0 (any case).

    Raises:
        ValueError: If a string is not a recognised boolean word.
    """
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


@dataclass(frozen=True)
class ReporterOptions:
    """Options controlling outcome mapping, pending handling and output paths.

    Attributes:
        treat_pending_as_not_executed: Report pending tests as NotExecuted
        exclude_pending: Leave pending tests out of the report
        warn_excluded_pending: Print a pipeline warning with the excluded count
        input_screenshot_path: Directory searched for failure screenshots,
            relative to the working directory
        output_path: Directory receiving the report, relative to the
            working directory
        output_screenshot_folder: Folder below output_path receiving the
            relocated screenshots, also the run deployment root
    """

    treat_pending_as_not_executed: bool = False
    exclude_pending: bool = False
    warn_excluded_pending: bool = False
    input_screenshot_path: str = DEFAULT_INPUT_SCREENSHOT_PATH
    output_path: str = DEFAULT_OUTPUT_PATH
    output_screenshot_folder: str = DEFAULT_OUTPUT_SCREENSHOT_FOLDER

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ReporterOptions":
        """Build options from loosely spelled keys, e.g. listener arguments.

        Both snake_case names and the camelCase/lower-case reporter option
        names (``excludePending``, ``inputscreenshotpath``) are accepted.
        Unknown keys are ignored.
        """
        known = {f.name: f for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in mapping.items():
            name = key if key in known else _ALIASES.get(key.replace("_", "").lower())
            if name is None:
                continue
            if known[name].type in (bool, "bool"):
                values[name] = parse_bool(value)
            else:
                values[name] = "" if value is None else str(value)
        return cls(**values)
