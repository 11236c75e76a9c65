# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Core constants shared across trx-reporter."""

# Screenshot discovery
SCREENSHOT_GLOB = "**/*.png"
FAILED_SCREENSHOT_SUFFIX = " (failed).png"

# Relocated artifact layout: <output>/<screenshot folder>/In/<execution id>/
RELOCATED_ARTIFACTS_DIRNAME = "In"

# Report file
TRX_EXTENSION = ".trx"

# Placeholder for unknown code locations and method/class names
NONE_PLACEHOLDER = "none"

# Reporter option defaults
DEFAULT_INPUT_SCREENSHOT_PATH = ""
DEFAULT_OUTPUT_PATH = ""
DEFAULT_OUTPUT_SCREENSHOT_FOLDER = "screenshots"

# Azure DevOps logging command prefix for pipeline warnings
PIPELINE_WARNING_PREFIX = "##[warning]"

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
