# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Global pytest fixtures shared across all test modules."""

import os
import re

import pytest


@pytest.fixture(scope="session", autouse=True)
def clear_reporter_environment() -> None:
    """Clear trx-reporter settings from the environment.

    The CLI reads every option from a TRX_REPORTER_* variable as well, so a
    developer's own settings would leak into the tests.
    """
    pattern = re.compile(r"^TRX_REPORTER_[A-Z_]+$")
    for key in [key for key in os.environ if pattern.match(key)]:
        del os.environ[key]
