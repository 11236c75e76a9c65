# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Utility modules for trx-reporter."""

from trx_reporter.utils.terminal import terminal

__all__ = ["terminal"]
