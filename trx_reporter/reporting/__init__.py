# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""TRX report document generation."""

from trx_reporter.reporting.trx_document import TrxDocument

__all__ = ["TrxDocument"]
