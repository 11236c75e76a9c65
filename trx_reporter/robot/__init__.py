# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Robot Framework integration: live listener and output.xml replay."""

from trx_reporter.robot.listener import TrxListener
from trx_reporter.robot.replay import ResultReplayer, replay_output

__all__ = ["TrxListener", "ResultReplayer", "replay_output"]
