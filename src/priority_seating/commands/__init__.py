# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Line-oriented command interface for the allocation engine.

Exports:
    Command, CommandName: Validated command model
    parse_line: Parse one input line into a Command
    format_result: Render an engine result descriptor to text
    CommandProcessor: Run command lines or files against an engine
"""

from .formatter import format_result
from .models import COMMAND_ARITY, Command, CommandName
from .parser import parse_line
from .processor import CommandProcessor

__all__ = [
    "COMMAND_ARITY",
    "Command",
    "CommandName",
    "CommandProcessor",
    "format_result",
    "parse_line",
]
