# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Parser for command lines such as ``Reserve(12, 3)``."""

import logging
import re

from pydantic import ValidationError

from ..exceptions import CommandParseError, UnknownCommandError
from .models import Command, CommandName

logger = logging.getLogger(__name__)

# Command names and arguments are separated by parentheses, commas and whitespace
_TOKEN_SEPARATORS = re.compile(r"[(),\s]+")

_NAMES = {name.value: name for name in CommandName}

# Optionally signed ASCII decimal, without underscores
_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)


def parse_line(line: str, line_number: int | None = None) -> Command | None:
    """
    Parse one input line.

    Args:
        line: Raw input line, e.g. "Reserve(1, 5)"
        line_number: 1-based position of the line in its file

    Returns:
        The parsed Command, or None for a blank line

    Raises:
        UnknownCommandError: If the command name is not recognized
        CommandParseError: If an argument is not an integer or the
            argument count is wrong
    """
    tokens = [token for token in _TOKEN_SEPARATORS.split(line.strip()) if token]
    if not tokens:
        return None

    raw_name, raw_args = tokens[0], tokens[1:]
    name = _NAMES.get(raw_name)
    if name is None:
        raise UnknownCommandError(raw_name, line=line, line_number=line_number)

    if not all(_INTEGER.fullmatch(arg) for arg in raw_args):
        raise CommandParseError(
            f"{raw_name} arguments must be integers, got {raw_args}",
            line=line,
            line_number=line_number,
        )
    args = tuple(int(arg) for arg in raw_args)

    try:
        return Command(name=name, args=args, line_number=line_number, raw=line.rstrip("\n"))
    except ValidationError as e:
        # Surface the validator's message, not pydantic's full report
        message = e.errors()[0]["msg"].removeprefix("Value error, ")
        raise CommandParseError(message, line=line, line_number=line_number) from e


__all__ = ["parse_line"]
