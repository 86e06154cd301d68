# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Command models for the line-oriented command interface.

Commands are validated with Pydantic so that every command reaching the
processor has the right number of integer arguments.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class CommandName(Enum):
    """Commands understood by the processor, spelled as they appear in input files."""

    INITIALIZE = "Initialize"
    AVAILABLE = "Available"
    RESERVE = "Reserve"
    CANCEL = "Cancel"
    EXIT_WAITLIST = "ExitWaitlist"
    UPDATE_PRIORITY = "UpdatePriority"
    ADD_SEATS = "AddSeats"
    PRINT_RESERVATIONS = "PrintReservations"
    RELEASE_SEATS = "ReleaseSeats"
    QUIT = "Quit"


# Number of integer arguments each command takes
COMMAND_ARITY: dict[CommandName, int] = {
    CommandName.INITIALIZE: 1,
    CommandName.AVAILABLE: 0,
    CommandName.RESERVE: 2,
    CommandName.CANCEL: 2,
    CommandName.EXIT_WAITLIST: 1,
    CommandName.UPDATE_PRIORITY: 2,
    CommandName.ADD_SEATS: 1,
    CommandName.PRINT_RESERVATIONS: 0,
    CommandName.RELEASE_SEATS: 2,
    CommandName.QUIT: 0,
}

# Commands whose single argument is a seat count
_SEAT_COUNT_COMMANDS = frozenset({CommandName.INITIALIZE, CommandName.ADD_SEATS})


class Command(BaseModel):
    """
    A parsed command.

    Attributes:
        name: Which command to run
        args: Integer arguments in the order they appear in the input
        line_number: 1-based input line number, if read from a file
        raw: The input line the command was parsed from
    """

    name: CommandName
    args: tuple[int, ...] = ()
    line_number: int | None = Field(default=None, ge=1)
    raw: str | None = None

    @model_validator(mode="after")
    def _validate_arguments(self) -> "Command":
        """Validate argument count and seat count sign."""
        expected = COMMAND_ARITY[self.name]
        if len(self.args) != expected:
            raise ValueError(
                f"{self.name.value} takes {expected} argument(s), got {len(self.args)}"
            )
        if self.name in _SEAT_COUNT_COMMANDS and self.args[0] < 1:
            raise ValueError(f"{self.name.value} seat count must be positive")
        return self


__all__ = [
    "COMMAND_ARITY",
    "Command",
    "CommandName",
]
