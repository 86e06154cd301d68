# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the priority seating library.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from SeatingError, making it easy to catch
all seating-related exceptions with a single except clause.

Note that "not found" outcomes (cancelling a reservation that does not
exist, exiting a waitlist the user is not on) are never raised. They are
reported through result descriptors. Exceptions are reserved for invalid
arguments, misuse of the data structures and malformed command input.
"""


class SeatingError(Exception):
    """Base exception for all seating errors.

    This is the root exception class for the priority seating library.
    Catch this exception to handle any error originating from the library.

    Example:
        try:
            engine.add_seats(count)
        except SeatingError as e:
            logger.error(f"Seating error: {e}")
    """

    pass


class ConfigurationError(SeatingError):
    """Raised when configuration is invalid.

    This exception is raised during initialization when the provided
    configuration values are out of range or incompatible.

    Common causes include:
    - A waitlist compaction ratio outside (0, 1]
    - A negative minimum compaction size
    - An empty output suffix for the command processor

    Example:
        try:
            config = EngineConfig(waitlist_compaction_ratio=0.0)
        except ConfigurationError as e:
            logger.error(f"Invalid configuration: {e}")
            raise SystemExit(1)
    """

    pass


class InvalidArgumentError(SeatingError):
    """Raised when an engine operation receives an out-of-range argument.

    Seat counts for Initialize and AddSeats must be positive integers.

    Attributes:
        argument: Name of the offending argument.
        value: The rejected value.
    """

    def __init__(self, message: str, argument: str | None = None, value: int | None = None):
        super().__init__(message)
        self.argument = argument
        self.value = value


class SeatPoolError(SeatingError):
    """Raised when the seat pool is asked to do something inconsistent.

    Returning a seat that is already free, or a seat number that was never
    created, would break the free/assigned partition of seats.

    Attributes:
        seat_id: The seat involved in the failed operation.
    """

    def __init__(self, message: str, seat_id: int | None = None):
        super().__init__(message)
        self.seat_id = seat_id


class DuplicateSeatError(SeatingError):
    """Raised when a seat would be mapped to two users at once.

    Attributes:
        seat_id: The seat already held.
        holder_id: The user currently holding the seat.
        user_id: The user the caller tried to map to the same seat.
    """

    def __init__(self, seat_id: int, holder_id: int, user_id: int):
        super().__init__(
            f"Seat {seat_id} is already held by user {holder_id}, "
            f"cannot assign it to user {user_id}"
        )
        self.seat_id = seat_id
        self.holder_id = holder_id
        self.user_id = user_id


class DuplicateUserError(SeatingError):
    """Raised when a user is inserted into the waitlist twice.

    Attributes:
        user_id: The user already waiting.
    """

    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} is already in the waitlist")
        self.user_id = user_id


class InvariantViolationError(SeatingError):
    """Raised by the invariant checker when engine state is inconsistent.

    This indicates a bug in the engine or direct tampering with its
    internal structures. It is only raised when invariant checking is
    enabled through EngineConfig.check_invariants or when
    check_invariants() is called explicitly.

    Attributes:
        violations: Human readable descriptions of every failed invariant.
    """

    def __init__(self, violations: list[str]):
        super().__init__("; ".join(violations))
        self.violations = violations


class EngineNotInitializedError(SeatingError):
    """Raised when a command needs an engine before Initialize ran.

    Example:
        try:
            output = processor.execute(command)
        except EngineNotInitializedError:
            output = "System is not initialized"
    """

    pass


class CommandParseError(SeatingError):
    """Raised when a command line cannot be parsed.

    Attributes:
        line: The raw input line.
        line_number: 1-based line number in the input, if known.
    """

    def __init__(
        self,
        message: str,
        line: str | None = None,
        line_number: int | None = None,
    ):
        super().__init__(message)
        self.line = line
        self.line_number = line_number


class UnknownCommandError(CommandParseError):
    """Raised when a line names a command the processor does not know.

    Attributes:
        command: The unrecognized command name.
    """

    def __init__(
        self,
        command: str,
        line: str | None = None,
        line_number: int | None = None,
    ):
        super().__init__(f"Unknown command: {command}", line, line_number)
        self.command = command
