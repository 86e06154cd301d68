# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Text rendering of engine result descriptors.

Each result renders to one block of text. Multi-line blocks (cancellation
with reassignment, AddSeats, ReleaseSeats, PrintReservations) join their
lines with a newline.
"""

from collections.abc import Callable
from typing import Any

from ..types.results import (
    AddSeatsResult,
    Assignment,
    AvailabilityResult,
    CancelResult,
    InitializeResult,
    PriorityUpdateResult,
    ReleaseResult,
    ReservationListing,
    ReserveResult,
    ReserveStatus,
    WaitlistExitResult,
)

TERMINATED_MESSAGE = "Program Terminated!!"
NOT_INITIALIZED_MESSAGE = "System is not initialized"


def format_assignment(assignment: Assignment) -> str:
    return f"User {assignment.user_id} reserved seat {assignment.seat_id}"


def format_initialize(result: InitializeResult) -> str:
    return f"Initialized with {result.seat_count} seats."


def format_available(result: AvailabilityResult) -> str:
    return (
        f"Total Seats Available : {result.free_seats}, "
        f"Waitlist : {result.waitlist_length}"
    )


def format_reserve(result: ReserveResult) -> str:
    if result.status is ReserveStatus.ASSIGNED:
        return f"User {result.user_id} reserved seat {result.seat_id}"
    if result.status is ReserveStatus.WAITLISTED:
        return f"User {result.user_id} is added to the waiting list"
    if result.status is ReserveStatus.ALREADY_HOLDING:
        return f"User {result.user_id} already holds seat {result.seat_id}"
    return f"User {result.user_id} is already in the waiting list"


def format_cancel(result: CancelResult) -> str:
    if not result.cancelled:
        return (
            f"User {result.user_id} has no reservation for seat "
            f"{result.seat_id} to cancel."
        )
    lines = [f"User {result.user_id} canceled their reservation."]
    if result.reassigned is not None:
        lines.append(format_assignment(result.reassigned))
    return "\n".join(lines)


def format_exit_waitlist(result: WaitlistExitResult) -> str:
    if result.removed:
        return f"User {result.user_id} is removed from the waiting list"
    return f"User {result.user_id} is not in waitlist"


def format_update_priority(result: PriorityUpdateResult) -> str:
    if result.updated:
        return f"User {result.user_id} priority has been updated to {result.priority}"
    return f"User {result.user_id} priority is not updated"


def format_add_seats(result: AddSeatsResult) -> str:
    lines = [f"Additional {result.count} Seats are made available for reservation"]
    lines.extend(format_assignment(a) for a in result.assignments)
    return "\n".join(lines)


def format_reservations(result: ReservationListing) -> str:
    return "\n".join(
        f"Seat {a.seat_id}, User {a.user_id}" for a in result.reservations
    )


def format_release(result: ReleaseResult) -> str:
    if not result.found:
        return (
            f"No reservations found for the Users in the range "
            f"[{result.low}, {result.high}]."
        )
    lines = [
        f"Reservations of the Users in the range [{result.low}, {result.high}] are released"
    ]
    lines.extend(format_assignment(a) for a in result.assignments)
    return "\n".join(lines)


_FORMATTERS: dict[type, Callable[[Any], str]] = {
    InitializeResult: format_initialize,
    AvailabilityResult: format_available,
    ReserveResult: format_reserve,
    CancelResult: format_cancel,
    WaitlistExitResult: format_exit_waitlist,
    PriorityUpdateResult: format_update_priority,
    AddSeatsResult: format_add_seats,
    ReservationListing: format_reservations,
    ReleaseResult: format_release,
}


def format_result(result: object) -> str:
    """
    Render any engine result descriptor.

    Raises:
        TypeError: If the object is not a known result descriptor
    """
    formatter = _FORMATTERS.get(type(result))
    if formatter is None:
        raise TypeError(f"No formatter for {type(result).__name__}")
    return formatter(result)


__all__ = [
    "NOT_INITIALIZED_MESSAGE",
    "TERMINATED_MESSAGE",
    "format_assignment",
    "format_result",
]
