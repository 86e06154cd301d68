# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Result descriptors returned by the allocation engine.

Every engine operation returns exactly one descriptor. Descriptors carry
the facts of what happened (which seats moved to which users) and are
rendered to text by the command formatter.
"""

from dataclasses import dataclass, field
from enum import Enum


class ReserveStatus(Enum):
    """Outcome of a reserve call.

    - ASSIGNED: a free seat was taken from the pool
    - WAITLISTED: the pool was empty and the user joined the waitlist
    - ALREADY_HOLDING: the user holds a seat; nothing changed
    - ALREADY_WAITING: the user is already waiting; nothing changed
    """

    ASSIGNED = "assigned"
    WAITLISTED = "waitlisted"
    ALREADY_HOLDING = "already_holding"
    ALREADY_WAITING = "already_waiting"


@dataclass(frozen=True)
class Assignment:
    """A seat handed to a user."""

    user_id: int
    seat_id: int


@dataclass
class InitializeResult:
    """Result of constructing a fresh engine."""

    seat_count: int


@dataclass
class AvailabilityResult:
    """Free seat count and waitlist length."""

    free_seats: int
    waitlist_length: int


@dataclass
class ReserveResult:
    """
    Result of a reserve call.

    Attributes:
        user_id: The user that asked for a seat
        status: What happened to the request
        seat_id: The seat assigned, or the seat already held for ALREADY_HOLDING
        priority: The priority the user asked with
    """

    user_id: int
    status: ReserveStatus
    seat_id: int | None = None
    priority: int = 0

    @property
    def assigned(self) -> bool:
        return self.status is ReserveStatus.ASSIGNED


@dataclass
class CancelResult:
    """
    Result of a cancel call.

    Attributes:
        user_id: The user cancelling
        seat_id: The seat named in the request
        cancelled: False when the user did not hold that seat
        reassigned: The waiting user that received the seat, if any
    """

    user_id: int
    seat_id: int
    cancelled: bool
    reassigned: Assignment | None = None


@dataclass
class WaitlistExitResult:
    """Result of removing a user from the waitlist."""

    user_id: int
    removed: bool


@dataclass
class PriorityUpdateResult:
    """Result of a priority update."""

    user_id: int
    priority: int
    updated: bool


@dataclass
class AddSeatsResult:
    """
    Result of growing capacity.

    Attributes:
        count: Number of seats created
        new_seats: The seat numbers created, ascending
        assignments: Waiting users drained onto free seats, in drain order
    """

    count: int
    new_seats: list[int] = field(default_factory=list)
    assignments: list[Assignment] = field(default_factory=list)


@dataclass
class ReleaseResult:
    """
    Result of releasing every user in an id range.

    Attributes:
        low: Lower user id bound (inclusive)
        high: Upper user id bound (inclusive)
        released_users: Holders in the range whose reservations were removed
        removed_waiters: Waiting users in the range removed from the waitlist
        assignments: Released seats handed to waiting users, in pairing order
        returned_seats: Released seats that went back to the free pool
    """

    low: int
    high: int
    released_users: list[int] = field(default_factory=list)
    removed_waiters: list[int] = field(default_factory=list)
    assignments: list[Assignment] = field(default_factory=list)
    returned_seats: list[int] = field(default_factory=list)

    @property
    def found(self) -> bool:
        """True when at least one user in the range held or awaited a seat."""
        return bool(self.released_users or self.removed_waiters)


@dataclass
class ReservationListing:
    """Current reservations ordered by seat number."""

    reservations: list[Assignment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.reservations)


__all__ = [
    "AddSeatsResult",
    "Assignment",
    "AvailabilityResult",
    "CancelResult",
    "InitializeResult",
    "PriorityUpdateResult",
    "ReleaseResult",
    "ReservationListing",
    "ReserveResult",
    "ReserveStatus",
    "WaitlistExitResult",
]
