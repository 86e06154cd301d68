# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Priority Seating - Priority-based seat allocation with waitlisting.

This library allocates a growing pool of numbered seats to users, keeping
a priority-ordered waitlist for users who arrive once every seat is taken.

Key Features:
    - Lowest free seat first, with capacity growth that extends the numbering
    - Waitlist ordered by priority, ties broken by arrival order
    - Cancellation hands the seat straight to the next waiting user
    - Ranged release of users with batch reassignment of the freed seats
    - Line-oriented command processor and CLI
    - Metrics with optional Prometheus mirroring

Quick Start:
    >>> from priority_seating import AllocationEngine
    >>>
    >>> engine = AllocationEngine(2)
    >>> engine.reserve(1, priority=1)
    ReserveResult(user_id=1, status=<ReserveStatus.ASSIGNED: 'assigned'>, seat_id=1, priority=1)
    >>> engine.available()
    AvailabilityResult(free_seats=1, waitlist_length=0)

Main Exports:
    - AllocationEngine: Core allocation engine
    - SeatPool, ReservationDirectory, Waitlist: Engine data structures
    - EngineConfig, ProcessorConfig: Configuration options
    - CommandProcessor: Run command lines or files against an engine

Version: 1.0.0
"""

__version__ = "1.0.0"

from .commands import Command, CommandName, CommandProcessor, format_result, parse_line
from .config import EngineConfig, ProcessorConfig
from .engine import AllocationEngine, check_invariants
from .exceptions import (
    CommandParseError,
    ConfigurationError,
    DuplicateSeatError,
    DuplicateUserError,
    EngineNotInitializedError,
    InvalidArgumentError,
    InvariantViolationError,
    SeatingError,
    SeatPoolError,
    UnknownCommandError,
)
from .observability import UnifiedMetricsCollector
from .structures import ReservationDirectory, SeatPool, Waitlist
from .types import (
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
    WaitingUser,
    WaitlistExitResult,
)

__all__ = [
    "AddSeatsResult",
    "AllocationEngine",
    "Assignment",
    "AvailabilityResult",
    "CancelResult",
    "Command",
    "CommandName",
    "CommandParseError",
    "CommandProcessor",
    "ConfigurationError",
    "DuplicateSeatError",
    "DuplicateUserError",
    "EngineConfig",
    "EngineNotInitializedError",
    "InitializeResult",
    "InvalidArgumentError",
    "InvariantViolationError",
    "PriorityUpdateResult",
    "ProcessorConfig",
    "ReleaseResult",
    "ReservationDirectory",
    "ReservationListing",
    "ReserveResult",
    "ReserveStatus",
    "SeatPool",
    "SeatPoolError",
    "SeatingError",
    "UnifiedMetricsCollector",
    "UnknownCommandError",
    "WaitingUser",
    "Waitlist",
    "WaitlistExitResult",
    "check_invariants",
    "format_result",
    "parse_line",
]
