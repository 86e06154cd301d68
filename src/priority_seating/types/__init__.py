# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Type definitions and result descriptors."""

from .results import (
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
from .user import WaitingUser

__all__ = [
    # Results
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
    # Users
    "WaitingUser",
    "WaitlistExitResult",
]
