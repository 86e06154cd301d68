# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Core data structures owned by the allocation engine.

Exports:
    SeatPool: Free seats, lowest number first
    ReservationDirectory: User to seat mapping with a seat to user index
    Waitlist: Waiting users ordered by priority, then arrival order
"""

from .directory import ReservationDirectory
from .seat_pool import SeatPool
from .waitlist import Waitlist

__all__ = ["ReservationDirectory", "SeatPool", "Waitlist"]
