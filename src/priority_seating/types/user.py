# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
User types for waitlist ordering.

This module defines the record kept for every user waiting for a seat.
"""

from dataclasses import dataclass


@dataclass
class WaitingUser:
    """
    A user waiting for a seat.

    Waiting users are served by descending priority. Users with equal
    priority are served in the order they joined the waitlist.

    Attributes:
        user_id: Externally supplied user identifier
        priority: Current priority (higher numbers are served first)
        arrival_order: Counter value taken when the user joined the waitlist.
            Never refreshed by priority updates.

    Priority Levels:
        * Any integer is accepted, negative values included
        * Ties on priority are broken by arrival_order (smaller first)
    """

    user_id: int
    priority: int
    arrival_order: int

    @property
    def sort_key(self) -> tuple[int, int]:
        """Heap key: smallest key is served first."""
        return (-self.priority, self.arrival_order)


__all__ = ["WaitingUser"]
