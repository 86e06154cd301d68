# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""SeatPool for tracking free seat numbers with a min-heap."""

import heapq
import logging

from ..exceptions import InvalidArgumentError, SeatPoolError

logger = logging.getLogger(__name__)


class SeatPool:
    """
    Tracks free seats and hands out the lowest free seat first.

    Primary storage: min-heap of free seat numbers
    Secondary index: set of free seat numbers for O(1) membership checks

    Seats are numbered contiguously from 1 up to highest_seat. Growing
    the pool always extends the ceiling, so seat numbers freed earlier
    are reused by take_min() but never re-created by add_range().
    """

    def __init__(self, seat_count: int = 0):
        """
        Initialize the SeatPool.

        Args:
            seat_count: Number of seats to create, numbered 1..seat_count (default: 0)
        """
        self._free_heap: list[int] = []
        self._free_set: set[int] = set()
        self._highest_seat = 0

        if seat_count:
            self.add_range(seat_count)

    def take_min(self) -> int | None:
        """
        Remove and return the smallest free seat.

        Returns:
            The seat number, or None if no seat is free
        """
        if not self._free_heap:
            return None

        seat_id = heapq.heappop(self._free_heap)
        self._free_set.discard(seat_id)
        logger.debug("Took seat %d from pool (%d free)", seat_id, len(self._free_heap))
        return seat_id

    def give(self, seat_id: int) -> None:
        """
        Return a seat to the pool as free.

        Args:
            seat_id: The seat to free

        Raises:
            SeatPoolError: If the seat was never created or is already free
        """
        if not 1 <= seat_id <= self._highest_seat:
            raise SeatPoolError(f"Seat {seat_id} does not exist", seat_id=seat_id)
        if seat_id in self._free_set:
            raise SeatPoolError(f"Seat {seat_id} is already free", seat_id=seat_id)

        heapq.heappush(self._free_heap, seat_id)
        self._free_set.add(seat_id)
        logger.debug("Returned seat %d to pool (%d free)", seat_id, len(self._free_heap))

    def add_range(self, count: int) -> list[int]:
        """
        Create count new seats above the current ceiling.

        Args:
            count: Number of seats to create

        Returns:
            The new seat numbers, ascending

        Raises:
            InvalidArgumentError: If count is not positive
        """
        if count < 1:
            raise InvalidArgumentError(
                f"Seat count must be positive, got {count}",
                argument="count",
                value=count,
            )

        start = self._highest_seat + 1
        new_seats = list(range(start, start + count))
        # New seats exceed every free seat, so appending them in ascending
        # order keeps the heap property without sifting
        self._free_heap.extend(new_seats)
        self._free_set.update(new_seats)
        self._highest_seat = new_seats[-1]

        logger.debug("Created seats %d..%d", start, self._highest_seat)
        return new_seats

    def peek_min(self) -> int | None:
        """Return the smallest free seat without removing it."""
        return self._free_heap[0] if self._free_heap else None

    def is_free(self, seat_id: int) -> bool:
        return seat_id in self._free_set

    def free_seats(self) -> list[int]:
        """Return all free seats, ascending."""
        return sorted(self._free_set)

    @property
    def highest_seat(self) -> int:
        """Return the highest seat number ever created (0 if none)."""
        return self._highest_seat

    @property
    def size(self) -> int:
        """Return the number of free seats."""
        return len(self._free_heap)

    def __len__(self) -> int:
        return len(self._free_heap)

    def __bool__(self) -> bool:
        return bool(self._free_heap)
