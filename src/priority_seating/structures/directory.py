# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""ReservationDirectory mapping users to the seats they hold."""

import logging
from collections.abc import Iterator

from ..exceptions import DuplicateSeatError

logger = logging.getLogger(__name__)


class ReservationDirectory:
    """
    Tracks which user holds which seat.

    Primary storage: Dict[user_id, seat_id]
    Secondary index: Dict[seat_id, user_id]

    The secondary index enforces that no seat is held by two users and
    gives O(1) lookup of a seat's holder. Point operations (put, get,
    remove) are O(1) amortized; ordered listings sort on demand.
    """

    def __init__(self) -> None:
        self._seats_by_user: dict[int, int] = {}
        self._users_by_seat: dict[int, int] = {}

    def put(self, user_id: int, seat_id: int) -> None:
        """
        Map a user to a seat, replacing any seat the user held before.

        Args:
            user_id: The user receiving the seat
            seat_id: The seat being assigned

        Raises:
            DuplicateSeatError: If another user already holds the seat
        """
        holder = self._users_by_seat.get(seat_id)
        if holder is not None and holder != user_id:
            raise DuplicateSeatError(seat_id, holder, user_id)

        previous = self._seats_by_user.get(user_id)
        if previous is not None and previous != seat_id:
            del self._users_by_seat[previous]

        self._seats_by_user[user_id] = seat_id
        self._users_by_seat[seat_id] = user_id

        logger.debug("Mapped user %d to seat %d", user_id, seat_id)

    def get(self, user_id: int) -> int | None:
        """
        Get the seat held by a user.

        Returns:
            The seat number if the user holds one, None otherwise
        """
        return self._seats_by_user.get(user_id)

    def holder_of(self, seat_id: int) -> int | None:
        """Return the user holding a seat, or None if it is not assigned."""
        return self._users_by_seat.get(seat_id)

    def remove(self, user_id: int) -> int | None:
        """
        Remove a user's reservation (idempotent).

        Returns:
            The seat the user held, or None if the user held none
        """
        seat_id = self._seats_by_user.pop(user_id, None)
        if seat_id is not None:
            del self._users_by_seat[seat_id]
            logger.debug("Removed reservation of user %d for seat %d", user_id, seat_id)
        return seat_id

    def all(self) -> list[tuple[int, int]]:
        """Return every (user_id, seat_id) pair ordered by user id."""
        return sorted(self._seats_by_user.items())

    def by_seat(self) -> list[tuple[int, int]]:
        """Return every (user_id, seat_id) pair ordered by seat id."""
        return [(user_id, seat_id) for seat_id, user_id in sorted(self._users_by_seat.items())]

    def users_in_range(self, low: int, high: int) -> list[int]:
        """
        Return the users with reservations whose ids fall in [low, high].

        Scans the id range when it is narrower than the directory, and the
        directory otherwise, so wide ranges over few users stay cheap.

        Returns:
            Matching user ids, ascending
        """
        if high < low:
            return []
        if high - low + 1 <= len(self._seats_by_user):
            return [u for u in range(low, high + 1) if u in self._seats_by_user]
        return sorted(u for u in self._seats_by_user if low <= u <= high)

    def assigned_seats(self) -> set[int]:
        """Return the set of seats currently held."""
        return set(self._users_by_seat)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._seats_by_user

    def __len__(self) -> int:
        return len(self._seats_by_user)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._seats_by_user))
