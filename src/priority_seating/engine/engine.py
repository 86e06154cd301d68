# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Allocation engine for priority seating.

The engine owns a SeatPool, a ReservationDirectory and a Waitlist and keeps
them consistent across every operation:

- every created seat is either free (in the pool) or held by exactly one user
- no user is both holding a seat and waiting
- waiting users are served by descending priority, then by arrival order
- the pool always hands out its lowest free seat

Each public operation decides its outcome from presence checks before it
mutates anything, so a caller never observes a partially applied operation.
"""

import itertools
import logging

from ..config import EngineConfig
from ..exceptions import InvalidArgumentError
from ..observability.collector import UnifiedMetricsCollector, get_metrics_collector
from ..observability.constants import (
    CANCELLATIONS_TOTAL,
    FREE_SEATS,
    HIGHEST_SEAT,
    PRIORITY_UPDATES_TOTAL,
    RESERVE_REJECTIONS_TOTAL,
    RESERVED_SEATS,
    SEATS_ASSIGNED_TOTAL,
    SEATS_CREATED_TOTAL,
    USERS_RELEASED_TOTAL,
    WAITLIST_EXITS_TOTAL,
    WAITLIST_JOINS_TOTAL,
    WAITLIST_LENGTH,
)
from ..structures import ReservationDirectory, SeatPool, Waitlist
from ..types.results import (
    AddSeatsResult,
    Assignment,
    AvailabilityResult,
    CancelResult,
    PriorityUpdateResult,
    ReleaseResult,
    ReservationListing,
    ReserveResult,
    ReserveStatus,
    WaitlistExitResult,
)
from .invariants import check_invariants

logger = logging.getLogger(__name__)


class AllocationEngine:
    """
    Priority-based seat allocation with waitlisting.

    Example:
        >>> engine = AllocationEngine(2)
        >>> engine.reserve(1, priority=1).seat_id
        1
        >>> engine.reserve(2, priority=1).seat_id
        2
        >>> engine.reserve(3, priority=2).status
        <ReserveStatus.WAITLISTED: 'waitlisted'>
        >>> engine.cancel(seat_id=1, user_id=1).reassigned
        Assignment(user_id=3, seat_id=1)
    """

    def __init__(
        self,
        seat_count: int,
        config: EngineConfig | None = None,
        metrics: UnifiedMetricsCollector | None = None,
    ):
        """
        Initialize an engine with seats numbered 1..seat_count, all free.

        Args:
            seat_count: Number of seats to create
            config: Engine configuration (defaults to EngineConfig())
            metrics: Metrics collector. When omitted, a private collector is
                created, or the process-wide singleton when Prometheus
                mirroring is enabled.

        Raises:
            InvalidArgumentError: If seat_count is not positive
        """
        if seat_count < 1:
            raise InvalidArgumentError(
                f"Seat count must be positive, got {seat_count}",
                argument="seat_count",
                value=seat_count,
            )

        self._config = config or EngineConfig()

        if not self._config.metrics_enabled:
            self._metrics: UnifiedMetricsCollector | None = None
        elif metrics is not None:
            self._metrics = metrics
        elif self._config.enable_prometheus:
            self._metrics = get_metrics_collector(enable_prometheus=True)
        else:
            self._metrics = UnifiedMetricsCollector(enable_prometheus=False)

        self._pool = SeatPool()
        self._directory = ReservationDirectory()
        self._waitlist = Waitlist(
            compaction_ratio=self._config.waitlist_compaction_ratio,
            min_compaction_size=self._config.waitlist_min_compaction_size,
        )
        self._arrival_counter = itertools.count(1)

        self._pool.add_range(seat_count)
        self._inc(SEATS_CREATED_TOTAL, seat_count)
        self._after_mutation()

        logger.info("Allocation engine initialized with %d seats", seat_count)

    # === Queries ===

    def available(self) -> AvailabilityResult:
        """Return the free seat count and the waitlist length."""
        return AvailabilityResult(
            free_seats=self._pool.size,
            waitlist_length=len(self._waitlist),
        )

    def reservations(self) -> ReservationListing:
        """Return all current reservations ordered by seat number."""
        return ReservationListing(
            reservations=[
                Assignment(user_id=user_id, seat_id=seat_id)
                for user_id, seat_id in self._directory.by_seat()
            ]
        )

    def seat_of(self, user_id: int) -> int | None:
        """Return the seat a user holds, or None."""
        return self._directory.get(user_id)

    def is_waiting(self, user_id: int) -> bool:
        return user_id in self._waitlist

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def metrics(self) -> UnifiedMetricsCollector | None:
        return self._metrics

    @property
    def seat_pool(self) -> SeatPool:
        return self._pool

    @property
    def directory(self) -> ReservationDirectory:
        return self._directory

    @property
    def waitlist(self) -> Waitlist:
        return self._waitlist

    @property
    def highest_seat(self) -> int:
        return self._pool.highest_seat

    # === Operations ===

    def reserve(self, user_id: int, priority: int) -> ReserveResult:
        """
        Give the user the lowest free seat, or waitlist them if none is free.

        A user who already holds a seat or is already waiting is rejected
        without any state change.

        Args:
            user_id: The requesting user
            priority: Priority used if the user has to wait (higher first)

        Returns:
            ReserveResult describing the outcome
        """
        held = self._directory.get(user_id)
        if held is not None:
            logger.warning("User %d already holds seat %d; reserve ignored", user_id, held)
            self._inc(RESERVE_REJECTIONS_TOTAL, labels={"reason": "already_holding"})
            return ReserveResult(
                user_id=user_id,
                status=ReserveStatus.ALREADY_HOLDING,
                seat_id=held,
                priority=priority,
            )
        if user_id in self._waitlist:
            logger.warning("User %d is already waiting; reserve ignored", user_id)
            self._inc(RESERVE_REJECTIONS_TOTAL, labels={"reason": "already_waiting"})
            return ReserveResult(
                user_id=user_id,
                status=ReserveStatus.ALREADY_WAITING,
                priority=priority,
            )

        seat_id = self._pool.take_min()
        if seat_id is not None:
            self._directory.put(user_id, seat_id)
            self._inc(SEATS_ASSIGNED_TOTAL, labels={"source": "reserve"})
            self._after_mutation()
            return ReserveResult(
                user_id=user_id,
                status=ReserveStatus.ASSIGNED,
                seat_id=seat_id,
                priority=priority,
            )

        self._waitlist.insert(user_id, priority, next(self._arrival_counter))
        self._inc(WAITLIST_JOINS_TOTAL)
        self._after_mutation()
        return ReserveResult(
            user_id=user_id,
            status=ReserveStatus.WAITLISTED,
            priority=priority,
        )

    def cancel(self, seat_id: int, user_id: int) -> CancelResult:
        """
        Cancel the user's reservation of the given seat.

        The seat goes straight to the highest-priority waiting user if
        anyone is waiting, and back to the pool otherwise.

        Returns:
            CancelResult; cancelled is False when the user does not hold
            exactly that seat, in which case nothing changed
        """
        if self._directory.get(user_id) != seat_id:
            self._inc(CANCELLATIONS_TOTAL, labels={"outcome": "not_found"})
            return CancelResult(user_id=user_id, seat_id=seat_id, cancelled=False)

        self._directory.remove(user_id)
        self._inc(CANCELLATIONS_TOTAL, labels={"outcome": "success"})

        reassigned = None
        next_user = self._waitlist.pop_highest()
        if next_user is not None:
            self._directory.put(next_user.user_id, seat_id)
            reassigned = Assignment(user_id=next_user.user_id, seat_id=seat_id)
            self._inc(SEATS_ASSIGNED_TOTAL, labels={"source": "cancel"})
            logger.debug("Seat %d passed from user %d to user %d", seat_id, user_id, next_user.user_id)
        else:
            self._pool.give(seat_id)

        self._after_mutation()
        return CancelResult(
            user_id=user_id,
            seat_id=seat_id,
            cancelled=True,
            reassigned=reassigned,
        )

    def add_seats(self, count: int) -> AddSeatsResult:
        """
        Create count seats above the current ceiling and drain the waitlist.

        Waiting users are seated one at a time in priority/arrival order,
        each taking the lowest free seat, until seats or waiters run out.

        Raises:
            InvalidArgumentError: If count is not positive
        """
        if count < 1:
            raise InvalidArgumentError(
                f"Seat count must be positive, got {count}",
                argument="count",
                value=count,
            )

        new_seats = self._pool.add_range(count)
        self._inc(SEATS_CREATED_TOTAL, count)

        assignments: list[Assignment] = []
        while self._pool and self._waitlist:
            waiting = self._waitlist.pop_highest()
            seat_id = self._pool.take_min()
            self._directory.put(waiting.user_id, seat_id)
            assignments.append(Assignment(user_id=waiting.user_id, seat_id=seat_id))

        if assignments:
            self._inc(SEATS_ASSIGNED_TOTAL, len(assignments), labels={"source": "add_seats"})

        self._after_mutation()
        logger.info(
            "Added seats %d..%d; drained %d waiting users",
            new_seats[0],
            new_seats[-1],
            len(assignments),
        )
        return AddSeatsResult(count=count, new_seats=new_seats, assignments=assignments)

    def exit_waitlist(self, user_id: int) -> WaitlistExitResult:
        """Remove a user from the waitlist."""
        removed = self._waitlist.remove(user_id)
        self._inc(
            WAITLIST_EXITS_TOTAL,
            labels={"outcome": "success" if removed else "not_found"},
        )
        if removed:
            self._after_mutation()
        return WaitlistExitResult(user_id=user_id, removed=removed)

    def update_priority(self, user_id: int, new_priority: int) -> PriorityUpdateResult:
        """
        Change the priority of a waiting user.

        Users holding a seat have no tracked priority and are reported as
        not updated. The user keeps its original arrival order.
        """
        updated = self._waitlist.update_priority(user_id, new_priority)
        self._inc(
            PRIORITY_UPDATES_TOTAL,
            labels={"outcome": "success" if updated else "not_found"},
        )
        if updated:
            self._after_mutation()
        return PriorityUpdateResult(user_id=user_id, priority=new_priority, updated=updated)

    def release_range(self, low: int, high: int) -> ReleaseResult:
        """
        Release every user whose id falls in [low, high].

        Holders lose their reservations and waiting users leave the
        waitlist. Released seats are then paired, smallest first, with the
        highest-priority waiting users; seats left over return to the pool.

        Returns:
            ReleaseResult; found is False when nobody in the range held or
            awaited a seat, in which case nothing changed
        """
        holders = self._directory.users_in_range(low, high)
        waiters = self._waitlist.users_in_range(low, high)
        result = ReleaseResult(low=low, high=high)
        if not holders and not waiters:
            return result

        released_seats = []
        for user_id in holders:
            released_seats.append(self._directory.remove(user_id))
        for user_id in waiters:
            self._waitlist.remove(user_id)
        released_seats.sort()

        paired = 0
        while paired < len(released_seats) and self._waitlist:
            waiting = self._waitlist.pop_highest()
            seat_id = released_seats[paired]
            self._directory.put(waiting.user_id, seat_id)
            result.assignments.append(Assignment(user_id=waiting.user_id, seat_id=seat_id))
            paired += 1

        for seat_id in released_seats[paired:]:
            self._pool.give(seat_id)

        result.released_users = holders
        result.removed_waiters = waiters
        result.returned_seats = released_seats[paired:]

        if holders:
            self._inc(USERS_RELEASED_TOTAL, len(holders), labels={"state": "holding"})
        if waiters:
            self._inc(USERS_RELEASED_TOTAL, len(waiters), labels={"state": "waiting"})
        if result.assignments:
            self._inc(SEATS_ASSIGNED_TOTAL, len(result.assignments), labels={"source": "release"})

        self._after_mutation()
        logger.info(
            "Released users %d..%d: %d holders, %d waiters, %d seats reassigned",
            low,
            high,
            len(holders),
            len(waiters),
            len(result.assignments),
        )
        return result

    # === Internals ===

    def _inc(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None:
        if self._metrics is not None:
            self._metrics.inc_counter(name, value, labels)

    def _after_mutation(self) -> None:
        if self._metrics is not None:
            self._metrics.set_gauge(FREE_SEATS, self._pool.size)
            self._metrics.set_gauge(WAITLIST_LENGTH, len(self._waitlist))
            self._metrics.set_gauge(RESERVED_SEATS, len(self._directory))
            self._metrics.set_gauge(HIGHEST_SEAT, self._pool.highest_seat)
        if self._config.check_invariants:
            check_invariants(self)

    def __repr__(self) -> str:
        return (
            f"AllocationEngine(seats={self._pool.highest_seat}, "
            f"free={self._pool.size}, reserved={len(self._directory)}, "
            f"waiting={len(self._waitlist)})"
        )
