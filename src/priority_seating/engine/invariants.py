# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Consistency checks across the structures owned by an allocation engine."""

from typing import TYPE_CHECKING

from ..exceptions import InvariantViolationError

if TYPE_CHECKING:
    from .engine import AllocationEngine


def find_violations(engine: "AllocationEngine") -> list[str]:
    """
    Collect every broken invariant of an engine.

    Checks:
        - free and assigned seats are disjoint and together cover 1..highest_seat
        - no user both holds a seat and waits
        - the pool's minimum is its smallest free seat
        - waiting users have unique arrival orders

    Returns:
        Descriptions of the violations found (empty when consistent)
    """
    pool = engine.seat_pool
    directory = engine.directory
    waitlist = engine.waitlist
    violations: list[str] = []

    free = set(pool.free_seats())
    assigned = directory.assigned_seats()
    if len(assigned) != len(directory):
        violations.append("a seat is mapped to more than one user")

    both = free & assigned
    if both:
        violations.append(f"seats both free and assigned: {sorted(both)}")

    expected = set(range(1, pool.highest_seat + 1))
    missing = expected - free - assigned
    if missing:
        violations.append(f"seats neither free nor assigned: {sorted(missing)}")
    unknown = (free | assigned) - expected
    if unknown:
        violations.append(f"seats outside 1..{pool.highest_seat}: {sorted(unknown)}")

    if free and pool.peek_min() != min(free):
        violations.append(f"pool exposes seat {pool.peek_min()} before seat {min(free)}")

    waiting = waitlist.entries()
    holding_and_waiting = [w.user_id for w in waiting if w.user_id in directory]
    if holding_and_waiting:
        violations.append(f"users both holding and waiting: {sorted(holding_and_waiting)}")

    arrivals = [w.arrival_order for w in waiting]
    if len(set(arrivals)) != len(arrivals):
        violations.append("duplicate arrival orders in waitlist")

    head = waitlist.peek()
    if waiting and head is not waiting[0]:
        violations.append(
            f"waitlist serves user {head.user_id if head else None} "
            f"before user {waiting[0].user_id}"
        )

    return violations


def check_invariants(engine: "AllocationEngine") -> None:
    """
    Verify an engine's invariants.

    Raises:
        InvariantViolationError: If any invariant does not hold
    """
    violations = find_violations(engine)
    if violations:
        raise InvariantViolationError(violations)
