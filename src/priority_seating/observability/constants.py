# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

This module provides standardized metric names for all observability
in the priority-seating library. All metric names use the
`priority_seating_` prefix for Prometheus compatibility.

Naming Conventions:
    - Counter metrics end with `_total`
    - Gauges use present-tense descriptive names

Label Best Practices:
    To prevent label cardinality explosion, use only:
    - `source` - What handed out a seat (enum: reserve, cancel, add_seats, release)
    - `outcome` - Result of an operation (enum: success, not_found)
    - `reason` - Why a reserve was rejected (enum: already_holding, already_waiting)
    - `state` - What a released user was doing (enum: holding, waiting)

    NEVER use:
    - `user_id` - Unique per user (unbounded!)
    - `seat_id` - Grows with capacity (unbounded!)

Usage:
    >>> from priority_seating.observability.constants import SEATS_ASSIGNED_TOTAL
    >>> print(SEATS_ASSIGNED_TOTAL)
    'priority_seating_seats_assigned_total'
"""


# =============================================================================
# Global Prefix
# =============================================================================

METRIC_PREFIX = "priority_seating"
"""Prefix for all Prometheus metrics in this library."""


# =============================================================================
# Allocation Metrics (engine/engine.py)
# =============================================================================

SEATS_ASSIGNED_TOTAL = f"{METRIC_PREFIX}_seats_assigned_total"
"""Total seats handed to users, labelled by the operation that did it."""

WAITLIST_JOINS_TOTAL = f"{METRIC_PREFIX}_waitlist_joins_total"
"""Total users placed on the waitlist because no seat was free."""

RESERVE_REJECTIONS_TOTAL = f"{METRIC_PREFIX}_reserve_rejections_total"
"""Total reserve calls rejected because the user was already active."""

CANCELLATIONS_TOTAL = f"{METRIC_PREFIX}_cancellations_total"
"""Total cancel calls, labelled by outcome."""

SEATS_CREATED_TOTAL = f"{METRIC_PREFIX}_seats_created_total"
"""Total seats created by Initialize and AddSeats."""

USERS_RELEASED_TOTAL = f"{METRIC_PREFIX}_users_released_total"
"""Total users removed by ranged release, labelled by prior state."""

WAITLIST_EXITS_TOTAL = f"{METRIC_PREFIX}_waitlist_exits_total"
"""Total exit-waitlist calls, labelled by outcome."""

PRIORITY_UPDATES_TOTAL = f"{METRIC_PREFIX}_priority_updates_total"
"""Total priority update calls, labelled by outcome."""


# =============================================================================
# Gauge Metrics
# =============================================================================

FREE_SEATS = f"{METRIC_PREFIX}_free_seats"
"""Current number of free seats."""

WAITLIST_LENGTH = f"{METRIC_PREFIX}_waitlist_length"
"""Current number of waiting users."""

RESERVED_SEATS = f"{METRIC_PREFIX}_reserved_seats"
"""Current number of assigned seats."""

HIGHEST_SEAT = f"{METRIC_PREFIX}_highest_seat"
"""Highest seat number created so far."""


__all__ = [
    "CANCELLATIONS_TOTAL",
    "FREE_SEATS",
    "HIGHEST_SEAT",
    "METRIC_PREFIX",
    "PRIORITY_UPDATES_TOTAL",
    "RESERVED_SEATS",
    "RESERVE_REJECTIONS_TOTAL",
    "SEATS_ASSIGNED_TOTAL",
    "SEATS_CREATED_TOTAL",
    "USERS_RELEASED_TOTAL",
    "WAITLIST_EXITS_TOTAL",
    "WAITLIST_JOINS_TOTAL",
    "WAITLIST_LENGTH",
]
