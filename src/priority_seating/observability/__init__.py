# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability and metrics for the priority seating engine.

Classes:
    UnifiedMetricsCollector: Metrics collector supporting dict and Prometheus.
    MetricDefinition: Schema of a pre-defined metric.

Functions:
    get_metrics_collector: Get the global metrics collector singleton.
    reset_metrics_collector: Reset the global metrics collector singleton.

Constants:
    All metric name constants from constants module.
"""

from .collector import (
    METRIC_DEFINITIONS,
    MetricDefinition,
    UnifiedMetricsCollector,
    get_metrics_collector,
    reset_metrics_collector,
)
from .constants import (
    CANCELLATIONS_TOTAL,
    FREE_SEATS,
    HIGHEST_SEAT,
    METRIC_PREFIX,
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

__all__ = [
    "CANCELLATIONS_TOTAL",
    "FREE_SEATS",
    "HIGHEST_SEAT",
    "METRIC_DEFINITIONS",
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
    "MetricDefinition",
    "UnifiedMetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
