# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metrics for allocation engines: in-process series with optional Prometheus mirroring.

Every engine records into a UnifiedMetricsCollector. Values always live in
plain dicts so tests, the CLI's --show-metrics and logging can read them
without a Prometheus server. With enable_prometheus set, each series is
also pushed to prometheus_client counters and gauges in the given
registry.

A Prometheus registry accepts each metric name once. Engines therefore
get a private, dict-only collector unless they opt into the process-wide
collector returned by get_metrics_collector().
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, ClassVar

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge

from .constants import (
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

logger = logging.getLogger(__name__)

COUNTER = "counter"
GAUGE = "gauge"


@dataclass(frozen=True)
class MetricDefinition:
    """Name, kind, help text and label names of a known metric."""

    name: str
    metric_type: str
    description: str
    label_names: tuple[str, ...] = ()


METRIC_DEFINITIONS: dict[str, MetricDefinition] = {
    d.name: d
    for d in (
        MetricDefinition(SEATS_ASSIGNED_TOTAL, COUNTER, "Seats handed to users", ("source",)),
        MetricDefinition(WAITLIST_JOINS_TOTAL, COUNTER, "Users placed on the waitlist"),
        MetricDefinition(
            RESERVE_REJECTIONS_TOTAL, COUNTER, "Reserves refused for active users", ("reason",)
        ),
        MetricDefinition(CANCELLATIONS_TOTAL, COUNTER, "Cancel requests", ("outcome",)),
        MetricDefinition(SEATS_CREATED_TOTAL, COUNTER, "Seats created"),
        MetricDefinition(
            USERS_RELEASED_TOTAL, COUNTER, "Users removed by ranged release", ("state",)
        ),
        MetricDefinition(WAITLIST_EXITS_TOTAL, COUNTER, "Exit-waitlist requests", ("outcome",)),
        MetricDefinition(PRIORITY_UPDATES_TOTAL, COUNTER, "Priority update requests", ("outcome",)),
        MetricDefinition(FREE_SEATS, GAUGE, "Free seats"),
        MetricDefinition(WAITLIST_LENGTH, GAUGE, "Waiting users"),
        MetricDefinition(RESERVED_SEATS, GAUGE, "Seats currently held"),
        MetricDefinition(HIGHEST_SEAT, GAUGE, "Highest seat number created"),
    )
}


def _series_key(labels: dict[str, str] | None) -> str:
    # "" for the unlabelled series, "k1=v1,k2=v2" (sorted) otherwise
    return ",".join(f"{k}={v}" for k, v in sorted((labels or {}).items()))


class UnifiedMetricsCollector:
    """
    Counter and gauge store keyed by metric name and label set.

    Each metric accepts at most MAX_LABEL_COMBINATIONS label sets; further
    label sets are dropped with a warning.

    Example:
        >>> collector = UnifiedMetricsCollector(enable_prometheus=False)
        >>> collector.inc_counter('priority_seating_waitlist_joins_total')
        >>> collector.get_counter('priority_seating_waitlist_joins_total')
        1
    """

    MAX_LABEL_COMBINATIONS: ClassVar[int] = 1000

    def __init__(
        self,
        enable_prometheus: bool = True,
        registry: CollectorRegistry | None = None,
    ) -> None:
        """
        Args:
            enable_prometheus: Mirror every update into Prometheus
            registry: Registry to mirror into (default: the global REGISTRY)
        """
        self._enable_prometheus = enable_prometheus
        self._registry = REGISTRY if registry is None else registry
        self._values: dict[str, dict[str, dict[str, float]]] = {COUNTER: {}, GAUGE: {}}
        # None marks a name Prometheus refused, so registration is not retried
        self._prom: dict[str, Any] = {}

    @property
    def prometheus_enabled(self) -> bool:
        return self._enable_prometheus

    def inc_counter(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None:
        """
        Add value to a counter series.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError(f"Counter increment must be non-negative, got {value}")
        series = self._series(COUNTER, name, labels)
        if series is None:
            return
        series[_series_key(labels)] = series.get(_series_key(labels), 0) + value

        prom = self._prometheus_metric(COUNTER, name)
        if prom is not None:
            (prom.labels(**labels) if labels else prom).inc(value)

    def set_gauge(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge series to value."""
        series = self._series(GAUGE, name, labels)
        if series is None:
            return
        series[_series_key(labels)] = value

        prom = self._prometheus_metric(GAUGE, name)
        if prom is not None:
            (prom.labels(**labels) if labels else prom).set(value)

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        """Return one counter series (0 if never incremented)."""
        return self._values[COUNTER].get(name, {}).get(_series_key(labels), 0)

    def get_gauge(self, name: str, labels: dict[str, str] | None = None) -> float:
        """Return one gauge series (0.0 if never set)."""
        return self._values[GAUGE].get(name, {}).get(_series_key(labels), 0.0)

    def get_metrics(self) -> dict[str, Any]:
        """
        Return a copy of every series.

        Shape: {"counters": {name: {label_key: value}}, "gauges": {...}}
        where label_key is "" for unlabelled series.
        """
        return {
            "counters": {n: dict(s) for n, s in self._values[COUNTER].items()},
            "gauges": {n: dict(s) for n, s in self._values[GAUGE].items()},
        }

    def get_flat_metrics(self) -> dict[str, Any]:
        """Return every series as {"name" or "name{label_key}": value}."""
        flat: dict[str, Any] = {}
        for kind in (COUNTER, GAUGE):
            for name, series in self._values[kind].items():
                for key, value in series.items():
                    flat[f"{name}{{{key}}}" if key else name] = value
        return flat

    def reset(self) -> None:
        """Forget every series. Registered Prometheus metrics are kept."""
        for store in self._values.values():
            store.clear()
        logger.debug("Metrics collector reset")

    def _series(
        self, kind: str, name: str, labels: dict[str, str] | None
    ) -> dict[str, float] | None:
        series = self._values[kind].setdefault(name, {})
        key = _series_key(labels)
        if key not in series and len(series) >= self.MAX_LABEL_COMBINATIONS:
            logger.warning(
                "Cardinality limit (%d) reached for metric %s; dropping series %s",
                self.MAX_LABEL_COMBINATIONS,
                name,
                key,
            )
            return None
        return series

    def _prometheus_metric(self, kind: str, name: str) -> Any | None:
        if not self._enable_prometheus:
            return None
        if name not in self._prom:
            defn = METRIC_DEFINITIONS.get(name)
            if defn is None or defn.metric_type != kind:
                defn = MetricDefinition(name, kind, f"{kind} {name}")
            factory = Counter if kind == COUNTER else Gauge
            try:
                self._prom[name] = factory(
                    name, defn.description, list(defn.label_names), registry=self._registry
                )
            except ValueError as e:
                logger.warning("Failed to create Prometheus %s %s: %s", kind, name, e)
                self._prom[name] = None
        return self._prom[name]


_global_collector: UnifiedMetricsCollector | None = None
_global_lock = threading.Lock()


def get_metrics_collector(enable_prometheus: bool = True) -> UnifiedMetricsCollector:
    """
    Return the process-wide collector, creating it on first use.

    enable_prometheus only applies to the call that creates it.
    """
    global _global_collector
    with _global_lock:
        if _global_collector is None:
            _global_collector = UnifiedMetricsCollector(enable_prometheus=enable_prometheus)
        return _global_collector


def reset_metrics_collector() -> None:
    """Clear and drop the process-wide collector (mainly for tests)."""
    global _global_collector
    with _global_lock:
        if _global_collector is not None:
            _global_collector.reset()
        _global_collector = None


__all__ = [
    "METRIC_DEFINITIONS",
    "MetricDefinition",
    "UnifiedMetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
