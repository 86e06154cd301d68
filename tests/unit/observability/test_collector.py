# SPDX-License-Identifier: Apache-2.0
"""
Unit tests for the observability collector module.

Tests cover:
- UnifiedMetricsCollector: counters, gauges and snapshots
- Label cardinality protection
- Prometheus mirroring into an injected registry
- Singleton pattern: get_metrics_collector, reset_metrics_collector
"""

from __future__ import annotations

import logging
import threading

import pytest
from prometheus_client import CollectorRegistry

from priority_seating.observability.collector import (
    METRIC_DEFINITIONS,
    UnifiedMetricsCollector,
    get_metrics_collector,
    reset_metrics_collector,
)
from priority_seating.observability.constants import (
    FREE_SEATS,
    SEATS_ASSIGNED_TOTAL,
    WAITLIST_JOINS_TOTAL,
)


@pytest.fixture
def collector() -> UnifiedMetricsCollector:
    """Create a fresh collector without Prometheus."""
    return UnifiedMetricsCollector(enable_prometheus=False)


# =============================================================================
# Metric Definitions
# =============================================================================


class TestMetricDefinitions:
    """Test the predefined metric schema."""

    def test_predefined_metrics_exist(self) -> None:
        """Test that the engine's metrics are defined."""
        assert SEATS_ASSIGNED_TOTAL in METRIC_DEFINITIONS
        assert WAITLIST_JOINS_TOTAL in METRIC_DEFINITIONS
        assert FREE_SEATS in METRIC_DEFINITIONS

    def test_counters_end_with_total(self) -> None:
        """Test counter names follow the Prometheus convention."""
        for name, defn in METRIC_DEFINITIONS.items():
            assert defn.name == name
            if defn.metric_type == "counter":
                assert name.endswith("_total")

    def test_labelled_assignment_counter(self) -> None:
        """Test seat assignments are labelled by source."""
        assert METRIC_DEFINITIONS[SEATS_ASSIGNED_TOTAL].label_names == ("source",)


# =============================================================================
# Counter and Gauge Operations
# =============================================================================


class TestCounterOperations:
    """Test counter operations."""

    def test_inc_counter_accumulates(self, collector: UnifiedMetricsCollector) -> None:
        """Test counter increments accumulate."""
        collector.inc_counter("test_counter", value=3)
        collector.inc_counter("test_counter", value=7)
        assert collector.get_counter("test_counter") == 10

    def test_inc_counter_with_labels(self, collector: UnifiedMetricsCollector) -> None:
        """Test label combinations are counted separately."""
        collector.inc_counter("test_counter", labels={"source": "reserve"})
        collector.inc_counter("test_counter", labels={"source": "cancel"})
        collector.inc_counter("test_counter", labels={"source": "reserve"})

        assert collector.get_counter("test_counter", {"source": "reserve"}) == 2
        assert collector.get_counter("test_counter", {"source": "cancel"}) == 1

    def test_inc_counter_negative_value_raises(
        self, collector: UnifiedMetricsCollector
    ) -> None:
        """Test that negative counter value raises ValueError."""
        with pytest.raises(ValueError, match="non-negative"):
            collector.inc_counter("test_counter", value=-1)

    def test_unknown_counter_reads_zero(self, collector: UnifiedMetricsCollector) -> None:
        assert collector.get_counter("never_incremented_total") == 0


class TestGaugeOperations:
    """Test gauge operations."""

    def test_set_gauge_overwrites(self, collector: UnifiedMetricsCollector) -> None:
        """Test gauge set replaces the previous value."""
        collector.set_gauge("test_gauge", 10)
        collector.set_gauge("test_gauge", 3)
        assert collector.get_gauge("test_gauge") == 3

    def test_unknown_gauge_reads_zero(self, collector: UnifiedMetricsCollector) -> None:
        assert collector.get_gauge("never_set") == 0.0


# =============================================================================
# Snapshots
# =============================================================================


class TestSnapshots:
    """Test get_metrics and get_flat_metrics."""

    def test_get_metrics_structure(self, collector: UnifiedMetricsCollector) -> None:
        """Test the nested snapshot groups by type, name and labels."""
        collector.inc_counter("a_total", labels={"outcome": "success"})
        collector.set_gauge("b", 2)

        assert collector.get_metrics() == {
            "counters": {"a_total": {"outcome=success": 1}},
            "gauges": {"b": {"": 2}},
        }

    def test_snapshot_is_copy(self, collector: UnifiedMetricsCollector) -> None:
        """Test modifying a snapshot leaves the collector unchanged."""
        collector.inc_counter("a_total")
        snapshot = collector.get_metrics()
        snapshot["counters"]["a_total"][""] = 100

        assert collector.get_counter("a_total") == 1

    def test_flat_metrics(self, collector: UnifiedMetricsCollector) -> None:
        """Test labelled series are rendered with braces."""
        collector.inc_counter("a_total", labels={"reason": "x", "outcome": "y"})
        collector.inc_counter("c_total")
        collector.set_gauge("b", 1.5)

        assert collector.get_flat_metrics() == {
            "a_total{outcome=y,reason=x}": 1,
            "c_total": 1,
            "b": 1.5,
        }

    def test_reset(self, collector: UnifiedMetricsCollector) -> None:
        """Test reset clears every series."""
        collector.inc_counter("a_total")
        collector.set_gauge("b", 1)
        collector.reset()

        assert collector.get_metrics() == {"counters": {}, "gauges": {}}


# =============================================================================
# Label Cardinality Protection
# =============================================================================


class TestCardinalityProtection:
    """Test label cardinality protection."""

    def test_limit_blocks_new_combinations(
        self, collector: UnifiedMetricsCollector, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that new label combinations are dropped at the limit."""
        monkeypatch.setattr(UnifiedMetricsCollector, "MAX_LABEL_COMBINATIONS", 2)

        collector.inc_counter("test_counter", labels={"id": "1"})
        collector.inc_counter("test_counter", labels={"id": "2"})
        collector.inc_counter("test_counter", labels={"id": "3"})
        collector.inc_counter("test_counter", labels={"id": "1"}, value=5)

        assert collector.get_counter("test_counter", {"id": "1"}) == 6
        assert collector.get_counter("test_counter", {"id": "3"}) == 0

    def test_limit_logs_warning(
        self,
        collector: UnifiedMetricsCollector,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that hitting the limit logs a warning."""
        monkeypatch.setattr(UnifiedMetricsCollector, "MAX_LABEL_COMBINATIONS", 1)
        collector.set_gauge("test_gauge", 1, labels={"id": "1"})

        with caplog.at_level(logging.WARNING):
            collector.set_gauge("test_gauge", 1, labels={"id": "2"})

        assert "Cardinality limit" in caplog.text


# =============================================================================
# Prometheus Mirroring
# =============================================================================


class TestPrometheusMirroring:
    """Test mirroring into an injected Prometheus registry."""

    def test_counter_mirrored(self) -> None:
        """Test a predefined labelled counter appears in the registry."""
        registry = CollectorRegistry()
        collector = UnifiedMetricsCollector(enable_prometheus=True, registry=registry)

        collector.inc_counter(SEATS_ASSIGNED_TOTAL, 2, labels={"source": "reserve"})

        assert registry.get_sample_value(
            SEATS_ASSIGNED_TOTAL, {"source": "reserve"}
        ) == 2.0

    def test_gauge_mirrored(self) -> None:
        """Test a predefined gauge appears in the registry."""
        registry = CollectorRegistry()
        collector = UnifiedMetricsCollector(enable_prometheus=True, registry=registry)

        collector.set_gauge(FREE_SEATS, 7)

        assert registry.get_sample_value(FREE_SEATS) == 7.0

    def test_dynamic_metric_mirrored(self) -> None:
        """Test a metric without a definition is still registered."""
        registry = CollectorRegistry()
        collector = UnifiedMetricsCollector(enable_prometheus=True, registry=registry)

        collector.inc_counter("custom_events_total")

        assert registry.get_sample_value("custom_events_total") == 1.0

    def test_duplicate_registration_keeps_dict_metrics(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a second collector on the same registry still counts locally."""
        registry = CollectorRegistry()
        first = UnifiedMetricsCollector(enable_prometheus=True, registry=registry)
        second = UnifiedMetricsCollector(enable_prometheus=True, registry=registry)
        first.inc_counter(WAITLIST_JOINS_TOTAL)

        with caplog.at_level(logging.WARNING):
            second.inc_counter(WAITLIST_JOINS_TOTAL)

        assert "Failed to create Prometheus counter" in caplog.text
        assert second.get_counter(WAITLIST_JOINS_TOTAL) == 1
        assert registry.get_sample_value(WAITLIST_JOINS_TOTAL) == 1.0

    def test_disabled_collector_registers_nothing(self) -> None:
        """Test a collector without Prometheus leaves the registry empty."""
        registry = CollectorRegistry()
        collector = UnifiedMetricsCollector(enable_prometheus=False, registry=registry)
        collector.inc_counter(WAITLIST_JOINS_TOTAL)

        assert not collector.prometheus_enabled
        assert registry.get_sample_value(WAITLIST_JOINS_TOTAL) is None


# =============================================================================
# Singleton Pattern
# =============================================================================


class TestSingletonPattern:
    """Test the process-wide collector singleton."""

    @pytest.fixture(autouse=True)
    def reset_singleton(self):
        reset_metrics_collector()
        yield
        reset_metrics_collector()

    def test_returns_same_instance(self) -> None:
        """Test repeated calls share one collector."""
        first = get_metrics_collector(enable_prometheus=False)
        assert get_metrics_collector(enable_prometheus=False) is first

    def test_reset_creates_new_instance(self) -> None:
        """Test reset discards the previous collector and its values."""
        first = get_metrics_collector(enable_prometheus=False)
        first.inc_counter("a_total")

        reset_metrics_collector()
        second = get_metrics_collector(enable_prometheus=False)

        assert second is not first
        assert first.get_counter("a_total") == 0

    def test_concurrent_access(self) -> None:
        """Test concurrent first calls agree on one instance."""
        seen: list[UnifiedMetricsCollector] = []

        def grab() -> None:
            seen.append(get_metrics_collector(enable_prometheus=False))

        threads = [threading.Thread(target=grab) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len({id(c) for c in seen}) == 1
