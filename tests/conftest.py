"""
Shared fixtures for the priority seating tests.
"""

import pytest

from priority_seating.config import EngineConfig
from priority_seating.engine import AllocationEngine
from priority_seating.observability.collector import UnifiedMetricsCollector


@pytest.fixture
def metrics():
    """A private collector that never touches the Prometheus registry."""
    return UnifiedMetricsCollector(enable_prometheus=False)


@pytest.fixture
def checked_config():
    """Engine configuration that verifies invariants after every operation."""
    return EngineConfig(check_invariants=True, waitlist_min_compaction_size=4)


@pytest.fixture
def make_engine(checked_config, metrics):
    """Factory for invariant-checked engines sharing the test's collector."""

    def _make(seat_count: int) -> AllocationEngine:
        return AllocationEngine(seat_count, config=checked_config, metrics=metrics)

    return _make
