"""
Shared fixtures for benchmark tests.
"""

import pytest

from priority_seating.config import EngineConfig
from priority_seating.engine import AllocationEngine


@pytest.fixture
def benchmark_config():
    """Configuration for benchmarking: no metrics, no invariant checks."""
    return EngineConfig(metrics_enabled=False)


@pytest.fixture
def full_engine(benchmark_config):
    """An engine with every seat held and a long waitlist."""
    engine = AllocationEngine(10_000, config=benchmark_config)
    for user_id in range(1, 10_001):
        engine.reserve(user_id, 1)
    for user_id in range(10_001, 30_001):
        engine.reserve(user_id, user_id % 17)
    return engine
