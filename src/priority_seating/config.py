# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Configuration for the priority seating engine and command processor.

This module provides configuration classes for the allocation engine,
including metrics and waitlist maintenance, and for the command file
processor that drives it.
"""

from dataclasses import dataclass

from .exceptions import ConfigurationError


@dataclass
class EngineConfig:
    """
    Configuration for an allocation engine.

    Every engine instance owns its configuration; engines never share state.
    """

    # === Metrics and Monitoring ===

    metrics_enabled: bool = True
    """Enable metrics collection."""

    enable_prometheus: bool = False
    """Mirror metrics into the default Prometheus registry."""

    # === Waitlist Maintenance ===

    waitlist_compaction_ratio: float = 0.5
    """Stale heap entry ratio above which the waitlist heap is compacted."""

    waitlist_min_compaction_size: int = 64
    """Heap size below which waitlist compaction never runs."""

    # === Testing Support ===

    check_invariants: bool = False
    """Verify every engine invariant after each mutating operation."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not 0 < self.waitlist_compaction_ratio <= 1.0:
            raise ConfigurationError(
                "waitlist_compaction_ratio must be between 0 and 1.0"
            )
        if self.waitlist_min_compaction_size < 0:
            raise ConfigurationError("waitlist_min_compaction_size must not be negative")


@dataclass
class ProcessorConfig:
    """
    Configuration for the command file processor.
    """

    output_suffix: str = "_output_file.txt"
    """Suffix appended to the input path to name the default output file."""

    stop_on_quit: bool = True
    """Stop reading commands after Quit()."""

    echo_unknown_commands: bool = True
    """Write an "Unknown command" line for unrecognized commands instead of skipping them."""

    encoding: str = "utf-8"
    """Encoding of the input and output files."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.output_suffix:
            raise ConfigurationError("output_suffix must not be empty")
        if not self.encoding:
            raise ConfigurationError("encoding must not be empty")


__all__ = [
    "EngineConfig",
    "ProcessorConfig",
]
