# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Allocation engine and its consistency checks.

Exports:
    AllocationEngine: Orchestrates the seat pool, directory and waitlist
    check_invariants: Raise if an engine's structures are inconsistent
    find_violations: List an engine's broken invariants
"""

from .engine import AllocationEngine
from .invariants import check_invariants, find_violations

__all__ = ["AllocationEngine", "check_invariants", "find_violations"]
