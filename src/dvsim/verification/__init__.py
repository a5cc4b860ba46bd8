"""Verification tools for simulated Worlds.

This module provides:
- Runtime invariant checking of World snapshots
- Reference all-pairs shortest paths (NumPy Floyd-Warshall) for checking
  converged distance vectors
"""

from __future__ import annotations

from dvsim.verification.invariants import (
    Invariant,
    InvariantRegistry,
    Violation,
    ViolationSeverity,
    check_world,
)
from dvsim.verification.reference import (
    ReferenceCheck,
    adjacency_matrix,
    distance_matrix,
    shortest_paths,
    verify_converged,
)

__all__ = [
    # Invariants
    "ViolationSeverity",
    "Invariant",
    "Violation",
    "InvariantRegistry",
    "check_world",
    # Reference
    "ReferenceCheck",
    "adjacency_matrix",
    "distance_matrix",
    "shortest_paths",
    "verify_converged",
]
