"""Network topology snapshots and their mutation.

Key features:
- Immutable World snapshots with stable node indices
- Name-based edge resolution
- Batch edge-weight mutation with up-front validation
"""

from __future__ import annotations

from dvsim.topology.mutation import (
    MutationResult,
    apply_operations,
    validate_operation,
    validate_weight,
)
from dvsim.topology.operations import ChangeWeight, Operation
from dvsim.topology.world import Node, Vector, World

__all__ = [
    # Snapshot
    "Node",
    "Vector",
    "World",
    # Operations
    "ChangeWeight",
    "Operation",
    # Mutation
    "MutationResult",
    "apply_operations",
    "validate_operation",
    "validate_weight",
]
