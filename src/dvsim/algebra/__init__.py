"""Cost algebra and distance vector entries.

This module provides:
- Cost: the ordered additive monoid {Zero, Value(w), Infinity}
- Distance vector entries: Unreachable, SelfEntry, DirectEdge, ViaNeighbor
"""

from __future__ import annotations

from dvsim.algebra.cost import INFINITY, ZERO, Cost, CostKind, total
from dvsim.algebra.vector import (
    SELF,
    UNREACHABLE,
    DirectEdge,
    DistanceVectorValue,
    SelfEntry,
    Unreachable,
    ViaNeighbor,
    entry_cost,
    from_cost,
    next_hop,
    same_cost,
)

__all__ = [
    # Cost algebra
    "Cost",
    "CostKind",
    "ZERO",
    "INFINITY",
    "total",
    # Vector entries
    "DistanceVectorValue",
    "Unreachable",
    "SelfEntry",
    "DirectEdge",
    "ViaNeighbor",
    "UNREACHABLE",
    "SELF",
    "entry_cost",
    "same_cost",
    "from_cost",
    "next_hop",
]
