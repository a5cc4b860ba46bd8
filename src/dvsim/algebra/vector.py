"""Distance vector entries.

One entry of a node's distance vector records both the believed cost to a
destination and where that belief came from:

- ``Unreachable``: no known path (cost Infinity)
- ``SelfEntry``: the node itself (cost Zero)
- ``DirectEdge(w)``: the direct link to a neighbor (cost Value(w))
- ``ViaNeighbor(w, neighbor)``: forwarded through ``neighbor`` (cost Value(w))

The set of variants is closed: ``DistanceVectorValue`` is a union of frozen
dataclasses, not an open class hierarchy. Change detection compares entries
by :func:`entry_cost` only, so two entries with equal cost but different
next hops count as "the same" for convergence purposes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Union

from dvsim.algebra.cost import INFINITY, ZERO, Cost, CostKind
from dvsim.types import NodeIndex, W


@dataclass(frozen=True)
class Unreachable:
    """No known path to the destination."""

    @property
    def cost(self) -> Cost[Any]:
        return INFINITY

    def __repr__(self) -> str:
        return "Unreachable"


@dataclass(frozen=True)
class SelfEntry:
    """The node's entry for itself."""

    @property
    def cost(self) -> Cost[Any]:
        return ZERO

    def __repr__(self) -> str:
        return "Self"


@dataclass(frozen=True)
class DirectEdge(Generic[W]):
    """Destination reached over the direct link."""

    weight: W

    @property
    def cost(self) -> Cost[W]:
        return Cost.of(self.weight)


@dataclass(frozen=True)
class ViaNeighbor(Generic[W]):
    """Destination reached by forwarding through ``neighbor``."""

    weight: W
    neighbor: NodeIndex

    @property
    def cost(self) -> Cost[W]:
        return Cost.of(self.weight)


DistanceVectorValue = Union[Unreachable, SelfEntry, DirectEdge[Any], ViaNeighbor[Any]]

UNREACHABLE = Unreachable()
SELF = SelfEntry()


def entry_cost(entry: DistanceVectorValue) -> Cost[Any]:
    """Project an entry onto the cost algebra."""
    return entry.cost


def same_cost(a: DistanceVectorValue, b: DistanceVectorValue) -> bool:
    """Cost-only equality used for change detection."""
    return a.cost == b.cost


def from_cost(cost: Cost[Any], through: NodeIndex, direct: bool) -> DistanceVectorValue:
    """Turn a winning candidate cost back into a vector entry.

    Args:
        cost: Summed cost of the winning candidate
        through: Neighbor the candidate goes through
        direct: Whether the candidate is the direct-link candidate

    Returns:
        ``Unreachable`` for Infinity, ``SelfEntry`` for Zero, otherwise
        ``DirectEdge`` or ``ViaNeighbor``.
    """
    if cost.kind is CostKind.INFINITY:
        return UNREACHABLE
    if cost.kind is CostKind.ZERO:
        return SELF
    if direct:
        return DirectEdge(cost.value)
    return ViaNeighbor(cost.value, through)


def next_hop(entry: DistanceVectorValue, destination: NodeIndex) -> NodeIndex | None:
    """First hop used to reach ``destination`` according to ``entry``."""
    if isinstance(entry, ViaNeighbor):
        return entry.neighbor
    if isinstance(entry, DirectEdge):
        return destination
    return None


__all__ = [
    "Unreachable",
    "SelfEntry",
    "DirectEdge",
    "ViaNeighbor",
    "DistanceVectorValue",
    "UNREACHABLE",
    "SELF",
    "entry_cost",
    "same_cost",
    "from_cost",
    "next_hop",
]
