"""Edge operations applied to a World by the mutation phase."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dvsim.types import NodeIndex


@dataclass(frozen=True)
class ChangeWeight:
    """Set the weight of the undirected edge ``node_a`` -- ``node_b``.

    Adds the edge if it does not exist yet. Endpoints are indices already
    resolved from names (see ``World.resolve_edge``).
    """

    node_a: NodeIndex
    node_b: NodeIndex
    weight: Any

    @property
    def endpoints(self) -> tuple[NodeIndex, NodeIndex]:
        return (self.node_a, self.node_b)

    def __repr__(self) -> str:
        return f"ChangeWeight({self.node_a}<->{self.node_b}, w={self.weight!r})"


Operation = ChangeWeight


__all__ = [
    "ChangeWeight",
    "Operation",
]
