"""World: an immutable snapshot of the simulated network.

A World holds:
- V: the node registry (stable indices 0..N-1 for the World's lifetime)
- E: a symmetric edge-weight relation, stored per node as neighbor -> weight
- DV: one distance vector per node, indexed by destination
- Inbox: the frozen copy of every node's vector as advertised to its
  neighbors; relaxation reads only from here
- Pending: nodes that must be relaxed in the next round
- t: the generation counter

Mutation and relaxation never touch a World in place; each returns a new
snapshot built with :meth:`World.evolve`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from dvsim.algebra.cost import Cost
from dvsim.algebra.vector import SELF, UNREACHABLE, DistanceVectorValue, next_hop
from dvsim.errors import NodeNotFoundError
from dvsim.topology.operations import ChangeWeight
from dvsim.types import NodeIndex

if TYPE_CHECKING:
    from dvsim.topology.mutation import MutationResult

logger = logging.getLogger(__name__)

Vector = tuple[DistanceVectorValue, ...]


@dataclass(frozen=True)
class Node:
    """
    A router in the simulated network.

    Nodes are value objects; a new World carries new Node instances.
    """

    index: NodeIndex
    """Stable index inside the World"""

    name: str
    """Display name"""

    vector: Vector
    """Current distance vector, one entry per destination index"""

    edges: Mapping[NodeIndex, Any] = field(default_factory=lambda: MappingProxyType({}))
    """Outgoing edges: neighbor index -> weight"""

    pending: bool = False
    """Whether the node is relaxed in the next round"""

    @property
    def neighbors(self) -> list[NodeIndex]:
        """Neighbor indices in ascending order."""
        return sorted(self.edges)

    def weight_to(self, neighbor: NodeIndex) -> Any | None:
        return self.edges.get(neighbor)

    def entry(self, destination: NodeIndex) -> DistanceVectorValue:
        return self.vector[destination]

    def cost_to(self, destination: NodeIndex) -> Cost[Any]:
        return self.vector[destination].cost


@dataclass(frozen=True)
class World:
    """
    Immutable network snapshot.

    Usage:
        world = World.new(["A", "B", "C"])
        result = world.apply([
            world.resolve_edge("A", "B", 2),
            world.resolve_edge("B", "C", 7),
        ])
        stable = run_until_stable(result.world)
        stable.cost("A", "C")  # Value(9)
    """

    nodes: tuple[Node, ...]
    """Node registry, position == index"""

    inbox: tuple[Vector, ...]
    """Advertised vectors, frozen for the next round"""

    generation: int = 0
    """Round counter t"""

    zero: Any = 0
    """Additive identity of the weight type, used to reject negative weights"""

    @classmethod
    def new(cls, names: Sequence[str], zero: Any = 0) -> World:
        """Create a World with no edges.

        Every vector is ``Unreachable`` except the node's own entry.

        Args:
            names: Node names in index order
            zero: Additive identity of the weight type

        Raises:
            ValueError: If a name is empty or duplicated
        """
        names = list(names)
        seen: set[str] = set()
        for name in names:
            if not name:
                raise ValueError("Node names must be non-empty")
            if name in seen:
                raise ValueError(f"Duplicate node name: {name}")
            seen.add(name)

        size = len(names)
        vectors = [
            tuple(SELF if d == i else UNREACHABLE for d in range(size)) for i in range(size)
        ]
        nodes = tuple(
            Node(index=i, name=name, vector=vectors[i]) for i, name in enumerate(names)
        )
        logger.debug(f"Created world with {size} nodes: {names}")
        return cls(nodes=nodes, inbox=tuple(vectors), generation=0, zero=zero)

    # ── Lookup ──────────────────────────────────────────────────────

    @property
    def size(self) -> int:
        return len(self.nodes)

    @property
    def names(self) -> list[str]:
        return [node.name for node in self.nodes]

    def node_names(self) -> dict[NodeIndex, str]:
        """Index -> name mapping, as consumed by renderers."""
        return {node.index: node.name for node in self.nodes}

    def find_node(self, name: str) -> Node | None:
        for node in self.nodes:
            if node.name == name:
                return node
        return None

    def index_of(self, name: str) -> NodeIndex:
        """Resolve a name to its index.

        Raises:
            NodeNotFoundError: If the name is not registered
        """
        node = self.find_node(name)
        if node is None:
            raise NodeNotFoundError(name, tuple(self.names))
        return node.index

    def node(self, key: NodeIndex | str) -> Node:
        if isinstance(key, str):
            return self.nodes[self.index_of(key)]
        return self.nodes[key]

    @property
    def pending(self) -> frozenset[NodeIndex]:
        return frozenset(node.index for node in self.nodes if node.pending)

    def neighbors(self, index: NodeIndex) -> list[NodeIndex]:
        return self.nodes[index].neighbors

    def weight(self, a: NodeIndex, b: NodeIndex) -> Any | None:
        """Weight of edge a--b, None if absent."""
        return self.nodes[a].edges.get(b)

    def edges(self) -> dict[tuple[NodeIndex, NodeIndex], Any]:
        """Undirected edges keyed by (low index, high index)."""
        result: dict[tuple[NodeIndex, NodeIndex], Any] = {}
        for node in self.nodes:
            for neighbor, weight in node.edges.items():
                if node.index < neighbor:
                    result[(node.index, neighbor)] = weight
        return result

    def vector(self, index: NodeIndex) -> Vector:
        return self.nodes[index].vector

    def vectors(self) -> tuple[Vector, ...]:
        return tuple(node.vector for node in self.nodes)

    def entry(self, source: str, destination: str) -> DistanceVectorValue:
        return self.nodes[self.index_of(source)].vector[self.index_of(destination)]

    def cost(self, source: str, destination: str) -> Cost[Any]:
        """Currently believed cost from ``source`` to ``destination``."""
        return self.entry(source, destination).cost

    def routing_table(self, name: str) -> dict[str, tuple[Cost[Any], str | None]]:
        """Destination -> (cost, next hop name) for one node."""
        node = self.node(name)
        table: dict[str, tuple[Cost[Any], str | None]] = {}
        for destination, entry in enumerate(node.vector):
            hop = next_hop(entry, destination)
            table[self.nodes[destination].name] = (
                entry.cost,
                self.nodes[hop].name if hop is not None else None,
            )
        return table

    # ── Operations ──────────────────────────────────────────────────

    def resolve_edge(self, name_a: str, name_b: str, weight: Any) -> ChangeWeight:
        """Resolve a named edge change into an index-based operation.

        Pure lookup: the World is not modified.

        Raises:
            NodeNotFoundError: If either name is not registered
        """
        return ChangeWeight(self.index_of(name_a), self.index_of(name_b), weight)

    def apply(self, operations: Iterable[ChangeWeight]) -> MutationResult:
        """Apply a batch of edge changes, returning the mutated World.

        See :func:`dvsim.topology.mutation.apply_operations`.
        """
        from dvsim.topology.mutation import apply_operations

        return apply_operations(self, operations)

    def evolve(
        self,
        *,
        vectors: Sequence[Vector] | None = None,
        edges: Sequence[Mapping[NodeIndex, Any]] | None = None,
        inbox: Sequence[Vector] | None = None,
        pending: Iterable[NodeIndex] | None = None,
        generation: int | None = None,
    ) -> World:
        """Derive a new World, replacing only the given parts."""
        pending_set = frozenset(pending) if pending is not None else self.pending
        nodes = []
        for node in self.nodes:
            nodes.append(
                Node(
                    index=node.index,
                    name=node.name,
                    vector=tuple(vectors[node.index]) if vectors is not None else node.vector,
                    edges=(
                        MappingProxyType(dict(edges[node.index]))
                        if edges is not None
                        else node.edges
                    ),
                    pending=node.index in pending_set,
                )
            )
        return World(
            nodes=tuple(nodes),
            inbox=tuple(tuple(v) for v in inbox) if inbox is not None else self.inbox,
            generation=self.generation if generation is None else generation,
            zero=self.zero,
        )

    def summary(self) -> str:
        """Human-readable distance tables."""
        lines = [f"World t={self.generation}", "=" * 40]
        for node in self.nodes:
            cells = ", ".join(
                f"{self.nodes[d].name}={entry.cost}" for d, entry in enumerate(node.vector)
            )
            marker = " *" if node.pending else ""
            lines.append(f"{node.name}{marker}: {cells}")
        return "\n".join(lines)


__all__ = [
    "Node",
    "Vector",
    "World",
]
