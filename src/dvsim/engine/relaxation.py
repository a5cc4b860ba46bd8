"""Synchronous relaxation: one round of distributed Bellman-Ford.

For every pending node x and every destination y != x:

    d_x(y) = min over neighbors v (ascending index) of
               C(x, y)             if v == y
               C(x, v) + D_v(y)    otherwise

where D_v is v's vector as frozen in the World's inbox before the round
began. No node ever sees a value another node computed in the same round,
so the result does not depend on the order nodes are visited in.

Ties go to the first candidate enumerated. A node is "changed" when at least
one entry's cost moved; a different next hop at equal cost is not a change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dvsim.algebra.vector import SELF, DistanceVectorValue
from dvsim.topology.world import Vector, World
from dvsim.trace.explanation import Candidate, ExplanationEntry, ExplanationTrace
from dvsim.types import NodeIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundResult:
    """Output of one relaxation round.

    ``vectors`` holds a vector for every node: relaxed nodes get their
    recomputed vector, all others keep theirs.
    """

    previous: World
    """World the round was computed from"""

    vectors: tuple[Vector, ...]
    """Post-round vectors, indexed by node"""

    relaxed: frozenset[NodeIndex]
    """Nodes that were pending and got recomputed"""

    changed: frozenset[NodeIndex]
    """Relaxed nodes where some entry's cost moved"""

    trace: ExplanationTrace
    """One explanation entry per relaxed, non-self destination"""

    @property
    def generation(self) -> int:
        return self.previous.generation + 1

    @property
    def converged(self) -> bool:
        return not self.changed

    def next_pending(self) -> frozenset[NodeIndex]:
        """Nodes that receive a new advertisement: neighbors of changed nodes."""
        pending: set[NodeIndex] = set()
        for index in self.changed:
            pending.update(self.previous.neighbors(index))
        return frozenset(pending)

    def commit(self) -> World:
        """World for the next round: new vectors, refreshed inbox, t + 1."""
        return self.previous.evolve(
            vectors=self.vectors,
            inbox=self.vectors,
            pending=self.next_pending(),
            generation=self.generation,
        )


def relax_entry(
    world: World,
    source: NodeIndex,
    destination: NodeIndex,
) -> ExplanationEntry:
    """Relax a single (source, destination) entry against the inbox.

    Args:
        world: Snapshot providing edges and the frozen inbox
        source: Node being recomputed
        destination: Destination index, must differ from ``source``

    Returns:
        ExplanationEntry listing every candidate and the winner
    """
    node = world.nodes[source]
    candidates: list[Candidate] = []
    for neighbor in node.neighbors:
        weight = node.edges[neighbor]
        if neighbor == destination:
            candidates.append(Candidate.direct_link(source, neighbor, weight))
        else:
            advertised = world.inbox[neighbor][destination].cost
            candidates.append(Candidate.via(source, neighbor, destination, weight, advertised))
    return ExplanationEntry.select(
        source,
        destination,
        candidates,
        previous=node.vector[destination],
    )


def relax_node(world: World, source: NodeIndex) -> tuple[Vector, list[ExplanationEntry]]:
    """Recompute every entry of one node's vector."""
    new_vector: list[DistanceVectorValue] = []
    entries: list[ExplanationEntry] = []
    for destination in range(world.size):
        if destination == source:
            new_vector.append(SELF)
            continue
        entry = relax_entry(world, source, destination)
        entries.append(entry)
        new_vector.append(entry.result)
    return tuple(new_vector), entries


def relax(world: World) -> RoundResult:
    """Run one synchronous relaxation round over the pending nodes.

    Args:
        world: Current snapshot (not modified)

    Returns:
        RoundResult with new vectors, the changed set and the trace
    """
    trace = ExplanationTrace(generation=world.generation + 1)
    vectors: list[Vector] = list(world.vectors())
    relaxed: set[NodeIndex] = set()
    changed: set[NodeIndex] = set()

    for node in world.nodes:
        if not node.pending:
            continue
        new_vector, entries = relax_node(world, node.index)
        for entry in entries:
            trace.add(entry)
        relaxed.add(node.index)
        if any(old.cost != new.cost for old, new in zip(node.vector, new_vector)):
            changed.add(node.index)
        vectors[node.index] = new_vector

    logger.debug(
        f"Round t={trace.generation}: relaxed {sorted(relaxed)}, changed {sorted(changed)}"
    )
    return RoundResult(
        previous=world,
        vectors=tuple(vectors),
        relaxed=frozenset(relaxed),
        changed=frozenset(changed),
        trace=trace,
    )


__all__ = [
    "RoundResult",
    "relax_entry",
    "relax_node",
    "relax",
]
