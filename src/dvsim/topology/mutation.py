"""Topology mutation: apply a batch of edge-weight changes.

The mutation phase is separate from relaxation. For each ``ChangeWeight``:

1. the edge relation is updated in both directions
2. each endpoint's own entry for the other endpoint is seeded with
   ``DirectEdge(weight)``; this acknowledges the link, it is not a relaxation
3. both endpoints and their neighbors are marked pending

The generation counter is left alone. All operations are validated before
anything is built, so a rejected batch leaves no partial state behind.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from dvsim.algebra.vector import DirectEdge
from dvsim.errors import InvalidWeightError, NodeIndexError
from dvsim.topology.operations import ChangeWeight
from dvsim.topology.world import World
from dvsim.types import NodeIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationResult:
    """Outcome of applying one batch of operations.

    ``previous`` is kept so presentation layers can show the new vectors
    against the inbox that was advertised before the batch.
    """

    previous: World
    world: World
    operations: tuple[ChangeWeight, ...]
    touched: frozenset[NodeIndex] = field(default_factory=frozenset)
    """Endpoints whose edge weight actually changed"""

    @property
    def is_noop(self) -> bool:
        return not self.touched


def _is_infinite(weight: Any) -> bool:
    try:
        return math.isinf(weight)
    except (TypeError, ValueError, OverflowError):
        return False


def validate_weight(weight: Any, zero: Any = 0, edge: tuple[str, str] | None = None) -> None:
    """Reject weights the engine cannot handle.

    Raises:
        InvalidWeightError: For None, NaN, infinite, negative or
            non-comparable weights
    """
    if weight is None:
        raise InvalidWeightError(weight, "weight is required", edge)
    try:
        # NaN is the only value not equal to itself
        if weight != weight:
            raise InvalidWeightError(weight, "weight must be a number", edge)
        negative = weight < zero
    except (TypeError, ArithmeticError) as e:
        raise InvalidWeightError(weight, f"weight is not comparable: {e}", edge) from e
    if _is_infinite(weight):
        raise InvalidWeightError(weight, "weight must be finite", edge)
    if negative:
        raise InvalidWeightError(weight, "weight must be non-negative", edge)


def validate_operation(world: World, op: ChangeWeight) -> None:
    """Check indices and weight of one operation against ``world``."""
    for index in op.endpoints:
        if not 0 <= index < world.size:
            raise NodeIndexError(index, world.size)
    edge = (world.nodes[op.node_a].name, world.nodes[op.node_b].name)
    if op.node_a == op.node_b:
        raise InvalidWeightError(op.weight, "self-loops are not allowed", edge)
    validate_weight(op.weight, world.zero, edge)


def apply_operations(world: World, operations: Iterable[ChangeWeight]) -> MutationResult:
    """Apply a batch of edge changes and return the new World.

    Reapplying an edge with its current weight is a no-op.

    Args:
        world: World to mutate (left untouched)
        operations: Edge changes, applied in order

    Returns:
        MutationResult with the new World

    Raises:
        InvalidWeightError: If any operation carries a rejected weight
        NodeIndexError: If an operation references an index outside the World
    """
    ops = tuple(operations)
    for op in ops:
        validate_operation(world, op)

    edges = [dict(node.edges) for node in world.nodes]
    vectors = [list(node.vector) for node in world.nodes]
    touched: set[NodeIndex] = set()

    for op in ops:
        a, b, weight = op.node_a, op.node_b, op.weight
        if b in edges[a] and edges[a][b] == weight:
            logger.debug(f"Edge {a}<->{b} already has weight {weight}, skipping")
            continue

        edges[a][b] = weight
        edges[b][a] = weight
        vectors[a][b] = DirectEdge(weight)
        vectors[b][a] = DirectEdge(weight)
        touched.update((a, b))

    pending = set(world.pending) | touched
    for index in touched:
        pending.update(edges[index])

    new_world = world.evolve(
        vectors=[tuple(v) for v in vectors],
        edges=edges,
        inbox=[tuple(v) for v in vectors],
        pending=pending,
    )
    logger.info(
        f"Applied {len(ops)} operation(s) at t={world.generation}: "
        f"{len(touched)} endpoint(s) touched, {len(pending)} node(s) pending"
    )
    return MutationResult(
        previous=world,
        world=new_world,
        operations=ops,
        touched=frozenset(touched),
    )


__all__ = [
    "MutationResult",
    "validate_weight",
    "validate_operation",
    "apply_operations",
]
