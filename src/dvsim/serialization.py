"""Serialization for costs, vector entries, Worlds and explanation traces.

Round-trip guarantee: ``from_dict(to_dict(x)) == x`` for costs, vector
entries and Worlds, provided the weights themselves are JSON-compatible
(``int``/``float``). Explanation traces are output-only: they are consumed
by presentation layers, never read back.
"""

from __future__ import annotations

import json
from typing import Any

from dvsim.algebra.cost import INFINITY, ZERO, Cost, CostKind
from dvsim.algebra.vector import (
    SELF,
    UNREACHABLE,
    DirectEdge,
    DistanceVectorValue,
    SelfEntry,
    Unreachable,
    ViaNeighbor,
)
from dvsim.topology.world import World
from dvsim.trace.explanation import Candidate, ExplanationEntry, ExplanationTrace

# ── Cost / entry serialization ─────────────────────────────────────────


def cost_to_dict(cost: Cost[Any]) -> dict[str, Any]:
    """Serialize a cost with a ``"type"`` discriminator."""
    if cost.kind is CostKind.VALUE:
        return {"type": "Value", "weight": cost.value}
    return {"type": cost.kind.name.capitalize()}


def cost_from_dict(data: dict[str, Any]) -> Cost[Any]:
    kind = data["type"]
    if kind == "Zero":
        return ZERO
    if kind == "Infinity":
        return INFINITY
    if kind == "Value":
        return Cost.of(data["weight"])
    raise ValueError(f"Unknown cost type: {kind}")


def entry_to_dict(entry: DistanceVectorValue) -> dict[str, Any]:
    """Serialize a distance vector entry.

    Raises:
        TypeError: If the entry type is unknown.
    """
    if isinstance(entry, Unreachable):
        return {"type": "Unreachable"}
    if isinstance(entry, SelfEntry):
        return {"type": "Self"}
    if isinstance(entry, DirectEdge):
        return {"type": "DirectEdge", "weight": entry.weight}
    if isinstance(entry, ViaNeighbor):
        return {"type": "ViaNeighbor", "weight": entry.weight, "neighbor": entry.neighbor}
    raise TypeError(f"Unknown distance vector entry: {type(entry).__name__}")


def entry_from_dict(data: dict[str, Any]) -> DistanceVectorValue:
    kind = data["type"]
    if kind == "Unreachable":
        return UNREACHABLE
    if kind == "Self":
        return SELF
    if kind == "DirectEdge":
        return DirectEdge(data["weight"])
    if kind == "ViaNeighbor":
        return ViaNeighbor(data["weight"], data["neighbor"])
    raise ValueError(f"Unknown distance vector entry type: {kind}")


# ── World serialization ────────────────────────────────────────────────


def world_to_dict(world: World) -> dict[str, Any]:
    """Serialize a World snapshot.

    Edges are listed once per undirected pair, lowest index first.
    """
    return {
        "generation": world.generation,
        "zero": world.zero,
        "nodes": [
            {
                "index": node.index,
                "name": node.name,
                "pending": node.pending,
                "vector": [entry_to_dict(e) for e in node.vector],
            }
            for node in world.nodes
        ],
        "edges": [{"a": a, "b": b, "weight": w} for (a, b), w in sorted(world.edges().items())],
        "inbox": [[entry_to_dict(e) for e in vector] for vector in world.inbox],
    }


def world_from_dict(data: dict[str, Any]) -> World:
    """Rebuild a World from :func:`world_to_dict` output."""
    nodes = sorted(data["nodes"], key=lambda n: n["index"])
    base = World.new([n["name"] for n in nodes], zero=data.get("zero", 0))

    edges: list[dict[int, Any]] = [{} for _ in nodes]
    for edge in data.get("edges", []):
        edges[edge["a"]][edge["b"]] = edge["weight"]
        edges[edge["b"]][edge["a"]] = edge["weight"]

    vectors = [tuple(entry_from_dict(e) for e in n["vector"]) for n in nodes]
    inbox = [tuple(entry_from_dict(e) for e in v) for v in data.get("inbox", [])] or vectors
    return base.evolve(
        vectors=vectors,
        edges=edges,
        inbox=inbox,
        pending=[n["index"] for n in nodes if n.get("pending")],
        generation=data.get("generation", 0),
    )


def world_to_json(world: World, **kwargs: Any) -> str:
    return json.dumps(world_to_dict(world), **kwargs)


def world_from_json(text: str) -> World:
    return world_from_dict(json.loads(text))


# ── Trace serialization ────────────────────────────────────────────────


def candidate_to_dict(candidate: Candidate) -> dict[str, Any]:
    return {
        "neighbor": candidate.neighbor,
        "direct": candidate.direct,
        "terms": [
            {
                "kind": term.kind.value,
                "source": term.source,
                "target": term.target,
                "cost": cost_to_dict(term.cost),
            }
            for term in candidate.terms
        ],
        "cost": cost_to_dict(candidate.cost),
    }


def explanation_entry_to_dict(entry: ExplanationEntry) -> dict[str, Any]:
    return {
        "source": entry.source,
        "destination": entry.destination,
        "candidates": [candidate_to_dict(c) for c in entry.candidates],
        "winner_index": entry.winner_index,
        "previous": entry_to_dict(entry.previous),
        "result": entry_to_dict(entry.result),
        "changed": entry.changed,
    }


def trace_to_dict(trace: ExplanationTrace) -> dict[str, Any]:
    return {
        "generation": trace.generation,
        "entries": [explanation_entry_to_dict(e) for e in trace],
    }


def trace_to_json(trace: ExplanationTrace, **kwargs: Any) -> str:
    return json.dumps(trace_to_dict(trace), **kwargs)


__all__ = [
    "cost_to_dict",
    "cost_from_dict",
    "entry_to_dict",
    "entry_from_dict",
    "world_to_dict",
    "world_from_dict",
    "world_to_json",
    "world_from_json",
    "candidate_to_dict",
    "explanation_entry_to_dict",
    "trace_to_dict",
    "trace_to_json",
]
