"""Shared fixtures for simulator tests."""

from __future__ import annotations

import pytest

from dvsim.engine import ConvergenceLoop, ConvergenceResult
from dvsim.topology import MutationResult, World

SQUARE_EDGES = [
    ("A", "B", 2),
    ("B", "C", 7),
    ("C", "D", 4),
    ("A", "D", 8),
    ("B", "D", 9),
]


def build(names: list[str], edges: list[tuple[str, str, int]]) -> MutationResult:
    """Create a World and apply ``edges`` as one batch."""
    world = World.new(names)
    return world.apply([world.resolve_edge(a, b, w) for a, b, w in edges])


@pytest.fixture
def square_world() -> World:
    """Four nodes A-D, no edges."""
    return World.new(["A", "B", "C", "D"])


@pytest.fixture
def square_mutation() -> MutationResult:
    """Square with diagonal B-D: A-B=2, B-C=7, C-D=4, A-D=8, B-D=9."""
    return build(["A", "B", "C", "D"], SQUARE_EDGES)


@pytest.fixture
def square_converged(square_mutation: MutationResult) -> ConvergenceResult:
    """Square run to its fixed point."""
    return ConvergenceLoop().run(square_mutation.world)


@pytest.fixture
def triangle_mutation() -> MutationResult:
    """Triangle with an equal-cost tie: A-B=1, B-C=1, A-C=2."""
    return build(["A", "B", "C"], [("A", "B", 1), ("B", "C", 1), ("A", "C", 2)])


@pytest.fixture
def line_mutation() -> MutationResult:
    """Path A-B-C-D with unit weights."""
    return build(["A", "B", "C", "D"], [("A", "B", 1), ("B", "C", 1), ("C", "D", 1)])


@pytest.fixture
def build_mutation():
    """Factory fixture: ``build_mutation(names, edges)`` -> MutationResult."""
    return build
