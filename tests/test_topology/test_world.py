"""Tests for World construction and lookup."""

from __future__ import annotations

import pytest

from dvsim.algebra.cost import INFINITY, ZERO, Cost
from dvsim.algebra.vector import SELF, UNREACHABLE, DirectEdge
from dvsim.errors import NodeNotFoundError
from dvsim.topology import ChangeWeight, World


class TestWorldNew:
    """Tests for World.new."""

    def test_indices_and_names(self, square_world):
        assert square_world.size == 4
        assert square_world.names == ["A", "B", "C", "D"]
        assert [n.index for n in square_world.nodes] == [0, 1, 2, 3]
        assert square_world.node_names() == {0: "A", 1: "B", 2: "C", 3: "D"}

    def test_vectors_unreachable_except_self(self, square_world):
        for node in square_world.nodes:
            for destination, entry in enumerate(node.vector):
                if destination == node.index:
                    assert entry == SELF
                else:
                    assert entry == UNREACHABLE

    def test_no_edges_nothing_pending(self, square_world):
        assert square_world.edges() == {}
        assert square_world.pending == frozenset()
        assert square_world.generation == 0

    def test_inbox_mirrors_vectors(self, square_world):
        assert square_world.inbox == square_world.vectors()

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            World.new(["A", "B", "A"])

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            World.new(["A", ""])

    def test_empty_world(self):
        world = World.new([])
        assert world.size == 0


class TestResolveEdge:
    """Tests for name -> index resolution."""

    def test_resolves_indices(self, square_world):
        op = square_world.resolve_edge("B", "D", 9)
        assert op == ChangeWeight(1, 3, 9)
        assert op.endpoints == (1, 3)

    def test_unknown_name(self, square_world):
        with pytest.raises(NodeNotFoundError) as exc_info:
            square_world.resolve_edge("A", "Z", 1)
        assert exc_info.value.name == "Z"
        assert "Z" in str(exc_info.value)

    def test_not_found_is_lookup_error(self, square_world):
        with pytest.raises(LookupError):
            square_world.index_of("Q")

    def test_resolution_does_not_mutate(self, square_world):
        square_world.resolve_edge("A", "B", 3)
        assert square_world.edges() == {}
        assert square_world.pending == frozenset()


class TestLookup:
    """Tests for read accessors on a populated World."""

    def test_cost_and_entry(self, square_mutation):
        world = square_mutation.world
        assert world.entry("A", "B") == DirectEdge(2)
        assert world.cost("A", "B") == Cost.of(2)
        assert world.cost("A", "A") == ZERO
        assert world.cost("A", "C") == INFINITY

    def test_node_by_name_or_index(self, square_mutation):
        world = square_mutation.world
        assert world.node("C") is world.node(2)
        assert world.node("C").neighbors == [1, 3]
        assert world.node("C").weight_to(3) == 4
        assert world.node("C").weight_to(0) is None

    def test_edges_listed_once(self, square_mutation):
        assert square_mutation.world.edges() == {
            (0, 1): 2,
            (1, 2): 7,
            (2, 3): 4,
            (0, 3): 8,
            (1, 3): 9,
        }

    def test_weight_symmetric(self, square_mutation):
        world = square_mutation.world
        for (a, b), weight in world.edges().items():
            assert world.weight(a, b) == world.weight(b, a) == weight

    def test_routing_table(self, square_converged):
        table = square_converged.world.routing_table("A")
        assert table["A"] == (ZERO, None)
        assert table["B"] == (Cost.of(2), "B")
        assert table["C"] == (Cost.of(9), "B")
        assert table["D"] == (Cost.of(8), "D")

    def test_summary(self, square_mutation):
        text = square_mutation.world.summary()
        assert "World t=0" in text
        assert "A *: A=0, B=2, C=∞, D=8" in text


class TestEvolve:
    """Snapshots are derived, never modified."""

    def test_evolve_leaves_original(self, square_world):
        evolved = square_world.evolve(pending=[0], generation=5)
        assert evolved.generation == 5
        assert evolved.pending == frozenset({0})
        assert square_world.generation == 0
        assert square_world.pending == frozenset()

    def test_world_is_frozen(self, square_world):
        with pytest.raises(AttributeError):
            square_world.generation = 3  # type: ignore[misc]

    def test_node_edges_read_only(self, square_mutation):
        with pytest.raises(TypeError):
            square_mutation.world.nodes[0].edges[2] = 1  # type: ignore[index]
