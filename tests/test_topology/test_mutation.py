"""Tests for applying edge-weight batches."""

from __future__ import annotations

import math
from decimal import Decimal

import pytest

from dvsim.algebra.vector import SELF, UNREACHABLE, DirectEdge, ViaNeighbor
from dvsim.errors import DVSimError, InvalidWeightError, NodeIndexError
from dvsim.topology import ChangeWeight, World, apply_operations, validate_weight


class TestApply:
    """Tests for World.apply."""

    def test_edges_symmetric(self, square_mutation):
        world = square_mutation.world
        for node in world.nodes:
            for neighbor, weight in node.edges.items():
                assert world.nodes[neighbor].edges[node.index] == weight

    def test_seeds_direct_entries(self, square_mutation):
        world = square_mutation.world
        assert world.vector(0) == (SELF, DirectEdge(2), UNREACHABLE, DirectEdge(8))
        assert world.vector(3) == (DirectEdge(8), DirectEdge(9), DirectEdge(4), SELF)

    def test_inbox_holds_seeded_vectors(self, square_mutation):
        assert square_mutation.world.inbox == square_mutation.world.vectors()

    def test_endpoints_pending(self, square_mutation):
        assert square_mutation.world.pending == frozenset({0, 1, 2, 3})
        assert square_mutation.touched == frozenset({0, 1, 2, 3})

    def test_neighbors_of_endpoints_pending(self, line_mutation):
        """Changing C-D also schedules B, which hears C's new advertisement."""
        from dvsim.engine import ConvergenceLoop

        stable = ConvergenceLoop().run(line_mutation.world).world
        result = stable.apply([stable.resolve_edge("C", "D", 5)])
        assert result.touched == frozenset({2, 3})
        assert result.world.pending == frozenset({1, 2, 3})

    def test_generation_not_advanced(self, square_converged):
        world = square_converged.world
        result = world.apply([world.resolve_edge("B", "D", 80)])
        assert result.world.generation == world.generation

    def test_original_untouched(self, square_world):
        result = square_world.apply([square_world.resolve_edge("A", "B", 2)])
        assert square_world.edges() == {}
        assert square_world.vector(0)[1] == UNREACHABLE
        assert result.previous is square_world

    def test_reweight_seeds_new_weight(self, square_converged):
        world = square_converged.world
        result = world.apply([world.resolve_edge("B", "D", 80)])
        assert result.world.weight(1, 3) == 80
        assert result.world.vector(1)[3] == DirectEdge(80)
        assert result.world.vector(3)[1] == DirectEdge(80)

    def test_identical_weight_is_noop(self, square_converged):
        world = square_converged.world
        result = world.apply([world.resolve_edge("A", "C", 9), world.resolve_edge("A", "B", 2)])
        # A-C is new, A-B already has weight 2
        assert result.touched == frozenset({0, 2})

        again = square_converged.world.apply([world.resolve_edge("A", "B", 2)])
        assert again.is_noop
        assert again.world.vectors() == world.vectors()
        assert again.world.pending == frozenset()

    def test_noop_keeps_via_entries(self, square_converged):
        world = square_converged.world
        assert world.vector(0)[2] == ViaNeighbor(9, 1)
        again = world.apply([world.resolve_edge("B", "C", 7)])
        assert again.world.vector(0)[2] == ViaNeighbor(9, 1)

    def test_later_operation_wins_within_batch(self, square_world):
        result = square_world.apply(
            [square_world.resolve_edge("A", "B", 5), square_world.resolve_edge("B", "A", 3)]
        )
        assert result.world.weight(0, 1) == 3
        assert result.world.vector(0)[1] == DirectEdge(3)

    def test_apply_operations_function(self, square_world):
        result = apply_operations(square_world, [ChangeWeight(0, 1, 4)])
        assert result.operations == (ChangeWeight(0, 1, 4),)
        assert result.world.weight(1, 0) == 4


class TestValidation:
    """Rejected batches leave the World untouched."""

    def test_negative_weight(self, square_world):
        with pytest.raises(InvalidWeightError) as exc_info:
            square_world.apply([square_world.resolve_edge("A", "B", -1)])
        assert exc_info.value.edge == ("A", "B")
        assert "non-negative" in str(exc_info.value)

    def test_batch_rejected_as_a_whole(self, square_world):
        ops = [square_world.resolve_edge("A", "B", 2), square_world.resolve_edge("B", "C", -4)]
        with pytest.raises(InvalidWeightError):
            square_world.apply(ops)
        assert square_world.edges() == {}

    def test_self_loop(self, square_world):
        with pytest.raises(InvalidWeightError, match="self-loop"):
            square_world.apply([square_world.resolve_edge("A", "A", 1)])

    def test_index_out_of_range(self, square_world):
        with pytest.raises(NodeIndexError) as exc_info:
            square_world.apply([ChangeWeight(0, 7, 1)])
        assert exc_info.value.index == 7
        assert exc_info.value.size == 4
        assert isinstance(exc_info.value, DVSimError)
        assert isinstance(exc_info.value, IndexError)

    @pytest.mark.parametrize(
        "weight",
        [
            math.nan,
            math.inf,
            None,
            "heavy",
            Decimal("NaN"),
            Decimal("sNaN"),
            Decimal("Infinity"),
        ],
    )
    def test_disallowed_weights(self, weight):
        with pytest.raises(InvalidWeightError):
            validate_weight(weight)

    def test_invalid_weight_is_value_error(self):
        with pytest.raises(ValueError):
            validate_weight(-3)

    def test_zero_weight_allowed(self):
        validate_weight(0)

    def test_custom_zero(self):
        world = World.new(["X", "Y"], zero=Decimal("0"))
        result = world.apply([world.resolve_edge("X", "Y", Decimal("0.5"))])
        assert result.world.weight(0, 1) == Decimal("0.5")
        with pytest.raises(InvalidWeightError):
            world.apply([world.resolve_edge("X", "Y", Decimal("-0.5"))])
