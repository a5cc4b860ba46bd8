"""Property-based tests for relaxation and convergence.

Random connected graphs are driven to their fixed point and checked
against the NumPy Floyd-Warshall reference.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from dvsim.algebra.vector import SelfEntry
from dvsim.engine import ConvergenceLoop
from dvsim.topology import ChangeWeight, World
from dvsim.verification import verify_converged

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


@st.composite
def connected_graph(
    draw: st.DrawFn,
    min_nodes: int = 2,
    max_nodes: int = 7,
    max_weight: int = 20,
) -> tuple[list[str], list[ChangeWeight]]:
    """A random spanning tree plus random extra edges."""
    n = draw(st.integers(min_value=min_nodes, max_value=max_nodes))
    names = [chr(ord("A") + i) for i in range(n)]
    weights = st.integers(min_value=0, max_value=max_weight)

    edges: dict[tuple[int, int], int] = {}
    for node in range(1, n):
        parent = draw(st.integers(min_value=0, max_value=node - 1))
        edges[(parent, node)] = draw(weights)

    all_pairs = [(a, b) for a in range(n) for b in range(a + 1, n)]
    extra = draw(st.lists(st.sampled_from(all_pairs), max_size=n, unique=True))
    for pair in extra:
        edges[pair] = draw(weights)

    return names, [ChangeWeight(a, b, w) for (a, b), w in edges.items()]


def _converge(names: list[str], ops: list[ChangeWeight]):
    mutation = World.new(names).apply(ops)
    return mutation, ConvergenceLoop().run(mutation.world)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestConvergenceProperties:
    """Fixed-point properties on random connected graphs."""

    @given(graph=connected_graph())
    @settings(max_examples=60, deadline=None)
    def test_matches_reference(self, graph):
        names, ops = graph
        _, result = _converge(names, ops)
        check = verify_converged(result.world)
        assert check.matches, check.summary()

    @given(graph=connected_graph())
    @settings(max_examples=60, deadline=None)
    def test_round_bound(self, graph):
        """At most V-1 rounds change anything after a batch."""
        names, ops = graph
        _, result = _converge(names, ops)
        assert result.changing_rounds <= len(names) - 1

    @given(graph=connected_graph())
    @settings(max_examples=60, deadline=None)
    def test_self_entries_stay_self(self, graph):
        names, ops = graph
        _, result = _converge(names, ops)
        for round_result in result.rounds:
            for index, vector in enumerate(round_result.vectors):
                assert isinstance(vector[index], SelfEntry)

    @given(graph=connected_graph())
    @settings(max_examples=60, deadline=None)
    def test_costs_never_increase(self, graph):
        """Building a fresh World only ever lowers believed costs."""
        names, ops = graph
        mutation, result = _converge(names, ops)
        previous = mutation.world.vectors()
        for round_result in result.rounds:
            for old, new in zip(previous, round_result.vectors):
                for old_entry, new_entry in zip(old, new):
                    assert new_entry.cost <= old_entry.cost
            previous = round_result.vectors

    @given(graph=connected_graph())
    @settings(max_examples=60, deadline=None)
    def test_idempotent(self, graph):
        names, ops = graph
        _, result = _converge(names, ops)
        again = ConvergenceLoop().run(result.world)
        assert again.changing_rounds == 0
        assert again.rounds_executed == 1
        assert again.world.vectors() == result.world.vectors()

    @given(graph=connected_graph(), data=st.data())
    @settings(max_examples=60, deadline=None)
    def test_weight_decrease_reconverges(self, graph, data):
        names, ops = graph
        _, result = _converge(names, ops)
        op = data.draw(st.sampled_from(ops))
        lowered = data.draw(st.integers(min_value=0, max_value=op.weight))

        mutation = result.world.apply([ChangeWeight(op.node_a, op.node_b, lowered)])
        final = ConvergenceLoop().run(mutation.world).world
        check = verify_converged(final)
        assert check.matches, check.summary()


class TestExplanationProperties:
    """Every relaxed entry is fully explained."""

    @given(graph=connected_graph())
    @settings(max_examples=60, deadline=None)
    def test_one_candidate_per_neighbor(self, graph):
        names, ops = graph
        _, result = _converge(names, ops)
        for round_result in result.rounds:
            world = round_result.previous
            for entry in round_result.trace:
                neighbors = world.neighbors(entry.source)
                assert [c.neighbor for c in entry.candidates] == neighbors
                direct = [c for c in entry.candidates if c.direct]
                assert len(direct) == (1 if entry.destination in neighbors else 0)

    @given(graph=connected_graph())
    @settings(max_examples=60, deadline=None)
    def test_winner_cost_is_entry_cost(self, graph):
        names, ops = graph
        _, result = _converge(names, ops)
        for round_result in result.rounds:
            for entry in round_result.trace:
                new_entry = round_result.vectors[entry.source][entry.destination]
                assert entry.result == new_entry
                assert entry.winner is not None
                assert entry.winner.cost == new_entry.cost
                assert all(entry.winner.cost <= c.cost for c in entry.candidates)
