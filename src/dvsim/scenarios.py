"""Classroom topologies.

Each scenario is an initial batch of edges followed by zero or more
re-weighting batches; every batch is applied to the previous stable World
and run to convergence again.

- SQUARE: 4 nodes A-D; after converging, B-D is re-weighted 9 -> 80
- EXERCISE: 8 nodes A-H; after converging, C-F is re-weighted 2 -> 30
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from dvsim.engine.convergence import ConvergenceConfig, ConvergenceLoop, ConvergenceResult
from dvsim.engine.relaxation import RoundResult
from dvsim.topology.mutation import MutationResult
from dvsim.topology.operations import ChangeWeight
from dvsim.topology.world import World

logger = logging.getLogger(__name__)

EdgeSpec = tuple[str, str, Any]


@dataclass(frozen=True)
class Scenario:
    """A named topology with its follow-up re-weightings."""

    name: str
    nodes: tuple[str, ...]
    edges: tuple[EdgeSpec, ...]
    followups: tuple[tuple[EdgeSpec, ...], ...] = ()
    description: str = ""

    @property
    def batches(self) -> list[tuple[EdgeSpec, ...]]:
        """Initial edges followed by each follow-up batch."""
        return [self.edges, *self.followups]

    def build(self) -> World:
        return World.new(self.nodes)

    @staticmethod
    def resolve(world: World, batch: tuple[EdgeSpec, ...]) -> list[ChangeWeight]:
        """Resolve every named edge of a batch before anything is applied."""
        return [world.resolve_edge(a, b, w) for a, b, w in batch]


@dataclass
class ScenarioRun:
    """Every mutation and convergence of one scenario, in order."""

    scenario: Scenario
    mutations: list[MutationResult] = field(default_factory=list)
    convergences: list[ConvergenceResult] = field(default_factory=list)

    @property
    def final(self) -> World:
        return self.convergences[-1].world


def run_scenario(
    scenario: Scenario,
    config: ConvergenceConfig | None = None,
    on_mutation: Callable[[MutationResult], Any] | None = None,
    on_round: Callable[[RoundResult], Any] | None = None,
) -> ScenarioRun:
    """Apply every batch of ``scenario`` and converge after each one.

    Args:
        scenario: Scenario to run
        config: Convergence configuration
        on_mutation: Called with each MutationResult
        on_round: Called with each RoundResult
    """
    run = ScenarioRun(scenario=scenario)
    loop = ConvergenceLoop(config, on_round=on_round)
    world = scenario.build()

    for batch in scenario.batches:
        mutation = world.apply(Scenario.resolve(world, batch))
        if on_mutation is not None:
            on_mutation(mutation)
        result = loop.run(mutation.world)
        run.mutations.append(mutation)
        run.convergences.append(result)
        world = result.world

    logger.info(
        f"Scenario {scenario.name}: {len(run.convergences)} batch(es), final t={world.generation}"
    )
    return run


SQUARE = Scenario(
    name="square",
    nodes=("A", "B", "C", "D"),
    edges=(
        ("A", "B", 2),
        ("B", "C", 7),
        ("C", "D", 4),
        ("A", "D", 8),
        ("B", "D", 9),
    ),
    followups=((("B", "D", 80),),),
    description="Four routers with a diagonal; the diagonal later degrades.",
)

EXERCISE = Scenario(
    name="exercise",
    nodes=("A", "B", "C", "D", "E", "F", "G", "H"),
    edges=(
        ("A", "D", 3),
        ("A", "G", 1),
        ("B", "E", 2),
        ("B", "H", 1),
        ("C", "D", 1),
        ("C", "F", 2),
        ("D", "G", 6),
        ("D", "F", 5),
        ("E", "F", 1),
        ("E", "H", 3),
        ("F", "H", 8),
    ),
    followups=((("C", "F", 30),),),
    description="Eight routers; the C-F link later degrades.",
)

SCENARIOS: dict[str, Scenario] = {s.name: s for s in (SQUARE, EXERCISE)}


__all__ = [
    "EdgeSpec",
    "Scenario",
    "ScenarioRun",
    "run_scenario",
    "SQUARE",
    "EXERCISE",
    "SCENARIOS",
]
