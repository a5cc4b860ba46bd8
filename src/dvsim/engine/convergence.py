"""Convergence loop: run relaxation rounds until a fixed point.

State machine:

    RUNNING --(changed set non-empty)--> RUNNING   commit World, t + 1
    RUNNING --(changed set empty)------> STABLE    return World, t + 1

After a batch of edge insertions or decreases every entry's cost is
non-increasing and bounded below, so the loop terminates; on a fresh World
the last changing round is at most V-1 rounds after the batch (the
Bellman-Ford bound). Increases terminate when all weights are positive.
Raising a weight next to a zero-weight cycle does not: the cycle's nodes
swap stale advertisements every round and ``ConvergenceError`` is raised
once ``ConvergenceConfig.max_rounds`` is exhausted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dvsim.engine.relaxation import RoundResult, relax
from dvsim.errors import ConvergenceError
from dvsim.topology.world import World
from dvsim.trace.explanation import ExplanationTrace
from dvsim.verification.invariants import InvariantRegistry

logger = logging.getLogger(__name__)


class ConvergenceState(str, Enum):
    """Convergence loop states."""

    RUNNING = "running"
    STABLE = "stable"


@dataclass
class ConvergenceConfig:
    """Configuration for the convergence loop."""

    max_rounds: int = 1000
    """Maximum number of rounds before giving up"""

    check_invariants: bool = True
    """Enforce World invariants on every committed snapshot"""

    record_history: bool = True
    """Keep every RoundResult in the ConvergenceResult"""


@dataclass
class ConvergenceResult:
    """
    Outcome of running a World to its fixed point.

    ``rounds`` holds every round executed, including the final round that
    observed no change (when history is recorded).
    """

    initial: World
    """World the loop started from"""

    world: World
    """Stable World"""

    rounds: list[RoundResult] = field(default_factory=list)
    """Executed rounds in order"""

    rounds_executed: int = 0
    """Total rounds run, including the final no-change round"""

    state: ConvergenceState = ConvergenceState.STABLE

    @property
    def changing_rounds(self) -> int:
        """Rounds in which at least one cost moved."""
        return max(self.rounds_executed - 1, 0)

    @property
    def traces(self) -> list[ExplanationTrace]:
        return [r.trace for r in self.rounds]

    def get_summary(self) -> dict[str, Any]:
        """Get convergence summary dictionary."""
        return {
            "start_generation": self.initial.generation,
            "final_generation": self.world.generation,
            "rounds_executed": self.rounds_executed,
            "changing_rounds": self.changing_rounds,
            "state": self.state.value,
        }


class ConvergenceLoop:
    """
    Drives synchronous relaxation rounds until no cost changes.

    Usage:
        loop = ConvergenceLoop(on_round=report.write_round)
        result = loop.run(mutation.world)
        result.world.cost("A", "D")
    """

    def __init__(
        self,
        config: ConvergenceConfig | None = None,
        on_round: Callable[[RoundResult], None] | None = None,
        invariants: InvariantRegistry | None = None,
    ):
        """
        Initialize the loop.

        Args:
            config: Loop configuration
            on_round: Called with every RoundResult as soon as it is computed
            invariants: Registry enforced on committed Worlds
        """
        self._config = config or ConvergenceConfig()
        self._on_round = on_round
        self._invariants = invariants or InvariantRegistry.default()

    @property
    def config(self) -> ConvergenceConfig:
        return self._config

    def step(self, world: World) -> tuple[ConvergenceState, World, RoundResult]:
        """Run exactly one round.

        Returns:
            (state, next World, round result). In STABLE the returned World
            keeps its vectors, gains a generation and has nothing pending.
        """
        result = relax(world)
        if self._on_round is not None:
            self._on_round(result)

        if result.converged:
            stable = world.evolve(pending=(), generation=result.generation)
            return ConvergenceState.STABLE, stable, result

        committed = result.commit()
        if self._config.check_invariants:
            self._invariants.enforce(committed)
        return ConvergenceState.RUNNING, committed, result

    def run(self, world: World) -> ConvergenceResult:
        """Run rounds until the STABLE state is reached.

        Raises:
            ConvergenceError: If ``max_rounds`` rounds pass without a fixed point
            InvariantViolationError: If a committed World breaks an invariant
        """
        if self._config.check_invariants:
            self._invariants.enforce(world)

        rounds: list[RoundResult] = []
        current = world
        for executed in range(1, self._config.max_rounds + 1):
            state, current, result = self.step(current)
            if self._config.record_history:
                rounds.append(result)
            if state is ConvergenceState.STABLE:
                logger.info(
                    f"Converged at t={current.generation} after {executed} round(s) "
                    f"from t={world.generation}"
                )
                return ConvergenceResult(
                    initial=world,
                    world=current,
                    rounds=rounds,
                    rounds_executed=executed,
                    state=state,
                )
            logger.debug(f"t={current.generation}: changed {sorted(result.changed)}")

        logger.error(f"No fixed point within {self._config.max_rounds} rounds")
        raise ConvergenceError(self._config.max_rounds, current.generation)


def run_until_stable(world: World, config: ConvergenceConfig | None = None) -> World:
    """Convenience wrapper returning only the stable World."""
    return ConvergenceLoop(config).run(world).world


__all__ = [
    "ConvergenceState",
    "ConvergenceConfig",
    "ConvergenceResult",
    "ConvergenceLoop",
    "run_until_stable",
]
