"""Exceptions raised by the distance-vector simulator.

Input errors (unknown node, bad weight) are raised at the mutation boundary
before any World is built. Invariant violations are programmer errors and
abort the computation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class DVSimError(Exception):
    """Base class for all simulator errors."""


@dataclass(eq=False)
class NodeNotFoundError(DVSimError, LookupError):
    """An edge operation referenced an unregistered node name.

    Attributes:
        name: The name that could not be resolved
        known: Names registered in the World
    """

    name: str
    known: tuple[str, ...] = ()

    def __str__(self) -> str:
        if self.known:
            return f"Unknown node '{self.name}' (known: {', '.join(self.known)})"
        return f"Unknown node '{self.name}'"


@dataclass(eq=False)
class NodeIndexError(DVSimError, IndexError):
    """An operation referenced a node index outside the World.

    Attributes:
        index: The offending index
        size: Number of nodes in the World
    """

    index: int
    size: int = 0

    def __str__(self) -> str:
        return f"Node index {self.index} out of range for {self.size} nodes"


@dataclass(eq=False)
class InvalidWeightError(DVSimError, ValueError):
    """An edge weight was rejected at the mutation boundary.

    Attributes:
        weight: The rejected weight
        reason: Why it was rejected
        edge: Endpoint names, when known
    """

    weight: Any
    reason: str = "weight must be non-negative"
    edge: tuple[str, str] | None = None

    def __str__(self) -> str:
        where = f" on edge {self.edge[0]}-{self.edge[1]}" if self.edge else ""
        return f"Invalid weight {self.weight!r}{where}: {self.reason}"


@dataclass(eq=False)
class InvariantViolationError(DVSimError, AssertionError):
    """An internal World invariant does not hold.

    Attributes:
        invariant: Name of the violated invariant
        message: Human-readable description
        context: Offending indices/values
    """

    invariant: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        if self.context:
            details = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.invariant}: {self.message} ({details})"
        return f"{self.invariant}: {self.message}"


@dataclass(eq=False)
class ConvergenceError(DVSimError, RuntimeError):
    """The round budget was exhausted before reaching a fixed point.

    Attributes:
        max_rounds: Configured budget
        generation: Generation of the last committed World
    """

    max_rounds: int
    generation: int = 0

    def __str__(self) -> str:
        return (
            f"No fixed point after {self.max_rounds} rounds "
            f"(last generation t={self.generation})"
        )


__all__ = [
    "DVSimError",
    "NodeNotFoundError",
    "NodeIndexError",
    "InvalidWeightError",
    "InvariantViolationError",
    "ConvergenceError",
]
