"""Runtime invariant checking for World snapshots.

Every World produced by mutation or relaxation must satisfy:

- self_entry_zero: DV[n][n] is SelfEntry for every node n
- vector_complete: every node holds one entry per registered node, in
  both its vector and its inbox copy
- edge_symmetry: weight(a, b) == weight(b, a) for every recorded edge
- non_negative_weights: no edge weight is below the weight type's zero
- valid_next_hop: a ViaNeighbor entry names an actual neighbor

A broken invariant is a programmer error. ``check_world`` records the
violation, logs it and raises ``InvariantViolationError``: wrong routing
data must not propagate into later rounds.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dvsim.algebra.vector import SelfEntry, ViaNeighbor
from dvsim.errors import InvariantViolationError
from dvsim.topology.world import World

logger = logging.getLogger(__name__)


class ViolationSeverity(str, Enum):
    """Severity levels for invariant violations."""

    WARNING = "warning"  # Non-critical, log and continue
    ERROR = "error"  # Critical, abort the computation
    FATAL = "fatal"  # Unrecoverable, abort the computation


@dataclass
class Invariant:
    """A named predicate over a World.

    The condition returns a (possibly empty) dict describing the offending
    values, or None when the invariant holds.

    Attributes:
        name: Descriptive name
        condition: Function returning None or an offending-context dict
        severity: Severity level if violated
        message: Message to log on violation
        enabled: Whether the invariant is checked
    """

    name: str
    condition: Callable[[World], dict[str, Any] | None]
    severity: ViolationSeverity = ViolationSeverity.ERROR
    message: str = ""
    enabled: bool = True

    def check(self, world: World) -> dict[str, Any] | None:
        """Return the offending context, or None if the invariant holds."""
        if not self.enabled:
            return None
        return self.condition(world)


@dataclass
class Violation:
    """Record of an invariant violation.

    Attributes:
        invariant_name: Name of violated invariant
        severity: Severity of violation
        message: Violation message
        generation: Generation of the offending World
        context: Offending indices/values
        timestamp: When the violation was detected
    """

    invariant_name: str
    severity: ViolationSeverity
    message: str
    generation: int
    context: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    def to_error(self) -> InvariantViolationError:
        return InvariantViolationError(
            self.invariant_name,
            self.message,
            {"t": self.generation, **self.context},
        )


# =============================================================================
# World invariants
# =============================================================================


def _self_entry_zero(world: World) -> dict[str, Any] | None:
    for node in world.nodes:
        if node.index < len(node.vector) and not isinstance(node.vector[node.index], SelfEntry):
            return {"node": node.name, "entry": node.vector[node.index]}
    return None


def _vector_complete(world: World) -> dict[str, Any] | None:
    if len(world.inbox) != world.size:
        return {"inbox_size": len(world.inbox), "nodes": world.size}
    for node in world.nodes:
        if len(node.vector) != world.size:
            return {"node": node.name, "entries": len(node.vector), "nodes": world.size}
        if len(world.inbox[node.index]) != world.size:
            return {"inbox": node.name, "entries": len(world.inbox[node.index])}
    return None


def _edge_symmetry(world: World) -> dict[str, Any] | None:
    for node in world.nodes:
        for neighbor, weight in node.edges.items():
            other = world.nodes[neighbor]
            if node.index not in other.edges or other.edges[node.index] != weight:
                return {
                    "edge": (node.name, other.name),
                    "forward": weight,
                    "back": other.edges.get(node.index),
                }
    return None


def _non_negative_weights(world: World) -> dict[str, Any] | None:
    for (a, b), weight in world.edges().items():
        if weight < world.zero:
            return {"edge": (world.nodes[a].name, world.nodes[b].name), "weight": weight}
    return None


def _valid_next_hop(world: World) -> dict[str, Any] | None:
    for node in world.nodes:
        for destination, entry in enumerate(node.vector):
            if isinstance(entry, ViaNeighbor) and entry.neighbor not in node.edges:
                return {"node": node.name, "destination": destination, "via": entry.neighbor}
    return None


class InvariantRegistry:
    """Registry of World invariants with violation tracking.

    Usage:
        registry = InvariantRegistry.default()
        registry.check_all(world)          # list of violated names
        registry.enforce(world)            # raises on ERROR/FATAL
    """

    def __init__(self, name: str = "default"):
        """Initialize registry.

        Args:
            name: Registry name for logging
        """
        self.name = name
        self._invariants: dict[str, Invariant] = {}
        self._violations: list[Violation] = []
        self._check_count = 0
        self._on_violation: list[Callable[[Violation], None]] = []

    @classmethod
    def default(cls) -> InvariantRegistry:
        """Registry preloaded with the standard World invariants."""
        registry = cls("world")
        registry.register(
            "self_entry_zero",
            _self_entry_zero,
            ViolationSeverity.FATAL,
            "a node's entry for itself must be Self",
        )
        registry.register(
            "vector_complete",
            _vector_complete,
            ViolationSeverity.FATAL,
            "every vector must hold one entry per registered node",
        )
        registry.register(
            "edge_symmetry",
            _edge_symmetry,
            ViolationSeverity.FATAL,
            "edge weights must be symmetric",
        )
        registry.register(
            "non_negative_weights",
            _non_negative_weights,
            ViolationSeverity.ERROR,
            "edge weights must be non-negative",
        )
        registry.register(
            "valid_next_hop",
            _valid_next_hop,
            ViolationSeverity.ERROR,
            "a via-neighbor entry must name a neighbor",
        )
        return registry

    def register(
        self,
        name: str,
        condition: Callable[[World], dict[str, Any] | None],
        severity: ViolationSeverity = ViolationSeverity.ERROR,
        message: str = "",
    ) -> Invariant:
        """Register a new invariant.

        Args:
            name: Unique name for invariant
            condition: Function returning None or an offending-context dict
            severity: Severity level if violated
            message: Message to log on violation

        Returns:
            The registered Invariant
        """
        invariant = Invariant(
            name=name,
            condition=condition,
            severity=severity,
            message=message or f"Invariant '{name}' violated",
        )
        self._invariants[name] = invariant
        return invariant

    def unregister(self, name: str) -> bool:
        if name in self._invariants:
            del self._invariants[name]
            return True
        return False

    @property
    def names(self) -> list[str]:
        return list(self._invariants)

    def check(self, name: str, world: World) -> Violation | None:
        """Check a specific invariant.

        Returns:
            The recorded Violation, or None if the invariant holds

        Raises:
            KeyError: If invariant not found
        """
        invariant = self._invariants.get(name)
        if not invariant:
            raise KeyError(f"Invariant '{name}' not registered")
        self._check_count += 1

        context = invariant.check(world)
        if context is None:
            return None

        violation = Violation(
            invariant_name=name,
            severity=invariant.severity,
            message=invariant.message,
            generation=world.generation,
            context=context,
        )
        self._violations.append(violation)

        log_level = {
            ViolationSeverity.WARNING: logging.WARNING,
            ViolationSeverity.ERROR: logging.ERROR,
            ViolationSeverity.FATAL: logging.CRITICAL,
        }.get(invariant.severity, logging.ERROR)
        logger.log(
            log_level,
            f"Invariant violation at t={world.generation}: {name} - {invariant.message}",
            extra={"context": context},
        )

        for handler in self._on_violation:
            handler(violation)
        return violation

    def check_all(self, world: World) -> list[str]:
        """Check all registered invariants.

        Returns:
            List of violated invariant names
        """
        return [name for name in list(self._invariants) if self.check(name, world)]

    def enforce(self, world: World) -> None:
        """Check everything and raise on the first ERROR or FATAL violation.

        Raises:
            InvariantViolationError: If an ERROR/FATAL invariant fails
        """
        for name in list(self._invariants):
            violation = self.check(name, world)
            if violation is not None and violation.severity is not ViolationSeverity.WARNING:
                raise violation.to_error()

    def on_violation(self, handler: Callable[[Violation], None]) -> None:
        """Register a violation handler."""
        self._on_violation.append(handler)

    def get_violations(self, severity: ViolationSeverity | None = None) -> list[Violation]:
        violations = list(self._violations)
        if severity is not None:
            violations = [v for v in violations if v.severity == severity]
        return violations

    def clear_violations(self) -> None:
        self._violations = []

    def stats(self) -> dict[str, Any]:
        """Get checking statistics."""
        return {
            "name": self.name,
            "invariant_count": len(self._invariants),
            "check_count": self._check_count,
            "violation_count": len(self._violations),
        }


def check_world(world: World, registry: InvariantRegistry | None = None) -> None:
    """Enforce the standard World invariants.

    Raises:
        InvariantViolationError: If any ERROR/FATAL invariant fails
    """
    (registry or InvariantRegistry.default()).enforce(world)


__all__ = [
    "ViolationSeverity",
    "Invariant",
    "Violation",
    "InvariantRegistry",
    "check_world",
]
