"""Cost algebra: Cost = Zero | Value(w) | Infinity.

A totally ordered commutative monoid used both to accumulate path costs
and as the "no known path" sentinel.

Order:
    Zero < Value(w) < Infinity, and Value(a) < Value(b) iff a < b

Addition:
    Infinity + x = x + Infinity = Infinity
    Zero + x = x + Zero = x
    Value(a) + Value(b) = Value(a + b)

Note that ``Value(0)`` is a finite value and not ``Zero``: a zero-weight
link still sorts after the node's own (Zero) entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Any, Generic

from dvsim.types import W


class CostKind(Enum):
    """The three shapes a cost can take, in ascending order."""

    ZERO = 0
    VALUE = 1
    INFINITY = 2


@total_ordering
@dataclass(frozen=True)
class Cost(Generic[W]):
    """An element of the cost algebra.

    Build with :meth:`zero`, :meth:`of` and :meth:`infinity` (or the
    module-level ``ZERO``/``INFINITY`` constants) instead of the raw
    constructor.
    """

    kind: CostKind
    value: Any = None
    """Underlying weight, only set for ``CostKind.VALUE``"""

    def __post_init__(self) -> None:
        if self.kind is CostKind.VALUE and self.value is None:
            raise ValueError("Cost.of() requires a weight")
        if self.kind is not CostKind.VALUE and self.value is not None:
            raise ValueError(f"{self.kind.name} cost carries no weight")

    @classmethod
    def zero(cls) -> Cost[Any]:
        return ZERO

    @classmethod
    def of(cls, weight: W) -> Cost[W]:
        """Wrap a finite weight."""
        return cls(CostKind.VALUE, weight)

    @classmethod
    def infinity(cls) -> Cost[Any]:
        return INFINITY

    @property
    def is_zero(self) -> bool:
        return self.kind is CostKind.ZERO

    @property
    def is_finite(self) -> bool:
        return self.kind is not CostKind.INFINITY

    @property
    def is_infinite(self) -> bool:
        return self.kind is CostKind.INFINITY

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Cost):
            return NotImplemented
        if self.kind is not other.kind:
            return self.kind.value < other.kind.value
        if self.kind is CostKind.VALUE:
            return bool(self.value < other.value)
        return False

    def __add__(self, other: object) -> Cost[Any]:
        if not isinstance(other, Cost):
            return NotImplemented
        if self.kind is CostKind.INFINITY or other.kind is CostKind.INFINITY:
            return INFINITY
        if self.kind is CostKind.ZERO:
            return other
        if other.kind is CostKind.ZERO:
            return self
        return Cost(CostKind.VALUE, self.value + other.value)

    def weight_or(self, default: Any) -> Any:
        """Return the finite weight, ``default`` for Zero and Infinity."""
        return self.value if self.kind is CostKind.VALUE else default

    def __str__(self) -> str:
        if self.kind is CostKind.ZERO:
            return "0"
        if self.kind is CostKind.INFINITY:
            return "∞"
        return str(self.value)

    def __repr__(self) -> str:
        if self.kind is CostKind.VALUE:
            return f"Value({self.value!r})"
        return self.kind.name.capitalize()


ZERO: Cost[Any] = Cost(CostKind.ZERO)
INFINITY: Cost[Any] = Cost(CostKind.INFINITY)


def total(costs: list[Cost[Any]] | tuple[Cost[Any], ...]) -> Cost[Any]:
    """Fold a sequence of costs with ``+`` starting from ``ZERO``."""
    result: Cost[Any] = ZERO
    for cost in costs:
        result = result + cost
    return result


__all__ = [
    "CostKind",
    "Cost",
    "ZERO",
    "INFINITY",
    "total",
]
