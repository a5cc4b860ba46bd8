"""
Foundation Types for the distance-vector simulator.

Core type definitions shared by the algebra, topology and engine layers
without circular dependencies.

The weight type is generic: anything that is totally ordered,
summable and printable can label an edge (``int``, ``float``,
``decimal.Decimal``, ``fractions.Fraction`` or a user-defined metric).
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar


class SupportsWeight(Protocol):
    """Structural contract for edge weights.

    A weight must support ``<`` (total order), ``+`` (closed addition) and
    ``str()`` for display.
    """

    def __lt__(self, other: Any, /) -> bool: ...

    def __add__(self, other: Any, /) -> Any: ...


W = TypeVar("W", bound=SupportsWeight)
"""Generic weight parameter."""

NodeIndex = int
"""Stable position of a node inside a World."""


__all__ = [
    "NodeIndex",
    "SupportsWeight",
    "W",
]
