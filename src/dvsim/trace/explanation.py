"""Structured explanation of every recomputed distance vector entry.

For each (source, destination) pair relaxed in a round the trace keeps:

- every candidate evaluated, in ascending neighbor order
- each candidate's term breakdown and summed cost
- the index of the winning candidate

Formally, for source x and destination y:

    d_x(y) = min over neighbors v of { C(x, y)          if v == y
                                     { C(x, v) + d_v(y) otherwise

The data is renderer-agnostic: terms carry node indices and costs, never
formatted strings. See ``dvsim.presentation`` for text and HTML output.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dvsim.algebra.cost import INFINITY, Cost, total
from dvsim.algebra.vector import UNREACHABLE, DistanceVectorValue, from_cost
from dvsim.types import NodeIndex


class TermKind(str, Enum):
    """What a single term of a candidate stands for."""

    LINK_COST = "link_cost"
    """C(source, target): weight of the direct link"""

    ADVERTISED_DISTANCE = "advertised_distance"
    """d_source(target): distance advertised by a neighbor"""


@dataclass(frozen=True)
class Term:
    """One summand of a candidate.

    Attributes:
        kind: Link cost or advertised distance
        source: Node the term is measured from
        target: Node the term is measured to
        cost: Contributing cost
    """

    kind: TermKind
    source: NodeIndex
    target: NodeIndex
    cost: Cost[Any]


@dataclass(frozen=True)
class Candidate:
    """One option considered while relaxing an entry.

    A direct candidate has a single ``LINK_COST`` term. An indirect
    candidate has the link cost to the neighbor followed by the neighbor's
    advertised distance to the destination.
    """

    neighbor: NodeIndex
    """Neighbor this candidate goes through"""

    terms: tuple[Term, ...]
    """Ordered term breakdown"""

    direct: bool = False
    """True for the direct-link candidate"""

    @property
    def cost(self) -> Cost[Any]:
        """Summed cost of all terms."""
        return total(tuple(term.cost for term in self.terms))

    def to_entry(self) -> DistanceVectorValue:
        """Vector entry this candidate produces if it wins."""
        return from_cost(self.cost, self.neighbor, self.direct)

    @classmethod
    def direct_link(cls, source: NodeIndex, neighbor: NodeIndex, weight: Any) -> Candidate:
        return cls(
            neighbor=neighbor,
            terms=(Term(TermKind.LINK_COST, source, neighbor, Cost.of(weight)),),
            direct=True,
        )

    @classmethod
    def via(
        cls,
        source: NodeIndex,
        neighbor: NodeIndex,
        destination: NodeIndex,
        weight: Any,
        advertised: Cost[Any],
    ) -> Candidate:
        return cls(
            neighbor=neighbor,
            terms=(
                Term(TermKind.LINK_COST, source, neighbor, Cost.of(weight)),
                Term(TermKind.ADVERTISED_DISTANCE, neighbor, destination, advertised),
            ),
        )


@dataclass(frozen=True)
class ExplanationEntry:
    """Justification for one relaxed distance vector entry.

    Attributes:
        source: Node whose vector was recomputed
        destination: Destination of the entry
        candidates: Candidates in enumeration order
        winner_index: Index of the winning candidate, None if there were none
        previous: Entry before relaxation
    """

    source: NodeIndex
    destination: NodeIndex
    candidates: tuple[Candidate, ...]
    winner_index: int | None
    previous: DistanceVectorValue = UNREACHABLE

    @property
    def winner(self) -> Candidate | None:
        if self.winner_index is None:
            return None
        return self.candidates[self.winner_index]

    @property
    def cost(self) -> Cost[Any]:
        """Minimum over all candidates (Infinity when there are none)."""
        winner = self.winner
        return winner.cost if winner is not None else INFINITY

    @property
    def result(self) -> DistanceVectorValue:
        """New vector entry produced by this relaxation."""
        winner = self.winner
        return winner.to_entry() if winner is not None else UNREACHABLE

    @property
    def changed(self) -> bool:
        """Whether the cost moved (next-hop changes alone do not count)."""
        return self.previous.cost != self.cost

    @classmethod
    def select(
        cls,
        source: NodeIndex,
        destination: NodeIndex,
        candidates: list[Candidate],
        previous: DistanceVectorValue = UNREACHABLE,
    ) -> ExplanationEntry:
        """Build an entry, picking the first minimum-cost candidate."""
        winner_index: int | None = None
        best: Cost[Any] | None = None
        for index, candidate in enumerate(candidates):
            cost = candidate.cost
            # Strict comparison keeps the first-enumerated candidate on ties
            if best is None or cost < best:
                best = cost
                winner_index = index
        return cls(
            source=source,
            destination=destination,
            candidates=tuple(candidates),
            winner_index=winner_index,
            previous=previous,
        )


@dataclass
class ExplanationTrace:
    """Ordered explanation entries produced by one relaxation round.

    Entries are ordered by source index, then destination index.
    """

    generation: int
    """Generation the round produces (previous generation + 1)"""

    entries: list[ExplanationEntry] = field(default_factory=list)

    def add(self, entry: ExplanationEntry) -> None:
        self.entries.append(entry)

    def for_source(self, source: NodeIndex) -> list[ExplanationEntry]:
        """Entries recomputed for one node, in destination order."""
        return [e for e in self.entries if e.source == source]

    def get(self, source: NodeIndex, destination: NodeIndex) -> ExplanationEntry | None:
        for entry in self.entries:
            if entry.source == source and entry.destination == destination:
                return entry
        return None

    def changed_entries(self) -> list[ExplanationEntry]:
        return [e for e in self.entries if e.changed]

    @property
    def sources(self) -> list[NodeIndex]:
        """Relaxed nodes, in ascending index order."""
        return sorted({e.source for e in self.entries})

    def __iter__(self) -> Iterator[ExplanationEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


__all__ = [
    "TermKind",
    "Term",
    "Candidate",
    "ExplanationEntry",
    "ExplanationTrace",
]
