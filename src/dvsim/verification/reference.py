"""Reference shortest paths for checking converged Worlds.

The distributed computation is checked against a centralised one:
Floyd-Warshall over the World's weighted adjacency matrix,

    D⁽ᵏ⁾[i][j] = min(D⁽ᵏ⁻¹⁾[i][j], D⁽ᵏ⁻¹⁾[i][k] + D⁽ᵏ⁻¹⁾[k][j])

vectorised with NumPy broadcasting. Costs are converted to float64 with
``inf`` for Unreachable, so this check applies to numeric weight types.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from dvsim.topology.world import World

logger = logging.getLogger(__name__)


def adjacency_matrix(world: World) -> np.ndarray:
    """Weighted adjacency matrix: 0 on the diagonal, inf where no edge."""
    n = world.size
    matrix = np.full((n, n), np.inf, dtype=np.float64)
    np.fill_diagonal(matrix, 0.0)
    for (a, b), weight in world.edges().items():
        matrix[a, b] = float(weight)
        matrix[b, a] = float(weight)
    return matrix


def distance_matrix(world: World) -> np.ndarray:
    """The World's current distance vectors as an n × n matrix.

    Row i is node i's vector; Unreachable entries become ``inf``.
    """
    n = world.size
    matrix = np.empty((n, n), dtype=np.float64)
    for node in world.nodes:
        for destination, entry in enumerate(node.vector):
            cost = entry.cost
            if cost.is_infinite:
                matrix[node.index, destination] = np.inf
            else:
                matrix[node.index, destination] = float(cost.weight_or(0.0))
    return matrix


def shortest_paths(world: World) -> np.ndarray:
    """All-pairs shortest path costs via Floyd-Warshall."""
    dist = adjacency_matrix(world)
    for k in range(world.size):
        dist = np.minimum(dist, dist[:, k : k + 1] + dist[k : k + 1, :])
    return dist


@dataclass
class ReferenceCheck:
    """Comparison of converged vectors against the reference.

    Attributes:
        matches: True when every entry agrees
        mismatches: (source, destination, believed, reference) per disagreement
        expected: Reference matrix
        actual: Matrix of the World's vectors
    """

    matches: bool
    expected: np.ndarray
    actual: np.ndarray
    mismatches: list[tuple[str, str, float, float]] = field(default_factory=list)

    def summary(self) -> str:
        if self.matches:
            return "Distance vectors match reference shortest paths"
        lines = [f"{len(self.mismatches)} entr(ies) differ from reference:"]
        for source, destination, believed, reference in self.mismatches[:10]:
            lines.append(f"  {source}->{destination}: {believed} (expected {reference})")
        return "\n".join(lines)


def verify_converged(world: World, rtol: float = 1e-9) -> ReferenceCheck:
    """Compare a World's vectors with the reference shortest paths.

    Args:
        world: World to check, normally the output of the convergence loop
        rtol: Relative tolerance for float weights

    Returns:
        ReferenceCheck describing any disagreement
    """
    expected = shortest_paths(world)
    actual = distance_matrix(world)

    both_inf = np.isinf(expected) & np.isinf(actual)
    close = np.isclose(actual, expected, rtol=rtol, atol=0.0) | both_inf

    names = world.names
    mismatches = [
        (names[i], names[j], float(actual[i, j]), float(expected[i, j]))
        for i, j in zip(*np.nonzero(~close))
    ]
    if mismatches:
        logger.warning(f"{len(mismatches)} distance vector entries differ from reference")
    return ReferenceCheck(
        matches=not mismatches,
        expected=expected,
        actual=actual,
        mismatches=mismatches,
    )


__all__ = [
    "ReferenceCheck",
    "adjacency_matrix",
    "distance_matrix",
    "shortest_paths",
    "verify_converged",
]
