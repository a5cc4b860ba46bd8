"""
dvsim -- Synchronous distance-vector routing simulator.

Distributed Bellman-Ford over small weighted graphs, round by round, with a
structured explanation for every recomputed table entry.

Cost Algebra | Immutable Worlds | Synchronous Relaxation | Explanation Traces

Minimal dependencies (NumPy, for reference checks). Pure Python engine.
"""

from dvsim._version import __version__
from dvsim.algebra import (
    INFINITY,
    ZERO,
    Cost,
    CostKind,
    DirectEdge,
    DistanceVectorValue,
    SelfEntry,
    Unreachable,
    ViaNeighbor,
)
from dvsim.engine import (
    ConvergenceConfig,
    ConvergenceLoop,
    ConvergenceResult,
    ConvergenceState,
    RoundResult,
    relax,
    run_until_stable,
)
from dvsim.errors import (
    ConvergenceError,
    DVSimError,
    InvalidWeightError,
    InvariantViolationError,
    NodeIndexError,
    NodeNotFoundError,
)
from dvsim.topology import ChangeWeight, MutationResult, Node, World
from dvsim.trace import Candidate, ExplanationEntry, ExplanationTrace, Term, TermKind

# NOTE: Full subpackage APIs are accessible via direct imports:
#   from dvsim.verification import InvariantRegistry, verify_converged, ...
#   from dvsim.presentation import HtmlReport, render_formula, ...
#   from dvsim.serialization import world_to_dict, trace_to_json, ...
#   from dvsim.scenarios import SQUARE, EXERCISE, run_scenario

__all__ = [
    "__version__",
    # Cost algebra
    "Cost",
    "CostKind",
    "ZERO",
    "INFINITY",
    # Vector entries
    "DistanceVectorValue",
    "Unreachable",
    "SelfEntry",
    "DirectEdge",
    "ViaNeighbor",
    # Topology
    "Node",
    "World",
    "ChangeWeight",
    "MutationResult",
    # Engine
    "RoundResult",
    "relax",
    "ConvergenceState",
    "ConvergenceConfig",
    "ConvergenceResult",
    "ConvergenceLoop",
    "run_until_stable",
    # Trace
    "TermKind",
    "Term",
    "Candidate",
    "ExplanationEntry",
    "ExplanationTrace",
    # Errors
    "DVSimError",
    "NodeNotFoundError",
    "NodeIndexError",
    "InvalidWeightError",
    "InvariantViolationError",
    "ConvergenceError",
]
