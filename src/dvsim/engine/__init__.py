"""Relaxation and convergence engine.

This module provides:
- One synchronous distributed Bellman-Ford round (relax)
- The convergence loop driving rounds to a fixed point
"""

from __future__ import annotations

from dvsim.engine.convergence import (
    ConvergenceConfig,
    ConvergenceLoop,
    ConvergenceResult,
    ConvergenceState,
    run_until_stable,
)
from dvsim.engine.relaxation import RoundResult, relax, relax_entry, relax_node

__all__ = [
    # Relaxation
    "RoundResult",
    "relax",
    "relax_entry",
    "relax_node",
    # Convergence
    "ConvergenceState",
    "ConvergenceConfig",
    "ConvergenceResult",
    "ConvergenceLoop",
    "run_until_stable",
]
