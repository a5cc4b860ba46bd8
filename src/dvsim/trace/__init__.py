"""Explanation traces for relaxation rounds."""

from __future__ import annotations

from dvsim.trace.explanation import (
    Candidate,
    ExplanationEntry,
    ExplanationTrace,
    Term,
    TermKind,
)

__all__ = [
    "TermKind",
    "Term",
    "Candidate",
    "ExplanationEntry",
    "ExplanationTrace",
]
