"""Render explanation entries as Bellman-Ford formulas.

An entry for source A and destination D with neighbors B and D renders as

    d_A(D)=min(C(A,B)+d_B(D), C(A,D))=min(2+9, 8)=8

in text style, or with ``<sub>`` subscripts and ``&infin;`` in HTML style.
"""

from __future__ import annotations

import html
from collections.abc import Mapping
from enum import Enum
from typing import Any

from dvsim.algebra.cost import Cost, CostKind
from dvsim.trace.explanation import Candidate, ExplanationEntry, Term, TermKind
from dvsim.types import NodeIndex


class FormulaStyle(str, Enum):
    """Output flavour for formulas and table cells."""

    TEXT = "text"
    HTML = "html"


def _name(names: Mapping[NodeIndex, str], index: NodeIndex, style: FormulaStyle) -> str:
    name = names[index]
    return html.escape(name) if style is FormulaStyle.HTML else name


def format_cost(cost: Cost[Any], style: FormulaStyle = FormulaStyle.TEXT) -> str:
    """Display a cost: ``0``, the weight, or infinity."""
    if cost.kind is CostKind.INFINITY:
        return "&infin;" if style is FormulaStyle.HTML else "∞"
    text = str(cost)
    return html.escape(text) if style is FormulaStyle.HTML else text


def format_distance(
    source: NodeIndex,
    target: NodeIndex,
    names: Mapping[NodeIndex, str],
    style: FormulaStyle = FormulaStyle.TEXT,
) -> str:
    """``d_source(target)``."""
    src, dst = _name(names, source, style), _name(names, target, style)
    if style is FormulaStyle.HTML:
        return f"d<sub>{src}</sub>({dst})"
    return f"d_{src}({dst})"


def format_term(
    term: Term,
    names: Mapping[NodeIndex, str],
    style: FormulaStyle = FormulaStyle.TEXT,
) -> str:
    """Symbolic form of one term."""
    if term.kind is TermKind.LINK_COST:
        return f"C({_name(names, term.source, style)},{_name(names, term.target, style)})"
    return format_distance(term.source, term.target, names, style)


def format_candidate(
    candidate: Candidate,
    names: Mapping[NodeIndex, str],
    style: FormulaStyle = FormulaStyle.TEXT,
) -> str:
    return "+".join(format_term(t, names, style) for t in candidate.terms)


def format_candidate_values(candidate: Candidate, style: FormulaStyle = FormulaStyle.TEXT) -> str:
    return "+".join(format_cost(t.cost, style) for t in candidate.terms)


def render_formula(
    entry: ExplanationEntry,
    names: Mapping[NodeIndex, str],
    style: FormulaStyle = FormulaStyle.TEXT,
) -> str:
    """Render the full ``d=min(symbols)=min(values)=result`` line."""
    symbols = ", ".join(format_candidate(c, names, style) for c in entry.candidates)
    values = ", ".join(format_candidate_values(c, style) for c in entry.candidates)
    head = format_distance(entry.source, entry.destination, names, style)
    return f"{head}=min({symbols})=min({values})={format_cost(entry.cost, style)}"


__all__ = [
    "FormulaStyle",
    "format_cost",
    "format_distance",
    "format_term",
    "format_candidate",
    "format_candidate_values",
    "render_formula",
]
