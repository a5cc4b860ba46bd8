"""Presentation adapters for engine outputs.

The engine emits structured data only. This package turns it into:
- Bellman-Ford formulas (text or HTML)
- Per-node distance tables
- Numbered HTML report pages
"""

from __future__ import annotations

from dvsim.presentation.formula import (
    FormulaStyle,
    format_cost,
    format_distance,
    render_formula,
)
from dvsim.presentation.report import HtmlReport, ReportConfig, render_table
from dvsim.presentation.tables import (
    NodeTable,
    build_node_table,
    format_entry,
    format_table_text,
    format_world_text,
)

__all__ = [
    # Formulas
    "FormulaStyle",
    "format_cost",
    "format_distance",
    "render_formula",
    # Tables
    "NodeTable",
    "build_node_table",
    "format_entry",
    "format_table_text",
    "format_world_text",
    # HTML
    "HtmlReport",
    "ReportConfig",
    "render_table",
]
