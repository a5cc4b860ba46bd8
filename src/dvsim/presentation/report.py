"""HTML report: one page per simulation frame.

A frame is either the snapshot right after a mutation batch or one
relaxation round. Pages are numbered in the order they are written
(``<prefix>-001.html``, ``<prefix>-002.html``, ...), each headed with the
generation it shows. Relaxed nodes get their formulas listed under their
table in a ``details`` block.

The report plugs into the convergence loop as a round callback:

    report = HtmlReport(ReportConfig(output_dir=Path("out"), prefix="square"))
    report.write_mutation(mutation)
    ConvergenceLoop(on_round=report.write_round).run(mutation.world)
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from pathlib import Path

from dvsim.engine.relaxation import RoundResult
from dvsim.presentation.formula import FormulaStyle, render_formula
from dvsim.presentation.tables import NodeTable, build_node_table
from dvsim.topology.mutation import MutationResult

logger = logging.getLogger(__name__)


@dataclass
class ReportConfig:
    """Configuration for the HTML report."""

    output_dir: Path = field(default_factory=lambda: Path("."))
    """Directory pages are written to (created if missing)"""

    prefix: str = "dv"
    """File name prefix for every page"""

    stylesheet: str | None = "styles.css"
    """Stylesheet linked from each page, None for no link"""

    show_details: bool = True
    """Include the formula block for relaxed nodes"""


def render_table(table: NodeTable) -> str:
    """Render a NodeTable whose cells are already HTML-formatted."""
    lines = ["<table>", "\t<tr>"]
    lines.extend(f"\t\t<th>{cell}</th>" for cell in table.header)
    lines.append("\t</tr>")
    for label, cells in table.rows:
        lines.append("\t<tr>")
        lines.append(f"\t\t<th>{label}</th>")
        lines.extend(f"\t\t<td>{cell}</td>" for cell in cells)
        lines.append("\t</tr>")
    lines.append("</table>")
    return "\n".join(lines)


class HtmlReport:
    """Writes numbered HTML pages for mutation and relaxation frames."""

    def __init__(self, config: ReportConfig | None = None):
        self._config = config or ReportConfig()
        self._counter = 0
        self._written: list[Path] = []

    @property
    def pages(self) -> list[Path]:
        """Paths written so far, in order."""
        return list(self._written)

    def _page(self, body: str) -> str:
        head = ["<!DOCTYPE html>", "<html>", "<head>", '<meta charset="utf-8">']
        if self._config.stylesheet:
            head.append(f'<link rel="stylesheet" href="{html.escape(self._config.stylesheet)}">')
        head.extend(["</head>", "<body>", '<div class="wrapper">'])
        return "\n".join(head + [body, "</div>", "</body>", "</html>", ""])

    def write_page(self, body: str) -> Path:
        """Write one numbered page and return its path."""
        self._config.output_dir.mkdir(parents=True, exist_ok=True)
        self._counter += 1
        path = self._config.output_dir / f"{self._config.prefix}-{self._counter:03d}.html"
        path.write_text(self._page(body), encoding="utf-8")
        self._written.append(path)
        logger.debug(f"Wrote {path}")
        return path

    def render_mutation(self, mutation: MutationResult) -> str:
        """Body for the post-mutation frame.

        Shows the seeded vectors against the inbox advertised before the
        batch was applied.
        """
        world = mutation.world
        parts = [f"<h2>t={world.generation}</h2>"]
        for node in world.nodes:
            table = build_node_table(
                world, node, inbox=mutation.previous.inbox, style=FormulaStyle.HTML
            )
            parts.append(render_table(table))
        return "\n".join(parts)

    def render_round(self, result: RoundResult) -> str:
        """Body for one relaxation round."""
        world = result.previous
        names = world.node_names()
        parts = [f"<h2>t={result.generation}</h2>"]
        for node in world.nodes:
            if node.index not in result.relaxed:
                parts.append(render_table(build_node_table(world, node, style=FormulaStyle.HTML)))
                continue
            table = build_node_table(
                world, node, new_vector=result.vectors[node.index], style=FormulaStyle.HTML
            )
            parts.append(render_table(table))
            if self._config.show_details:
                parts.append('<div class="details">')
                for entry in result.trace.for_source(node.index):
                    parts.append(f"\t<div>{render_formula(entry, names, FormulaStyle.HTML)}</div>")
                parts.append("</div>")
        return "\n".join(parts)

    def write_mutation(self, mutation: MutationResult) -> Path:
        return self.write_page(self.render_mutation(mutation))

    def write_round(self, result: RoundResult) -> Path:
        return self.write_page(self.render_round(result))


__all__ = [
    "ReportConfig",
    "HtmlReport",
    "render_table",
]
