"""Per-node distance tables.

Each node's table has a header row with every node name, the node's own
vector, and one row per neighbor showing the vector that neighbor
advertises (its inbox copy). When a new vector is supplied, own-row cells
whose cost moved are shown as ``old→new``.
"""

from __future__ import annotations

import html
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from dvsim.algebra.vector import (
    DirectEdge,
    DistanceVectorValue,
    SelfEntry,
    Unreachable,
    ViaNeighbor,
)
from dvsim.presentation.formula import FormulaStyle
from dvsim.topology.world import Node, Vector, World
from dvsim.types import NodeIndex


def format_entry(
    entry: DistanceVectorValue,
    names: Mapping[NodeIndex, str],
    style: FormulaStyle = FormulaStyle.TEXT,
) -> str:
    """Long form of an entry: ``w(Via)``, ``w``, ``0`` or infinity."""
    if isinstance(entry, Unreachable):
        return "&infin;" if style is FormulaStyle.HTML else "∞"
    if isinstance(entry, SelfEntry):
        return "0"
    if isinstance(entry, DirectEdge):
        text = str(entry.weight)
    elif isinstance(entry, ViaNeighbor):
        text = f"{entry.weight}({names[entry.neighbor]})"
    else:
        raise TypeError(f"Unknown distance vector entry: {type(entry).__name__}")
    return html.escape(text) if style is FormulaStyle.HTML else text


@dataclass
class NodeTable:
    """Cell grid for one node, already formatted for a style.

    Attributes:
        header: Corner cell followed by every node name
        rows: (row label, cells) for the node itself, then each neighbor
    """

    header: list[str]
    rows: list[tuple[str, list[str]]] = field(default_factory=list)


def build_node_table(
    world: World,
    node: Node,
    new_vector: Vector | None = None,
    inbox: Sequence[Vector] | None = None,
    style: FormulaStyle = FormulaStyle.TEXT,
) -> NodeTable:
    """Build the table for ``node``.

    Args:
        world: World providing names and edges
        node: Node to draw
        new_vector: Recomputed vector; changed cells render as ``old→new``
        inbox: Advertised vectors to show for neighbors (defaults to the
            World's inbox)
        style: Text or HTML cell formatting
    """
    names = world.node_names()
    arrow = "&#8594;" if style is FormulaStyle.HTML else "→"
    advertised = inbox if inbox is not None else world.inbox

    def label(index: NodeIndex) -> str:
        return html.escape(names[index]) if style is FormulaStyle.HTML else names[index]

    table = NodeTable(header=[label(node.index)] + [label(n.index) for n in world.nodes])

    own: list[str] = []
    if new_vector is None:
        own = [format_entry(e, names, style) for e in node.vector]
    else:
        for old, new in zip(node.vector, new_vector):
            if old.cost == new.cost:
                own.append(format_entry(new, names, style))
            else:
                own.append(
                    f"{format_entry(old, names, style)}{arrow}{format_entry(new, names, style)}"
                )
    table.rows.append((label(node.index), own))

    for neighbor in node.neighbors:
        table.rows.append(
            (label(neighbor), [format_entry(e, names, style) for e in advertised[neighbor]])
        )
    return table


def format_table_text(table: NodeTable) -> str:
    """Fixed-width plain-text rendering."""
    grid = [table.header] + [[label, *cells] for label, cells in table.rows]
    widths = [max(len(row[i]) for row in grid) for i in range(len(table.header))]
    return "\n".join(
        "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip() for row in grid
    )


def format_world_text(world: World) -> str:
    """Every node table of a World, as plain text."""
    parts = [f"t={world.generation}"]
    for node in world.nodes:
        parts.append(format_table_text(build_node_table(world, node)))
    return "\n\n".join(parts)


__all__ = [
    "NodeTable",
    "format_entry",
    "build_node_table",
    "format_table_text",
    "format_world_text",
]
