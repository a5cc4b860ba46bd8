"""Tests for per-node distance tables."""

from __future__ import annotations

from dvsim.algebra.vector import SELF, UNREACHABLE, DirectEdge, ViaNeighbor
from dvsim.engine import relax
from dvsim.presentation import (
    FormulaStyle,
    build_node_table,
    format_entry,
    format_table_text,
    format_world_text,
)

NAMES = {0: "A", 1: "B", 2: "C", 3: "D"}


class TestFormatEntry:
    def test_long_form(self):
        assert format_entry(ViaNeighbor(9, 1), NAMES) == "9(B)"
        assert format_entry(DirectEdge(8), NAMES) == "8"
        assert format_entry(SELF, NAMES) == "0"
        assert format_entry(UNREACHABLE, NAMES) == "∞"
        assert format_entry(UNREACHABLE, NAMES, FormulaStyle.HTML) == "&infin;"


class TestNodeTable:
    """Table layout for node A of the square."""

    def test_rows(self, square_mutation):
        world = square_mutation.world
        table = build_node_table(world, world.node("A"))
        assert table.header == ["A", "A", "B", "C", "D"]
        assert table.rows == [
            ("A", ["0", "2", "∞", "8"]),
            ("B", ["2", "0", "7", "9"]),
            ("D", ["8", "9", "4", "0"]),
        ]

    def test_changed_cells(self, square_mutation):
        result = relax(square_mutation.world)
        world = result.previous
        table = build_node_table(world, world.node("A"), new_vector=result.vectors[0])
        assert table.rows[0] == ("A", ["0", "2", "∞→9(B)", "8"])

    def test_changed_cells_html(self, square_mutation):
        result = relax(square_mutation.world)
        world = result.previous
        table = build_node_table(
            world, world.node("C"), new_vector=result.vectors[2], style=FormulaStyle.HTML
        )
        assert table.rows[0] == ("C", ["&infin;&#8594;9(B)", "7", "0", "4"])

    def test_explicit_inbox(self, square_mutation):
        world = square_mutation.world
        table = build_node_table(world, world.node("A"), inbox=square_mutation.previous.inbox)
        assert table.rows[1] == ("B", ["∞", "0", "∞", "∞"])

    def test_text_rendering(self, square_mutation):
        result = relax(square_mutation.world)
        world = result.previous
        text = format_table_text(
            build_node_table(world, world.node("A"), new_vector=result.vectors[0])
        )
        lines = text.splitlines()
        assert len(lines) == 4
        assert lines[1].split() == ["A", "0", "2", "∞→9(B)", "8"]
        assert lines[2].split() == ["B", "2", "0", "7", "9"]

    def test_world_text(self, square_converged):
        text = format_world_text(square_converged.world)
        assert text.startswith("t=2")
        assert "9(B)" in text
