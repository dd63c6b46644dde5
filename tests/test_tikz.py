"""Tests for renderers/tikz.py — node placement, edge lines, preamble options."""

from __future__ import annotations

from automata_tikz.config import AcceptingBy, DiagramStyle
from automata_tikz.layout.routing import route_edges
from automata_tikz.layout.types import Diagram, LayoutStatus
from automata_tikz.renderers.tikz import (
    TikzRenderer,
    build_node_ids,
    format_state,
    picture_options,
    render_nodes,
    sanitize_node_id,
)
from automata_tikz.syntax import parse_transitions
from automata_tikz.transitions import build_table

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_diagram(grid, transitions="", initial="q1", accepting=(), style=None, status=LayoutStatus.FOUND):
    states = [s for row in grid for s in row if s is not None]
    table = build_table(parse_transitions(transitions))
    return Diagram(
        states=states,
        initial=initial,
        accepting=list(accepting),
        grid=grid,
        routes=route_edges(grid, table, states),
        status=status,
        style=style or DiagramStyle(),
    )


def body_lines(tikz: str) -> list[str]:
    """Lines between the tikzpicture options and \\end{tikzpicture}."""
    lines = tikz.splitlines()
    start = next(i for i, line in enumerate(lines) if line.endswith("on grid]"))
    end = lines.index(r"\end{tikzpicture}")
    return [line.strip() for line in lines[start + 1 : end]]


# ─── Labels & Identifiers ─────────────────────────────────────────────────────


class TestFormatState:
    def test_letter_and_digits(self):
        assert format_state("q12") == "$q_{12}$"

    def test_single_letter(self):
        assert format_state("q") == "$q$"

    def test_other_names_verbatim(self):
        assert format_state("start") == "start"

    def test_escaped(self):
        assert format_state("s_1") == r"s\_1"


class TestNodeIds:
    def test_plain_names_unchanged(self):
        assert sanitize_node_id("q1") == "q1"

    def test_invalid_characters_replaced(self):
        assert sanitize_node_id("a.b c") == "a_b_c"

    def test_leading_digit_prefixed(self):
        assert sanitize_node_id("0") == "n0"

    def test_collisions_suffixed(self):
        assert build_node_ids(["a.b", "a,b", "a_b"]) == {"a.b": "a_b", "a,b": "a_b_2", "a_b": "a_b_3"}


# ─── Preamble ─────────────────────────────────────────────────────────────────


class TestPictureOptions:
    def test_defaults(self):
        assert picture_options(DiagramStyle()) == [
            "shorten >=3pt",
            "bend angle=30",
            "inner sep=4pt",
            "thick",
            "node distance=120pt",
            ">={Stealth[round]}",
            "initial text=start",
            "every state/.style={fill=nodeFillColor}",
            "accepting by double/.style={double, double distance=1.5pt}",
            "on grid",
        ]

    def test_accepting_by_arrow(self):
        options = picture_options(DiagramStyle(accepting_by=AcceptingBy.ARROW))
        assert "accepting/.style=accepting by arrow" in options

    def test_colors(self):
        options = picture_options(DiagramStyle(node_border_color="#112233", edge_color="445566"))
        assert "every state/.style={fill=nodeFillColor, draw=nodeBorderColor}" in options
        assert "every edge/.style={draw=edgeColor}" in options

    def test_no_fill(self):
        options = picture_options(DiagramStyle(node_fill_color=None))
        assert not any(opt.startswith("every state") for opt in options)

    def test_no_initial_where_blanks_text(self):
        assert "initial text=" in picture_options(DiagramStyle(initial_where=None))


# ─── Nodes ────────────────────────────────────────────────────────────────────


class TestRenderNodes:
    def test_row_anchoring(self):
        diagram = make_diagram([["q1", "q2"], ["q3", None]], accepting=["q3"])
        ids = build_node_ids(diagram.states)
        assert [line.strip() for line in render_nodes(diagram, ids)] == [
            r"\node[state, initial left] (q1) {$q_{1}$};",
            r"\node[state] (q2) [right of=q1] {$q_{2}$};",
            r"\node[state, accepting] (q3) [below of=q1] {$q_{3}$};",
        ]

    def test_third_row_below_second(self):
        diagram = make_diagram([["q1"], ["q2"], ["q3"]])
        lines = render_nodes(diagram, build_node_ids(diagram.states))
        assert lines[2].strip() == r"\node[state] (q3) [below of=q2] {$q_{3}$};"

    def test_initial_without_where(self):
        diagram = make_diagram([["q1"]], style=DiagramStyle(initial_where=None))
        lines = render_nodes(diagram, build_node_ids(diagram.states))
        assert lines[0].strip() == r"\node[state, initial] (q1) {$q_{1}$};"

    def test_initial_and_accepting(self):
        diagram = make_diagram([["q1"]], accepting=["q1"], style=DiagramStyle(initial_where="above"))
        lines = render_nodes(diagram, build_node_ids(diagram.states))
        assert lines[0].strip() == r"\node[state, initial above, accepting] (q1) {$q_{1}$};"


# ─── Full Render ──────────────────────────────────────────────────────────────


class TestTikzRenderer:
    def test_loop_and_straight_edge(self):
        diagram = make_diagram([["q1", "q2"]], "q1,0,q1; q1,1,q2", accepting=["q2"])
        assert body_lines(TikzRenderer().render(diagram)) == [
            r"\node[state, initial left] (q1) {$q_{1}$};",
            r"\node[state, accepting] (q2) [right of=q1] {$q_{2}$};",
            r"\draw (q1) edge[loop above, ->] node[auto]{0} (q1);",
            r"\draw (q1) edge[above, ->] node[auto]{1} (q2);",
        ]

    def test_bent_edges(self):
        diagram = make_diagram([["q1", "q2"]], "q1,0,q2; q2,0,q1")
        lines = body_lines(TikzRenderer().render(diagram))
        assert lines[2:] == [
            r"\draw (q1) edge[bend left, below, ->] node[auto]{0} (q2);",
            r"\draw (q2) edge[bend left, above, ->] node[auto]{0} (q1);",
        ]

    def test_preamble_and_terminator(self):
        tikz = TikzRenderer().render(make_diagram([["q1"]]))
        lines = tikz.splitlines()
        assert lines[:5] == [
            r"\usepackage{tikz}",
            r"\usetikzlibrary{automata, arrows.meta, positioning}",
            r"\begin{document}",
            r"\definecolor{nodeFillColor}{HTML}{f0f0f0}",
            r"\begin{tikzpicture}[",
        ]
        assert lines[-2:] == [r"\end{tikzpicture}", r"\end{document}"]
        assert tikz.endswith("\n")

    def test_standalone(self):
        tikz = TikzRenderer().render(make_diagram([["q1"]], style=DiagramStyle(standalone=True)))
        assert tikz.startswith(r"\documentclass[border=5mm]{standalone}" + "\n" + r"\usepackage{tikz}")

    def test_color_hash_stripped(self):
        tikz = TikzRenderer().render(make_diagram([["q1"]], style=DiagramStyle(edge_color="#AA0000")))
        assert r"\definecolor{edgeColor}{HTML}{AA0000}" in tikz

    def test_no_layout_comment(self):
        diagram = make_diagram([], status=LayoutStatus.NO_LAYOUT)
        assert body_lines(TikzRenderer().render(diagram)) == ["% no layout: no-layout"]

    def test_sanitized_ids_in_edges(self):
        diagram = make_diagram([["s.0", "s.1"]], "s.0,a,s.1", initial="s.0")
        lines = body_lines(TikzRenderer().render(diagram))
        assert lines[1] == r"\node[state] (s_1) [right of=s_0] {s.1};"
        assert lines[2] == r"\draw (s_0) edge[above, ->] node[auto]{a} (s_1);"
