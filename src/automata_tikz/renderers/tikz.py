"""TikZ renderer — emits ``automata``-library TikZ code for a Diagram."""

from __future__ import annotations

import re

from automata_tikz.config import AcceptingBy, DiagramStyle
from automata_tikz.layout.routing import escape_latex
from automata_tikz.layout.types import Diagram, LayoutStatus, Route, RouteKind

# ─── Constants ──────────────────────────────────────────────────────────────

PREAMBLE = [
    r"\usepackage{tikz}",
    r"\usetikzlibrary{automata, arrows.meta, positioning}",
    r"\begin{document}",
]
STANDALONE_CLASS = r"\documentclass[border=5mm]{standalone}"
NODE_INDENT = "    "

_SUBSCRIPTED = re.compile(r"^([A-Za-z])(\d+)$")
_NOT_ID_CHAR = re.compile(r"[^A-Za-z0-9_]")


def _num(value: float) -> str:
    return f"{value:g}"


def _hex(color: str) -> str:
    return color.replace("#", "")


# ─── Labels & Identifiers ───────────────────────────────────────────────────


def format_state(name: str) -> str:
    """Display label for a state.

    ``q12`` → ``$q_{12}$``, ``q`` → ``$q$``, anything else escaped text.
    """
    m = _SUBSCRIPTED.match(name)
    if m:
        return f"${m.group(1)}_{{{m.group(2)}}}$"
    if len(name) == 1 and name.isalpha():
        return f"${name}$"
    return escape_latex(name)


def sanitize_node_id(name: str) -> str:
    """A valid TikZ node name for ``name``."""
    sanitized = _NOT_ID_CHAR.sub("_", name)
    if sanitized and not sanitized[0].isalpha():
        sanitized = "n" + sanitized
    return sanitized or "node"


def build_node_ids(states: list[str]) -> dict[str, str]:
    """Assign unique TikZ node names, suffixing ``_2``, ``_3``… on collisions."""
    ids: dict[str, str] = {}
    used: set[str] = set()
    for state in states:
        if state in ids:
            continue
        base = sanitize_node_id(state)
        node_id = base
        counter = 2
        while node_id in used:
            node_id = f"{base}_{counter}"
            counter += 1
        used.add(node_id)
        ids[state] = node_id
    return ids


# ─── Preamble ───────────────────────────────────────────────────────────────


def _color_definitions(style: DiagramStyle) -> list[str]:
    lines: list[str] = []
    if style.node_fill_color:
        lines.append(rf"\definecolor{{nodeFillColor}}{{HTML}}{{{_hex(style.node_fill_color)}}}")
    if style.node_border_color:
        lines.append(rf"\definecolor{{nodeBorderColor}}{{HTML}}{{{_hex(style.node_border_color)}}}")
    if style.edge_color:
        lines.append(rf"\definecolor{{edgeColor}}{{HTML}}{{{_hex(style.edge_color)}}}")
    return lines


def picture_options(style: DiagramStyle) -> list[str]:
    """Options of the ``tikzpicture`` environment, in emission order."""
    options = [
        f"shorten >={_num(style.shorten)}pt",
        f"bend angle={_num(style.bend_angle)}",
        f"inner sep={_num(style.inner_sep)}pt",
        style.line_width,
        f"node distance={_num(style.node_distance)}pt",
        f">={{{style.arrow_type}}}",
        f"initial text={style.initial_text if style.initial_where else ''}",
    ]

    state_style: list[str] = []
    if style.node_fill_color:
        state_style.append("fill=nodeFillColor")
    if style.node_border_color:
        state_style.append("draw=nodeBorderColor")
    if state_style:
        options.append(f"every state/.style={{{', '.join(state_style)}}}")
    if style.edge_color:
        options.append("every edge/.style={draw=edgeColor}")

    if style.accepting_by is AcceptingBy.DOUBLE:
        options.append(f"accepting by double/.style={{double, double distance={_num(style.double_distance)}pt}}")
    else:
        options.append("accepting/.style=accepting by arrow")

    options.append("on grid")
    return options


# ─── Nodes & Edges ──────────────────────────────────────────────────────────


def _node_flags(diagram: Diagram, state: str) -> str:
    flags = "state"
    if state == diagram.initial:
        where = diagram.style.initial_where
        flags += f", initial {where}" if where else ", initial"
    if state in diagram.accepting:
        flags += ", accepting"
    return flags


def render_nodes(diagram: Diagram, ids: dict[str, str]) -> list[str]:
    """Node declarations, row-major.

    The first node is placed absolutely, the first node of each later row
    below the first node of the previous row, every other node right of its
    predecessor in the row.
    """
    lines: list[str] = []
    first_of_prev_row: str | None = None

    for row in diagram.grid:
        prev: str | None = None
        first_of_row: str | None = None
        for state in row:
            if state is None:
                continue
            if prev is not None:
                position = f" [right of={ids[prev]}]"
            elif first_of_prev_row is not None:
                position = f" [below of={ids[first_of_prev_row]}]"
            else:
                position = ""
            lines.append(
                rf"{NODE_INDENT}\node[{_node_flags(diagram, state)}] ({ids[state]}){position} {{{format_state(state)}}};"
            )
            if first_of_row is None:
                first_of_row = state
            prev = state
        if first_of_row is not None:
            first_of_prev_row = first_of_row

    return lines


def render_edge(route: Route, ids: dict[str, str]) -> str:
    """One ``\\draw`` line for a routed transition."""
    if route.kind is RouteKind.LOOP:
        options = f"loop {route.side.value}, ->"
    elif route.kind is RouteKind.STRAIGHT:
        options = f"{route.anchor.value}, ->"
    else:
        options = f"bend {route.bend.value}, {route.anchor.value}, ->"
    return rf"{NODE_INDENT}\draw ({ids[route.source]}) edge[{options}] node[auto]{{{route.label}}} ({ids[route.target]});"


# ─── Public Renderer ────────────────────────────────────────────────────────


class TikzRenderer:
    """TikZ renderer — consumes a Diagram, produces TikZ source."""

    def render(self, diagram: Diagram) -> str:
        style = diagram.style
        placed = [state for row in diagram.grid for state in row if state is not None]
        ids = build_node_ids(list(diagram.states) + placed)

        parts: list[str] = []
        if style.standalone:
            parts.append(STANDALONE_CLASS)
        parts.extend(PREAMBLE)
        parts.extend(_color_definitions(style))

        options = picture_options(style)
        parts.append(r"\begin{tikzpicture}[")
        parts.extend(f"  {opt}," for opt in options[:-1])
        parts.append(f"  {options[-1]}]")

        if diagram.status is not LayoutStatus.FOUND:
            parts.append(f"{NODE_INDENT}% no layout: {diagram.status.value}")
        else:
            parts.extend(render_nodes(diagram, ids))
            parts.extend(render_edge(route, ids) for route in diagram.routes)

        parts.append(r"\end{tikzpicture}")
        parts.append(r"\end{document}")
        return "\n".join(parts) + "\n"
