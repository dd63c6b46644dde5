"""Edge routing — how each transition arrow is drawn on the chosen grid.

For every ordered pair of placed states (in state-list order) with a
transition:
  - self-transitions become loops on the first free side of the cell;
  - one-way pairs with a clear line of sight become straight edges;
  - everything else becomes a bent edge, bowed away from the grid interior
    along the border, with the reverse edge of a mutual pair mirrored.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from automata_tikz.config import SymbolStyle
from automata_tikz.connectivity import Connection, connection_degree, symbols_between
from automata_tikz.layout.grid import grid_positions
from automata_tikz.layout.types import Bend, Cell, Grid, Route, RouteKind, Side
from automata_tikz.transitions import TransitionTable

# Loop sides are tried in this order.
LOOP_SIDE_ORDER: tuple[Side, ...] = (Side.ABOVE, Side.BELOW, Side.LEFT, Side.RIGHT)
DEFAULT_LOOP_SIDE = Side.BELOW

_OFFSETS: dict[Side, Cell] = {
    Side.ABOVE: (-1, 0),
    Side.BELOW: (1, 0),
    Side.LEFT: (0, -1),
    Side.RIGHT: (0, 1),
}

# ─── Labels ───────────────────────────────────────────────────────────────────

_LATEX_ESCAPES = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "_": r"\_",
    "&": r"\&",
    "%": r"\%",
    "#": r"\#",
    "$": r"\$",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}
_LATEX_RE = re.compile(r"[\\{}_&%#$~^]")


def escape_latex(text: str) -> str:
    """Escape LaTeX special characters in one pass."""
    return _LATEX_RE.sub(lambda m: _LATEX_ESCAPES[m.group()], text)


def format_symbol(symbol: str, style: SymbolStyle) -> str:
    if style is SymbolStyle.MONOSPACE:
        return rf"\texttt{{{escape_latex(symbol)}}}"
    if style is SymbolStyle.MATH:
        return f"${symbol}$"
    return escape_latex(symbol)


def compose_label(symbols: Sequence[str], style: SymbolStyle = SymbolStyle.VERBATIM) -> str:
    """Sorted, de-duplicated, individually formatted symbols joined by commas."""
    return ",".join(format_symbol(s, style) for s in sorted(set(symbols)))


# ─── Geometry ─────────────────────────────────────────────────────────────────


def _occupied(grid: Grid, r: int, c: int) -> bool:
    return 0 <= r < len(grid) and 0 <= c < len(grid[r]) and grid[r][c] is not None


def free_sides(grid: Grid, cell: Cell) -> list[Side]:
    """Sides of ``cell`` with no occupied neighbour, in loop-side order."""
    r, c = cell
    return [side for side in LOOP_SIDE_ORDER if not _occupied(grid, r + _OFFSETS[side][0], c + _OFFSETS[side][1])]


def loop_side(grid: Grid, cell: Cell) -> Side:
    """Side for a self-loop on ``cell``.

    The first free side wins. An isolated cell (every side free) or an
    enclosed one (no side free) gets the default side.
    """
    sides = free_sides(grid, cell)
    if not sides or len(sides) == len(LOOP_SIDE_ORDER):
        return DEFAULT_LOOP_SIDE
    return sides[0]


def line_blocked(grid: Grid, a: Cell, b: Cell) -> bool:
    """Whether another occupied cell lies on the segment from ``a`` to ``b``."""
    (r1, c1), (r2, c2) = a, b
    for r, row in enumerate(grid):
        for c, state in enumerate(row):
            if state is None or (r, c) == a or (r, c) == b:
                continue
            if (r2 - r1) * (c - c1) != (c2 - c1) * (r - r1):
                continue
            if min(r1, r2) <= r <= max(r1, r2) and min(c1, c2) <= c <= max(c1, c2):
                return True
    return False


def bend_direction(grid: Grid, a: Cell, b: Cell) -> Bend:
    """Bend keyword for an edge from ``a`` to ``b``.

    Along the top row, bottom row, leftmost and rightmost column the arc bows
    outwards; elsewhere it bends right when travelling rightwards (or straight
    down/up) and left otherwise.
    """
    (r1, c1), (r2, c2) = a, b
    last_row = len(grid) - 1
    last_col = max((len(row) for row in grid), default=1) - 1

    if r1 == r2 == 0:
        return Bend.LEFT if c1 < c2 else Bend.RIGHT
    if r1 == r2 == last_row:
        return Bend.RIGHT if c1 < c2 else Bend.LEFT
    if c1 == c2 == 0:
        return Bend.RIGHT if r1 < r2 else Bend.LEFT
    if c1 == c2 == last_col:
        return Bend.LEFT if r1 < r2 else Bend.RIGHT
    return Bend.RIGHT if c1 <= c2 else Bend.LEFT


# ─── Router ───────────────────────────────────────────────────────────────────


def route_edges(
    grid: Grid,
    table: TransitionTable,
    states: Sequence[str],
    symbol_style: SymbolStyle = SymbolStyle.VERBATIM,
) -> list[Route]:
    """Routing decisions for every drawn transition, in (from, to) state order.

    Pairs without a transition and states missing from the grid produce no
    route.
    """
    ordered = list(dict.fromkeys(states))
    order = {state: i for i, state in enumerate(ordered)}
    positions = grid_positions(grid)
    chosen_bends: dict[frozenset[str], Bend] = {}
    routes: list[Route] = []

    for source in ordered:
        if source not in positions:
            continue
        for target in ordered:
            if target not in positions:
                continue
            symbols = symbols_between(table, source, target)
            if symbols is None:
                continue

            label = compose_label(symbols, symbol_style)
            a, b = positions[source], positions[target]

            if source == target:
                routes.append(
                    Route(
                        source,
                        target,
                        RouteKind.LOOP,
                        label,
                        symbols,
                        side=loop_side(grid, a),
                        source_cell=a,
                        target_cell=a,
                    )
                )
                continue

            if connection_degree(table, source, target) is Connection.ONE_WAY and not line_blocked(grid, a, b):
                routes.append(
                    Route(
                        source,
                        target,
                        RouteKind.STRAIGHT,
                        label,
                        symbols,
                        anchor=Side.ABOVE,
                        source_cell=a,
                        target_cell=b,
                    )
                )
                continue

            pair = frozenset((source, target))
            bend = chosen_bends.get(pair)
            if bend is None:
                bend = bend_direction(grid, a, b)
                chosen_bends[pair] = bend
            anchor = Side.ABOVE if order[source] > order[target] else Side.BELOW
            routes.append(
                Route(
                    source,
                    target,
                    RouteKind.BENT,
                    label,
                    symbols,
                    bend=bend,
                    anchor=anchor,
                    source_cell=a,
                    target_cell=b,
                )
            )

    return routes
