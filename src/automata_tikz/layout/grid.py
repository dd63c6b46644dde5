"""Grid layout search — exhaustive placement of states on a rectangular grid.

Pipeline for one search:
  1. Shapes: every (rows, cols) with rows*cols == n or n + 1, in lexical order.
  2. Permutations of the states, filled row-major (a spare cell stays last).
  3. Hard constraint: the initial state sits in column 0 of some row.
  4. Optional constraint: accepting states only at the ends of rows.
  5. Cost: sum of Manhattan distances over every transition triple.
  6. Keep the cheapest grid; on ties the first one found wins.
  7. Drop all-empty rows.

The search is factorial in the number of states, so it refuses automata above
``max_states`` and can be stopped through a deadline or a cancel callback.
"""

from __future__ import annotations

import itertools
import logging
import time
from collections.abc import Callable, Iterable, Sequence

from automata_tikz.config import DEFAULT_MAX_STATES, SEARCH_CHECK_INTERVAL
from automata_tikz.connectivity import transition_graph
from automata_tikz.layout.types import Cell, Grid, GridSearchResult, LayoutStatus
from automata_tikz.transitions import TransitionTable

logger = logging.getLogger(__name__)


# ─── Grid Helpers ─────────────────────────────────────────────────────────────


def grid_positions(grid: Grid) -> dict[str, Cell]:
    """Map each placed state to its (row, col)."""
    positions: dict[str, Cell] = {}
    for r, row in enumerate(grid):
        for c, state in enumerate(row):
            if state is not None:
                positions[state] = (r, c)
    return positions


def trim_grid(grid: Grid) -> Grid:
    """Drop rows with no occupied cell."""
    return [list(row) for row in grid if any(cell is not None for cell in row)]


def rows_grid(rows: Sequence[Sequence[str]]) -> Grid:
    """Fixed-row layout: the given rows, padded with empty cells to a rectangle.

    Each state is placed once, at its first occurrence.
    """
    seen: set[str] = set()
    kept: list[list[str]] = []
    for row in rows:
        unique = []
        for state in row:
            if state not in seen:
                seen.add(state)
                unique.append(state)
        if unique:
            kept.append(unique)
    width = max((len(row) for row in kept), default=0)
    return [row + [None] * (width - len(row)) for row in kept]


def candidate_shapes(n: int) -> list[tuple[int, int]]:
    """Every (rows, cols) with at most one spare cell, in (rows, cols) order."""
    n = max(n, 1)
    return [(r, c) for r in range(1, n + 2) for c in range(1, n + 2) if r * c in (n, n + 1)]


# ─── Constraints ──────────────────────────────────────────────────────────────


def initial_in_first_column(grid: Grid, initial: str) -> bool:
    return any(row and row[0] == initial for row in grid)


def accepting_at_row_ends(grid: Grid, accepting: Iterable[str], initial: str) -> bool:
    """Every row ends in an accepting state, and none sits earlier in a row.

    A row without occupied cells passes. The initial state is exempt from the
    "none earlier" rule since it is pinned to column 0.
    """
    accepting_set = set(accepting)
    for row in grid:
        occupied = [c for c, cell in enumerate(row) if cell is not None]
        if not occupied:
            continue
        rightmost = occupied[-1]
        if row[rightmost] not in accepting_set:
            return False
        if any(cell in accepting_set and cell != initial for cell in row[:rightmost]):
            return False
    return True


# ─── Cost ─────────────────────────────────────────────────────────────────────


def transition_cost(positions: dict[str, Cell], table: TransitionTable) -> int:
    """Sum of Manhattan distances over every (source, key, destination) triple.

    Triples with an end that is not placed contribute nothing.
    """
    total = 0
    for source, _key, destination in table.triples():
        if source in positions and destination in positions:
            (r1, c1), (r2, c2) = positions[source], positions[destination]
            total += abs(r1 - r2) + abs(c1 - c2)
    return total


def _weighted_pairs(table: TransitionTable, index: dict[str, int]) -> list[tuple[int, int, int]]:
    """(source index, destination index, triple count) for every placed non-loop pair."""
    g = transition_graph(table)
    return [
        (index[u], index[v], w)
        for u, v, w in g.edges(data="weight")
        if u != v and u in index and v in index
    ]


# ─── Search ───────────────────────────────────────────────────────────────────


def search_grid(
    states: Sequence[str],
    initial: str,
    accepting: Iterable[str],
    table: TransitionTable,
    *,
    accepting_at_row_ends_required: bool = False,
    max_states: int | None = DEFAULT_MAX_STATES,
    deadline: float | None = None,
    cancelled: Callable[[], bool] | None = None,
) -> GridSearchResult:
    """Find the cheapest grid placement of ``states``.

    Args:
        states: State identifiers; duplicates are ignored.
        initial: Must end up in column 0 of some row.
        accepting: Accepting states, used when ``accepting_at_row_ends_required``.
        table: Transitions that drive the cost.
        accepting_at_row_ends_required: Enforce ``accepting_at_row_ends``.
        max_states: Refuse (status TOO_LARGE) above this many states; ``None``
            disables the cutoff.
        deadline: ``time.monotonic()`` value after which the search gives up.
        cancelled: Polled periodically; a true result stops the search.

    Permutations come from ``itertools.permutations``, i.e. the order of the
    recursive "take element i, permute the rest" generator; the first grid
    with the minimum cost is kept.
    """
    ordered = list(dict.fromkeys(states))
    n = len(ordered)
    if n == 0:
        return GridSearchResult(status=LayoutStatus.NO_LAYOUT)
    if max_states is not None and n > max_states:
        logger.warning("%d states exceed the layout limit of %d", n, max_states)
        return GridSearchResult(status=LayoutStatus.TOO_LARGE)
    if initial not in ordered:
        logger.warning("initial state %r is not among the states; no layout possible", initial)
        return GridSearchResult(status=LayoutStatus.NO_LAYOUT)

    accepting_list = list(accepting)
    index = {state: i for i, state in enumerate(ordered)}
    pairs = _weighted_pairs(table, index)
    init = index[initial]

    best: Grid | None = None
    best_cost: int | None = None
    checked = 0

    for rows, cols in candidate_shapes(n):
        spare = rows * cols - n
        for perm in itertools.permutations(range(n)):
            checked += 1
            if checked % SEARCH_CHECK_INTERVAL == 0:
                stop = _stop_status(deadline, cancelled)
                if stop is not None:
                    logger.info("grid search stopped after %d candidates: %s", checked, stop.value)
                    return GridSearchResult(status=stop, candidates=checked)

            where = [0] * n
            for k, s in enumerate(perm):
                where[s] = k
            if where[init] % cols != 0:
                continue

            cells: list[str | None] = [ordered[s] for s in perm]
            cells.extend([None] * spare)
            grid: Grid = [cells[r * cols : (r + 1) * cols] for r in range(rows)]

            if accepting_at_row_ends_required and not accepting_at_row_ends(grid, accepting_list, initial):
                continue

            cost = 0
            for u, v, w in pairs:
                ku, kv = where[u], where[v]
                cost += w * (abs(ku // cols - kv // cols) + abs(ku % cols - kv % cols))

            if best_cost is None or cost < best_cost:
                best_cost = cost
                best = grid

        logger.debug("shape %dx%d searched, best cost so far %s", rows, cols, best_cost)

    if best is None:
        logger.warning("no grid satisfies the placement constraints (%d candidates)", checked)
        return GridSearchResult(status=LayoutStatus.NO_LAYOUT, candidates=checked)

    return GridSearchResult(grid=trim_grid(best), cost=best_cost, status=LayoutStatus.FOUND, candidates=checked)


def optimal_grid(
    states: Sequence[str],
    initial: str,
    accepting: Iterable[str],
    table: TransitionTable,
    *,
    accepting_at_row_ends_required: bool = False,
) -> Grid:
    """The winning grid of ``search_grid``, or ``[]`` when there is none."""
    return search_grid(
        states,
        initial,
        accepting,
        table,
        accepting_at_row_ends_required=accepting_at_row_ends_required,
    ).grid


def _stop_status(deadline: float | None, cancelled: Callable[[], bool] | None) -> LayoutStatus | None:
    if cancelled is not None and cancelled():
        return LayoutStatus.CANCELLED
    if deadline is not None and time.monotonic() >= deadline:
        return LayoutStatus.TIMED_OUT
    return None
