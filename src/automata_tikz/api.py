"""Public API — text fields in, TikZ out.

    generate_tikz(states, initial, accepting, transitions, style) -> str

runs parse → table → grid search (or fixed rows) → routing → emission.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from automata_tikz.config import DEFAULT_MAX_STATES, DiagramStyle, LayoutMode
from automata_tikz.errors import LayoutError, LayoutTooLargeError, NoLayoutError, RenderError
from automata_tikz.layout.grid import rows_grid, search_grid
from automata_tikz.layout.routing import route_edges
from automata_tikz.layout.types import Diagram, GridSearchResult, LayoutStatus
from automata_tikz.renderers.base import RenderingService
from automata_tikz.renderers.tikz import TikzRenderer
from automata_tikz.syntax.parser import parse_automaton
from automata_tikz.syntax.types import AutomatonSpec, Diagnostic
from automata_tikz.transitions import TransitionTable, build_table

logger = logging.getLogger(__name__)


def check_references(spec: AutomatonSpec, table: TransitionTable) -> list[Diagnostic]:
    """Report names used in the input that are not declared states."""
    declared = set(spec.states)
    found: list[Diagnostic] = []

    if spec.initial not in declared:
        found.append(Diagnostic("initial-not-declared", f"initial state {spec.initial!r} is not a declared state"))
    for state in spec.accepting:
        if state not in declared:
            found.append(Diagnostic("accepting-not-declared", f"accepting state {state!r} is not a declared state"))

    unknown: list[str] = []
    for source, _key, destination in table.triples():
        for state in (source, destination):
            if state and state not in declared and state not in unknown:
                unknown.append(state)
    for state in unknown:
        found.append(Diagnostic("unknown-state", f"transition references undeclared state {state!r}"))

    for d in found:
        logger.warning(d.message)
    return found


def build_diagram(
    spec: AutomatonSpec,
    style: DiagramStyle | None = None,
    *,
    layout: LayoutMode = LayoutMode.AUTO,
    max_states: int | None = DEFAULT_MAX_STATES,
    timeout: float | None = None,
    cancelled: Callable[[], bool] | None = None,
) -> Diagram:
    """Lay out and route a parsed automaton."""
    style = style or DiagramStyle()
    table = build_table(spec.records)
    diagnostics = list(table.diagnostics) + check_references(spec, table)

    if layout is LayoutMode.ROWS:
        grid = rows_grid(spec.rows)
        result = GridSearchResult(grid=grid, status=LayoutStatus.FOUND if grid else LayoutStatus.NO_LAYOUT)
    else:
        deadline = time.monotonic() + timeout if timeout is not None else None
        result = search_grid(
            spec.states,
            spec.initial,
            spec.accepting,
            table,
            accepting_at_row_ends_required=style.accepting_at_row_ends,
            max_states=max_states,
            deadline=deadline,
            cancelled=cancelled,
        )
        logger.debug("grid search: %s, cost %s, %d candidates", result.status.value, result.cost, result.candidates)

    routes = route_edges(result.grid, table, spec.states, style.symbol_style)
    return Diagram(
        states=list(spec.states),
        initial=spec.initial,
        accepting=list(spec.accepting),
        grid=result.grid,
        routes=routes,
        status=result.status,
        style=style,
        diagnostics=diagnostics,
    )


def raise_for_status(diagram: Diagram) -> None:
    """Raise the matching ``LayoutError`` unless a grid was found."""
    if diagram.status is LayoutStatus.FOUND:
        return
    if diagram.status is LayoutStatus.NO_LAYOUT:
        raise NoLayoutError(diagram.status, "no grid satisfies the placement constraints")
    if diagram.status is LayoutStatus.TOO_LARGE:
        raise LayoutTooLargeError(diagram.status, f"too many states to lay out ({len(diagram.states)})")
    raise LayoutError(diagram.status)


def generate_tikz(
    states: str | Iterable[str],
    initial: str,
    accepting: str | Iterable[str],
    transitions: str | Iterable,
    style: DiagramStyle | None = None,
    *,
    layout: LayoutMode = LayoutMode.AUTO,
    max_states: int | None = DEFAULT_MAX_STATES,
    timeout: float | None = None,
    cancelled: Callable[[], bool] | None = None,
    strict: bool = False,
) -> str:
    """Parse the input fields and return TikZ source.

    When no grid is found the picture body holds a ``% no layout`` comment,
    or, with ``strict=True``, a ``LayoutError`` is raised instead.
    """
    spec = parse_automaton(states, initial, accepting, transitions)
    diagram = build_diagram(
        spec,
        style,
        layout=layout,
        max_states=max_states,
        timeout=timeout,
        cancelled=cancelled,
    )
    if strict:
        raise_for_status(diagram)
    return TikzRenderer().render(diagram)


def publish(diagram_text: str, service: RenderingService) -> None:
    """Hand emitted markup to an external renderer.

    Any failure of the service surfaces as ``RenderError``.
    """
    try:
        service.render(diagram_text)
    except Exception as exc:
        raise RenderError(f"renderer failed: {exc}") from exc
