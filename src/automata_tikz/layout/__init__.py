"""Layout: grid search for state placement and edge routing on the grid."""

from automata_tikz.layout.grid import (
    accepting_at_row_ends,
    candidate_shapes,
    grid_positions,
    initial_in_first_column,
    optimal_grid,
    rows_grid,
    search_grid,
    transition_cost,
    trim_grid,
)
from automata_tikz.layout.routing import (
    bend_direction,
    compose_label,
    line_blocked,
    loop_side,
    route_edges,
)
from automata_tikz.layout.types import (
    Bend,
    Cell,
    Diagram,
    Grid,
    GridSearchResult,
    LayoutStatus,
    Route,
    RouteKind,
    Side,
)

__all__ = [
    "Bend",
    "Cell",
    "Diagram",
    "Grid",
    "GridSearchResult",
    "LayoutStatus",
    "Route",
    "RouteKind",
    "Side",
    "accepting_at_row_ends",
    "bend_direction",
    "candidate_shapes",
    "compose_label",
    "grid_positions",
    "initial_in_first_column",
    "line_blocked",
    "loop_side",
    "optimal_grid",
    "route_edges",
    "rows_grid",
    "search_grid",
    "transition_cost",
    "trim_grid",
]
