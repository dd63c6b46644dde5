"""Configuration — style parameters and search limits.

Style values are passed through verbatim into the emitted TikZ; only
``accepting_by`` influences layout (see ``DiagramStyle.accepting_at_row_ends``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ─── Search Limits ────────────────────────────────────────────────────────────

DEFAULT_MAX_STATES: int = 8  # above this the search refuses with TOO_LARGE
SEARCH_CHECK_INTERVAL: int = 1024  # permutations between deadline/cancel checks
DEFAULT_DEBOUNCE: float = 0.5  # seconds a request waits before running


# ─── Enums ────────────────────────────────────────────────────────────────────


class AcceptingBy(Enum):
    """How accepting states are marked in the picture."""

    DOUBLE = "double"
    ARROW = "arrow"


class SymbolStyle(Enum):
    """How each transition symbol is typeset in an edge label."""

    VERBATIM = "verbatim"
    MONOSPACE = "monospace"
    MATH = "math"


class LayoutMode(Enum):
    """AUTO runs the grid search; ROWS keeps the rows given in the states text."""

    AUTO = "auto"
    ROWS = "rows"


# ─── Diagram Style ────────────────────────────────────────────────────────────


@dataclass
class DiagramStyle:
    """TikZ picture options.

    Colors are HTML hex strings with or without a leading ``#``; ``None``
    leaves the TikZ default in place.
    """

    node_distance: float = 120
    inner_sep: float = 4
    bend_angle: float = 30
    shorten: float = 3
    initial_text: str = "start"
    initial_where: str | None = "left"
    accepting_by: AcceptingBy = AcceptingBy.DOUBLE
    double_distance: float = 1.5
    arrow_type: str = "Stealth[round]"
    node_fill_color: str | None = "f0f0f0"
    node_border_color: str | None = None
    edge_color: str | None = None
    line_width: str = "thick"
    symbol_style: SymbolStyle = SymbolStyle.VERBATIM
    standalone: bool = False

    @property
    def accepting_at_row_ends(self) -> bool:
        """Whether the layout must keep accepting states at the ends of rows.

        An accepting arrow is drawn beside the state, so it needs the free
        space at the end of a row.
        """
        return self.accepting_by is AcceptingBy.ARROW
