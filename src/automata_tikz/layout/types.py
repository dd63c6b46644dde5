"""Layout types shared by the grid search, the edge router and the renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from automata_tikz.config import DiagramStyle
from automata_tikz.syntax.types import Diagnostic

Cell = tuple[int, int]  # (row, col)
Grid = list[list[str | None]]


class LayoutStatus(Enum):
    FOUND = "found"
    NO_LAYOUT = "no-layout"
    TOO_LARGE = "too-large"
    TIMED_OUT = "timed-out"
    CANCELLED = "cancelled"


@dataclass
class GridSearchResult:
    """Outcome of the grid search.

    ``grid`` is empty unless ``status`` is FOUND; ``cost`` is ``None`` then.
    ``candidates`` counts the permutations examined.
    """

    grid: Grid = field(default_factory=list)
    cost: int | None = None
    status: LayoutStatus = LayoutStatus.NO_LAYOUT
    candidates: int = 0

    @property
    def found(self) -> bool:
        return self.status is LayoutStatus.FOUND


class Side(Enum):
    ABOVE = "above"
    BELOW = "below"
    LEFT = "left"
    RIGHT = "right"


class Bend(Enum):
    """Bend keyword, relative to the direction of travel."""

    LEFT = "left"
    RIGHT = "right"


class RouteKind(Enum):
    LOOP = "loop"
    STRAIGHT = "straight"
    BENT = "bent"


@dataclass
class Route:
    """How one transition arrow is drawn.

    LOOP uses ``side``; STRAIGHT and BENT use ``anchor`` (label side) and BENT
    also ``bend``. Cells are grid coordinates of the two ends.
    """

    source: str
    target: str
    kind: RouteKind
    label: str
    symbols: list[str] = field(default_factory=list)
    side: Side | None = None
    bend: Bend | None = None
    anchor: Side | None = None
    source_cell: Cell | None = None
    target_cell: Cell | None = None

    @property
    def bulge(self) -> tuple[int, int] | None:
        """Grid direction (drow, dcol) the arc bows towards, for bent edges.

        Rows grow downwards. Bending right of a travel vector (dr, dc) bows
        towards (dc, -dr); bending left towards (-dc, dr).
        """
        if self.kind is not RouteKind.BENT or self.source_cell is None or self.target_cell is None:
            return None
        dr = self.target_cell[0] - self.source_cell[0]
        dc = self.target_cell[1] - self.source_cell[1]
        if self.bend is Bend.RIGHT:
            return (dc, -dr)
        return (-dc, dr)


@dataclass
class Diagram:
    """Self-contained layout output — everything renderers need."""

    states: list[str]
    initial: str
    accepting: list[str]
    grid: Grid
    routes: list[Route]
    status: LayoutStatus = LayoutStatus.FOUND
    style: DiagramStyle = field(default_factory=DiagramStyle)
    diagnostics: list[Diagnostic] = field(default_factory=list)
