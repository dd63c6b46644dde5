"""automata-tikz — lay out finite automata on a grid and emit TikZ diagrams."""

from automata_tikz.api import build_diagram, check_references, generate_tikz, publish, raise_for_status
from automata_tikz.config import AcceptingBy, DiagramStyle, LayoutMode, SymbolStyle
from automata_tikz.connectivity import Connection, connection_degree, symbols_between, transition_graph
from automata_tikz.errors import (
    AutomataTikzError,
    LayoutError,
    LayoutTooLargeError,
    NoLayoutError,
    RenderError,
    SupersededError,
)
from automata_tikz.layout.types import Diagram, LayoutStatus
from automata_tikz.renderers.tikz import TikzRenderer
from automata_tikz.transitions import TransitionTable, build_table

__version__ = "0.1.0"

__all__ = [
    "AcceptingBy",
    "AutomataTikzError",
    "Connection",
    "Diagram",
    "DiagramStyle",
    "LayoutError",
    "LayoutMode",
    "LayoutStatus",
    "LayoutTooLargeError",
    "NoLayoutError",
    "RenderError",
    "SupersededError",
    "SymbolStyle",
    "TikzRenderer",
    "TransitionTable",
    "build_diagram",
    "build_table",
    "check_references",
    "connection_degree",
    "generate_tikz",
    "publish",
    "raise_for_status",
    "symbols_between",
    "transition_graph",
]
