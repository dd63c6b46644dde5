"""Input parsing: text form fields → ``AutomatonSpec``."""

from automata_tikz.syntax.parser import (
    parse_accepting,
    parse_automaton,
    parse_state_rows,
    parse_states,
    parse_transitions,
)
from automata_tikz.syntax.types import AutomatonSpec, Diagnostic

__all__ = [
    "AutomatonSpec",
    "Diagnostic",
    "parse_accepting",
    "parse_automaton",
    "parse_state_rows",
    "parse_states",
    "parse_transitions",
]
