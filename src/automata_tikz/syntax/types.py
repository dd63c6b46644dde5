"""Input types shared by the parser, the table builder and the API."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem found in the input.

    ``code`` is a short stable identifier (``empty-symbols``,
    ``missing-destination``, ``unknown-state``, ``initial-not-declared``,
    ``accepting-not-declared``); ``message`` is for humans.
    """

    code: str
    message: str


@dataclass
class AutomatonSpec:
    """A parsed automaton description, prior to table building.

    ``rows`` keeps the row grouping of the states text (``;`` separators); it
    only matters for the fixed-row layout.
    """

    states: list[str]
    initial: str
    accepting: list[str]
    records: list[list[str]]
    rows: list[list[str]] = field(default_factory=list)
