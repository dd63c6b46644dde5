"""Exception types raised at the edges of the pipeline.

The core stages (parsing, table building, search, routing, emission) never
raise on malformed input; these are raised by the API in strict mode, by the
external renderer adapter and by the scheduler.
"""

from __future__ import annotations

from automata_tikz.layout.types import LayoutStatus


class AutomataTikzError(Exception):
    """Base class for all package errors."""


class LayoutError(AutomataTikzError):
    """The grid search produced no grid."""

    def __init__(self, status: LayoutStatus, message: str | None = None) -> None:
        self.status = status
        super().__init__(message or f"no layout: {status.value}")


class NoLayoutError(LayoutError):
    """No candidate grid satisfied the placement constraints."""


class LayoutTooLargeError(LayoutError):
    """The automaton has more states than the search cutoff allows."""


class RenderError(AutomataTikzError):
    """The external renderer failed; the cause is kept as ``__cause__``."""


class SupersededError(AutomataTikzError):
    """A scheduled request was replaced by a newer one before it finished."""
