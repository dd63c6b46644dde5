"""Base renderer protocols."""

from __future__ import annotations

from typing import Protocol

from automata_tikz.layout.types import Diagram


class Renderer(Protocol):
    """Protocol that all diagram emitters must implement."""

    def render(self, diagram: Diagram) -> str:
        """Render a laid-out automaton to diagram markup."""
        ...


class RenderingService(Protocol):
    """An external renderer that consumes emitted markup (e.g. a LaTeX engine).

    Obtained once by the caller and passed in; failures are reported by
    raising any exception, which the API wraps into ``RenderError``.
    """

    def render(self, diagram_text: str) -> None: ...
