"""Renderers: TikZ emission and external rendering services."""

from automata_tikz.renderers.base import Renderer, RenderingService
from automata_tikz.renderers.latex import PdfLatexService
from automata_tikz.renderers.tikz import TikzRenderer

__all__ = ["PdfLatexService", "Renderer", "RenderingService", "TikzRenderer"]
