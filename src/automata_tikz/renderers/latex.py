"""pdflatex rendering service — compiles emitted TikZ into a PDF on disk."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from automata_tikz.renderers.tikz import STANDALONE_CLASS

logger = logging.getLogger(__name__)


def ensure_document_class(text: str) -> str:
    """Prefix a standalone document class when the markup has none."""
    if r"\documentclass" in text:
        return text
    return f"{STANDALONE_CLASS}\n{text}"


class PdfLatexService:
    """Writes ``<jobname>.tex`` into ``output_dir`` and runs a LaTeX engine on it."""

    def __init__(self, output_dir: str | Path, executable: str = "pdflatex", jobname: str = "automaton") -> None:
        self.output_dir = Path(output_dir)
        self.executable = executable
        self.jobname = jobname

    @property
    def tex_path(self) -> Path:
        return self.output_dir / f"{self.jobname}.tex"

    @property
    def pdf_path(self) -> Path:
        return self.output_dir / f"{self.jobname}.pdf"

    def render(self, diagram_text: str) -> None:
        exe = shutil.which(self.executable)
        if exe is None:
            raise FileNotFoundError(f"{self.executable} not found on PATH")

        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.tex_path.write_text(ensure_document_class(diagram_text), encoding="utf-8")

        cmd = [exe, "-interaction=nonstopmode", "-halt-on-error", f"-output-directory={self.output_dir}", str(self.tex_path)]
        logger.debug("running %s", " ".join(cmd))
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        if proc.returncode != 0:
            tail = "\n".join(proc.stdout.splitlines()[-10:])
            raise RuntimeError(f"{self.executable} exited with status {proc.returncode}:\n{tail}")
        logger.info("wrote %s", self.pdf_path)
