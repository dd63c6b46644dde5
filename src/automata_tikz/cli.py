"""Command-line interface.

Examples:
  automata-tikz automaton.json                      # TikZ to stdout
  automata-tikz --states "q1, q2" --initial q1 \\
      --accepting q2 --transitions "q1,0,q1; q1,1,q2"
  automata-tikz automaton.json --standalone -o fa.tex
  automata-tikz automaton.json --compile build/     # run pdflatex
  automata-tikz - < automaton.json                  # read stdin

A JSON input holds "states", "initial", "accepting" and "transitions", each
either in the text form or as lists. Flags override values from the file.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import fields
from pathlib import Path

from automata_tikz.api import build_diagram, publish, raise_for_status
from automata_tikz.config import DEFAULT_MAX_STATES, AcceptingBy, DiagramStyle, LayoutMode, SymbolStyle
from automata_tikz.errors import AutomataTikzError
from automata_tikz.renderers.latex import PdfLatexService
from automata_tikz.renderers.tikz import TikzRenderer
from automata_tikz.syntax.parser import parse_automaton

logger = logging.getLogger("automata_tikz")

_INPUT_KEYS = ("states", "initial", "accepting", "transitions")
_STYLE_FIELDS = {f.name for f in fields(DiagramStyle)}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="automata-tikz",
        description="Generate TikZ (automata library) code for a finite automaton diagram",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("\n\n", 1)[1],
    )
    parser.add_argument("input", nargs="?", metavar="FILE", help="JSON input file, or '-' for stdin")

    auto = parser.add_argument_group("automaton")
    auto.add_argument("--states", help="'q1, q2; q3' (';' starts a row in --layout rows)")
    auto.add_argument("--initial", help="initial state")
    auto.add_argument("--accepting", help="'q2, q3'")
    auto.add_argument("--transitions", help="'source, symbol+, destination; ...'")

    lay = parser.add_argument_group("layout")
    lay.add_argument("--layout", choices=[m.value for m in LayoutMode], default=LayoutMode.AUTO.value)
    lay.add_argument("--max-states", type=int, default=DEFAULT_MAX_STATES, help="grid search cutoff")
    lay.add_argument("--timeout", type=float, help="grid search time limit in seconds")

    sty = parser.add_argument_group("style")
    sty.add_argument("--node-distance", type=float)
    sty.add_argument("--inner-sep", type=float)
    sty.add_argument("--bend-angle", type=float)
    sty.add_argument("--shorten", type=float)
    sty.add_argument("--initial-text")
    sty.add_argument("--initial-where", choices=["above", "below", "left", "right", "none"])
    sty.add_argument("--accepting-by", choices=[a.value for a in AcceptingBy])
    sty.add_argument("--double-distance", type=float)
    sty.add_argument("--arrow-type")
    sty.add_argument("--node-fill-color", help="HTML hex color, '' for none")
    sty.add_argument("--node-border-color", help="HTML hex color")
    sty.add_argument("--edge-color", help="HTML hex color")
    sty.add_argument("--line-width", choices=["semithick", "thick", "very thick"])
    sty.add_argument("--symbol-style", choices=[s.value for s in SymbolStyle])
    sty.add_argument("--standalone", action="store_true", default=None, help="emit a \\documentclass line")

    out = parser.add_argument_group("output")
    out.add_argument("-o", "--output", metavar="FILE", help="output file (default: stdout)")
    out.add_argument("--strict", action="store_true", help="fail when no layout is found")
    out.add_argument("--compile", metavar="DIR", help="compile the TikZ with pdflatex into DIR")
    out.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def style_from_args(args: argparse.Namespace) -> DiagramStyle:
    """DiagramStyle defaults overridden by every style flag that was given."""
    overrides: dict[str, object] = {}
    for name in _STYLE_FIELDS:
        value = getattr(args, name, None)
        if value is None:
            continue
        if name == "accepting_by":
            value = AcceptingBy(value)
        elif name == "symbol_style":
            value = SymbolStyle(value)
        elif name == "initial_where" and value == "none":
            value = None
        elif name.endswith("_color") and value == "":
            value = None
        overrides[name] = value
    return DiagramStyle(**overrides)


def load_input(args: argparse.Namespace) -> dict:
    """Merge the JSON input (if any) with the automaton flags."""
    data: dict = {}
    if args.input:
        text = sys.stdin.read() if args.input == "-" else Path(args.input).read_text(encoding="utf-8")
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("JSON input must be an object")
        if "initial" in data and not isinstance(data["initial"], str):
            raise ValueError("'initial' must be a single state name")
    for key in _INPUT_KEYS:
        value = getattr(args, key)
        if value is not None:
            data[key] = value
    return data


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        data = load_input(args)
    except (OSError, ValueError) as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2

    missing = [key for key in ("states", "initial") if not data.get(key)]
    if missing:
        parser.error(f"missing {', '.join(missing)} (give a FILE or --{missing[0]})")

    spec = parse_automaton(
        data["states"],
        data["initial"],
        data.get("accepting", ""),
        data.get("transitions", ""),
    )
    diagram = build_diagram(
        spec,
        style_from_args(args),
        layout=LayoutMode(args.layout),
        max_states=args.max_states,
        timeout=args.timeout,
    )

    try:
        if args.strict:
            raise_for_status(diagram)
        tikz = TikzRenderer().render(diagram)
        if args.output:
            Path(args.output).write_text(tikz, encoding="utf-8")
        else:
            sys.stdout.write(tikz)
        if args.compile:
            publish(tikz, PdfLatexService(args.compile))
    except AutomataTikzError as e:
        logger.error("%s", e)
        return 1

    return 0
