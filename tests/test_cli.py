"""Tests for cli.py — argument handling, JSON input, output targets, exit codes."""

from __future__ import annotations

import io
import json

import pytest

from automata_tikz.cli import build_parser, main, style_from_args
from automata_tikz.config import AcceptingBy, SymbolStyle
from automata_tikz.renderers import latex

FLAGS = ["--states", "q1, q2", "--initial", "q1", "--accepting", "q2", "--transitions", "q1,0,q1; q1,1,q2"]


class TestStyleFromArgs:
    def test_defaults(self):
        style = style_from_args(build_parser().parse_args([]))
        assert style.node_distance == 120
        assert style.accepting_by is AcceptingBy.DOUBLE

    def test_overrides(self):
        args = build_parser().parse_args(
            ["--accepting-by", "arrow", "--symbol-style", "math", "--initial-where", "none", "--node-fill-color", ""]
        )
        style = style_from_args(args)
        assert style.accepting_by is AcceptingBy.ARROW
        assert style.symbol_style is SymbolStyle.MATH
        assert style.initial_where is None
        assert style.node_fill_color is None


class TestMain:
    def test_flags_to_stdout(self, capsys):
        assert main(FLAGS) == 0
        out = capsys.readouterr().out
        assert r"\draw (q1) edge[loop above, ->] node[auto]{0} (q1);" in out
        assert out.rstrip().endswith(r"\end{document}")

    def test_json_file(self, tmp_path, capsys):
        path = tmp_path / "fa.json"
        path.write_text(
            json.dumps({"states": ["q1", "q2"], "initial": "q1", "accepting": ["q2"], "transitions": [["q1", "1", "q2"]]})
        )
        assert main([str(path)]) == 0
        assert r"\draw (q1) edge[above, ->] node[auto]{1} (q2);" in capsys.readouterr().out

    def test_flags_override_file(self, tmp_path, capsys):
        path = tmp_path / "fa.json"
        path.write_text(json.dumps({"states": "q1, q2", "initial": "q1", "transitions": "q1,0,q2"}))
        assert main([str(path), "--transitions", "q1,7,q2"]) == 0
        assert "node[auto]{7}" in capsys.readouterr().out

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps({"states": "q1", "initial": "q1"})))
        assert main(["-"]) == 0
        assert r"\node[state, initial left] (q1) {$q_{1}$};" in capsys.readouterr().out

    def test_output_file(self, tmp_path, capsys):
        target = tmp_path / "fa.tex"
        assert main([*FLAGS, "--standalone", "-o", str(target)]) == 0
        assert capsys.readouterr().out == ""
        assert target.read_text(encoding="utf-8").startswith(r"\documentclass")

    def test_rows_layout(self, capsys):
        assert main(["--states", "q1; q2", "--initial", "q1", "--layout", "rows"]) == 0
        assert r"\node[state] (q2) [below of=q1] {$q_{2}$};" in capsys.readouterr().out

    def test_strict_failure(self, capsys):
        argv = ["--states", "q1, q2", "--initial", "q1", "--accepting-by", "arrow", "--strict"]
        assert main(argv) == 1
        assert capsys.readouterr().out == ""

    def test_no_layout_without_strict(self, capsys):
        assert main(["--states", "q1, q2", "--initial", "q1", "--accepting-by", "arrow"]) == 0
        assert "% no layout: no-layout" in capsys.readouterr().out

    def test_missing_states(self):
        with pytest.raises(SystemExit) as info:
            main(["--initial", "q1"])
        assert info.value.code == 2

    def test_unreadable_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.json")]) == 2
        assert "Input error" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "fa.json"
        path.write_text("[1, 2]")
        assert main([str(path)]) == 2

    def test_non_string_initial(self, tmp_path, capsys):
        path = tmp_path / "fa.json"
        path.write_text(json.dumps({"states": "q1", "initial": ["q1"]}))
        assert main([str(path)]) == 2
        assert "Input error" in capsys.readouterr().err

    def test_compile_without_engine(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(latex.shutil, "which", lambda name: None)
        assert main([*FLAGS, "--compile", str(tmp_path)]) == 1
        assert r"\begin{tikzpicture}" in capsys.readouterr().out
