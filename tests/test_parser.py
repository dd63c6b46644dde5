"""Tests for syntax/parser.py — text form fields → AutomatonSpec."""

from __future__ import annotations

from automata_tikz.syntax import (
    parse_accepting,
    parse_automaton,
    parse_state_rows,
    parse_states,
    parse_transitions,
)


class TestParseStates:
    def test_comma_separated(self):
        assert parse_states("q1, q2, q3") == ["q1", "q2", "q3"]

    def test_semicolon_counts_as_separator(self):
        """Row breaks still separate states in the flat list."""
        assert parse_states("q1, q2; q3") == ["q1", "q2", "q3"]

    def test_blanks_dropped(self):
        assert parse_states(" q1 ,, ;q2, ") == ["q1", "q2"]

    def test_duplicates_keep_first(self):
        assert parse_states("q2, q1, q2") == ["q2", "q1"]

    def test_empty(self):
        assert parse_states("") == []


class TestParseStateRows:
    def test_rows(self):
        assert parse_state_rows("q1, q2; q3") == [["q1", "q2"], ["q3"]]

    def test_empty_rows_dropped(self):
        assert parse_state_rows("q1;; q2;") == [["q1"], ["q2"]]

    def test_repeated_state_keeps_first_row(self):
        assert parse_state_rows("q1, q2; q2, q3") == [["q1", "q2"], ["q3"]]

    def test_row_of_only_repeats_dropped(self):
        assert parse_state_rows("q1, q2; q2, q1; q3") == [["q1", "q2"], ["q3"]]


class TestParseAccepting:
    def test_stripped(self):
        assert parse_accepting("q3,q2 ") == ["q3", "q2"]

    def test_empty(self):
        assert parse_accepting(" ") == []


class TestParseTransitions:
    def test_records(self):
        text = "q1, 0, q1;\nq1, 1, q2;"
        assert parse_transitions(text) == [["q1", "0", "q1"], ["q1", "1", "q2"]]

    def test_multiple_symbols(self):
        assert parse_transitions("q2, 0, 1, q3") == [["q2", "0", "1", "q3"]]

    def test_blank_records_skipped(self):
        assert parse_transitions(" ; q1,0,q2 ;; ") == [["q1", "0", "q2"]]

    def test_short_record_kept(self):
        """Malformed records are left for the table builder to degrade."""
        assert parse_transitions("q1, q2") == [["q1", "q2"]]


class TestParseAutomaton:
    def test_text_fields(self):
        spec = parse_automaton("q1, q2; q3", " q1 ", "q3", "q1,0,q2; q2,1,q3")
        assert spec.states == ["q1", "q2", "q3"]
        assert spec.rows == [["q1", "q2"], ["q3"]]
        assert spec.initial == "q1"
        assert spec.accepting == ["q3"]
        assert spec.records == [["q1", "0", "q2"], ["q2", "1", "q3"]]

    def test_non_string_initial(self):
        assert parse_automaton("1, 2", 1, "", "").initial == "1"

    def test_list_fields(self):
        spec = parse_automaton(["q1", "q2"], "q1", ["q2"], [["q1", "a", "q2"], "q2, b, q1"])
        assert spec.states == ["q1", "q2"]
        assert spec.rows == [["q1", "q2"]]
        assert spec.accepting == ["q2"]
        assert spec.records == [["q1", "a", "q2"], ["q2", "b", "q1"]]
