"""Parser — turns the textual form fields into an ``AutomatonSpec``.

Text forms:
    states       ``q1, q2; q3``          (``;`` starts a new row)
    accepting    ``q2, q3``
    transitions  ``q1, 0, q1; q1, 1, q2``  (``source, symbol+, destination``)

Nothing here raises: blank items are dropped and malformed records are kept
for the table builder to degrade gracefully.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from automata_tikz.syntax.types import AutomatonSpec

_STATE_SEP = re.compile(r"[,;]")


def _split_clean(text: str, sep: str) -> list[str]:
    return [part.strip() for part in text.split(sep) if part.strip()]


def _unique(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


def parse_states(text: str) -> list[str]:
    """All state identifiers in order of first appearance."""
    return _unique(s.strip() for s in _STATE_SEP.split(text) if s.strip())


def parse_state_rows(text: str) -> list[list[str]]:
    """States grouped into rows by ``;``.

    A state listed again keeps only its first position; rows left empty are
    dropped.
    """
    seen: set[str] = set()
    rows: list[list[str]] = []
    for chunk in text.split(";"):
        row = []
        for state in _split_clean(chunk, ","):
            if state not in seen:
                seen.add(state)
                row.append(state)
        if row:
            rows.append(row)
    return rows


def parse_accepting(text: str) -> list[str]:
    return _unique(_split_clean(text, ","))


def parse_transitions(text: str) -> list[list[str]]:
    """Split the transitions text into flat records.

    Records are separated by ``;`` and fields by ``,``; surrounding
    whitespace (including newlines) is ignored. Blank records are skipped,
    short records are returned as-is.
    """
    records: list[list[str]] = []
    for chunk in text.strip().split(";"):
        if not chunk.strip():
            continue
        records.append([field.strip() for field in chunk.strip().split(",")])
    return records


def _as_records(value: str | Iterable) -> list[list[str]]:
    if isinstance(value, str):
        return parse_transitions(value)
    records: list[list[str]] = []
    for item in value:
        if isinstance(item, str):
            records.extend(parse_transitions(item))
        else:
            records.append([str(field).strip() for field in item])
    return records


def _as_list(value: str | Iterable[str], parse) -> list[str]:
    if isinstance(value, str):
        return parse(value)
    return _unique(str(v).strip() for v in value if str(v).strip())


def parse_automaton(
    states: str | Iterable[str],
    initial: str,
    accepting: str | Iterable[str],
    transitions: str | Iterable,
) -> AutomatonSpec:
    """Parse the four input fields, each given as text or as an already split list."""
    if isinstance(states, str):
        state_list = parse_states(states)
        rows = parse_state_rows(states)
    else:
        state_list = _as_list(states, parse_states)
        rows = [state_list] if state_list else []

    return AutomatonSpec(
        states=state_list,
        initial=str(initial).strip(),
        accepting=_as_list(accepting, parse_accepting),
        records=_as_records(transitions),
        rows=rows,
    )
