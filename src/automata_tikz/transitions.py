"""Transition table — normalized view of the flat transition records.

A record ``[source, s1, ..., sk, destination]`` becomes one entry
``table[source][(s1..sk sorted)]`` holding ``destination``. Several
destinations under one key express nondeterminism; several keys reaching the
same destination are merged again when queried (see ``connectivity``).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from automata_tikz.syntax.types import Diagnostic

logger = logging.getLogger(__name__)

SymbolKey = tuple[str, ...]


@dataclass
class TransitionTable:
    """source → symbol key → ordered destinations.

    ``diagnostics`` lists the records that could only be parsed partially.
    """

    entries: dict[str, dict[SymbolKey, list[str]]] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def add(self, source: str, symbols: Iterable[str], destination: str) -> None:
        """Add one transition; a destination already under the key is not repeated."""
        key: SymbolKey = tuple(sorted(symbols))
        targets = self.entries.setdefault(source, {}).setdefault(key, [])
        if destination not in targets:
            targets.append(destination)

    def triples(self) -> Iterator[tuple[str, SymbolKey, str]]:
        """Every ``(source, key, destination)`` in insertion order."""
        for source, by_key in self.entries.items():
            for key, targets in by_key.items():
                for destination in targets:
                    yield source, key, destination

    def states(self) -> set[str]:
        """Every state mentioned as a source or destination."""
        found: set[str] = set()
        for source, _key, destination in self.triples():
            found.add(source)
            found.add(destination)
        return found

    def __len__(self) -> int:
        return sum(1 for _ in self.triples())


def build_table(records: Iterable[list[str]]) -> TransitionTable:
    """Build a ``TransitionTable`` from flat records.

    The first field is the source, the last the destination and everything in
    between are symbols. Records with fewer than three fields are kept with an
    empty symbol key (and an empty destination for a single field) and
    reported in ``diagnostics``. Empty records are ignored.
    """
    table = TransitionTable()
    for index, record in enumerate(records):
        if not record:
            continue
        source = record[0]
        destination = record[-1] if len(record) > 1 else ""
        symbols = [s for s in record[1:-1] if s]

        if not destination:
            _report(table, "missing-destination", f"transition #{index + 1} from {source!r} has no destination")
        elif not symbols:
            _report(table, "empty-symbols", f"transition #{index + 1} {source!r} -> {destination!r} has no symbols")

        table.add(source, symbols, destination)

    return table


def _report(table: TransitionTable, code: str, message: str) -> None:
    logger.warning(message)
    table.diagnostics.append(Diagnostic(code=code, message=message))
