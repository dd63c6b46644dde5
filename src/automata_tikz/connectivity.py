"""Connectivity oracle — which symbols connect two states, and in which directions."""

from __future__ import annotations

from enum import Enum

import networkx as nx

from automata_tikz.transitions import TransitionTable


class Connection(Enum):
    NONE = 0
    ONE_WAY = 1
    MUTUAL = 2


def symbols_between(table: TransitionTable, a: str, b: str) -> list[str] | None:
    """Sorted symbols on the transitions from ``a`` to ``b``.

    Returns ``None`` when no transition leads from ``a`` to ``b``, and an
    empty list when transitions exist but carry no symbols.
    """
    by_key = table.entries.get(a)
    if not by_key:
        return None

    found = False
    symbols: set[str] = set()
    for key, targets in by_key.items():
        if b in targets:
            found = True
            symbols.update(key)
    return sorted(symbols) if found else None


def connection_degree(table: TransitionTable, a: str, b: str) -> Connection:
    """``MUTUAL`` if both directions exist, ``ONE_WAY`` if one does, else ``NONE``."""
    forward = symbols_between(table, a, b) is not None
    backward = symbols_between(table, b, a) is not None
    if forward and backward:
        return Connection.MUTUAL
    if forward or backward:
        return Connection.ONE_WAY
    return Connection.NONE


def transition_graph(table: TransitionTable) -> nx.DiGraph:
    """Collapse the table into a DiGraph with one edge per connected ordered pair.

    Edge attributes:
      symbols — sorted symbols over all keys on the pair
      weight  — number of (source, key, destination) triples on the pair
    """
    g: nx.DiGraph = nx.DiGraph()
    for source, key, destination in table.triples():
        if g.has_edge(source, destination):
            data = g.edges[source, destination]
            data["weight"] += 1
            data["symbols"] = sorted(set(data["symbols"]).union(key))
        else:
            g.add_edge(source, destination, weight=1, symbols=sorted(set(key)))
    return g
