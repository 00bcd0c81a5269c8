"""Condensed hop distances among flow-bearing valves."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterator, Mapping

import networkx as nx

from valve_release.network.model import ValveNetwork


class CondensedDistances:
    """Read-only shortest hop distances between openable valves.

    Rows exist for every flow-bearing valve and for the start valve. Each row
    maps the other reachable flow-bearing valves to their hop distance.
    Zero-flow valves other than start never appear; unreachable valves are
    simply missing from a row.
    """

    def __init__(self, rows: Mapping[str, Mapping[str, int]]):
        self._rows = MappingProxyType(
            {src: MappingProxyType(dict(row)) for src, row in rows.items()}
        )

    # ------------------------------------------------------------------ API --
    def targets(self, source: str) -> Mapping[str, int]:
        """Return the condensed row for ``source`` (empty when not a row key)."""
        return self._rows.get(source, _EMPTY)

    def dist(self, source: str, target: str) -> int | None:
        return self.targets(source).get(target)

    def sources(self) -> list[str]:
        return list(self._rows)

    def as_dict(self) -> Dict[str, Dict[str, int]]:
        return {src: dict(row) for src, row in self._rows.items()}

    def __contains__(self, source: object) -> bool:
        return source in self._rows

    def __iter__(self) -> Iterator[str]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def is_empty(self) -> bool:
        """True when no row has any target."""
        return not any(self._rows.values())


_EMPTY: Mapping[str, int] = MappingProxyType({})


def reduce_network(network: ValveNetwork) -> CondensedDistances:
    """Run one breadth-first traversal per openable valve (and start)."""
    graph = network.graph()
    sources = [network.start, *(name for name in network.flow_valves() if name != network.start)]
    rows: Dict[str, Dict[str, int]] = {}
    for src in sources:
        lengths = nx.single_source_shortest_path_length(graph, src)
        rows[src] = {
            target: hops
            for target, hops in lengths.items()
            if hops > 0 and network[target].openable
        }
    return CondensedDistances(rows)


__all__ = ["CondensedDistances", "reduce_network"]
