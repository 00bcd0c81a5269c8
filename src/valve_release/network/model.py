"""Valve network container used by the distance reducer and the search engine."""

from __future__ import annotations

import itertools
import random
import string
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Tuple

import networkx as nx

START_VALVE = "AA"


class NetworkError(ValueError):
    """Raised when a valve network violates its structural invariants."""


@dataclass(frozen=True)
class Valve:
    """Single valve with its flow rate and unit-cost tunnels."""

    name: str
    flow: int
    tunnels: Tuple[str, ...] = ()

    @property
    def openable(self) -> bool:
        return self.flow > 0


class ValveNetwork:
    """Immutable mapping of valve identity to :class:`Valve`.

    Every tunnel must resolve to a valve in the same network and the start
    valve must be present. Flow-bearing valves get a stable ordinal (sorted by
    name) so the search can encode opened sets as bitmasks.
    """

    def __init__(
        self,
        valves: Iterable[Valve],
        *,
        start: str = START_VALVE,
        network_id: str = "network",
    ):
        table: Dict[str, Valve] = {}
        for valve in valves:
            if valve.name in table:
                msg = f"Duplicate valve {valve.name!r} in {network_id}"
                raise NetworkError(msg)
            if valve.flow < 0:
                msg = f"Valve {valve.name!r} has negative flow {valve.flow}"
                raise NetworkError(msg)
            table[valve.name] = valve
        if start not in table:
            msg = f"Start valve {start!r} not present in {network_id}"
            raise NetworkError(msg)
        for valve in table.values():
            missing = [t for t in valve.tunnels if t not in table]
            if missing:
                msg = f"Valve {valve.name!r} tunnels to unknown valves {missing}"
                raise NetworkError(msg)

        self.network_id = network_id
        self.start = start
        self._valves = MappingProxyType(table)
        flow_names = sorted(name for name, valve in table.items() if valve.openable)
        self._ordinals = MappingProxyType({name: idx for idx, name in enumerate(flow_names)})
        self._graph: nx.DiGraph | None = None

    # ------------------------------------------------------------------ build
    @classmethod
    def synthetic(
        cls,
        graph: nx.Graph | Iterable[Tuple[int, int]],
        *,
        seed: int,
        profile: str = "sparse",
        max_flow: int = 25,
        max_openable: int | None = None,
        network_id: str | None = None,
    ) -> "ValveNetwork":
        """Assign flow rates to ``graph`` deterministically from ``seed``.

        Node order follows ``sorted(graph.nodes())``; the first node becomes
        the zero-flow start valve. ``profile="sparse"`` leaves most valves at
        zero flow like the published puzzles, ``"dense"`` makes every valve
        except start flow-bearing. ``max_openable`` caps the number of
        flow-bearing valves, keeping the search tractable on large layouts.
        """
        if isinstance(graph, nx.Graph):
            g = graph.to_undirected()
        else:
            g = nx.Graph()
            g.add_edges_from(graph)
        if g.number_of_nodes() == 0:
            msg = "Cannot build a valve network from an empty graph."
            raise NetworkError(msg)
        if profile not in {"sparse", "dense"}:
            msg = f"Unknown profile '{profile}'. Expected sparse/dense."
            raise ValueError(msg)

        rng = random.Random(seed)
        nodes = sorted(g.nodes())
        if len(nodes) > len(string.ascii_uppercase) ** 2:
            msg = f"Too many valves for two-letter names: {len(nodes)}"
            raise NetworkError(msg)
        labels = dict(zip(nodes, _valve_labels()))
        zero_rate = 0.6 if profile == "sparse" else 0.0

        flows: Dict[str, int] = {}
        for node in nodes:
            name = labels[node]
            if name == START_VALVE or rng.random() < zero_rate:
                flows[name] = 0
            else:
                flows[name] = rng.randint(1, max_flow)
        openable = sorted(name for name, flow in flows.items() if flow > 0)
        if max_openable is not None and len(openable) > max_openable:
            for name in rng.sample(openable, len(openable) - max_openable):
                flows[name] = 0

        valves = []
        for node in nodes:
            name = labels[node]
            flow = flows[name]
            tunnels = tuple(sorted(labels[n] for n in g.neighbors(node)))
            valves.append(Valve(name=name, flow=flow, tunnels=tunnels))

        graph_name = g.graph.get("name") or "synthetic"
        return cls(valves, start=START_VALVE, network_id=network_id or f"{graph_name}_s{seed}")

    # ----------------------------------------------------------------- access
    def __getitem__(self, name: str) -> Valve:
        try:
            return self._valves[name]
        except KeyError:
            msg = f"Valve {name!r} not present in {self.network_id}"
            raise KeyError(msg) from None

    def __contains__(self, name: object) -> bool:
        return name in self._valves

    def __iter__(self) -> Iterator[str]:
        return iter(self._valves)

    def __len__(self) -> int:
        return len(self._valves)

    @property
    def valves(self) -> Mapping[str, Valve]:
        return self._valves

    @property
    def ordinals(self) -> Mapping[str, int]:
        """Bit position of each flow-bearing valve."""
        return self._ordinals

    def flow_valves(self) -> list[str]:
        return list(self._ordinals)

    def flow(self, name: str) -> int:
        return self[name].flow

    def total_flow(self) -> int:
        return sum(valve.flow for valve in self._valves.values())

    def graph(self) -> nx.DiGraph:
        """Directed tunnel graph; built lazily and shared afterwards."""
        if self._graph is None:
            g = nx.DiGraph(name=self.network_id)
            for name, valve in self._valves.items():
                g.add_node(name, flow=valve.flow)
            for name, valve in self._valves.items():
                for other in valve.tunnels:
                    g.add_edge(name, other)
            self._graph = g
        return self._graph

    def __repr__(self) -> str:
        return (
            f"ValveNetwork(id={self.network_id!r}, valves={len(self)}, "
            f"flow_valves={len(self._ordinals)}, start={self.start!r})"
        )


def _valve_labels() -> Iterator[str]:
    for first, second in itertools.product(string.ascii_uppercase, repeat=2):
        yield first + second


__all__ = ["START_VALVE", "NetworkError", "Valve", "ValveNetwork"]
