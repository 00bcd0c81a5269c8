"""Standardized tunnel layouts for synthetic valve networks."""

from __future__ import annotations

import random
from functools import lru_cache
from typing import Dict, Iterable

import networkx as nx


def _named(graph: nx.Graph, name: str) -> nx.Graph:
    graph = nx.convert_node_labels_to_integers(graph, ordering="sorted")
    graph.graph["name"] = name
    return graph


def _line_3() -> nx.Graph:
    return _named(nx.path_graph(3), "line_3")


def _square_4() -> nx.Graph:
    return _named(nx.cycle_graph(4), "square_4")


def _ring_8() -> nx.Graph:
    return _named(nx.cycle_graph(8), "ring_8")


def _grid_3x3() -> nx.Graph:
    return _named(nx.grid_2d_graph(3, 3), "grid_3x3")


def _grid_5x5() -> nx.Graph:
    return _named(nx.grid_2d_graph(5, 5), "grid_5x5")


def _tree_15() -> nx.Graph:
    return _named(nx.balanced_tree(2, 3), "tree_15")


def _small_world_16(seed: int = 7) -> nx.Graph:
    return _named(nx.connected_watts_strogatz_graph(16, 4, 0.3, seed=seed), "small_world_16")


def _sparse_graph_32(seed: int = 2024) -> nx.Graph:
    rng = random.Random(seed)
    g = nx.Graph()
    g.add_nodes_from(range(32))
    order = list(range(32))
    rng.shuffle(order)
    # Random spanning tree for baseline connectivity.
    for idx in range(1, len(order)):
        u = order[idx]
        v = order[rng.randrange(idx)]
        g.add_edge(u, v)
    target_edges = 40
    while g.number_of_edges() < target_edges:
        u, v = rng.sample(range(32), 2)
        g.add_edge(u, v)
    return _named(g, "sparse_32")


@lru_cache(maxsize=1)
def topology_registry() -> Dict[str, nx.Graph]:
    """Return canonical tunnel layouts keyed by topology id."""
    return {
        "line_3": _line_3(),
        "square_4": _square_4(),
        "ring_8": _ring_8(),
        "grid_3x3": _grid_3x3(),
        "tree_15": _tree_15(),
        "small_world_16": _small_world_16(),
        "grid_5x5": _grid_5x5(),
        "sparse_32": _sparse_graph_32(),
    }


def topologies_for(names: Iterable[str]) -> dict[str, nx.Graph]:
    """Select a subset of registered topologies, raising on unknown ids."""
    reg = topology_registry()
    selected: dict[str, nx.Graph] = {}
    for name in names:
        if name not in reg:
            msg = f"Unknown topology id '{name}'"
            raise KeyError(msg)
        selected[name] = reg[name]
    return selected


def tiered_topologies(tier: str) -> dict[str, nx.Graph]:
    """Convenience chooser for eval tiers."""
    tier = tier.lower()
    if tier == "small":
        return topologies_for(["line_3", "square_4", "ring_8", "grid_3x3"])
    if tier == "medium":
        return topologies_for(["tree_15", "small_world_16", "grid_5x5"])
    if tier == "large":
        return topologies_for(["sparse_32"])
    return topology_registry()


__all__ = ["tiered_topologies", "topologies_for", "topology_registry"]
