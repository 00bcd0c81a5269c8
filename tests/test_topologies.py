import networkx as nx
import pytest

from valve_release.benchmarks.topologies import (
    tiered_topologies,
    topologies_for,
    topology_registry,
)


def test_registry_graphs_connected_with_integer_nodes():
    for name, graph in topology_registry().items():
        assert nx.is_connected(graph), name
        assert sorted(graph.nodes()) == list(range(graph.number_of_nodes()))
        assert graph.graph["name"] == name


def test_grid_3x3_size():
    graph = topologies_for(["grid_3x3"])["grid_3x3"]
    assert graph.number_of_nodes() == 9
    assert graph.number_of_edges() == 12


def test_sparse_32_stable():
    graph = topology_registry()["sparse_32"]
    assert graph.number_of_nodes() == 32
    assert graph.number_of_edges() == 40


def test_unknown_topology_raises():
    with pytest.raises(KeyError):
        topologies_for(["moebius_9"])


def test_tiered_topologies_small_subset():
    small = tiered_topologies("small")
    assert {"ring_8", "grid_3x3"} <= set(small.keys())


def test_small_world_16_is_stable():
    graph = topology_registry()["small_world_16"]
    assert graph.number_of_nodes() == 16
    assert graph.number_of_edges() == 32
    assert set(tiered_topologies("medium")) == {"tree_15", "small_world_16", "grid_5x5"}
