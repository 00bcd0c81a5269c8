"""Quick comparison between the memoized and the exhaustive search on a synthetic layout."""

from __future__ import annotations

import networkx as nx

from valve_release import make_synthetic_network, solve_detailed


def _print_results(label: str, results) -> None:
    for r in results:
        print(
            f"{label} {r.mode}: score={r.score}, frames={r.stats['nodes_expanded']}, "
            f"memo_hits={r.stats['memo_hits']}, runtime={r.runtime_s:.3f}s"
        )


def main() -> None:
    graph = nx.grid_2d_graph(3, 4)
    network = make_synthetic_network(graph, seed=23, profile="sparse", max_openable=7)
    print(f"Comparison on {network!r}:")
    _print_results("memoized", solve_detailed(network, memoize=True))
    _print_results("exhaustive", solve_detailed(network, memoize=False))


if __name__ == "__main__":
    main()
