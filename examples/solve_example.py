"""Minimal example: solve the published ten-valve scan in both modes."""

from __future__ import annotations

from valve_release import example_network, solve_detailed


def main() -> None:
    network = example_network()
    print(f"{network!r}")
    for result in solve_detailed(network):
        print(
            f"{result.mode} ({result.budget} min): score={result.score}, "
            f"frames={result.stats['nodes_expanded']}, runtime={result.runtime_s:.3f}s"
        )


if __name__ == "__main__":
    main()
