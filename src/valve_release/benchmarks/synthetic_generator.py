"""Synthetic valve networks for exercising the search."""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path

from valve_release.benchmarks.canonical import example_network
from valve_release.benchmarks.scan_loader import ValveScan
from valve_release.benchmarks.topologies import tiered_topologies, topology_registry
from valve_release.network.model import ValveNetwork


@dataclass(frozen=True)
class SyntheticSpec:
    """Specification of a synthetic valve network."""

    name: str
    topology: str
    seed: int
    profile: str = "sparse"
    max_openable: int | None = 6


def _scan_entry(network: ValveNetwork) -> ValveScan:
    """Wrap a network with a stable synthetic path."""
    return ValveScan(network.network_id, Path(f"synthetic/{network.network_id}.txt"), network)


def generate_network(spec: SyntheticSpec) -> ValveNetwork:
    """Build the network described by ``spec``."""
    registry = topology_registry()
    if spec.topology not in registry:
        msg = f"Unknown topology id '{spec.topology}'"
        raise KeyError(msg)
    return ValveNetwork.synthetic(
        registry[spec.topology],
        seed=spec.seed,
        profile=spec.profile,
        max_openable=spec.max_openable,
        network_id=spec.name,
    )


def synthetic_suite(tier: str = "small", *, count: int = 4, seed: int = 0) -> list[ValveScan]:
    """Return ``count`` networks drawn round-robin over the tier's topologies."""
    topologies = sorted(tiered_topologies(tier))
    rng = random.Random(seed)
    scans: list[ValveScan] = []
    for idx in range(count):
        topology = topologies[idx % len(topologies)]
        profile = rng.choice(["sparse", "dense"])
        spec = SyntheticSpec(
            name=f"{tier}_{topology}_{idx}",
            topology=topology,
            seed=rng.randrange(1_000_000),
            profile=profile,
        )
        scans.append(_scan_entry(generate_network(spec)))
    return scans


def example_suite() -> list[ValveScan]:
    """The published example wrapped like any other scan."""
    return [_scan_entry(example_network())]


__all__ = ["SyntheticSpec", "example_suite", "generate_network", "synthetic_suite"]
