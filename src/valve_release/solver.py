"""Single- and dual-agent release queries."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

from valve_release.network.model import ValveNetwork
from valve_release.routing.distances import CondensedDistances, reduce_network
from valve_release.search.engine import (
    DUAL_BUDGET,
    SINGLE_BUDGET,
    SearchEngine,
    SearchParams,
)

MODES = ("single", "dual")


@dataclass
class SolveResult:
    """Score of one query mode plus search bookkeeping."""

    mode: str
    budget: int
    score: int
    runtime_s: float
    engine: str = "memoized"
    stats: dict[str, int] = field(default_factory=dict)

    def as_record(self) -> dict[str, Any]:
        """Flatten into a dictionary suitable for CSV/JSON logging."""
        record: dict[str, Any] = {
            "mode": self.mode,
            "engine": self.engine,
            "budget": self.budget,
            "score": self.score,
            "runtime_s": self.runtime_s,
        }
        record.update(self.stats)
        return record


def run_mode(
    network: ValveNetwork,
    mode: str,
    *,
    distances: CondensedDistances | None = None,
    memoize: bool = True,
) -> SolveResult:
    """Run one query mode on a fresh engine and time it."""
    if mode not in MODES:
        msg = f"Unknown mode '{mode}'. Expected one of {MODES}."
        raise ValueError(msg)
    if distances is None:
        distances = reduce_network(network)

    engine = SearchEngine(network, distances, SearchParams(memoize=memoize))
    budget = SINGLE_BUDGET if mode == "single" else DUAL_BUDGET
    start = time.perf_counter()
    score = engine.maximize(
        network.start,
        minutes_remaining=budget,
        allow_delegation=mode == "dual",
    )
    runtime = time.perf_counter() - start
    return SolveResult(
        mode=mode,
        budget=budget,
        score=score,
        runtime_s=runtime,
        engine="memoized" if memoize else "exhaustive",
        stats=engine.stats.as_dict(),
    )


def solve_single(network: ValveNetwork, *, memoize: bool = True) -> int:
    """Best release for one agent over 30 minutes."""
    return run_mode(network, "single", memoize=memoize).score


def solve_dual(network: ValveNetwork, *, memoize: bool = True) -> int:
    """Best release for two agents sharing the valves, 26 minutes each."""
    return run_mode(network, "dual", memoize=memoize).score


def solve_detailed(network: ValveNetwork, *, memoize: bool = True) -> list[SolveResult]:
    """Reduce once, then run every mode against the shared distance table."""
    distances = reduce_network(network)
    return [run_mode(network, mode, distances=distances, memoize=memoize) for mode in MODES]


def solve(network: ValveNetwork, *, memoize: bool = True) -> tuple[int, int]:
    """Return ``(single, dual)`` scores."""
    single, dual = solve_detailed(network, memoize=memoize)
    return single.score, dual.score


__all__ = [
    "MODES",
    "SolveResult",
    "run_mode",
    "solve",
    "solve_detailed",
    "solve_dual",
    "solve_single",
]
