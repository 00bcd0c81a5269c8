"""valve-release package."""

from valve_release.benchmarks.canonical import EXAMPLE_SCORES, example_network
from valve_release.network.model import START_VALVE, NetworkError, Valve, ValveNetwork
from valve_release.network.parser import ValveParseError, load_network, parse_network
from valve_release.routing.distances import CondensedDistances, reduce_network
from valve_release.search.engine import (
    DUAL_BUDGET,
    SINGLE_BUDGET,
    SearchEngine,
    SearchParams,
    maximize,
)
from valve_release.search.state import OpenedSet
from valve_release.solver import SolveResult, solve, solve_detailed, solve_dual, solve_single
from valve_release.eval.run_eval import main as run_eval

__all__ = [
    "CondensedDistances",
    "DUAL_BUDGET",
    "EXAMPLE_SCORES",
    "NetworkError",
    "OpenedSet",
    "SINGLE_BUDGET",
    "START_VALVE",
    "SearchEngine",
    "SearchParams",
    "SolveResult",
    "Valve",
    "ValveNetwork",
    "ValveParseError",
    "example_network",
    "load_network",
    "maximize",
    "parse_network",
    "reduce_network",
    "run_eval",
    "solve",
    "solve_detailed",
    "solve_dual",
    "solve_single",
    "make_synthetic_network",
]


def make_synthetic_network(graph, *, seed: int, profile: str = "sparse", **kwargs):
    """Helper to build a synthetic ValveNetwork from a NetworkX graph."""
    return ValveNetwork.synthetic(graph, seed=seed, profile=profile, **kwargs)
