"""Depth-first release maximizer over the condensed valve graph."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List

from valve_release.network.model import ValveNetwork
from valve_release.routing.distances import CondensedDistances, reduce_network
from valve_release.search.state import OpenedSet, SearchKey, SearchState

SINGLE_BUDGET = 30
DUAL_BUDGET = 26


@dataclass(frozen=True)
class SearchParams:
    """Tunables for one engine instance.

    ``delegate_table_limit`` caps the number of flow valves for which the
    memoized engine tabulates the second agent's best plan per free subset.
    Larger networks fall back to searching the second agent directly.
    """

    delegate_budget: int = DUAL_BUDGET
    memoize: bool = True
    delegate_table_limit: int = 18


@dataclass
class SearchStats:
    nodes_expanded: int = 0
    memo_hits: int = 0
    delegations: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


class SearchEngine:
    """Exhaustive branch search with optional delegation to a second agent.

    From every frame the engine considers: standing still for the rest of the
    budget, walking to any closed flow valve it can still open with at least
    one minute to spare, and (when allowed) handing the closed remainder to a
    second agent that starts fresh at the start valve.

    Every candidate releases ``flow_rate * minutes_remaining`` from the valves
    already open plus a gain that does not depend on ``flow_rate``. The engine
    searches that gain, so the memo table is keyed without the flow rate and
    frames that differ only in how much flow is open share one entry. With
    memoization on, delegation is answered from a table of the second agent's
    best plan per subset of closed valves. ``memoize=False`` runs the plain
    reference search.
    """

    def __init__(
        self,
        network: ValveNetwork,
        distances: CondensedDistances | None = None,
        params: SearchParams | None = None,
    ):
        self.network = network
        self.distances = distances if distances is not None else reduce_network(network)
        self.params = params or SearchParams()
        self.stats = SearchStats()
        self._bits = {name: 1 << idx for name, idx in network.ordinals.items()}
        self._memo: Dict[SearchKey, int] = {}
        self._delegate_table: List[int] | None = None

    # ------------------------------------------------------------------ API --
    def maximize(
        self,
        position: str,
        opened: OpenedSet | None = None,
        minutes_remaining: int = SINGLE_BUDGET,
        flow_rate: int = 0,
        allow_delegation: bool = False,
    ) -> int:
        """Return the best total release reachable from the given frame."""
        if minutes_remaining < 0:
            msg = f"minutes_remaining must be non-negative, got {minutes_remaining}"
            raise ValueError(msg)
        if flow_rate < 0:
            msg = f"flow_rate must be non-negative, got {flow_rate}"
            raise ValueError(msg)
        if position not in self.network:
            msg = f"Unknown start position {position!r} for {self.network.network_id}"
            raise KeyError(msg)

        state = SearchState(
            position=position,
            opened=opened if opened is not None else OpenedSet.empty(self.network),
            minutes_remaining=minutes_remaining,
            flow_rate=flow_rate,
            allow_delegation=allow_delegation,
        )
        return state.baseline() + self._gain(*state.key())

    def reset(self) -> None:
        """Drop the memo table, the delegation table and counters."""
        self._memo.clear()
        self._delegate_table = None
        self.stats = SearchStats()

    # -------------------------------------------------------------- internal --
    def _gain(self, position: str, mask: int, minutes: int, delegate: bool) -> int:
        if minutes == 0:
            return 0
        if not self.params.memoize:
            return self._expand(position, mask, minutes, delegate)
        key = (position, mask, minutes, delegate)
        cached = self._memo.get(key)
        if cached is not None:
            self.stats.memo_hits += 1
            return cached
        gain = self._expand(position, mask, minutes, delegate)
        self._memo[key] = gain
        return gain

    def _expand(self, position: str, mask: int, minutes: int, delegate: bool) -> int:
        self.stats.nodes_expanded += 1
        released = 0
        bit = self._bits.get(position)
        if bit is not None and not mask & bit:
            mask |= bit
            released = self.network.flow(position) * minutes

        extra = 0
        for target, hops in self.distances.targets(position).items():
            if mask & self._bits[target]:
                continue
            cost = hops + 1  # walk there, then one minute to open it
            if cost >= minutes:
                continue
            extra = max(extra, self._gain(target, mask, minutes - cost, delegate))

        if delegate:
            self.stats.delegations += 1
            extra = max(extra, self._delegate(mask))
        return released + extra

    def _delegate(self, mask: int) -> int:
        """Best release of a fresh agent from the start valve, avoiding ``mask``."""
        budget = self.params.delegate_budget
        if (
            not self.params.memoize
            or len(self._bits) > self.params.delegate_table_limit
            or budget == 0
        ):
            return self._gain(self.network.start, mask, budget, False)

        if self._delegate_table is None:
            self._delegate_table = self._build_delegate_table(budget)
        start_bit = self._bits.get(self.network.start, 0)
        free = ((1 << len(self._bits)) - 1) & ~mask & ~start_bit
        gain = self._delegate_table[free]
        if start_bit and not mask & start_bit:
            gain += self.network.flow(self.network.start) * budget
        return gain

    def _build_delegate_table(self, budget: int) -> List[int]:
        """Best plan per subset of closed valves, for an agent leaving the start.

        Entry ``free`` holds the best release of a plan that opens only valves
        in ``free``. A start valve with flow is opened on arrival at no cost,
        so it is kept out of every plan and added by the caller.
        """
        size = len(self._bits)
        table = [0] * (1 << size)
        start_bit = self._bits.get(self.network.start, 0)
        self._collect_plans(self.network.start, start_bit, budget, 0, table)
        # spread each plan to every superset of its valves
        for idx in range(size):
            bit = 1 << idx
            for subset in range(1 << size):
                if subset & bit and table[subset ^ bit] > table[subset]:
                    table[subset] = table[subset ^ bit]
        return table

    def _collect_plans(
        self, position: str, mask: int, minutes: int, released: int, table: List[int]
    ) -> None:
        self.stats.nodes_expanded += 1
        plan = mask & ~self._bits.get(self.network.start, 0)
        if released > table[plan]:
            table[plan] = released
        for target, hops in self.distances.targets(position).items():
            bit = self._bits[target]
            if mask & bit:
                continue
            cost = hops + 1
            if cost >= minutes:
                continue
            left = minutes - cost
            self._collect_plans(
                target, mask | bit, left, released + self.network.flow(target) * left, table
            )


def maximize(
    network: ValveNetwork,
    distances: CondensedDistances,
    position: str,
    opened: OpenedSet | None,
    minutes_remaining: int,
    flow_rate: int,
    allow_delegation: bool,
    *,
    params: SearchParams | None = None,
) -> int:
    """Functional entry point; builds a throwaway :class:`SearchEngine`."""
    engine = SearchEngine(network, distances, params)
    return engine.maximize(position, opened, minutes_remaining, flow_rate, allow_delegation)


__all__ = [
    "DUAL_BUDGET",
    "SINGLE_BUDGET",
    "SearchEngine",
    "SearchParams",
    "SearchStats",
    "maximize",
]
