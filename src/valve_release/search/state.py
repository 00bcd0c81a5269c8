"""State containers for the release search."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Mapping, Tuple

from valve_release.network.model import ValveNetwork

SearchKey = Tuple[str, int, int, bool]


@dataclass(frozen=True)
class OpenedSet:
    """Immutable bitmask of opened valves, indexed by flow-valve ordinal.

    ``with_valve`` returns a new set, so a parent frame keeps seeing its own
    set after a child branch returns.
    """

    ordinals: Mapping[str, int] = field(compare=False, repr=False)
    mask: int = 0

    @classmethod
    def empty(cls, network: ValveNetwork) -> "OpenedSet":
        return cls(ordinals=network.ordinals)

    @classmethod
    def of(cls, network: ValveNetwork, names: Iterable[str]) -> "OpenedSet":
        opened = cls.empty(network)
        for name in names:
            opened = opened.with_valve(name)
        return opened

    def _bit(self, name: str) -> int:
        try:
            return 1 << self.ordinals[name]
        except KeyError:
            msg = f"Valve {name!r} has no flow and cannot be opened"
            raise KeyError(msg) from None

    def with_valve(self, name: str) -> "OpenedSet":
        return replace(self, mask=self.mask | self._bit(name))

    def __contains__(self, name: object) -> bool:
        idx = self.ordinals.get(name) if isinstance(name, str) else None
        return idx is not None and bool(self.mask >> idx & 1)

    def __len__(self) -> int:
        return bin(self.mask).count("1")

    def names(self) -> list[str]:
        return [name for name, idx in self.ordinals.items() if self.mask >> idx & 1]


@dataclass(frozen=True)
class SearchState:
    """One frame of the search: where we stand and what is already open."""

    position: str
    opened: OpenedSet
    minutes_remaining: int
    flow_rate: int
    allow_delegation: bool

    def baseline(self) -> int:
        """Release if nothing else happens for the remaining minutes."""
        return self.flow_rate * self.minutes_remaining

    def key(self) -> SearchKey:
        """Memo key. The flow rate is left out; it only shifts the baseline."""
        return (self.position, self.opened.mask, self.minutes_remaining, self.allow_delegation)
