"""Release search over condensed valve graphs."""

from valve_release.search.engine import (
    DUAL_BUDGET,
    SINGLE_BUDGET,
    SearchEngine,
    SearchParams,
    SearchStats,
    maximize,
)
from valve_release.search.state import OpenedSet, SearchState

__all__ = [
    "DUAL_BUDGET",
    "SINGLE_BUDGET",
    "OpenedSet",
    "SearchEngine",
    "SearchParams",
    "SearchState",
    "SearchStats",
    "maximize",
]
