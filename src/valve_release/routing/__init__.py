"""Routing utilities."""

from valve_release.routing.distances import CondensedDistances, reduce_network

__all__ = ["CondensedDistances", "reduce_network"]
