"""Valve network model and scan parser."""

from valve_release.network.model import START_VALVE, NetworkError, Valve, ValveNetwork
from valve_release.network.parser import (
    ValveParseError,
    ValveRecordParser,
    load_network,
    parse_network,
)

__all__ = [
    "START_VALVE",
    "NetworkError",
    "Valve",
    "ValveNetwork",
    "ValveParseError",
    "ValveRecordParser",
    "load_network",
    "parse_network",
]
