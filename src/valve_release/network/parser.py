"""Parser for valve scan records.

Accepted lines::

    Valve AA has flow rate=0; tunnels lead to valves DD, II, BB
    Valve HH has flow rate=22; tunnel leads to valve GG
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Tuple

from valve_release.network.model import START_VALVE, Valve, ValveNetwork

_RECORD = (
    r"Valve (?P<name>\w+) has flow rate=(?P<flow>\d+); "
    r"(?:tunnels lead to valves|tunnel leads to valve) (?P<tunnels>\w+(?:, \w+)*)"
)


class ValveParseError(ValueError):
    """Raised when a scan record cannot be parsed."""


@dataclass(frozen=True)
class ValveRecordParser:
    """Holds the compiled record grammar; build once and reuse."""

    pattern: re.Pattern[str] = field(default_factory=lambda: re.compile(_RECORD))

    def parse_line(self, line: str, *, lineno: int = 1) -> Valve:
        match = self.pattern.fullmatch(line.strip())
        if match is None:
            msg = f"Line {lineno}: cannot parse valve record {line.strip()!r}"
            raise ValveParseError(msg)
        tunnels: Tuple[str, ...] = tuple(match["tunnels"].split(", "))
        return Valve(name=match["name"], flow=int(match["flow"]), tunnels=tunnels)

    def parse_lines(self, lines: Iterable[str]) -> list[Valve]:
        valves: list[Valve] = []
        for lineno, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            valves.append(self.parse_line(line, lineno=lineno))
        return valves

    def parse(
        self, text: str, *, start: str = START_VALVE, network_id: str = "network"
    ) -> ValveNetwork:
        valves = self.parse_lines(text.strip().splitlines())
        if not valves:
            msg = f"No valve records found in {network_id}"
            raise ValveParseError(msg)
        return ValveNetwork(valves, start=start, network_id=network_id)


DEFAULT_PARSER = ValveRecordParser()


def parse_network(
    text: str,
    *,
    start: str = START_VALVE,
    network_id: str = "network",
    parser: ValveRecordParser | None = None,
) -> ValveNetwork:
    """Parse scan text into a :class:`ValveNetwork`."""
    return (parser or DEFAULT_PARSER).parse(text, start=start, network_id=network_id)


def load_network(
    path: str | Path,
    *,
    start: str = START_VALVE,
    parser: ValveRecordParser | None = None,
) -> ValveNetwork:
    """Read and parse a scan file; the network id is the file stem."""
    file_path = Path(path).expanduser().resolve()
    if not file_path.is_file():
        msg = f"Valve scan not found: {file_path}"
        raise FileNotFoundError(msg)
    return parse_network(
        file_path.read_text(), start=start, network_id=file_path.stem, parser=parser
    )


__all__ = [
    "DEFAULT_PARSER",
    "ValveParseError",
    "ValveRecordParser",
    "load_network",
    "parse_network",
]
