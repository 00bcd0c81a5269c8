import pytest

from valve_release.benchmarks.canonical import EXAMPLE_SCAN
from valve_release.network.model import NetworkError
from valve_release.network.parser import (
    ValveParseError,
    ValveRecordParser,
    load_network,
    parse_network,
)


def test_parses_published_example():
    network = parse_network(EXAMPLE_SCAN)
    assert len(network) == 10
    assert network["AA"].flow == 0
    assert network["AA"].tunnels == ("DD", "II", "BB")
    assert network["HH"].flow == 22
    assert network["HH"].tunnels == ("GG",)
    assert sorted(network.ordinals) == ["BB", "CC", "DD", "EE", "HH", "JJ"]


def test_singular_tunnel_grammar():
    parser = ValveRecordParser()
    valve = parser.parse_line("Valve JJ has flow rate=21; tunnel leads to valve II")
    assert valve.name == "JJ"
    assert valve.flow == 21
    assert valve.tunnels == ("II",)


def test_surrounding_whitespace_and_blank_lines_ignored():
    text = (
        "\n\n  Valve AA has flow rate=0; tunnel leads to valve BB\n\n"
        "Valve BB has flow rate=4; tunnel leads to valve AA\n\n"
    )
    network = parse_network(text)
    assert sorted(network) == ["AA", "BB"]


def test_malformed_line_reports_line_number():
    text = "Valve AA has flow rate=0; tunnel leads to valve BB\nValve BB flows 4\n"
    with pytest.raises(ValveParseError, match="Line 2"):
        parse_network(text)


def test_empty_input_rejected():
    with pytest.raises(ValveParseError):
        parse_network("   \n")


def test_dangling_reference_is_fatal():
    with pytest.raises(NetworkError):
        parse_network("Valve AA has flow rate=0; tunnel leads to valve QQ")


def test_missing_start_is_fatal():
    with pytest.raises(NetworkError):
        parse_network("Valve BB has flow rate=1; tunnel leads to valve BB")


def test_custom_start_valve():
    network = parse_network(
        "Valve BB has flow rate=1; tunnel leads to valve BB", start="BB", network_id="solo"
    )
    assert network.start == "BB"
    assert network.network_id == "solo"


def test_load_network_uses_file_stem(tmp_path):
    path = tmp_path / "day16.txt"
    path.write_text(EXAMPLE_SCAN)
    network = load_network(path)
    assert network.network_id == "day16"
    assert len(network) == 10


def test_load_network_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_network(tmp_path / "nope.txt")
