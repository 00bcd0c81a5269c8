import pytest

from valve_release.benchmarks.canonical import example_network
from valve_release.search.state import OpenedSet, SearchState


def test_with_valve_leaves_parent_untouched():
    network = example_network()
    parent = OpenedSet.of(network, ["BB"])
    left = parent.with_valve("DD")
    right = parent.with_valve("JJ")

    assert parent.names() == ["BB"]
    assert "DD" in left and "JJ" not in left
    assert "JJ" in right and "DD" not in right
    assert len(left) == len(right) == 2


def test_zero_flow_valve_cannot_be_opened():
    opened = OpenedSet.empty(example_network())
    with pytest.raises(KeyError):
        opened.with_valve("AA")
    assert "AA" not in opened


def test_equal_masks_compare_equal():
    network = example_network()
    assert OpenedSet.of(network, ["BB", "CC"]) == OpenedSet.of(network, ["CC", "BB"])
    assert hash(OpenedSet.of(network, ["BB"])) == hash(OpenedSet.of(network, ["BB"]))


def test_key_leaves_out_flow_rate():
    network = example_network()
    opened = OpenedSet.of(network, ["DD"])
    slow = SearchState("DD", opened, 28, 0, False)
    fast = SearchState("DD", opened, 28, 20, False)
    assert slow.key() == fast.key() == ("DD", opened.mask, 28, False)
    assert (slow.baseline(), fast.baseline()) == (0, 20 * 28)


def test_key_separates_delegation():
    network = example_network()
    state = SearchState("AA", OpenedSet.empty(network), 30, 0, True)
    assert state.key() == ("AA", 0, 30, True)
    assert state.key() != SearchState("AA", OpenedSet.empty(network), 30, 0, False).key()
