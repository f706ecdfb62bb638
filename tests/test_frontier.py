import pytest

from astar_stepper.core.frontier import NodeSet
from astar_stepper.core.path import reconstruct
from astar_stepper.core.types import Node


def test_lookup_is_by_position():
    s = NodeSet()
    node = Node((2, 3), (2, 2), 1, 4, 5)
    s.insert(node)
    assert (2, 3) in s
    assert (3, 2) not in s
    assert s.find((2, 3)) is node
    assert s.find((0, 0)) is None
    assert len(s) == 1


def test_duplicate_position_rejected():
    s = NodeSet()
    s.insert(Node((1, 1), None, 0, 0, 0))
    with pytest.raises(KeyError):
        s.insert(Node((1, 1), (1, 0), 1, 0, 1))


def test_remove_returns_node():
    s = NodeSet()
    s.insert(Node((1, 1)))
    removed = s.remove((1, 1))
    assert removed.position == (1, 1)
    assert not s
    with pytest.raises(KeyError):
        s.remove((1, 1))


def test_lowest_cost_earliest_wins():
    s = NodeSet()
    assert s.lowest_cost() is None
    s.insert(Node((0, 0), None, 1, 2, 3))
    s.insert(Node((1, 0), None, 1, 1, 2))
    s.insert(Node((2, 0), None, 0, 2, 2))
    assert s.lowest_cost().position == (1, 0)


def test_replace_moves_node_to_back():
    s = NodeSet()
    s.insert(Node((0, 0), None, 2, 0, 2))
    s.insert(Node((1, 0), None, 2, 0, 2))
    old = s.replace(Node((0, 0), (0, 1), 1, 1, 2))
    assert old.g == 2
    assert s.find((0, 0)).g == 1
    assert s.positions() == [(1, 0), (0, 0)]
    assert s.lowest_cost().position == (1, 0)


def test_reconstruct_follows_parents():
    closed = NodeSet()
    closed.insert(Node((0, 0)))
    closed.insert(Node((0, 1), (0, 0), 1, 1, 2))
    closed.insert(Node((1, 1), (0, 1), 2, 0, 2))
    assert reconstruct(closed, (1, 1)) == [(1, 1), (0, 1), (0, 0)]
    assert reconstruct(closed, (5, 5)) == []
