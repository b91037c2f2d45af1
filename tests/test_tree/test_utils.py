# tests/test_tree/test_utils.py

from pystochopt.tree.structures import Node
from pystochopt.tree.utils import deduplicate


def test_keeps_first_occurrence():
    assert deduplicate([(0, 0), (0, 1), (0, 0)]) == [(0, 0), (0, 1)]


def test_preserves_order():
    assert deduplicate([(1, 2, 1), (0, 0, 1), (1, 2, 1), (0, 1, 3)]) == [(1, 2, 1), (0, 0, 1), (0, 1, 3)]


def test_idempotent():
    seq = [(2, 5), (0, 0), (2, 5), (1, 3), (0, 0)]
    assert deduplicate(deduplicate(seq)) == deduplicate(seq)


def test_nodes_and_empty():
    assert deduplicate([Node(0, 1), Node(0, 1, 1), Node(0, 1, 2)]) == [Node(0, 1), Node(0, 1, 2)]
    assert deduplicate([]) == []
