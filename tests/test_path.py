"""Tests for the Path dataclass."""

import pytest

from kspwlo.path import Path


@pytest.fixture
def abc_path():
    return Path("A", (("A", "B", 1), ("B", "C", 2)), 3)


def test_basic_properties(abc_path):
    assert abc_path.src_node == "A"
    assert abc_path.dst_node == "C"
    assert abc_path.nodes == {"A", "B", "C"}
    assert abc_path.nodes_seq == ("A", "B", "C")
    assert len(abc_path) == 2
    assert list(abc_path) == [("A", "B", 1), ("B", "C", 2)]


def test_edge_costs(abc_path):
    assert abc_path.edge_costs == {("A", "B"): 1, ("B", "C"): 2}


def test_empty_path():
    path = Path("A", (), 0)
    assert path.dst_node == "A"
    assert path.nodes_seq == ("A",)
    assert len(path) == 0
    assert path.is_simple()


def test_is_simple():
    looping = Path("A", (("A", "B", 1), ("B", "A", 1), ("A", "C", 1)), 3)
    assert not looping.is_simple()
    assert Path("A", (("A", "B", 1),), 1).is_simple()


def test_ordering_and_equality(abc_path):
    cheaper = Path("A", (("A", "C", 1),), 1)
    same = Path("A", (("A", "B", 1), ("B", "C", 2)), 3)

    assert cheaper < abc_path
    assert sorted([abc_path, cheaper]) == [cheaper, abc_path]
    assert same == abc_path
    assert hash(same) == hash(abc_path)
    assert len({same, abc_path}) == 1
    assert abc_path != cheaper
    assert abc_path != "A-B-C"


def test_repr(abc_path):
    assert repr(abc_path) == "Path(('A', 'B', 'C'), cost=3)"


def test_to_dict(abc_path):
    assert abc_path.to_dict() == {
        "nodes": ["A", "B", "C"],
        "edges": [["A", "B", 1], ["B", "C", 2]],
        "cost": 3,
    }
