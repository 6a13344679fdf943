"""Global pytest configuration and shared sample graphs.

Costs are integers throughout so path costs compare exactly.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from kspwlo.graph.io import load_gr
from kspwlo.graph.strict_multidigraph import StrictMultiDiGraph

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def graph_gr():
    # Benchmark graph from tests/data/graph.gr (directed), edges [cost]:
    #
    #   0->1 [3]  0->2 [5]  0->3 [3]
    #   1->3 [1]  1->4 [3]
    #   2->3 [3]  2->5 [6]
    #   3->4 [2]  3->5 [3]
    #   4->6 [3]  5->6 [2]
    #
    # Distances to 6: 0:8 1:6 2:8 3:5 4:3 5:2 6:0
    return load_gr(DATA_DIR / "graph.gr")


@pytest.fixture
def graph_gr_undirected():
    return load_gr(DATA_DIR / "graph.gr", undirected=True)


@pytest.fixture
def square1():
    # Metric:
    #       [1]        [1]
    #   ┌────────►B─────────┐
    #   │                   │
    #   │                   ▼
    #   A                   C
    #   │                   ▲
    #   │   [2]        [2]  │
    #   └────────►D─────────┘
    g = StrictMultiDiGraph()
    for node in ("A", "B", "C", "D"):
        g.add_node(node)

    g.add_edge("A", "B", key=0, cost=1)
    g.add_edge("B", "C", key=1, cost=1)
    g.add_edge("A", "D", key=2, cost=2)
    g.add_edge("D", "C", key=3, cost=2)
    return g


@pytest.fixture
def line1():
    # Metric:
    #      [1]      [1,1,2]
    #  A◄───────►B◄───────►C
    g = StrictMultiDiGraph()
    for node in ("A", "B", "C"):
        g.add_node(node)

    g.add_edge("A", "B", key=0, cost=1)
    g.add_edge("B", "A", key=1, cost=1)
    g.add_edge("B", "C", key=2, cost=1)
    g.add_edge("C", "B", key=3, cost=1)
    g.add_edge("B", "C", key=4, cost=1)
    g.add_edge("C", "B", key=5, cost=1)
    g.add_edge("B", "C", key=6, cost=2)
    g.add_edge("C", "B", key=7, cost=2)
    return g


@pytest.fixture
def disconnected():
    # A ──►B     C (isolated)
    g = StrictMultiDiGraph()
    for node in ("A", "B", "C"):
        g.add_node(node)
    g.add_edge("A", "B", cost=1)
    return g


@pytest.fixture
def zero_cost_square():
    # Same shape as square1 with zero-cost edges on the upper route.
    g = StrictMultiDiGraph()
    for node in ("A", "B", "C", "D"):
        g.add_node(node)
    g.add_edge("A", "B", cost=0)
    g.add_edge("B", "C", cost=0)
    g.add_edge("A", "D", cost=1)
    g.add_edge("D", "C", cost=1)
    return g


@pytest.fixture
def grid4():
    """4x4 bidirectional grid with uneven costs; nodes are (row, col)."""
    size = 4
    g = StrictMultiDiGraph()
    for r in range(size):
        for c in range(size):
            g.add_node((r, c))
    for r in range(size):
        for c in range(size):
            if c + 1 < size:
                g.add_link((r, c), (r, c + 1), 1 + (3 * r + c) % 4)
            if r + 1 < size:
                g.add_link((r, c), (r + 1, c), 1 + (r + 2 * c) % 3)
    return g


@pytest.fixture
def fan_in():
    # Twenty branches meet at v, each with a cheap and a costly way in:
    #
    #        [1]      [1]      [1]
    #   S ──────►xi──────►yi──────►v──────►T
    #             │                ▲  [1]
    #             └────────────────┘
    #                   [5]
    #
    # Shortest S->T is 4 through any yi. Costly arrivals at v (cost 6) are all
    # generated before the first cheap one (cost 3).
    g = StrictMultiDiGraph()
    for node in ("S", "v", "T"):
        g.add_node(node)
    for i in range(20):
        g.add_node(f"x{i}")
        g.add_node(f"y{i}")
        g.add_edge("S", f"x{i}", cost=1)
        g.add_edge(f"x{i}", f"y{i}", cost=1)
        g.add_edge(f"y{i}", "v", cost=1)
        g.add_edge(f"x{i}", "v", cost=5)
    g.add_edge("v", "T", cost=1)
    return g
