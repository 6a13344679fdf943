# pylint: disable=protected-access,invalid-name
import math

import networkx as nx
import pytest

from kspwlo.algorithms.spf import (
    build_path_from_predecessors,
    distance_to_target,
    spf,
)


class TestSPF:
    def test_spf_square(self, square1):
        costs, pred = spf(square1, "A")
        assert costs == {"A": 0, "B": 1, "D": 2, "C": 2}
        assert pred == {"A": None, "B": "A", "D": "A", "C": "B"}

    def test_spf_parallel_edges_use_min_cost(self, line1):
        costs, pred = spf(line1, "A")
        assert costs == {"A": 0, "B": 1, "C": 2}
        assert pred["C"] == "B"

    def test_spf_early_exit_does_not_expand_destination(self, graph_gr):
        costs, _ = spf(graph_gr, 0, dst_node=3)
        assert costs[3] == 3
        # Node 5 is only reached through 3 or 2, and neither is expanded.
        assert 5 not in costs

    def test_spf_matches_networkx(self, grid4):
        costs, _ = spf(grid4, (0, 0))
        expected = nx.single_source_dijkstra_path_length(grid4, (0, 0), weight="cost")
        assert costs == expected

    def test_spf_unknown_source(self, square1):
        with pytest.raises(KeyError):
            spf(square1, "Z")


class TestDistanceToTarget:
    def test_benchmark_distances(self, graph_gr):
        distance = distance_to_target(graph_gr, 6)
        assert distance == {0: 8, 1: 6, 2: 8, 3: 5, 4: 3, 5: 2, 6: 0}

    def test_matches_independent_shortest_paths(self, graph_gr_undirected):
        distance = distance_to_target(graph_gr_undirected, 6)
        for node in graph_gr_undirected:
            assert distance[node] == nx.dijkstra_path_length(
                graph_gr_undirected, node, 6, weight="cost"
            )

    def test_directed_asymmetry(self, square1):
        distance = distance_to_target(square1, "A")
        assert distance["A"] == 0
        for node in ("B", "C", "D"):
            assert distance[node] == math.inf

    def test_every_node_present(self, disconnected):
        distance = distance_to_target(disconnected, "B")
        assert distance == {"A": 1, "B": 0, "C": math.inf}

    def test_unknown_target(self, square1):
        with pytest.raises(KeyError):
            distance_to_target(square1, "Z")

    def test_negative_cost(self, square1):
        for _, _, _, attr in square1.get_edges().values():
            attr["metric"] = -1
        with pytest.raises(ValueError):
            distance_to_target(square1, "C", cost_attr="metric")


class TestBuildPath:
    def test_path_from_dijkstra(self, graph_gr):
        _, pred = spf(graph_gr, 0)
        path = build_path_from_predecessors(graph_gr, pred, 0, 6)

        assert path is not None
        assert len(path) == 3
        assert path.cost == 8
        assert path.nodes_seq[0] == 0 and path.nodes_seq[-1] == 6
        for u, v, cost in path.edges:
            assert graph_gr.min_edge_cost(u, v) == cost

    def test_unreached_destination(self, disconnected):
        _, pred = spf(disconnected, "A")
        assert build_path_from_predecessors(disconnected, pred, "A", "C") is None

    def test_source_only(self, square1):
        _, pred = spf(square1, "A")
        path = build_path_from_predecessors(square1, pred, "A", "A")
        assert path is not None
        assert path.edges == ()
        assert path.cost == 0

    def test_looping_predecessors(self, square1):
        with pytest.raises(ValueError):
            build_path_from_predecessors(square1, {"C": "B", "B": "C"}, "A", "C")
