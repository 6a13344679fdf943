"""Tests for graph ingestion: .gr edge lists, YAML, and node-link dicts."""

import pytest

from kspwlo.graph.io import (
    graph_to_node_link,
    load_gr,
    load_graph_yaml,
    node_link_to_graph,
    read_gr,
)


class TestReadGr:
    def test_benchmark_file(self, data_dir):
        graph = load_gr(data_dir / "graph.gr")
        assert sorted(graph.nodes) == list(range(7))
        assert graph.number_of_edges() == 11
        assert graph.min_edge_cost(0, 3) == 3
        assert graph.min_edge_cost(3, 0) is None

    def test_undirected_override(self, data_dir):
        graph = load_gr(data_dir / "graph.gr", undirected=True)
        assert graph.number_of_edges() == 22
        assert graph.min_edge_cost(3, 0) == 3

    def test_undirected_header(self):
        graph = read_gr(["u", "2 1", "0 1 4"])
        assert graph.min_edge_cost(0, 1) == 4
        assert graph.min_edge_cost(1, 0) == 4

    def test_directed_override_of_undirected_header(self):
        graph = read_gr(["u", "2 1", "0 1 4"], undirected=False)
        assert graph.min_edge_cost(1, 0) is None

    def test_comments_blank_lines_and_float_costs(self):
        lines = ["# benchmark", "", "d", "3 2", "0 1 1.5 0", "", "1 2 2"]
        graph = read_gr(lines)
        assert graph.min_edge_cost(0, 1) == 1.5
        assert graph.min_edge_cost(1, 2) == 2
        assert isinstance(graph.min_edge_cost(1, 2), int)

    def test_isolated_nodes_are_created(self):
        graph = read_gr(["d", "4 1", "0 1 1"])
        assert 3 in graph

    @pytest.mark.parametrize(
        "lines,message",
        [
            ([], "no header"),
            (["x", "2 1", "0 1 1"], "graph kind"),
            (["d", "2", "0 1 1"], "num_nodes"),
            (["d", "two 1", "0 1 1"], "integers"),
            (["d", "2 1", "0 1"], "<src> <dst> <cost>"),
            (["d", "2 1", "0 a 1"], "node ids"),
            (["d", "2 1", "0 5 1"], "out of range"),
            (["d", "2 1", "0 1 far"], "invalid edge cost"),
            (["d", "2 2", "0 1 1"], "declares 2 edges"),
            (["d", "2 1", "0 1 -1"], "negative cost"),
            (["d", "2 1", "0 1 nan"], "not finite"),
            (["d", "2 1", "0 1 inf"], "not finite"),
            (["d", "2 1", "0 1 -inf"], "not finite"),
            (["d", "2 1", "0 1 1e400"], "not finite"),
        ],
    )
    def test_malformed(self, lines, message):
        with pytest.raises(ValueError, match=message):
            read_gr(lines)

    def test_error_names_line_number(self):
        with pytest.raises(ValueError, match="Line 4"):
            read_gr(["d", "2 2", "0 1 1", "1 0 x"])


class TestYaml:
    def test_square_file(self, data_dir):
        graph = load_graph_yaml((data_dir / "square.yaml").read_text())
        assert set(graph.nodes) == {"A", "B", "C", "D"}
        assert graph.number_of_edges() == 8
        assert graph.min_edge_cost("C", "D") == 2

    def test_directed_default_and_implicit_nodes(self):
        graph = load_graph_yaml(
            "links:\n  - {source: X, target: Y, cost: 3}\n  - {source: Y, target: Z}\n"
        )
        assert set(graph.nodes) == {"X", "Y", "Z"}
        assert graph.min_edge_cost("X", "Y") == 3
        assert graph.min_edge_cost("Y", "X") is None
        assert graph.min_edge_cost("Y", "Z") == 1

    def test_empty_document(self):
        assert load_graph_yaml("").number_of_nodes() == 0

    @pytest.mark.parametrize(
        "doc",
        [
            "- a\n- b\n",
            "nodes: {A: 1}\n",
            "links: {A: B}\n",
            "directed: maybe\n",
            "links:\n  - [A, B]\n",
            "links:\n  - {source: A}\n",
            "links:\n  - {source: A, target: B, cost: high}\n",
            "links:\n  - {source: A, target: B, cost: true}\n",
            "links:\n  - {source: A, target: B, cost: .nan}\n",
            "links:\n  - {source: A, target: B, cost: .inf}\n",
        ],
    )
    def test_malformed(self, doc):
        with pytest.raises(ValueError):
            load_graph_yaml(doc)


def test_node_link_round_trip(square1):
    data = graph_to_node_link(square1)

    assert [n["id"] for n in data["nodes"]] == ["A", "B", "C", "D"]
    assert data["links"][0] == {"source": 0, "target": 1, "key": 0, "attr": {"cost": 1}}

    rebuilt = node_link_to_graph(data)
    assert rebuilt.get_edges() == square1.get_edges()
