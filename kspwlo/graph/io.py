"""Graph ingestion for kSPwLO queries.

Three input shapes are supported:

- ``.gr`` edge lists as used by the OnePass+ road-network benchmarks::

      d
      7 11
      0 1 3 0
      ...

  The first line is the graph kind (``d`` directed, ``u`` undirected), the
  second holds the node and edge counts, and every following line is
  ``<src> <dst> <cost> [ignored columns...]``. Node ids are ``0..n-1``.
- YAML documents with ``nodes`` and ``links`` sections.
- Node-link dictionaries (JSON friendly), see `graph_to_node_link`.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

import yaml

from kspwlo.graph.strict_multidigraph import NodeID, StrictMultiDiGraph
from kspwlo.logging import get_logger

logger = get_logger(__name__)

_GR_KINDS = {"d": False, "u": True}


def _parse_cost(token: str, line_no: int) -> Union[int, float]:
    try:
        return int(token)
    except ValueError:
        pass
    try:
        cost = float(token)
    except ValueError:
        raise ValueError(f"Line {line_no}: invalid edge cost '{token}'.") from None
    if not math.isfinite(cost):
        raise ValueError(f"Line {line_no}: edge cost '{token}' is not finite.")
    return cost


def read_gr(
    lines: Iterable[str], undirected: Optional[bool] = None
) -> StrictMultiDiGraph:
    """Build a graph from ``.gr`` formatted lines.

    Args:
        lines: Lines of the document. Blank lines and ``#`` comments are skipped.
        undirected: Override the kind declared in the header. When True, each
            edge line becomes a bidirectional link.

    Returns:
        A StrictMultiDiGraph with integer node ids and ``cost`` edge attributes.

    Raises:
        ValueError: On a missing or malformed header, malformed edge lines,
            out-of-range node ids, or an edge count that does not match the header.
    """
    graph = StrictMultiDiGraph()
    kind: Optional[bool] = None
    num_nodes: Optional[int] = None
    expected_edges = 0
    edge_lines = 0

    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        tokens = line.split()

        if kind is None:
            if tokens[0] not in _GR_KINDS or len(tokens) != 1:
                raise ValueError(
                    f"Line {line_no}: expected graph kind 'd' or 'u', got '{line}'."
                )
            kind = _GR_KINDS[tokens[0]]
            continue

        if num_nodes is None:
            if len(tokens) != 2:
                raise ValueError(
                    f"Line {line_no}: expected '<num_nodes> <num_edges>', got '{line}'."
                )
            try:
                num_nodes, expected_edges = int(tokens[0]), int(tokens[1])
            except ValueError:
                raise ValueError(
                    f"Line {line_no}: node and edge counts must be integers."
                ) from None
            for node in range(num_nodes):
                graph.add_node(node)
            continue

        if len(tokens) < 3:
            raise ValueError(
                f"Line {line_no}: expected '<src> <dst> <cost>', got '{line}'."
            )
        try:
            src, dst = int(tokens[0]), int(tokens[1])
        except ValueError:
            raise ValueError(f"Line {line_no}: node ids must be integers.") from None
        if not (0 <= src < num_nodes and 0 <= dst < num_nodes):
            raise ValueError(
                f"Line {line_no}: node id out of range [0, {num_nodes})."
            )
        cost = _parse_cost(tokens[2], line_no)

        is_undirected = kind if undirected is None else undirected
        if is_undirected:
            graph.add_link(src, dst, cost)
        else:
            graph.add_edge(src, dst, cost=cost)
        edge_lines += 1

    if num_nodes is None:
        raise ValueError("Graph document has no header.")
    if edge_lines != expected_edges:
        raise ValueError(
            f"Header declares {expected_edges} edges but {edge_lines} were read."
        )

    logger.debug(
        "Read .gr graph: %d nodes, %d edge lines, %d directed edges",
        num_nodes,
        edge_lines,
        graph.number_of_edges(),
    )
    return graph


def load_gr(path: Union[str, Path], undirected: Optional[bool] = None) -> StrictMultiDiGraph:
    """Read a ``.gr`` file from disk. See `read_gr`."""
    with open(path, "r", encoding="utf-8") as fh:
        return read_gr(fh, undirected=undirected)


def load_graph_yaml(yaml_str: str) -> StrictMultiDiGraph:
    """Build a graph from a YAML document.

    Expected shape::

        directed: false        # optional, default true
        nodes: [A, B, C]       # optional; link endpoints are added implicitly
        links:
          - {source: A, target: B, cost: 1}

    Raises:
        ValueError: If the document does not have the expected shape.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")

    nodes = data.get("nodes", [])
    links = data.get("links", [])
    if not isinstance(nodes, list):
        raise ValueError("'nodes' must be a list")
    if not isinstance(links, list):
        raise ValueError("'links' must be a list")
    directed = data.get("directed", True)
    if not isinstance(directed, bool):
        raise ValueError("'directed' must be a boolean")

    graph = StrictMultiDiGraph()
    for node in nodes:
        if node not in graph:
            graph.add_node(node)

    for entry in links:
        if not isinstance(entry, dict):
            raise ValueError(
                "Each link definition must be a mapping with 'source' and 'target'"
            )
        if "source" not in entry or "target" not in entry:
            raise ValueError("Each link definition must include 'source' and 'target'")
        cost = entry.get("cost", 1)
        if isinstance(cost, bool) or not isinstance(cost, (int, float)):
            raise ValueError(
                f"Link {entry['source']}->{entry['target']} has non-numeric cost."
            )
        if not math.isfinite(cost):
            raise ValueError(
                f"Link {entry['source']}->{entry['target']} has non-finite cost {cost}."
            )
        for node in (entry["source"], entry["target"]):
            if node not in graph:
                graph.add_node(node)
        if directed:
            graph.add_edge(entry["source"], entry["target"], cost=cost)
        else:
            graph.add_link(entry["source"], entry["target"], cost)

    return graph


def graph_to_node_link(graph: StrictMultiDiGraph) -> Dict[str, Any]:
    """Convert a StrictMultiDiGraph into a node-link dict.

    The returned dict has the structure::

        {
            "graph": {...},
            "nodes": [{"id": node_id, "attr": {...}}, ...],
            "links": [{"source": idx, "target": idx, "key": edge_id, "attr": {...}}, ...],
        }

    ``source`` and ``target`` are indices into ``nodes``.
    """
    node_dict = graph.get_nodes()
    node_list = list(node_dict.keys())
    node_map = {node_id: i for i, node_id in enumerate(node_list)}

    return {
        "graph": dict(graph.graph),
        "nodes": [
            {"id": node_id, "attr": dict(node_dict[node_id])} for node_id in node_list
        ],
        "links": [
            {
                "source": node_map[src],
                "target": node_map[dst],
                "key": edge_id,
                "attr": dict(edge_attrs),
            }
            for edge_id, (src, dst, _, edge_attrs) in graph.get_edges().items()
        ],
    }


def node_link_to_graph(data: Dict[str, Any]) -> StrictMultiDiGraph:
    """Rebuild a StrictMultiDiGraph from the output of `graph_to_node_link`."""
    graph = StrictMultiDiGraph(**data.get("graph", {}))

    node_map: Dict[int, NodeID] = {}
    for idx, node_obj in enumerate(data.get("nodes", [])):
        node_id = node_obj["id"]
        graph.add_node(node_id, **node_obj.get("attr", {}))
        node_map[idx] = node_id

    for edge_obj in data.get("links", []):
        src_id = node_map[edge_obj["source"]]
        dst_id = node_map[edge_obj["target"]]
        graph.add_edge(
            src_id, dst_id, key=edge_obj.get("key"), **edge_obj.get("attr", {})
        )

    return graph
