"""Shortest-path-first (SPF) primitives.

Implements a Dijkstra SPF over either the outgoing adjacency (``spf``) or the
reversed adjacency (``distance_to_target``). The reverse run gives, for every
node, the exact cost of its shortest path to a fixed target; OnePass+ uses
it as a heuristic.

Notes:
    Between two adjacent nodes only the cheapest parallel edge is considered.
    Each reachable node records a single predecessor, so ties are resolved in
    favour of the first relaxation that reached the minimal cost.
"""

from __future__ import annotations

from heapq import heappop, heappush
from typing import Any, Dict, List, Mapping, Optional, Tuple

from kspwlo.algorithms.base import INF_COST, Cost, PathEdge
from kspwlo.graph.strict_multidigraph import (
    DEFAULT_COST_ATTR,
    NodeID,
    StrictMultiDiGraph,
)
from kspwlo.path import Path


def _dijkstra(
    adjacencies: Mapping[NodeID, Mapping[NodeID, Mapping[Any, Dict[str, Any]]]],
    seed_node: NodeID,
    dst_node: Optional[NodeID],
    cost_attr: str,
) -> Tuple[Dict[NodeID, Cost], Dict[NodeID, Optional[NodeID]]]:
    """Run Dijkstra from ``seed_node`` over an adjacency of parallel-edge maps.

    Args:
        adjacencies: ``node -> neighbor -> {edge_key: attr}`` mapping; either
            ``graph._adj`` (forward) or ``graph._pred`` (reversed).
        seed_node: Node the distances are measured from.
        dst_node: If given, stop once this node is settled; it is not expanded.
        cost_attr: Edge attribute holding the cost.

    Returns:
        A tuple of (costs, pred) for every reached node. ``pred[seed_node]`` is None.

    Raises:
        ValueError: If a negative or non-finite edge cost is encountered.
    """
    costs: Dict[NodeID, Cost] = {seed_node: 0}
    pred: Dict[NodeID, Optional[NodeID]] = {seed_node: None}
    settled = set()
    min_pq: List[Tuple[Cost, int, NodeID]] = [(0, 0, seed_node)]
    # Insertion counter keeps heap comparisons away from node ids
    counter = 1

    while min_pq:
        current_cost, _, node_id = heappop(min_pq)
        if node_id in settled or current_cost > costs[node_id]:
            continue
        settled.add(node_id)

        if node_id == dst_node:
            break

        for neighbor_id, edges_map in adjacencies[node_id].items():
            min_edge_cost: Optional[Cost] = None
            for e_attr in edges_map.values():
                edge_cost = e_attr[cost_attr]
                if not (0 <= edge_cost < INF_COST):
                    raise ValueError(
                        f"Edge cost {edge_cost} between '{node_id}' and "
                        f"'{neighbor_id}' is negative or not finite."
                    )
                if min_edge_cost is None or edge_cost < min_edge_cost:
                    min_edge_cost = edge_cost
            if min_edge_cost is None or neighbor_id in settled:
                continue

            new_cost = current_cost + min_edge_cost
            if neighbor_id not in costs or new_cost < costs[neighbor_id]:
                costs[neighbor_id] = new_cost
                pred[neighbor_id] = node_id
                heappush(min_pq, (new_cost, counter, neighbor_id))
                counter += 1

    return costs, pred


def spf(
    graph: StrictMultiDiGraph,
    src_node: NodeID,
    dst_node: Optional[NodeID] = None,
    cost_attr: str = DEFAULT_COST_ATTR,
) -> Tuple[Dict[NodeID, Cost], Dict[NodeID, Optional[NodeID]]]:
    """Compute shortest paths from a source node.

    Args:
        graph: The directed graph.
        src_node: The source node.
        dst_node: Optional destination. If provided, the search stops once the
            destination's minimal cost is settled; other costs may then be
            tentative.
        cost_attr: Edge attribute holding the cost.

    Returns:
        Costs and single-predecessor mapping for every reached node.

    Raises:
        KeyError: If src_node does not exist in graph.
    """
    outgoing_adjacencies = graph._adj  # type: ignore[attr-defined]
    if src_node not in outgoing_adjacencies:
        raise KeyError(f"Source node '{src_node}' is not in the graph.")
    return _dijkstra(outgoing_adjacencies, src_node, dst_node, cost_attr)


def distance_to_target(
    graph: StrictMultiDiGraph,
    dst_node: NodeID,
    cost_attr: str = DEFAULT_COST_ATTR,
) -> Dict[NodeID, Cost]:
    """Return the shortest-path cost from every node to ``dst_node``.

    Runs Dijkstra from ``dst_node`` over the reversed adjacency. Nodes that
    cannot reach ``dst_node`` map to ``INF_COST``.

    Raises:
        KeyError: If dst_node does not exist in graph.
        ValueError: If a negative or non-finite edge cost is encountered.
    """
    incoming_adjacencies = graph._pred  # type: ignore[attr-defined]
    if dst_node not in incoming_adjacencies:
        raise KeyError(f"Target node '{dst_node}' is not in the graph.")

    costs, _ = _dijkstra(incoming_adjacencies, dst_node, None, cost_attr)
    return {node: costs.get(node, INF_COST) for node in graph}


def build_path_from_predecessors(
    graph: StrictMultiDiGraph,
    pred: Mapping[NodeID, Optional[NodeID]],
    src_node: NodeID,
    dst_node: NodeID,
    cost_attr: str = DEFAULT_COST_ATTR,
) -> Optional[Path]:
    """Turn a predecessor map from `spf` into a `Path`.

    Hop costs are the cheapest parallel edge between consecutive nodes.

    Returns:
        The source-to-destination path, or None if ``dst_node`` was not reached.

    Raises:
        ValueError: If the predecessor chain loops or does not end at ``src_node``.
    """
    if dst_node not in pred:
        return None

    hops: List[PathEdge] = []
    seen = {dst_node}
    node = dst_node
    while node != src_node:
        prev = pred[node]
        if prev is None or prev in seen:
            raise ValueError(
                f"Predecessor chain from '{dst_node}' does not lead to '{src_node}'."
            )
        edge_cost = graph.min_edge_cost(prev, node, cost_attr)
        if edge_cost is None:
            raise ValueError(f"No edge from '{prev}' to '{node}' in the graph.")
        hops.append((prev, node, edge_cost))
        seen.add(prev)
        node = prev

    hops.reverse()
    return Path(src_node, tuple(hops), sum(cost for _, _, cost in hops))
