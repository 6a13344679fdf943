from __future__ import annotations

from typing import Tuple, Union

from kspwlo.graph.strict_multidigraph import NodeID

#: Represents numeric cost in the graph (e.g. distance, travel time, etc.).
Cost = Union[int, float]

#: One hop of a path: ``(from_node, to_node, cost)``.
PathEdge = Tuple[NodeID, NodeID, Cost]

#: Distance assigned to nodes that cannot reach (or be reached from) a seed node.
INF_COST: float = float("inf")
