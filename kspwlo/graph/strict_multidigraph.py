"""Strict multi-directed graph used as the kSPwLO graph model.

`StrictMultiDiGraph` extends `networkx.MultiDiGraph` with explicit node
management, unique integer edge keys, and a numeric ``cost`` attribute on every
edge. Path searches only read the graph: outgoing adjacency through ``succ``,
reversed adjacency through ``pred``, and parallel-edge costs through
`min_edge_cost`.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Hashable, Optional, Tuple

import networkx as nx

NodeID = Hashable
EdgeID = Hashable
AttrDict = Dict[str, Any]
EdgeTuple = Tuple[NodeID, NodeID, EdgeID, AttrDict]

DEFAULT_COST_ATTR = "cost"


class StrictMultiDiGraph(nx.MultiDiGraph):
    """A multi-directed graph with strict rules and unique edge IDs.

    This class enforces:
      - No automatic creation of missing nodes when adding an edge.
      - No duplicate nodes (raises ValueError on duplicates).
      - No duplicate edges by key (raises ValueError on duplicates).
      - Edge costs must be finite, non-negative numbers.

    Inherits from:
        networkx.MultiDiGraph
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize a StrictMultiDiGraph.

        Args:
            *args: Positional arguments forwarded to the MultiDiGraph constructor.
            **kwargs: Keyword arguments forwarded to the MultiDiGraph constructor.

        Attributes:
            _edges: Map edge key to ``(source_node, target_node, edge_key, attribute_dict)``.
        """
        super().__init__(*args, **kwargs)
        self._edges: Dict[EdgeID, EdgeTuple] = {}
        # Only advances; removed edges never hand their id back out.
        self._next_edge_id: int = 0

    def new_edge_key(self, u: NodeID, v: NodeID, key: Optional[int] = None) -> int:  # type: ignore[override]
        """Return a new unique integer edge ID.

        Signature matches NetworkX's ``new_edge_key(self, u, v, key=None)``.
        """
        next_edge_id = self._next_edge_id
        self._next_edge_id += 1
        return int(next_edge_id)

    #
    # Node management
    #
    def add_node(self, node_for_adding: NodeID, **attr: Any) -> None:
        """Add a single node, disallowing duplicates.

        Args:
            node_for_adding: The node to add.
            **attr: Arbitrary attributes for this node.

        Raises:
            ValueError: If the node already exists in the graph.
        """
        if node_for_adding in self:
            raise ValueError(f"Node '{node_for_adding}' already exists in this graph.")
        super().add_node(node_for_adding, **attr)

    #
    # Edge management
    #
    def add_edge(  # pyright: ignore[reportIncompatibleMethodOverride]
        self,
        u_for_edge: NodeID,
        v_for_edge: NodeID,
        key: Optional[EdgeID] = None,
        **attr: Any,
    ) -> EdgeID:
        """Add a directed edge from u_for_edge to v_for_edge.

        Both nodes must already exist. When ``cost`` is given it must be a
        finite, non-negative number. Explicit integer keys advance the internal counter
        so later auto-assigned keys never collide with them.

        Args:
            u_for_edge: The source node. Must exist in the graph.
            v_for_edge: The target node. Must exist in the graph.
            key: The unique edge key. If None, a new key is generated.
            **attr: Arbitrary edge attributes.

        Returns:
            EdgeID: The key associated with this new edge.

        Raises:
            ValueError: If either node does not exist, the key is already in
                use, or the cost is negative or not finite.
        """
        if u_for_edge not in self:
            raise ValueError(f"Source node '{u_for_edge}' does not exist.")
        if v_for_edge not in self:
            raise ValueError(f"Target node '{v_for_edge}' does not exist.")
        cost = attr.get(DEFAULT_COST_ATTR)
        if cost is not None:
            if not math.isfinite(cost):
                raise ValueError(
                    f"Edge {u_for_edge}->{v_for_edge} has non-finite cost {cost}."
                )
            if cost < 0:
                raise ValueError(
                    f"Edge {u_for_edge}->{v_for_edge} has negative cost {cost}."
                )

        if key is None:
            key = self.new_edge_key(u_for_edge, v_for_edge)
        else:
            if key in self._edges:
                raise ValueError(f"Edge with id '{key}' already exists.")
            if isinstance(key, int) and key >= self._next_edge_id:
                self._next_edge_id = key + 1

        super().add_edge(u_for_edge, v_for_edge, key=key, **attr)
        self._edges[key] = (
            u_for_edge,
            v_for_edge,
            key,
            self[u_for_edge][v_for_edge][key],  # pyright: ignore[reportArgumentType]
        )
        return key

    def add_link(
        self, u: NodeID, v: NodeID, cost: float, **attr: Any
    ) -> Tuple[EdgeID, EdgeID]:
        """Add a bidirectional link as two directed edges of equal cost.

        Args:
            u: One endpoint. Must exist in the graph.
            v: The other endpoint. Must exist in the graph.
            cost: Cost of each direction.
            **attr: Extra attributes copied onto both edges.

        Returns:
            Keys of the ``u->v`` and ``v->u`` edges.
        """
        forward = self.add_edge(u, v, cost=cost, **attr)
        reverse = self.add_edge(v, u, cost=cost, **attr)
        return forward, reverse

    #
    # Read-only helpers used by readers and path searches
    #
    def get_nodes(self) -> Dict[NodeID, AttrDict]:
        """Return all nodes and their attributes as a dictionary."""
        return dict(self.nodes(data=True))

    def get_edges(self) -> Dict[EdgeID, EdgeTuple]:
        """Return a mapping of edge key to ``(src, dst, key, attributes)``."""
        return self._edges

    def min_edge_cost(
        self, u: NodeID, v: NodeID, cost_attr: str = DEFAULT_COST_ATTR
    ) -> Optional[float]:
        """Return the lowest cost among parallel ``u->v`` edges, or None."""
        if u not in self.succ or v not in self.succ[u]:
            return None
        return min(e_attr[cost_attr] for e_attr in self.succ[u][v].values())
