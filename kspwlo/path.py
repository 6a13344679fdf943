"""Lightweight representation of a single source-to-target route.

The ``Path`` dataclass stores the source node, the ordered ``(u, v, cost)``
hops, and the total cost. Cached properties expose the node sequence and an
edge-to-cost mapping used when measuring overlap between paths.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Dict, Iterator, Set, Tuple

from kspwlo.algorithms.base import Cost, PathEdge
from kspwlo.graph.strict_multidigraph import NodeID


@dataclass
class Path:
    """Represents a single path in the graph.

    Attributes:
        src_node: First node of the path.
        edges: Ordered hops ``(u, v, cost)`` from source to destination. Empty
            for the degenerate path that starts and ends at ``src_node``.
        cost: Total cost of the path; equals the sum of hop costs.
        nodes: Set of all node IDs encountered in the path.
    """

    src_node: NodeID
    edges: Tuple[PathEdge, ...]
    cost: Cost
    nodes: Set[NodeID] = field(init=False, default_factory=set, repr=False)

    def __post_init__(self) -> None:
        """Populate `nodes` from `src_node` and `edges`."""
        self.nodes.add(self.src_node)
        for _, v, _ in self.edges:
            self.nodes.add(v)

    def __iter__(self) -> Iterator[PathEdge]:
        """Iterate over the ``(u, v, cost)`` hops in order."""
        return iter(self.edges)

    def __len__(self) -> int:
        """Return the number of hops."""
        return len(self.edges)

    @property
    def dst_node(self) -> NodeID:
        """Return the last node in the path (the destination node)."""
        if not self.edges:
            return self.src_node
        return self.edges[-1][1]

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.cost < other.cost

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return (
            self.src_node == other.src_node
            and self.edges == other.edges
            and self.cost == other.cost
        )

    def __hash__(self) -> int:
        return hash((self.src_node, self.edges, self.cost))

    def __repr__(self) -> str:
        return f"Path({self.nodes_seq}, cost={self.cost})"

    @cached_property
    def nodes_seq(self) -> Tuple[NodeID, ...]:
        """Return node IDs in order from source to destination."""
        return (self.src_node,) + tuple(v for _, v, _ in self.edges)

    @cached_property
    def edge_costs(self) -> Dict[Tuple[NodeID, NodeID], Cost]:
        """Return a mapping ``(u, v) -> cost`` for every hop."""
        return {(u, v): cost for u, v, cost in self.edges}

    def is_simple(self) -> bool:
        """Return True if no node is visited twice."""
        return len(self.nodes) == len(self.edges) + 1

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "nodes": list(self.nodes_seq),
            "edges": [[u, v, cost] for u, v, cost in self.edges],
            "cost": self.cost,
        }
