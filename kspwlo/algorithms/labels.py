"""Search labels for OnePass+.

A label is one partial path from the source to ``label.vertex``. Labels never
copy their path; each one points at the label it was extended from, so many
in-flight partial paths share a common prefix. Labels are kept in an
append-only `LabelArena` and reference their parent by index; a parent is
always stored before its children, so the parent relation cannot form a cycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

from kspwlo.algorithms.base import Cost, PathEdge
from kspwlo.graph.strict_multidigraph import NodeID
from kspwlo.path import Path


@dataclass(frozen=True)
class Label:
    """One partial path ending at ``vertex``.

    Attributes:
        vertex: Node the partial path ends at.
        cost: Accumulated edge cost from the source along this partial path.
        priority: ``cost`` plus the lower bound on the remaining cost to the target.
        hop_count: Number of edges from the source.
        parent: Arena index of the label one hop shorter; None for the root.
    """

    vertex: NodeID
    cost: Cost
    priority: Cost
    hop_count: int
    parent: Optional[int] = None


class LabelArena:
    """Append-only store of labels addressed by index.

    Alongside each label the arena keeps its overlap vector: the cost the
    label's partial path shares with each accepted path, in acceptance order.
    The vector may lag behind the result set; the search brings it up to date
    when the label is extracted.
    """

    def __init__(self) -> None:
        self._labels: List[Label] = []
        self._overlaps: List[List[Cost]] = []

    def __len__(self) -> int:
        return len(self._labels)

    def __getitem__(self, idx: int) -> Label:
        return self._labels[idx]

    def add_root(self, vertex: NodeID, priority: Cost) -> int:
        """Store the zero-cost label at the source and return its index."""
        self._labels.append(Label(vertex, 0, priority, 0, None))
        self._overlaps.append([])
        return len(self._labels) - 1

    def add_child(
        self,
        parent_idx: int,
        vertex: NodeID,
        edge_cost: Cost,
        heuristic: Cost,
        overlaps: List[Cost],
    ) -> int:
        """Extend the label at ``parent_idx`` by one edge and return the new index."""
        parent = self._labels[parent_idx]
        cost = parent.cost + edge_cost
        self._labels.append(
            Label(vertex, cost, cost + heuristic, parent.hop_count + 1, parent_idx)
        )
        self._overlaps.append(overlaps)
        return len(self._labels) - 1

    def overlaps(self, idx: int) -> List[Cost]:
        """Return the (mutable) overlap vector of the label at ``idx``."""
        return self._overlaps[idx]

    def chain(self, idx: int) -> Iterator[Label]:
        """Yield the label at ``idx`` and then each ancestor up to the root."""
        next_idx: Optional[int] = idx
        while next_idx is not None:
            label = self._labels[next_idx]
            yield label
            next_idx = label.parent

    def hops(self, idx: int) -> Iterator[PathEdge]:
        """Yield ``(u, v, cost)`` hops of the partial path, last hop first."""
        label = self._labels[idx]
        while label.parent is not None:
            parent = self._labels[label.parent]
            yield (parent.vertex, label.vertex, label.cost - parent.cost)
            label = parent

    def on_chain(self, idx: int, vertex: NodeID) -> bool:
        """Return True if ``vertex`` already appears on the partial path at ``idx``."""
        return any(label.vertex == vertex for label in self.chain(idx))


def reconstruct_path(arena: LabelArena, idx: int, src_node: NodeID) -> Path:
    """Rebuild the source-to-vertex path of the label at ``idx``.

    Args:
        arena: Arena holding the label and its ancestors.
        idx: Index of the completed label.
        src_node: The search source; the chain must end at a root label there.

    Returns:
        The path with hops ordered from ``src_node`` to the label's vertex.

    Raises:
        RuntimeError: If the parent chain is corrupted: it does not reach a
            root within ``hop_count`` steps, hop counts do not drop by one per
            step, or the root is not at ``src_node``.
    """
    label = arena[idx]
    final_cost = label.cost
    hops: List[PathEdge] = []

    for _ in range(label.hop_count):
        if label.parent is None:
            raise RuntimeError(
                f"Label {idx} at '{arena[idx].vertex}' ends its parent chain early "
                f"after {len(hops)} of {arena[idx].hop_count} hops."
            )
        parent = arena[label.parent]
        if parent.hop_count != label.hop_count - 1:
            raise RuntimeError(
                f"Label chain from {idx} skips hop counts "
                f"({label.hop_count} -> {parent.hop_count})."
            )
        hops.append((parent.vertex, label.vertex, label.cost - parent.cost))
        label = parent

    if label.parent is not None or label.vertex != src_node:
        raise RuntimeError(
            f"Label chain from {idx} does not terminate at source '{src_node}' "
            f"within {arena[idx].hop_count} hops."
        )

    hops.reverse()
    return Path(src_node, tuple(hops), final_cost)
