"""Best-first frontier with a per-vertex admission cap.

Several live labels may end at the same vertex: the cheapest arrival can later
be ruled out by the overlap constraint, so costlier arrivals must stay
explorable. The cap bounds how many labels per vertex are admitted when they
are extracted, that is, completed or expanded. Queueing is never refused for a
vertex that still has room, so a cheap arrival generated late is not crowded
out by costlier ones queued earlier. Every admitted label queues at most one
child per outgoing edge, which keeps the label count of a run within
``1 + cap * |E|``.
"""

from __future__ import annotations

from collections import Counter
from heapq import heappop, heappush
from typing import List, Tuple

from kspwlo.algorithms.base import Cost
from kspwlo.algorithms.labels import LabelArena
from kspwlo.graph.strict_multidigraph import NodeID


class Frontier:
    """Min-priority queue of arena label indices.

    Ordering key is ``(priority, hop_count, insertion_seq)``: lowest estimated
    total cost first, then fewer hops, then first inserted.
    """

    def __init__(self, arena: LabelArena, max_labels_per_vertex: int) -> None:
        if max_labels_per_vertex < 1:
            raise ValueError(
                f"max_labels_per_vertex must be positive, got {max_labels_per_vertex}."
            )
        self._arena = arena
        self._heap: List[Tuple[Cost, int, int, int]] = []
        self._admitted: Counter = Counter()
        self._seq = 0
        self.max_labels_per_vertex = max_labels_per_vertex

    def __len__(self) -> int:
        return len(self._heap)

    def admitted(self, vertex: NodeID) -> int:
        """Return how many extracted labels have been admitted for ``vertex``."""
        return self._admitted[vertex]

    def has_room(self, vertex: NodeID) -> bool:
        """Return True if ``vertex`` can still admit a label."""
        return self._admitted[vertex] < self.max_labels_per_vertex

    def admit(self, vertex: NodeID) -> bool:
        """Charge one extracted label to ``vertex``.

        Returns:
            True if the label may be processed, False if ``vertex`` is full.
        """
        if not self.has_room(vertex):
            return False
        self._admitted[vertex] += 1
        return True

    def push(self, idx: int) -> None:
        """Queue the label at ``idx``."""
        label = self._arena[idx]
        heappush(self._heap, (label.priority, label.hop_count, self._seq, idx))
        self._seq += 1

    def pop(self) -> int:
        """Remove and return the index of the best label.

        Raises:
            IndexError: If the frontier is empty.
        """
        return heappop(self._heap)[3]
