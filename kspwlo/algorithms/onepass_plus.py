"""OnePass+ search for k shortest paths with limited overlap (kSPwLO).

OnePass+ is a single best-first pass over partial paths (labels):

1. Compute the exact cost-to-target of every node with a reverse Dijkstra run
   (`distance_to_target`). A label's priority is its cost plus that distance,
   so labels are extracted in non-decreasing order of their best possible
   completion cost.
2. Extract the best label. If it ends at the target, rebuild its path and
   accept it when its overlap with every accepted path is below ``theta``.
   Otherwise extend it along each outgoing edge.
3. Stop after ``k`` accepted paths or when no labels remain.

Extensions that revisit a node of their own partial path, that cannot reach
the target, or whose shared cost with an accepted path already rules them out
are never created. A per-vertex admission cap bounds how many labels per node
are completed or expanded. It is charged at extraction, so a node's quota is
filled in priority order and its cheapest arrival is never crowded out.

Example:
    >>> graph = load_gr("tests/data/graph.gr")
    >>> paths = k_shortest_paths(graph, 0, 6, k=3, theta=0.5)
    >>> [p.cost for p in paths]
    [8, 8, 9]
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral, Real
from typing import Dict, List, Optional

from kspwlo.algorithms.base import INF_COST, Cost
from kspwlo.algorithms.frontier import Frontier
from kspwlo.algorithms.labels import LabelArena, reconstruct_path
from kspwlo.algorithms.overlap import exceeds_overlap, is_dissimilar
from kspwlo.algorithms.spf import distance_to_target
from kspwlo.config import ONEPASS_CONFIG, OnePassConfig
from kspwlo.graph.strict_multidigraph import (
    DEFAULT_COST_ATTR,
    NodeID,
    StrictMultiDiGraph,
)
from kspwlo.logging import get_logger
from kspwlo.path import Path

logger = get_logger(__name__)


@dataclass
class SearchStats:
    """Counters collected during one OnePass+ run."""

    labels_created: int = 0
    labels_extracted: int = 0
    labels_pruned: int = 0
    labels_capped: int = 0
    candidates_rejected: int = 0


def _validate_request(
    graph: StrictMultiDiGraph,
    source: NodeID,
    target: NodeID,
    k: int,
    theta: float,
    max_labels_per_vertex: Optional[int],
) -> None:
    """Raise ValueError if the query arguments are out of range."""
    if source not in graph:
        raise ValueError(f"Source node '{source}' is not in the graph.")
    if target not in graph:
        raise ValueError(f"Target node '{target}' is not in the graph.")
    if isinstance(k, bool) or not isinstance(k, Integral) or k <= 0:
        raise ValueError(f"k must be a positive integer, got {k!r}.")
    if isinstance(theta, bool) or not isinstance(theta, Real):
        raise ValueError(f"theta must be a number in [0, 1), got {theta!r}.")
    if not 0 <= theta < 1:
        raise ValueError(f"theta must be in [0, 1), got {theta!r}.")
    if max_labels_per_vertex is not None and (
        isinstance(max_labels_per_vertex, bool)
        or not isinstance(max_labels_per_vertex, Integral)
        or max_labels_per_vertex <= 0
    ):
        raise ValueError(
            "max_labels_per_vertex must be a positive integer, "
            f"got {max_labels_per_vertex!r}."
        )


class OnePassPlus:
    """State of one OnePass+ run between a source and a target.

    The instance owns the label arena, the frontier, and the accepted paths;
    none of it outlives the run. Use `k_shortest_paths` unless the search
    counters in `stats` are needed.

    Args:
        graph: Graph to search; only read.
        source: Start node.
        target: End node; must differ from ``source``.
        k: Maximum number of paths to accept.
        theta: Overlap threshold in ``[0, 1)``.
        heuristic: Exact cost from every node to ``target``.
        max_labels_per_vertex: Per-vertex admission cap.
        cost_attr: Edge attribute holding the cost.
        cost_tolerance: Slack allowed when checking extraction order.
    """

    def __init__(
        self,
        graph: StrictMultiDiGraph,
        source: NodeID,
        target: NodeID,
        k: int,
        theta: float,
        heuristic: Dict[NodeID, Cost],
        max_labels_per_vertex: int,
        cost_attr: str = DEFAULT_COST_ATTR,
        cost_tolerance: float = ONEPASS_CONFIG.cost_tolerance,
    ) -> None:
        self.graph = graph
        self.source = source
        self.target = target
        self.k = k
        self.theta = theta
        self.heuristic = heuristic
        self.cost_attr = cost_attr
        self.cost_tolerance = cost_tolerance
        self.arena = LabelArena()
        self.frontier = Frontier(self.arena, max_labels_per_vertex)
        self.results: List[Path] = []
        self.stats = SearchStats()

    def run(self) -> List[Path]:
        """Run the search to completion and return the accepted paths."""
        root = self.arena.add_root(self.source, self.heuristic[self.source])
        self.frontier.push(root)
        self.stats.labels_created += 1
        last_priority = -INF_COST

        while self.frontier and len(self.results) < self.k:
            idx = self.frontier.pop()
            label = self.arena[idx]
            self.stats.labels_extracted += 1

            slack = self.cost_tolerance * max(1.0, abs(last_priority))
            if label.priority < last_priority - slack:
                raise RuntimeError(
                    f"Frontier ordering violated: extracted priority "
                    f"{label.priority} after {last_priority}."
                )
            last_priority = max(last_priority, label.priority)

            if not self._refresh_overlaps(idx):
                self.stats.labels_pruned += 1
                continue
            if not self.frontier.admit(label.vertex):
                self.stats.labels_capped += 1
                continue

            if label.vertex == self.target:
                self._complete(idx)
            else:
                self._expand(idx)

        return self.results

    def _refresh_overlaps(self, idx: int) -> bool:
        """Bring the label's overlap vector up to date with the accepted paths.

        Returns:
            False if the label shares too much with some accepted path.
        """
        overlaps = self.arena.overlaps(idx)
        if len(overlaps) < len(self.results):
            hops = list(self.arena.hops(idx))
            for path in self.results[len(overlaps) :]:
                path_edges = path.edge_costs
                overlaps.append(
                    sum(cost for u, v, cost in hops if (u, v) in path_edges)
                )
        return not any(
            exceeds_overlap(shared, path.cost, self.theta)
            for shared, path in zip(overlaps, self.results)
        )

    def _complete(self, idx: int) -> None:
        path = reconstruct_path(self.arena, idx, self.source)
        if is_dissimilar(path, self.results, self.theta):
            self.results.append(path)
            logger.debug(
                "Accepted path %d/%d with cost %s: %s",
                len(self.results),
                self.k,
                path.cost,
                path.nodes_seq,
            )
        else:
            self.stats.candidates_rejected += 1

    def _expand(self, idx: int) -> None:
        label = self.arena[idx]
        parent_overlaps = self.arena.overlaps(idx)

        for neighbor, edges_map in self.graph.succ[label.vertex].items():
            remaining = self.heuristic.get(neighbor, INF_COST)
            if remaining == INF_COST or self.arena.on_chain(idx, neighbor):
                continue
            if not self.frontier.has_room(neighbor):
                self.stats.labels_capped += 1
                continue

            edge_cost = min(e_attr[self.cost_attr] for e_attr in edges_map.values())
            overlaps = list(parent_overlaps)
            for i, path in enumerate(self.results):
                if (label.vertex, neighbor) in path.edge_costs:
                    overlaps[i] += edge_cost
            if any(
                exceeds_overlap(shared, path.cost, self.theta)
                for shared, path in zip(overlaps, self.results)
            ):
                self.stats.labels_pruned += 1
                continue

            child = self.arena.add_child(idx, neighbor, edge_cost, remaining, overlaps)
            self.frontier.push(child)
            self.stats.labels_created += 1


def k_shortest_paths(
    graph: StrictMultiDiGraph,
    source: NodeID,
    target: NodeID,
    k: int,
    theta: float,
    *,
    max_labels_per_vertex: Optional[int] = None,
    cost_attr: str = DEFAULT_COST_ATTR,
    config: Optional[OnePassConfig] = None,
) -> List[Path]:
    """Return up to ``k`` short paths whose pairwise overlap stays below ``theta``.

    The first path is a shortest path. Each following path is the cheapest
    path reached by the search whose overlap with every earlier path is below
    ``theta``. Fewer than ``k`` paths are returned when the graph, the
    threshold, or the admission cap cannot supply more.

    Args:
        graph: Graph to search; only read.
        source: Start node.
        target: End node.
        k: Maximum number of paths, a positive integer.
        theta: Overlap threshold in ``[0, 1)``. ``0`` asks for paths sharing no
            positive-cost edge; values close to 1 approach plain k shortest paths.
        max_labels_per_vertex: Per-vertex admission cap. Defaults to
            ``config.labels_per_vertex(k)``.
        cost_attr: Edge attribute holding the cost.
        config: Search tunables; defaults to ``ONEPASS_CONFIG``.

    Returns:
        Paths ordered by non-decreasing cost, at most ``k`` of them. A single
        zero-cost path with no edges when ``source == target``.

    Raises:
        ValueError: If a node is not in the graph, ``k`` is not a positive
            integer, ``theta`` is outside ``[0, 1)``, the cap is not a positive
            integer, or a negative or non-finite edge cost is found.
        RuntimeError: If the search detects an internal inconsistency.
    """
    _validate_request(graph, source, target, k, theta, max_labels_per_vertex)
    cfg = config or ONEPASS_CONFIG

    if source == target:
        return [Path(source, (), 0)]

    heuristic = distance_to_target(graph, target, cost_attr)
    if heuristic[source] == INF_COST:
        logger.info("No path from '%s' to '%s'", source, target)
        return []

    k = int(k)
    if max_labels_per_vertex is None:
        cap = cfg.labels_per_vertex(k)
    else:
        cap = int(max_labels_per_vertex)
    search = OnePassPlus(
        graph,
        source,
        target,
        k,
        theta,
        heuristic,
        cap,
        cost_attr=cost_attr,
        cost_tolerance=cfg.cost_tolerance,
    )
    results = search.run()

    stats = search.stats
    logger.debug(
        "OnePass+ %s->%s: %d labels created, %d extracted, %d pruned by overlap, "
        "%d over cap, %d candidates rejected",
        source,
        target,
        stats.labels_created,
        stats.labels_extracted,
        stats.labels_pruned,
        stats.labels_capped,
        stats.candidates_rejected,
    )
    if len(results) < k:
        logger.info(
            "Found %d of %d requested paths from '%s' to '%s' (theta=%s)",
            len(results),
            k,
            source,
            target,
            theta,
        )
    return results


onepass_plus = k_shortest_paths
