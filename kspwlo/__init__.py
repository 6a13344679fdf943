"""kspwlo: k shortest paths with limited overlap.

Primary API:
    k_shortest_paths() - OnePass+ search for up to k paths whose pairwise
        overlap stays below a threshold
    StrictMultiDiGraph - Graph model (networkx MultiDiGraph with strict rules)
    Path - Source-to-target route returned by the search

Example:
    from kspwlo import StrictMultiDiGraph, k_shortest_paths

    g = StrictMultiDiGraph()
    for node in "ABCD":
        g.add_node(node)
    g.add_link("A", "B", 1)
    g.add_link("B", "D", 1)
    g.add_link("A", "C", 2)
    g.add_link("C", "D", 2)

    paths = k_shortest_paths(g, "A", "D", k=2, theta=0.5)
"""

from __future__ import annotations

from kspwlo import cli, logging
from kspwlo.algorithms.onepass_plus import k_shortest_paths, onepass_plus
from kspwlo.algorithms.overlap import is_dissimilar, overlap_ratio
from kspwlo.algorithms.spf import distance_to_target, spf
from kspwlo.config import ONEPASS_CONFIG, OnePassConfig
from kspwlo.graph.io import load_gr, load_graph_yaml, read_gr
from kspwlo.graph.strict_multidigraph import StrictMultiDiGraph
from kspwlo.path import Path

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Search
    "k_shortest_paths",
    "onepass_plus",
    "distance_to_target",
    "spf",
    "overlap_ratio",
    "is_dissimilar",
    # Model
    "StrictMultiDiGraph",
    "Path",
    # Ingestion
    "read_gr",
    "load_gr",
    "load_graph_yaml",
    # Configuration
    "OnePassConfig",
    "ONEPASS_CONFIG",
    # Utilities
    "cli",
    "logging",
]
