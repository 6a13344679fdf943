"""Command-line interface for kspwlo."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional

from kspwlo.algorithms.onepass_plus import k_shortest_paths
from kspwlo.graph.io import load_gr, load_graph_yaml, node_link_to_graph
from kspwlo.graph.strict_multidigraph import NodeID, StrictMultiDiGraph
from kspwlo.logging import get_logger, set_global_log_level

logger = get_logger(__name__)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _load_graph(path: Path, undirected: bool) -> StrictMultiDiGraph:
    """Load a graph, choosing the reader by file suffix."""
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return load_graph_yaml(path.read_text(encoding="utf-8"))
    if suffix == ".json":
        return node_link_to_graph(json.loads(path.read_text(encoding="utf-8")))
    return load_gr(path, undirected=True if undirected else None)


def _resolve_node(graph: StrictMultiDiGraph, token: str) -> NodeID:
    """Map a command-line node token to a node of ``graph``.

    Integer ids are tried first, so ``.gr`` graphs can be addressed as ``0``.
    Unknown tokens are returned unchanged and rejected by the search.
    """
    try:
        as_int = int(token)
    except ValueError:
        return token
    return as_int if as_int in graph else token


def _run_query(
    graph_path: Path,
    source: str,
    target: str,
    k: int,
    theta: float,
    max_labels: Optional[int],
    undirected: bool,
    results_path: Optional[Path],
    stdout: bool,
) -> None:
    graph = _load_graph(graph_path, undirected)
    logger.info(
        "Loaded graph %s: %d nodes, %d edges",
        graph_path,
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
    src_node = _resolve_node(graph, source)
    dst_node = _resolve_node(graph, target)

    started = perf_counter()
    paths = k_shortest_paths(
        graph, src_node, dst_node, k, theta, max_labels_per_vertex=max_labels
    )
    elapsed = perf_counter() - started
    logger.info(
        "Found %d path(s) from %s to %s in %s",
        len(paths),
        src_node,
        dst_node,
        _format_duration(elapsed),
    )

    payload: Dict[str, Any] = {
        "source": src_node,
        "target": dst_node,
        "k": k,
        "theta": theta,
        "paths": [path.to_dict() for path in paths],
    }
    text = json.dumps(payload, indent=2)
    if results_path is not None:
        results_path.parent.mkdir(parents=True, exist_ok=True)
        results_path.write_text(text + "\n", encoding="utf-8")
        logger.info("Results written to %s", results_path)
    if stdout or results_path is None:
        print(text)


def _inspect_graph(graph_path: Path, undirected: bool) -> None:
    graph = _load_graph(graph_path, undirected)
    print(f"Graph: {graph_path}")
    print(f"   Nodes: {graph.number_of_nodes():,}")
    print(f"   Edges: {graph.number_of_edges():,}")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``kspwlo`` command.

    Args:
        argv: Argument list; defaults to ``sys.argv[1:]``.
    """
    parser = argparse.ArgumentParser(
        prog="kspwlo",
        description="Compute k shortest paths with limited overlap.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,inspect}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser("run", help="Run a kSPwLO query")
    run_parser.add_argument(
        "graph", type=Path, help="Graph file (.gr, .yaml/.yml, or node-link .json)"
    )
    run_parser.add_argument("--source", "-s", required=True, help="Source node")
    run_parser.add_argument("--target", "-t", required=True, help="Target node")
    run_parser.add_argument(
        "-k", type=int, default=3, help="Number of paths to compute (default: 3)"
    )
    run_parser.add_argument(
        "--theta",
        type=float,
        default=0.5,
        help="Overlap threshold in [0, 1) (default: 0.5)",
    )
    run_parser.add_argument(
        "--max-labels",
        type=int,
        default=None,
        help="Per-node label admission cap (default: derived from k)",
    )
    run_parser.add_argument(
        "--results",
        "-r",
        type=Path,
        default=None,
        help="Write results JSON to this file instead of stdout",
    )
    run_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Also print results to stdout when --results is given",
    )

    inspect_parser = subparsers.add_parser("inspect", help="Show graph size")
    inspect_parser.add_argument("graph", type=Path, help="Graph file")

    for p in (run_parser, inspect_parser):
        p.add_argument(
            "--undirected",
            action="store_true",
            help="Treat .gr edges as bidirectional regardless of the header",
        )

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    try:
        if args.command == "run":
            _run_query(
                graph_path=args.graph,
                source=args.source,
                target=args.target,
                k=args.k,
                theta=args.theta,
                max_labels=args.max_labels,
                undirected=args.undirected,
                results_path=args.results,
                stdout=args.stdout,
            )
        elif args.command == "inspect":
            _inspect_graph(args.graph, args.undirected)
    except FileNotFoundError as exc:
        logger.error("Graph file not found: %s", exc.filename)
        raise SystemExit(1) from exc
    except ValueError as exc:
        logger.error("Invalid input: %s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
