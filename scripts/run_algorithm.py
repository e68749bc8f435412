#!/usr/bin/env python3
"""
Run one graph algorithm over a serialized graph file and print the result.

The graph file holds ``{"nodes": [...], "edges": [...]}`` as JSON or YAML.
Output is the UI result envelope as JSON.

Usage:
    poetry run python scripts/run_algorithm.py data/sample_graph.yaml bfs A
    poetry run python scripts/run_algorithm.py data/sample_graph.yaml dijkstra A D
    poetry run python scripts/run_algorithm.py data/sample_graph.yaml centrality --top-n 3
    poetry run python scripts/run_algorithm.py data/sample_graph.yaml welsh_powell --config simgraph.yaml
"""

import argparse
import json
import sys
from pathlib import Path

import yaml

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from simgraph.config import configure_logging, load_config
from simgraph.errors import GraphError
from simgraph.graph import Graph
from simgraph.handlers import ALGORITHM_ARITY, ALGORITHMS, run_algorithm


def load_graph(path: Path) -> Graph:
    """Load a graph file (JSON is valid YAML, so one loader covers both)."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return Graph.from_dict(data)


def main():
    parser = argparse.ArgumentParser(
        description="Run a graph algorithm over a serialized graph file"
    )
    parser.add_argument("graph_file", type=Path, help="Graph file (JSON or YAML)")
    parser.add_argument("algorithm", choices=sorted(ALGORITHMS), help="Algorithm to run")
    parser.add_argument("node_ids", nargs="*", help="Start (and end) node ids")
    parser.add_argument("--config", type=Path, help="YAML config file")
    parser.add_argument("--top-n", type=int, help="Override centrality top-N")
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    configure_logging(config)

    expected = ALGORITHM_ARITY[args.algorithm]
    if len(args.node_ids) != expected:
        parser.error(f"{args.algorithm} takes {expected} node id(s), got {len(args.node_ids)}")

    kwargs = {}
    if args.algorithm == "centrality":
        kwargs["top_n"] = args.top_n if args.top_n is not None else config.centrality_top_n

    try:
        graph = load_graph(args.graph_file)
        result = run_algorithm(args.algorithm, graph, *args.node_ids, **kwargs)
    except FileNotFoundError:
        print(f"Error: Graph file not found: {args.graph_file}", file=sys.stderr)
        sys.exit(1)
    except (GraphError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
