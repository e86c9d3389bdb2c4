"""Main Entry Point and CLI Integration.

This module provides the ``heapgraph`` command. It loads configuration, reads
a graph description file, optionally validates or renders the graph, and
prints a topological order of its vertices.
"""

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

import structlog

from heapgraph import __version__
from heapgraph.config import AppConfig, load_config
from heapgraph.graph.exceptions import CycleDetectedError, GraphFormatError, InvalidArgumentError
from heapgraph.graph.priority_graph import PriorityGraph
from heapgraph.graph.topological_sort import topological_order, topological_sort
from heapgraph.graph.validator import GraphValidator
from heapgraph.io.graph_loader import GraphLoader
from heapgraph.log_config import bind_context, clear_context, configure_logging

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="heapgraph",
        description="Topologically sort a graph described in a text file.",
    )
    parser.add_argument("graph_file", type=Path, help="Graph description file")
    parser.add_argument(
        "--start",
        help="Vertex to start the traversal from (default: first vertex in the file)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Configuration file (default: heapgraph.yaml in the current directory)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured logging level",
    )
    parser.add_argument(
        "--format",
        choices=["lines", "csv", "json"],
        help="Override the configured output format",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Validate the graph and print the report instead of sorting",
    )
    parser.add_argument(
        "--visualize",
        choices=["mermaid", "dot"],
        help="Print the graph as a Mermaid or Graphviz diagram instead of sorting",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def format_order(order: list, output_format: str) -> str:
    """Render a vertex order in one of the supported output formats."""
    if output_format == "json":
        return json.dumps([str(vertex) for vertex in order])
    if output_format == "csv":
        return ",".join(str(vertex) for vertex in order)
    return "\n".join(str(vertex) for vertex in order)


def sort_graph(graph: PriorityGraph, start: str | None = None) -> list:
    """Sort a loaded graph, from ``start`` when given, else from its first vertex."""
    if start is None:
        return topological_order(graph)
    return topological_sort(graph, start)


def run(args: argparse.Namespace, config: AppConfig) -> int:
    """Execute one command with an already loaded configuration.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    loader = GraphLoader(
        delimiter=config.loader.delimiter,
        heap_initial_capacity=config.graph.heap_initial_capacity,
    )
    graph = loader.load(args.graph_file)

    validator = GraphValidator()

    if args.visualize:
        print(validator.generate_visualization(graph, args.visualize))
        return 0

    if args.validate_only or config.output.validate_before_sort:
        report = validator.validate(graph)
        if args.validate_only:
            print(report.summary())
            return 0 if report.is_valid else 1
        if not report.is_valid:
            print(report.summary(), file=sys.stderr)
            return 1

    order = sort_graph(graph, args.start)
    logger.info("graph_sorted", vertex_count=len(order), start=args.start)

    output_format = args.format or config.output.format
    if order:
        print(format_order(order, output_format))
    elif output_format == "json":
        print("[]")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Command line entry point.

    Args:
        argv: Arguments to parse (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = build_parser().parse_args(argv)
    exit_code = 0

    try:
        config = load_config(args.config)
        if args.log_level:
            config.logging_level = args.log_level
        configure_logging(config.logging_level, json_logs=config.json_logs)

        for warning in config.validate_config():
            logger.warning("configuration_warning", message=warning)

        bind_context(graph_file=str(args.graph_file))
        exit_code = run(args, config)

    except CycleDetectedError as e:
        logger.error("graph_has_cycle", cycle=[str(v) for v in e.cycle])
        print(f"error: {e.message}", file=sys.stderr)
        exit_code = 1

    except FileNotFoundError as e:
        logger.error("file_not_found", error=str(e))
        print(f"error: {e}", file=sys.stderr)
        exit_code = 1

    except (GraphFormatError, InvalidArgumentError) as e:
        logger.error("invalid_graph_input", error=e.message)
        print(f"error: {e.message}", file=sys.stderr)
        exit_code = 1

    except ValueError as e:
        logger.error("configuration_validation_error", error=str(e))
        print(f"error: {e}", file=sys.stderr)
        exit_code = 1

    finally:
        clear_context()

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
