"""Demonstration of building, inspecting and sorting a priority graph.

This example loads a course prerequisite graph, shows how edge priorities
order each vertex's adjacency heap while successors stay in vertex order,
and prints a topological order with structured logging enabled.
"""

import sys
from pathlib import Path

# Add the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from heapgraph.graph import (
    CycleDetectedError,
    GraphValidator,
    PriorityItem,
    topological_sort,
)
from heapgraph.io import load_graph
from heapgraph.log_config import bind_context, clear_context, configure_logging, get_logger


def main() -> None:
    """Main demonstration function."""
    configure_logging(level="INFO", json_logs=False)
    logger = get_logger(__name__)

    graph_path = Path(__file__).parent / "courses.txt"
    bind_context(graph_file=graph_path.name)

    graph = load_graph(graph_path)

    # Priority decides heap order, vertex order decides successor order
    heap = graph.adjacency_heap("MATH100")
    print("MATH100 cheapest edge:", heap.peek())
    print("MATH100 successors:", graph.successors("MATH100"))

    report = GraphValidator().validate(graph)
    print(report.summary())

    order = topological_sort(graph, "CS101")
    print("Order:", " -> ".join(order))

    # Closing the loop turns the graph cyclic
    graph.add_edge(PriorityItem("MATH100", 1), "CS301", "MATH100")
    try:
        topological_sort(graph, "CS101")
    except CycleDetectedError as e:
        logger.warning("sort_failed", cycle=e.cycle)
        print("Cycle:", " -> ".join(e.cycle))
    finally:
        clear_context()


if __name__ == "__main__":
    main()
