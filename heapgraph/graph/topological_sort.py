"""Depth-first topological sort over a directed graph.

Every vertex moves through ``unvisited -> started -> finished``. A vertex is
finished, and prepended to the output, only after all of its successors are
finished, so each edge ``u -> v`` places ``u`` before ``v``. Meeting a started
but unfinished vertex again means the graph has a cycle.

Successors are visited in reverse of the order ``graph.successors`` returns
them, which makes the result deterministic for a given graph. The traversal
keeps an explicit stack instead of recursing, so deep graphs do not hit the
interpreter's recursion limit.
"""

from collections import deque
from collections.abc import Hashable, Iterator

import structlog

from heapgraph.graph.contract import DirectedGraph
from heapgraph.graph.exceptions import CycleDetectedError, InvalidArgumentError

logger = structlog.get_logger(__name__)


def topological_sort(graph: DirectedGraph, start: Hashable) -> list:
    """Order every vertex of ``graph`` so that each edge points forward.

    The traversal begins at ``start``. Once its depth-first tree is done, it
    restarts from the first unfinished vertex in the graph's vertex order
    until every vertex is finished, so disconnected parts are covered too.

    Args:
        graph: Graph to sort
        start: Vertex to begin the traversal from

    Returns:
        All vertices, each exactly once, in topological order

    Raises:
        InvalidArgumentError: If graph or start is None, or start is not in graph
        CycleDetectedError: If the graph contains a cycle

    Example:
        >>> from heapgraph.graph.priority_graph import PriorityGraph
        >>> from heapgraph.graph.priority_item import PriorityItem
        >>> graph = PriorityGraph()
        >>> for vertex in ("A", "B", "C"):
        ...     graph.add_vertex(vertex)
        >>> graph.add_edge(PriorityItem("B", 1), "A", "B")
        True
        >>> topological_sort(graph, "A")
        ['C', 'A', 'B']
    """
    if graph is None or start is None:
        msg = "Graph or starting vertex cannot be None"
        raise InvalidArgumentError(msg)

    if not graph.contains_vertex(start):
        msg = f"Graph does not contain starting vertex {start!r}"
        raise InvalidArgumentError(msg)

    started: set = set()
    finished: set = set()
    order: deque = deque()

    next_start = start
    while next_start is not None:
        _visit(graph, next_start, started, finished, order)
        next_start = next((v for v in graph.vertices() if v not in finished), None)

    logger.debug("topological_sort_complete", start=start, vertex_count=len(order))
    return list(order)


def topological_order(graph: DirectedGraph) -> list:
    """Sort ``graph`` starting from its first vertex; an empty graph gives []."""
    if graph is None:
        msg = "Graph cannot be None"
        raise InvalidArgumentError(msg)

    vertices = graph.vertices()
    if not vertices:
        return []
    return topological_sort(graph, vertices[0])


def _visit(
    graph: DirectedGraph,
    root: Hashable,
    started: set,
    finished: set,
    order: deque,
) -> None:
    """Finish ``root`` and every unstarted vertex reachable from it."""
    started.add(root)
    stack: list[tuple[Hashable, Iterator]] = [(root, _reversed_successors(graph, root))]

    while stack:
        vertex, remaining = stack[-1]

        for successor in remaining:
            if successor in started and successor not in finished:
                path = [frame_vertex for frame_vertex, _ in stack]
                cycle = [*path[path.index(successor) :], successor]
                logger.warning("cycle_detected", cycle=cycle)
                msg = "Graph contains a cycle: " + " -> ".join(str(v) for v in cycle)
                raise CycleDetectedError(msg, cycle)

            if successor not in started:
                started.add(successor)
                stack.append((successor, _reversed_successors(graph, successor)))
                break
        else:
            stack.pop()
            finished.add(vertex)
            order.appendleft(vertex)


def _reversed_successors(graph: DirectedGraph, vertex: Hashable) -> Iterator:
    return reversed(graph.successors(vertex))
