"""Directed graph whose adjacency lists are per-vertex min-heaps.

Each vertex owns one :class:`MinHeap` of :class:`PriorityItem` records holding
its outgoing edges, ordered by edge priority. The priority only governs how a
vertex's edges are stored and extracted; successor enumeration always follows
the vertices' own natural order.
"""

from collections.abc import Callable, Collection, Hashable
from typing import Any, Generic, TypeVar

import structlog

from heapgraph.graph.contract import EdgeType, Endpoints
from heapgraph.graph.exceptions import InvalidArgumentError
from heapgraph.graph.min_heap import DEFAULT_INITIAL_CAPACITY, MinHeap
from heapgraph.graph.priority_item import PriorityItem

logger = structlog.get_logger(__name__)

V = TypeVar("V", bound=Hashable)

EDGE_VERTEX_COUNT = 2


class PriorityGraph(Generic[V]):
    """Directed graph keyed by vertex, with one adjacency heap per vertex.

    Invariants kept by every mutation:
        - a vertex has at most one edge to any given target (no parallel edges)
        - every edge targets a vertex currently in the graph
        - vertices enumerate in the order they were first added

    Thread-safety:
        This class is NOT thread-safe. Callers must not mutate a graph from
        several threads, nor while iterating over its vertices or edges.

    Example:
        >>> graph = PriorityGraph()
        >>> for vertex in ("A", "B", "C"):
        ...     graph.add_vertex(vertex)
        >>> graph.add_edge(PriorityItem("C", 1), "A", "C")
        True
        >>> graph.add_edge(PriorityItem("B", 9), "A", "B")
        True
        >>> graph.successors("A")
        ['B', 'C']
    """

    def __init__(self, heap_initial_capacity: int = DEFAULT_INITIAL_CAPACITY):
        """Initialize an empty graph.

        Args:
            heap_initial_capacity: Initial capacity of each vertex's adjacency heap
        """
        self._heap_initial_capacity = heap_initial_capacity
        self._adjacency: dict[V, MinHeap[PriorityItem[V]]] = {}

    @classmethod
    def factory(cls) -> Callable[[], "PriorityGraph"]:
        """Return a callable that creates fresh, empty graphs."""
        return cls

    # Vertex and edge enumeration

    def vertices(self) -> list[V]:
        """Return the vertices in insertion order."""
        return list(self._adjacency)

    def edges(self, edge_type: EdgeType | None = None) -> list[PriorityItem[V]]:
        """Return every stored edge.

        Edges are grouped by source vertex (insertion order) and listed in each
        heap's physical order. Asking for undirected edges yields an empty list.
        """
        if edge_type is EdgeType.UNDIRECTED:
            return []

        edges: list[PriorityItem[V]] = []
        for heap in self._adjacency.values():
            edges.extend(heap)
        return edges

    def vertex_count(self) -> int:
        return len(self._adjacency)

    def edge_count(self, edge_type: EdgeType | None = None) -> int:
        if edge_type is EdgeType.UNDIRECTED:
            return 0
        return sum(len(heap) for heap in self._adjacency.values())

    def __len__(self) -> int:
        return len(self._adjacency)

    def __contains__(self, vertex: Any) -> bool:
        return self.contains_vertex(vertex)

    def contains_vertex(self, vertex: Any) -> bool:
        return vertex is not None and vertex in self._adjacency

    def contains_edge(self, edge: Any) -> bool:
        return self.endpoints(edge) is not None

    def adjacency_heap(self, vertex: V) -> MinHeap[PriorityItem[V]] | None:
        """Return the live adjacency heap of ``vertex`` for inspection.

        The heap must not be mutated directly; use the graph's add and remove
        operations so the graph invariants hold.
        """
        return self._adjacency.get(vertex)

    # Mutation

    def add_vertex(self, vertex: V) -> bool:
        """Add a vertex with an empty adjacency heap.

        Args:
            vertex: Vertex to add

        Returns:
            True if the vertex was added, False if it was already present

        Raises:
            InvalidArgumentError: If vertex is None
        """
        if vertex is None:
            msg = "Vertex cannot be None"
            raise InvalidArgumentError(msg)

        if vertex in self._adjacency:
            return False

        self._adjacency[vertex] = MinHeap(self._heap_initial_capacity)
        logger.debug("vertex_added", vertex=vertex, vertex_count=len(self._adjacency))
        return True

    def add_edge(
        self,
        edge: PriorityItem[V],
        source: V,
        dest: V,
        edge_type: EdgeType = EdgeType.DIRECTED,
    ) -> bool:
        """Add a directed edge from ``source`` to ``dest``.

        The stored record is ``edge`` retargeted at ``dest``; the argument
        itself is left untouched.

        Args:
            edge: Edge record supplying the priority
            source: Vertex whose adjacency heap receives the edge
            dest: Vertex the edge points at
            edge_type: Must be EdgeType.DIRECTED

        Returns:
            True if the edge was added; False if either vertex is missing or
            ``source`` already has an edge to ``dest``

        Raises:
            InvalidArgumentError: If any argument is None or edge_type is
                undirected
        """
        if edge_type is EdgeType.UNDIRECTED:
            msg = "Undirected edges are not supported"
            raise InvalidArgumentError(msg)

        if edge is None or source is None or dest is None or edge_type is None:
            msg = "Edge and vertices cannot be None"
            raise InvalidArgumentError(msg)

        if source not in self._adjacency or dest not in self._adjacency:
            logger.debug("edge_endpoint_missing", source=source, dest=dest)
            return False

        heap = self._adjacency[source]
        if any(existing.target == dest for existing in heap):
            logger.debug("parallel_edge_rejected", source=source, dest=dest)
            return False

        heap.push(edge.with_target(dest))
        logger.debug("edge_added", source=source, dest=dest, priority=edge.priority)
        return True

    def add_edge_between(
        self,
        edge: PriorityItem[V],
        vertices: Collection[V],
        edge_type: EdgeType = EdgeType.DIRECTED,
    ) -> bool:
        """Add an edge given its endpoints as a two-element collection.

        Returns False without effect if ``edge`` or ``vertices`` is None or
        ``vertices`` does not hold exactly two vertices.
        """
        if edge is None or vertices is None or len(vertices) != EDGE_VERTEX_COUNT:
            return False

        source, dest = list(vertices)
        return self.add_edge(edge, source, dest, edge_type)

    def remove_vertex(self, vertex: V) -> bool:
        """Remove a vertex and every edge pointing at it.

        Returns:
            True if the vertex was removed, False if it was not present
        """
        if not self.contains_vertex(vertex):
            return False

        del self._adjacency[vertex]

        removed_edges = 0
        for heap in self._adjacency.values():
            # At most one edge per heap can target the vertex.
            edges = iter(heap)
            for edge in edges:
                if edge.target == vertex:
                    edges.remove()
                    removed_edges += 1
                    break

        logger.debug(
            "vertex_removed",
            vertex=vertex,
            removed_in_edges=removed_edges,
            vertex_count=len(self._adjacency),
        )
        return True

    def remove_edge(self, edge: PriorityItem[V]) -> bool:
        """Remove ``edge`` from whichever adjacency heap holds it.

        A handle obtained from the graph (``find_edge``, ``edges``...) removes
        exactly that stored record. Any other item removes the first stored
        edge equal to it, scanning heaps in vertex insertion order.

        Returns:
            True if an edge was removed, False otherwise
        """
        if edge is None:
            return False

        return self._remove_first(lambda stored: stored is edge) or self._remove_first(
            lambda stored: stored == edge,
        )

    def _remove_first(self, matches: Callable[[PriorityItem[V]], bool]) -> bool:
        for source, heap in self._adjacency.items():
            edges = iter(heap)
            for stored in edges:
                if matches(stored):
                    edges.remove()
                    logger.debug("edge_removed", source=source, dest=stored.target)
                    return True
        return False

    # Adjacency queries

    def successors(self, vertex: V) -> list[V]:
        """Return the targets of ``vertex``'s edges sorted by vertex order.

        An absent vertex has no successors.
        """
        heap = self._adjacency.get(vertex) if vertex is not None else None
        if heap is None:
            return []
        return sorted(edge.target for edge in heap)

    def predecessors(self, vertex: V) -> list[V]:
        """Return the vertices with an edge to ``vertex``, in insertion order."""
        return [
            source
            for source, heap in self._adjacency.items()
            if any(edge.target == vertex for edge in heap)
        ]

    def find_edge(self, source: V, dest: V) -> PriorityItem[V] | None:
        """Return the stored edge from ``source`` to ``dest``, or None."""
        heap = self._adjacency.get(source) if source is not None else None
        if heap is None:
            return None

        for edge in heap:
            if edge.target == dest:
                return edge
        return None

    def find_edge_set(self, source: V, dest: V) -> list[PriorityItem[V]]:
        """Return the edges from ``source`` to ``dest`` (at most one)."""
        edge = self.find_edge(source, dest)
        return [] if edge is None else [edge]

    def endpoints(self, edge: PriorityItem[V]) -> Endpoints | None:
        """Return the source and destination of a stored edge, or None.

        The source is recovered by finding the adjacency heap that holds this
        very record, since edges do not record it. An equal item that is not
        the stored record is not an edge of this graph.
        """
        if edge is None:
            return None

        for source, heap in self._adjacency.items():
            if any(stored is edge for stored in heap):
                return Endpoints(source, edge.target)
        return None

    def source(self, edge: PriorityItem[V]) -> V | None:
        pair = self.endpoints(edge)
        return None if pair is None else pair.source

    def dest(self, edge: PriorityItem[V]) -> V | None:
        pair = self.endpoints(edge)
        return None if pair is None else pair.dest

    def opposite(self, vertex: V, edge: PriorityItem[V]) -> V | None:
        """Return the endpoint of ``edge`` that is not ``vertex``."""
        pair = self.endpoints(edge)
        if pair is None:
            return None
        return pair.dest if pair.source == vertex else pair.source

    def incident_vertices(self, edge: PriorityItem[V]) -> list[V] | None:
        pair = self.endpoints(edge)
        return None if pair is None else [pair.source, pair.dest]

    def in_edges(self, vertex: V) -> list[PriorityItem[V]]:
        return [self.find_edge(pred, vertex) for pred in self.predecessors(vertex)]

    def out_edges(self, vertex: V) -> list[PriorityItem[V]]:
        return [self.find_edge(vertex, succ) for succ in self.successors(vertex)]

    def incident_edges(self, vertex: V) -> list[PriorityItem[V]]:
        return self.in_edges(vertex) + self.out_edges(vertex)

    def neighbors(self, vertex: V) -> list[V]:
        """Return predecessors followed by successors (a self-loop appears twice)."""
        return self.predecessors(vertex) + self.successors(vertex)

    def neighbor_count(self, vertex: V) -> int:
        return len(self.neighbors(vertex))

    def is_incident(self, vertex: V, edge: PriorityItem[V]) -> bool:
        return any(stored is edge for stored in self.incident_edges(vertex))

    def is_predecessor(self, vertex: V, other: V) -> bool:
        """Check whether ``other`` is a predecessor of ``vertex``."""
        return other in self.predecessors(vertex)

    def is_successor(self, vertex: V, other: V) -> bool:
        """Check whether ``other`` is a successor of ``vertex``."""
        return other in self.successors(vertex)

    def is_neighbor(self, source: V, dest: V) -> bool:
        return self.find_edge(source, dest) is not None

    def is_source(self, vertex: V, edge: PriorityItem[V]) -> bool:
        pair = self.endpoints(edge)
        return pair is not None and pair.source == vertex

    def is_dest(self, vertex: V, edge: PriorityItem[V]) -> bool:
        pair = self.endpoints(edge)
        return pair is not None and pair.dest == vertex

    # Degrees

    def in_degree(self, vertex: V) -> int:
        return len(self.in_edges(vertex))

    def out_degree(self, vertex: V) -> int:
        return len(self.out_edges(vertex))

    def degree(self, vertex: V) -> int:
        """Return in-degree plus out-degree; a self-loop counts twice."""
        return self.in_degree(vertex) + self.out_degree(vertex)

    def predecessor_count(self, vertex: V) -> int:
        return self.in_degree(vertex)

    def successor_count(self, vertex: V) -> int:
        return self.out_degree(vertex)

    # Edge types

    def edge_type(self, edge: PriorityItem[V]) -> EdgeType:
        return EdgeType.DIRECTED

    def default_edge_type(self) -> EdgeType:
        return EdgeType.DIRECTED

    def incident_count(self, edge: PriorityItem[V]) -> int:
        return EDGE_VERTEX_COUNT

    def __repr__(self) -> str:
        return (
            f"PriorityGraph(vertices={self.vertex_count()}, edges={self.edge_count()})"
        )
