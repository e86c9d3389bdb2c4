"""Unit tests for PriorityGraph class.

Tests cover:
- Adding vertices and edges
- Parallel edge and undirected edge rejection
- Successor ordering independent of priority
- Predecessors, endpoints and edge lookup
- Cascading vertex removal and edge removal
- Degree queries
- Factory construction
"""

import pytest

from heapgraph.graph.contract import DirectedGraph, EdgeType, Endpoints
from heapgraph.graph.exceptions import InvalidArgumentError
from heapgraph.graph.priority_graph import PriorityGraph
from heapgraph.graph.priority_item import PriorityItem

# Test constants
EXPECTED_VERTEX_COUNT_FOUR = 4
EXPECTED_EDGE_COUNT_THREE = 3


def heap_ordered(graph: PriorityGraph, vertex) -> bool:
    slots = graph.adjacency_heap(vertex).to_list()
    return all(slots[(i - 1) // 2].priority <= slots[i].priority for i in range(1, len(slots)))


@pytest.fixture
def sample_graph() -> PriorityGraph:
    """Graph X, G, Hat, A! with edges X->G (1), X->A! (7), Hat->X (7)."""
    graph = PriorityGraph()
    for vertex in ("X", "G", "Hat", "A!"):
        graph.add_vertex(vertex)
    graph.add_edge(PriorityItem("G", 1), "X", "G")
    graph.add_edge(PriorityItem("A!", 7), "X", "A!")
    graph.add_edge(PriorityItem("X", 7), "Hat", "X")
    return graph


class TestVertices:
    """Test vertex management."""

    def test_initialization(self):
        """Test that a new graph is empty."""
        graph = PriorityGraph()

        assert graph.vertices() == []
        assert graph.edges() == []
        assert graph.vertex_count() == 0
        assert graph.edge_count() == 0
        assert len(graph) == 0

    def test_add_vertex(self):
        """Test adding a vertex creates an empty adjacency heap."""
        graph = PriorityGraph()

        assert graph.add_vertex("A") is True
        assert graph.contains_vertex("A")
        assert "A" in graph
        assert graph.adjacency_heap("A").is_empty()

    def test_add_duplicate_vertex(self):
        """Test adding a vertex twice returns False."""
        graph = PriorityGraph()
        graph.add_vertex("A")

        assert graph.add_vertex("A") is False
        assert graph.vertex_count() == 1

    def test_add_none_vertex(self):
        """Test None vertices are rejected."""
        graph = PriorityGraph()

        with pytest.raises(InvalidArgumentError):
            graph.add_vertex(None)

    def test_insertion_order(self):
        """Test vertices enumerate in insertion order, not sorted order."""
        graph = PriorityGraph()
        for vertex in ("C", "A", "B"):
            graph.add_vertex(vertex)

        assert graph.vertices() == ["C", "A", "B"]

    def test_contains_none(self):
        """Test containment of None is False."""
        assert not PriorityGraph().contains_vertex(None)

    def test_heap_capacity_is_configurable(self):
        """Test adjacency heaps use the configured capacity."""
        graph = PriorityGraph(heap_initial_capacity=2)
        graph.add_vertex("A")

        assert graph.adjacency_heap("A").capacity == 2


class TestEdges:
    """Test edge insertion and lookup."""

    def test_counts(self, sample_graph):
        """Test vertex and edge counts."""
        assert sample_graph.vertex_count() == EXPECTED_VERTEX_COUNT_FOUR
        assert sample_graph.edge_count() == EXPECTED_EDGE_COUNT_THREE
        assert len(sample_graph.edges()) == EXPECTED_EDGE_COUNT_THREE

    def test_add_edge_sets_target(self):
        """Test the stored edge points at the destination vertex."""
        graph = PriorityGraph()
        graph.add_vertex("A")
        graph.add_vertex("B")
        placeholder = PriorityItem(None, 3)

        assert graph.add_edge(placeholder, "A", "B")

        assert graph.find_edge("A", "B") == PriorityItem("B", 3)
        assert placeholder.target is None

    def test_no_parallel_edges(self):
        """Test a second edge between the same pair is refused."""
        graph = PriorityGraph()
        graph.add_vertex("A")
        graph.add_vertex("B")

        assert graph.add_edge(PriorityItem("B", 1), "A", "B")
        assert graph.add_edge(PriorityItem("B", 2), "A", "B") is False
        assert graph.edge_count() == 1

    def test_reverse_edge_is_not_parallel(self):
        """Test A->B and B->A may coexist."""
        graph = PriorityGraph()
        graph.add_vertex("A")
        graph.add_vertex("B")

        assert graph.add_edge(PriorityItem("B", 1), "A", "B")
        assert graph.add_edge(PriorityItem("A", 1), "B", "A")

    def test_add_edge_missing_vertex(self):
        """Test edges to or from absent vertices are refused."""
        graph = PriorityGraph()
        graph.add_vertex("A")

        assert graph.add_edge(PriorityItem("B", 1), "A", "B") is False
        assert graph.add_edge(PriorityItem("A", 1), "B", "A") is False
        assert graph.edge_count() == 0

    @pytest.mark.parametrize(
        ("edge", "source", "dest"),
        [
            (None, "A", "B"),
            (PriorityItem("B", 1), None, "B"),
            (PriorityItem("B", 1), "A", None),
        ],
    )
    def test_add_edge_none_arguments(self, edge, source, dest):
        """Test None arguments are rejected."""
        graph = PriorityGraph()
        graph.add_vertex("A")
        graph.add_vertex("B")

        with pytest.raises(InvalidArgumentError):
            graph.add_edge(edge, source, dest)

    def test_undirected_edge_rejected(self):
        """Test undirected edge requests raise."""
        graph = PriorityGraph()
        graph.add_vertex("A")
        graph.add_vertex("B")

        with pytest.raises(InvalidArgumentError):
            graph.add_edge(PriorityItem("B", 1), "A", "B", EdgeType.UNDIRECTED)

    def test_add_edge_between(self):
        """Test the two-element collection form."""
        graph = PriorityGraph()
        graph.add_vertex("A")
        graph.add_vertex("B")

        assert graph.add_edge_between(PriorityItem("B", 1), ["A", "B"])
        assert graph.add_edge_between(PriorityItem("B", 1), ["A"]) is False
        assert graph.add_edge_between(PriorityItem("B", 1), None) is False
        assert graph.is_neighbor("A", "B")

    def test_heap_order_by_priority(self):
        """Test each adjacency heap keeps the lowest priority at its root."""
        graph = PriorityGraph()
        for vertex in "SABCDE":
            graph.add_vertex(vertex)
        for target, priority in zip("ABCDE", [5, 3, 8, 1, 4], strict=True):
            graph.add_edge(PriorityItem(target, priority), "S", target)

        heap = graph.adjacency_heap("S")

        assert heap.peek() == PriorityItem("D", 1)
        assert heap_ordered(graph, "S")

    def test_edge_type_queries(self, sample_graph):
        """Test every edge is reported as directed."""
        edge = sample_graph.find_edge("X", "G")

        assert sample_graph.edge_type(edge) is EdgeType.DIRECTED
        assert sample_graph.default_edge_type() is EdgeType.DIRECTED
        assert sample_graph.edges(EdgeType.UNDIRECTED) == []
        assert sample_graph.edge_count(EdgeType.UNDIRECTED) == 0
        assert sample_graph.edge_count(EdgeType.DIRECTED) == EXPECTED_EDGE_COUNT_THREE
        assert sample_graph.incident_count(edge) == 2


class TestAdjacencyQueries:
    """Test successor, predecessor and endpoint queries."""

    def test_successors_ignore_priority(self, abc_graph):
        """Test successors come back in vertex order, not priority order."""
        assert abc_graph.successors("A") == ["B", "C"]

    def test_successors_absent_vertex(self, abc_graph):
        """Test an absent vertex has no successors."""
        assert abc_graph.successors("Z") == []
        assert abc_graph.successors(None) == []

    def test_predecessors_insertion_order(self):
        """Test predecessors follow vertex insertion order."""
        graph = PriorityGraph()
        for vertex in ("Z", "T", "M"):
            graph.add_vertex(vertex)
        graph.add_edge(PriorityItem("T", 1), "M", "T")
        graph.add_edge(PriorityItem("T", 2), "Z", "T")

        assert graph.predecessors("T") == ["Z", "M"]

    def test_find_edge(self, sample_graph):
        """Test edge lookup by endpoints."""
        assert sample_graph.find_edge("X", "G") == PriorityItem("G", 1)
        assert sample_graph.find_edge("G", "X") is None
        assert sample_graph.find_edge("missing", "X") is None
        assert sample_graph.find_edge_set("X", "G") == [PriorityItem("G", 1)]
        assert sample_graph.find_edge_set("G", "X") == []

    def test_endpoints(self, sample_graph):
        """Test the source is recovered from the holding heap."""
        edge = sample_graph.find_edge("X", "G")

        assert sample_graph.endpoints(edge) == Endpoints("X", "G")
        assert sample_graph.source(edge) == "X"
        assert sample_graph.dest(edge) == "G"
        assert sample_graph.incident_vertices(edge) == ["X", "G"]
        assert sample_graph.opposite("X", edge) == "G"
        assert sample_graph.opposite("G", edge) == "X"
        assert sample_graph.is_source("X", edge)
        assert sample_graph.is_dest("G", edge)

    def test_endpoints_missing_edge(self, sample_graph):
        """Test queries on an unknown edge return missing values."""
        edge = PriorityItem("G", 99)

        assert sample_graph.endpoints(edge) is None
        assert sample_graph.endpoints(None) is None
        assert not sample_graph.contains_edge(edge)
        assert sample_graph.source(edge) is None
        assert sample_graph.dest(edge) is None
        assert sample_graph.opposite("X", edge) is None
        assert sample_graph.incident_vertices(edge) is None
        assert not sample_graph.is_source("X", edge)
        assert not sample_graph.is_dest("G", edge)

    def test_endpoints_match_stored_record(self):
        """Test equal edges from different sources resolve to their own source."""
        graph = PriorityGraph()
        for vertex in ("A", "B", "C"):
            graph.add_vertex(vertex)
        graph.add_edge(PriorityItem("B", 5), "A", "B")
        graph.add_edge(PriorityItem("B", 5), "C", "B")

        edge_from_a = graph.find_edge("A", "B")
        edge_from_c = graph.find_edge("C", "B")

        assert edge_from_a == edge_from_c
        assert graph.endpoints(edge_from_c) == Endpoints("C", "B")
        assert graph.endpoints(edge_from_a) == Endpoints("A", "B")
        assert graph.is_source("C", edge_from_c)
        assert graph.is_incident("C", edge_from_c)
        assert not graph.is_incident("A", edge_from_c)

    def test_equal_item_is_not_a_stored_edge(self, sample_graph):
        """Test an equal item that was never stored has no endpoints."""
        assert not sample_graph.contains_edge(PriorityItem("G", 1))
        assert sample_graph.endpoints(PriorityItem("G", 1)) is None
        assert sample_graph.contains_edge(sample_graph.find_edge("X", "G"))

    def test_incident_and_neighbors(self, sample_graph):
        """Test incident edges, neighbors and relationship predicates."""
        out_edge = sample_graph.find_edge("X", "A!")
        in_edge = sample_graph.find_edge("Hat", "X")

        assert sample_graph.in_edges("X") == [in_edge]
        assert sample_graph.out_edges("X") == [PriorityItem("A!", 7), PriorityItem("G", 1)]
        assert sample_graph.is_incident("X", out_edge)
        assert sample_graph.is_incident("X", in_edge)
        assert sample_graph.neighbors("X") == ["Hat", "A!", "G"]
        assert sample_graph.neighbor_count("Hat") == 1
        assert sample_graph.neighbor_count("G") == 1
        assert sample_graph.is_predecessor("X", "Hat")
        assert sample_graph.is_successor("X", "G")
        assert not sample_graph.is_successor("G", "X")


class TestRemoval:
    """Test vertex and edge removal."""

    def test_cascading_vertex_removal(self):
        """Test removing a vertex removes every edge pointing at it."""
        graph = PriorityGraph()
        for vertex in ("X", "Y", "Z"):
            graph.add_vertex(vertex)
        graph.add_edge(PriorityItem("Y", 1), "X", "Y")
        graph.add_edge(PriorityItem("Y", 2), "Z", "Y")

        assert graph.remove_vertex("Y") is True

        assert graph.successors("X") == []
        assert graph.successors("Z") == []
        assert graph.edge_count() == 0
        assert graph.vertices() == ["X", "Z"]

    def test_remove_vertex_keeps_heap_order(self):
        """Test cascading removal from an interior slot keeps heap order."""
        graph = PriorityGraph()
        for vertex in "SABCDEFG":
            graph.add_vertex(vertex)
        for target, priority in zip("ABCDEFG", [1, 5, 2, 6, 7, 3, 4], strict=True):
            graph.add_edge(PriorityItem(target, priority), "S", target)

        graph.remove_vertex("B")

        assert graph.edge_count() == 6
        assert "B" not in graph.successors("S")
        assert heap_ordered(graph, "S")

    def test_remove_vertex_drops_out_edges(self, sample_graph):
        """Test the removed vertex's own edges disappear with it."""
        assert sample_graph.remove_vertex("X")

        assert not sample_graph.contains_vertex("X")
        assert sample_graph.vertex_count() == 3
        assert sample_graph.edge_count() == 0

    def test_remove_absent_vertex(self, sample_graph):
        """Test removing an absent vertex returns False."""
        assert sample_graph.remove_vertex("nope") is False
        assert sample_graph.remove_vertex(None) is False

    def test_remove_edge(self, sample_graph):
        """Test removing a stored edge."""
        edge = sample_graph.find_edge("X", "G")

        assert sample_graph.remove_edge(edge) is True

        assert not sample_graph.contains_edge(edge)
        assert sample_graph.edge_count() == 2
        assert sample_graph.successors("X") == ["A!"]

    def test_remove_edge_removes_stored_record(self):
        """Test removing one of two equal edges leaves the other in place."""
        graph = PriorityGraph()
        for vertex in ("A", "B", "C"):
            graph.add_vertex(vertex)
        graph.add_edge(PriorityItem("B", 5), "A", "B")
        graph.add_edge(PriorityItem("B", 5), "C", "B")

        assert graph.remove_edge(graph.find_edge("C", "B")) is True

        assert graph.successors("C") == []
        assert graph.successors("A") == ["B"]
        assert graph.predecessors("B") == ["A"]

    def test_remove_edge_by_value(self):
        """Test an equal item removes the first matching edge in vertex order."""
        graph = PriorityGraph()
        for vertex in ("A", "B", "C"):
            graph.add_vertex(vertex)
        graph.add_edge(PriorityItem("B", 5), "A", "B")
        graph.add_edge(PriorityItem("B", 5), "C", "B")

        assert graph.remove_edge(PriorityItem("B", 5)) is True

        assert graph.successors("A") == []
        assert graph.successors("C") == ["B"]

    def test_remove_absent_edge(self, sample_graph):
        """Test removing an edge that is not stored."""
        assert sample_graph.remove_edge(PriorityItem("G", 42)) is False
        assert sample_graph.edge_count() == EXPECTED_EDGE_COUNT_THREE

    def test_readd_after_removal(self, sample_graph):
        """Test a removed vertex can be added back with fresh edges."""
        sample_graph.remove_vertex("X")
        sample_graph.add_vertex("X")
        sample_graph.add_edge(PriorityItem("G", 1), "X", "G")
        sample_graph.add_edge(PriorityItem("A!", 7), "X", "A!")

        assert sample_graph.remove_edge(PriorityItem("G", 1))
        assert sample_graph.successors("X") == ["A!"]
        assert sample_graph.edge_count() == 1


class TestDegrees:
    """Test degree queries."""

    def test_degrees(self, sample_graph):
        """Test in, out and total degree."""
        assert sample_graph.in_degree("X") == 1
        assert sample_graph.out_degree("X") == 2
        assert sample_graph.degree("X") == 3
        assert sample_graph.predecessor_count("G") == 1
        assert sample_graph.successor_count("Hat") == 1

    def test_self_loop_counted_twice(self):
        """Test a self-loop adds to both in- and out-degree."""
        graph = PriorityGraph()
        graph.add_vertex("A")
        graph.add_edge(PriorityItem("A", 1), "A", "A")

        assert graph.in_degree("A") == 1
        assert graph.out_degree("A") == 1
        assert graph.degree("A") == 2

    def test_absent_vertex_degree(self):
        """Test an absent vertex has zero degree."""
        assert PriorityGraph().degree("nope") == 0


class TestFactory:
    """Test construction through the factory."""

    def test_factory_creates_fresh_graphs(self):
        """Test each call yields a new empty graph."""
        create = PriorityGraph.factory()
        first = create()
        second = create()
        first.add_vertex("A")

        assert isinstance(first, PriorityGraph)
        assert first is not second
        assert second.vertex_count() == 0

    def test_satisfies_contract(self):
        """Test the graph structurally satisfies the capability contract."""
        assert isinstance(PriorityGraph(), DirectedGraph)
