"""Graph validation with detailed cycle detection and reporting.

This module checks a priority graph against the invariants its operations are
supposed to maintain (heap order in every adjacency heap, no dangling edges,
no parallel edges), reports cycles with their paths, and renders the graph as
Mermaid or Graphviz text.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from heapgraph.graph.priority_graph import PriorityGraph

logger = structlog.get_logger(__name__)


@dataclass
class ValidationReport:
    """Report containing validation results for a priority graph.

    Attributes:
        is_valid: Whether the graph passed all validation checks
        errors: List of error messages (critical issues)
        warnings: List of warning messages (potential issues)
        cycles: List of detected cycles, each a list of vertices
        heap_violations: Vertices whose adjacency heap breaks heap order
        dangling_edges: (source, target) pairs whose target is not a vertex
        parallel_edges: (source, target) pairs stored more than once
        isolated_vertices: Vertices with neither incoming nor outgoing edges
    """

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    cycles: list[list[Any]] = field(default_factory=list)
    heap_violations: list[Any] = field(default_factory=list)
    dangling_edges: list[tuple[Any, Any]] = field(default_factory=list)
    parallel_edges: list[tuple[Any, Any]] = field(default_factory=list)
    isolated_vertices: list[Any] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error message and mark validation as failed."""
        self.errors.append(message)
        self.is_valid = False
        logger.error("validation_error", message=message)

    def add_warning(self, message: str) -> None:
        """Add a warning message without failing validation."""
        self.warnings.append(message)
        logger.warning("validation_warning", message=message)

    def summary(self) -> str:
        """Generate a human-readable summary of the validation report."""
        lines = []
        lines.append(f"Validation Status: {'PASS' if self.is_valid else 'FAIL'}")
        lines.append(f"Errors: {len(self.errors)}")
        lines.append(f"Warnings: {len(self.warnings)}")
        lines.append(f"Cycles: {len(self.cycles)}")
        lines.append(f"Heap Violations: {len(self.heap_violations)}")
        lines.append(f"Dangling Edges: {len(self.dangling_edges)}")
        lines.append(f"Parallel Edges: {len(self.parallel_edges)}")
        lines.append(f"Isolated Vertices: {len(self.isolated_vertices)}")

        if self.errors:
            lines.append("\nErrors:")
            lines.extend(f"  - {error}" for error in self.errors)

        if self.warnings:
            lines.append("\nWarnings:")
            lines.extend(f"  - {warning}" for warning in self.warnings)

        if self.cycles:
            lines.append("\nCycles Detected:")
            for i, cycle in enumerate(self.cycles, 1):
                cycle_path = " -> ".join(str(v) for v in cycle)
                lines.append(f"  {i}. {cycle_path}")

        return "\n".join(lines)


class GraphValidator:
    """Validator for priority graphs with detailed error reporting.

    This class provides:
    - Heap order checks for every adjacency heap
    - Dangling and parallel edge detection
    - Cycle detection with complete path information
    - Isolated vertex detection
    - Graph visualization generation
    """

    def validate(self, graph: "PriorityGraph") -> ValidationReport:
        """Validate a priority graph and generate a detailed report.

        Args:
            graph: The PriorityGraph to validate

        Returns:
            ValidationReport containing all validation results
        """
        logger.info(
            "starting_graph_validation",
            vertex_count=graph.vertex_count(),
            edge_count=graph.edge_count(),
        )

        report = ValidationReport()

        for vertex in graph.vertices():
            if not self._heap_ordered(graph, vertex):
                report.heap_violations.append(vertex)
                report.add_error(f"Adjacency heap of {vertex} violates heap order")

        dangling = self._check_dangling_edges(graph)
        if dangling:
            report.dangling_edges = dangling
            for source, target in dangling:
                report.add_error(f"Edge {source} -> {target} targets a missing vertex")

        parallel = self._check_parallel_edges(graph)
        if parallel:
            report.parallel_edges = parallel
            for source, target in parallel:
                report.add_error(f"Parallel edges stored for {source} -> {target}")

        cycles = self._detect_cycles(graph)
        if cycles:
            report.cycles = cycles
            for cycle in cycles:
                cycle_path = " -> ".join(str(v) for v in cycle)
                report.add_error(f"Cycle detected: {cycle_path}")

        isolated = [
            vertex
            for vertex in graph.vertices()
            if not graph.successors(vertex) and not graph.predecessors(vertex)
        ]
        if isolated and graph.vertex_count() > 1:
            report.isolated_vertices = isolated
            isolated_str = ", ".join(str(v) for v in isolated)
            report.add_warning(f"Isolated vertices with no edges: {isolated_str}")

        logger.info(
            "graph_validation_complete",
            is_valid=report.is_valid,
            error_count=len(report.errors),
            warning_count=len(report.warnings),
        )

        return report

    @staticmethod
    def _heap_ordered(graph: "PriorityGraph", vertex: Any) -> bool:
        """Check that no slot of the vertex's heap is smaller than its parent."""
        heap = graph.adjacency_heap(vertex)
        slots = heap.to_list() if heap is not None else []
        return all(
            slots[(index - 1) // 2].priority <= slots[index].priority
            for index in range(1, len(slots))
        )

    @staticmethod
    def _check_dangling_edges(graph: "PriorityGraph") -> list[tuple[Any, Any]]:
        dangling = []
        for vertex in graph.vertices():
            for edge in graph.adjacency_heap(vertex):
                if not graph.contains_vertex(edge.target):
                    dangling.append((vertex, edge.target))

        if dangling:
            logger.debug("dangling_edges_found", count=len(dangling))

        return dangling

    @staticmethod
    def _check_parallel_edges(graph: "PriorityGraph") -> list[tuple[Any, Any]]:
        parallel = []
        for vertex in graph.vertices():
            seen: set[Any] = set()
            for edge in graph.adjacency_heap(vertex):
                if edge.target in seen:
                    parallel.append((vertex, edge.target))
                seen.add(edge.target)
        return parallel

    def _detect_cycles(self, graph: "PriorityGraph") -> list[list[Any]]:
        """Detect cycles in the graph using DFS.

        At most one cycle is reported per depth-first tree. Vertices reached
        by an earlier tree are not searched again.

        Args:
            graph: The graph to search

        Returns:
            List of cycles, where each cycle is a list of vertices forming the cycle
        """
        visited: set[Any] = set()
        cycles = []

        for vertex in graph.vertices():
            if vertex not in visited:
                cycle = self._find_cycle(vertex, graph, visited)
                if cycle:
                    cycles.append(cycle)

        return cycles

    @staticmethod
    def _find_cycle(root: Any, graph: "PriorityGraph", visited: set[Any]) -> list[Any] | None:
        """Walk the depth-first tree under ``root`` and return the first cycle path.

        The walk keeps an explicit stack of successor iterators, one per vertex
        on the current path, so long chains do not recurse.

        Args:
            root: Vertex the tree starts from
            graph: The graph being searched
            visited: Vertices reached by any tree so far; updated in place

        Returns:
            List representing the cycle path if found, None otherwise
        """
        visited.add(root)
        path = [root]
        on_path = {root}
        stack = [iter(graph.successors(root))]

        while stack:
            for successor in stack[-1]:
                if successor in on_path:
                    return [*path[path.index(successor) :], successor]
                if successor not in visited:
                    visited.add(successor)
                    path.append(successor)
                    on_path.add(successor)
                    stack.append(iter(graph.successors(successor)))
                    break
            else:
                # Backtrack
                stack.pop()
                on_path.discard(path.pop())

        return None

    def generate_visualization(
        self,
        graph: "PriorityGraph",
        output_format: str = "mermaid",
    ) -> str:
        """Generate a visual representation of the graph.

        Args:
            graph: The PriorityGraph to visualize
            output_format: Output format ('mermaid' or 'dot')

        Returns:
            String representation of the graph in the requested format

        Raises:
            ValueError: If an unsupported format is requested
        """
        output_format = output_format.lower().strip()

        if output_format == "mermaid":
            return self._generate_mermaid(graph)
        if output_format == "dot":
            return self._generate_graphviz(graph)
        error_msg = f"Unsupported format: {output_format}. Use 'mermaid' or 'dot'."
        raise ValueError(error_msg)

    @staticmethod
    def _sorted_edges(graph: "PriorityGraph", vertex: Any) -> list:
        return sorted(graph.adjacency_heap(vertex), key=lambda edge: str(edge.target))

    def _generate_mermaid(self, graph: "PriorityGraph") -> str:
        """Generate a Mermaid flowchart representation.

        Args:
            graph: The graph to render

        Returns:
            Mermaid flowchart syntax
        """
        lines = ["graph TD"]

        if not graph.vertex_count():
            lines.append("    Empty[Empty Graph]")
            return "\n".join(lines)

        ids = {vertex: f"v{i}" for i, vertex in enumerate(graph.vertices())}

        # Mermaid ids must be plain identifiers, so labels carry the names
        for vertex, node_id in ids.items():
            label = str(vertex).replace('"', "#quot;")
            lines.append(f'    {node_id}["{label}"]')

        for vertex in graph.vertices():
            for edge in self._sorted_edges(graph, vertex):
                lines.append(f"    {ids[vertex]} -->|{edge.priority}| {ids[edge.target]}")

        return "\n".join(lines)

    def _generate_graphviz(self, graph: "PriorityGraph") -> str:
        """Generate a Graphviz DOT representation.

        Args:
            graph: The graph to render

        Returns:
            Graphviz DOT syntax
        """
        def escape_dot_string(s: Any) -> str:
            """Escape double quotes for DOT format."""
            return str(s).replace('"', '\\"')

        lines = ["digraph PriorityGraph {"]
        lines.append("    rankdir=LR;")
        lines.append("    node [shape=box, style=rounded];")

        if not graph.vertex_count():
            lines.append('    Empty [label="Empty Graph"];')
        else:
            lines.extend(f'    "{escape_dot_string(v)}";' for v in graph.vertices())

            for vertex in graph.vertices():
                source = escape_dot_string(vertex)
                lines.extend(
                    f'    "{source}" -> "{escape_dot_string(edge.target)}" '
                    f'[label="{edge.priority}"];'
                    for edge in self._sorted_edges(graph, vertex)
                )

        lines.append("}")
        return "\n".join(lines)
