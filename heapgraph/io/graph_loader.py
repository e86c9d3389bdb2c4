"""Loader for line-oriented graph descriptions.

The format is::

    3            <- number of vertices N
    A            <- N vertex names, one per line
    B
    C
    2            <- number of edges M
    A,B,4        <- M lines of source,destination,priority
    B,C,1

Vertices are added in file order, then every edge through
:meth:`PriorityGraph.add_edge`. Edges the graph refuses (unknown endpoint or a
second edge between the same pair) are skipped with a warning.
"""

from collections.abc import Iterable
from pathlib import Path

import structlog

from heapgraph.graph.exceptions import GraphFormatError
from heapgraph.graph.min_heap import DEFAULT_INITIAL_CAPACITY
from heapgraph.graph.priority_graph import PriorityGraph
from heapgraph.graph.priority_item import PriorityItem

logger = structlog.get_logger(__name__)

EDGE_FIELD_COUNT = 3


class GraphLoader:
    """Parser for graph description files.

    Example:
        >>> loader = GraphLoader()
        >>> graph = loader.parse(["2", "A", "B", "1", "A,B,3"])
        >>> graph.successors("A")
        ['B']
    """

    def __init__(
        self,
        delimiter: str = ",",
        heap_initial_capacity: int = DEFAULT_INITIAL_CAPACITY,
    ):
        """Initialize the loader.

        Args:
            delimiter: Separator between the fields of an edge line
            heap_initial_capacity: Adjacency heap capacity for created graphs
        """
        if not delimiter:
            msg = "Delimiter cannot be empty"
            raise ValueError(msg)

        self.delimiter = delimiter
        self.heap_initial_capacity = heap_initial_capacity

    def load(self, path: str | Path) -> PriorityGraph[str]:
        """Read and parse a graph description file.

        Args:
            path: Path to the description file

        Returns:
            The graph described by the file

        Raises:
            FileNotFoundError: If the file does not exist
            GraphFormatError: If the file content is malformed
        """
        graph_path = Path(path)
        if not graph_path.exists():
            msg = f"Graph file not found: {graph_path}"
            raise FileNotFoundError(msg)

        logger.info("loading_graph_file", path=str(graph_path))

        with graph_path.open(encoding="utf-8") as f:
            graph = self.parse(f)

        logger.info(
            "graph_file_loaded",
            path=str(graph_path),
            vertex_count=graph.vertex_count(),
            edge_count=graph.edge_count(),
        )
        return graph

    def parse(self, lines: Iterable[str]) -> PriorityGraph[str]:
        """Build a graph from the lines of a description.

        Args:
            lines: Description lines, with or without trailing newlines

        Returns:
            The described graph

        Raises:
            GraphFormatError: If a count is not a non-negative integer, a line
                is missing, an edge line has the wrong number of fields, or a
                priority is not an integer
        """
        graph: PriorityGraph[str] = PriorityGraph(self.heap_initial_capacity)
        numbered = enumerate((line.strip() for line in lines), 1)

        vertex_count = self._read_count(numbered, "vertex count")
        for _ in range(vertex_count):
            line_number, name = self._next_line(numbered, "vertex name")
            if not name:
                msg = "Vertex name cannot be empty"
                raise GraphFormatError(msg, line_number)
            if not graph.add_vertex(name):
                logger.warning("duplicate_vertex_ignored", vertex=name, line=line_number)

        edge_count = self._read_count(numbered, "edge count")
        for _ in range(edge_count):
            line_number, text = self._next_line(numbered, "edge")
            source, dest, priority = self._parse_edge(text, line_number)
            if not graph.add_edge(PriorityItem(dest, priority), source, dest):
                logger.warning(
                    "edge_rejected",
                    source=source,
                    dest=dest,
                    priority=priority,
                    line=line_number,
                )

        for line_number, text in numbered:
            if text:
                msg = f"Unexpected content after the last edge: {text!r}"
                raise GraphFormatError(msg, line_number)

        return graph

    def _parse_edge(self, text: str, line_number: int) -> tuple[str, str, int]:
        fields = [part.strip() for part in text.split(self.delimiter)]
        if len(fields) != EDGE_FIELD_COUNT:
            msg = (
                f"Edge must have {EDGE_FIELD_COUNT} fields "
                f"(source{self.delimiter}destination{self.delimiter}priority), got {text!r}"
            )
            raise GraphFormatError(msg, line_number)

        source, dest, raw_priority = fields
        try:
            priority = int(raw_priority)
        except ValueError as e:
            msg = f"Priority must be an integer, got {raw_priority!r}"
            raise GraphFormatError(msg, line_number) from e

        return source, dest, priority

    def _read_count(self, numbered, what: str) -> int:
        line_number, text = self._next_line(numbered, what)
        try:
            count = int(text)
        except ValueError as e:
            msg = f"Expected {what} as an integer, got {text!r}"
            raise GraphFormatError(msg, line_number) from e

        if count < 0:
            msg = f"{what.capitalize()} cannot be negative, got {count}"
            raise GraphFormatError(msg, line_number)
        return count

    @staticmethod
    def _next_line(numbered, what: str) -> tuple[int, str]:
        try:
            return next(numbered)
        except StopIteration:
            msg = f"Unexpected end of input while reading {what}"
            raise GraphFormatError(msg) from None


def load_graph(
    path: str | Path,
    delimiter: str = ",",
    heap_initial_capacity: int = DEFAULT_INITIAL_CAPACITY,
) -> PriorityGraph[str]:
    """Load a graph description file with a default-configured loader."""
    return GraphLoader(delimiter, heap_initial_capacity).load(path)
