"""Capability contract shared by directed graph implementations.

Consumers such as the topological sort, the validator and the loader only
depend on the methods named by :class:`DirectedGraph`, so any structure that
provides them can be plugged in.
"""

from collections.abc import Callable, Hashable
from enum import Enum
from typing import Any, NamedTuple, Protocol, runtime_checkable


class EdgeType(Enum):
    """Kind of an edge. Only directed edges are ever stored."""

    DIRECTED = "directed"
    UNDIRECTED = "undirected"


class Endpoints(NamedTuple):
    """Source and destination vertex of a stored edge."""

    source: Any
    dest: Any


@runtime_checkable
class DirectedGraph(Protocol):
    """Operations a directed graph must offer to the rest of the package."""

    def vertices(self) -> list: ...

    def edges(self, edge_type: EdgeType | None = None) -> list: ...

    def vertex_count(self) -> int: ...

    def edge_count(self, edge_type: EdgeType | None = None) -> int: ...

    def contains_vertex(self, vertex: Hashable) -> bool: ...

    def contains_edge(self, edge: Any) -> bool: ...

    def add_vertex(self, vertex: Hashable) -> bool: ...

    def add_edge(
        self,
        edge: Any,
        source: Hashable,
        dest: Hashable,
        edge_type: EdgeType = EdgeType.DIRECTED,
    ) -> bool: ...

    def remove_vertex(self, vertex: Hashable) -> bool: ...

    def remove_edge(self, edge: Any) -> bool: ...

    def successors(self, vertex: Hashable) -> list: ...

    def predecessors(self, vertex: Hashable) -> list: ...

    def endpoints(self, edge: Any) -> Endpoints | None: ...

    def source(self, edge: Any) -> Any: ...

    def dest(self, edge: Any) -> Any: ...

    def edge_type(self, edge: Any) -> EdgeType: ...

    @classmethod
    def factory(cls) -> Callable[[], "DirectedGraph"]: ...
