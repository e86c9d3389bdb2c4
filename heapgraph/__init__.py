"""Directed graphs with heap-ordered adjacency and deterministic topological sort."""

from heapgraph.graph import (
    CycleDetectedError,
    EdgeType,
    GraphError,
    InvalidArgumentError,
    MinHeap,
    PriorityGraph,
    PriorityItem,
    topological_order,
    topological_sort,
)

__version__ = "0.1.0"

__all__ = [
    "CycleDetectedError",
    "EdgeType",
    "GraphError",
    "InvalidArgumentError",
    "MinHeap",
    "PriorityGraph",
    "PriorityItem",
    "__version__",
    "topological_order",
    "topological_sort",
]
