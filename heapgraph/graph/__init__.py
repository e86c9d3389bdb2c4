"""Graph module for heap-backed adjacency storage and topological sorting.

This module provides a directed graph whose outgoing edges live in per-vertex
min-heaps, the heap itself, a deterministic depth-first topological sort and a
structural validator.
"""

from heapgraph.graph.contract import DirectedGraph, EdgeType, Endpoints
from heapgraph.graph.exceptions import (
    CycleDetectedError,
    EmptyHeapError,
    GraphError,
    GraphFormatError,
    InvalidArgumentError,
    IteratorStateError,
    UnsupportedOperationError,
)
from heapgraph.graph.min_heap import MinHeap
from heapgraph.graph.priority_graph import PriorityGraph
from heapgraph.graph.priority_item import PriorityItem
from heapgraph.graph.topological_sort import topological_order, topological_sort
from heapgraph.graph.validator import GraphValidator, ValidationReport

__all__ = [
    "CycleDetectedError",
    "DirectedGraph",
    "EdgeType",
    "EmptyHeapError",
    "Endpoints",
    "GraphError",
    "GraphFormatError",
    "GraphValidator",
    "InvalidArgumentError",
    "IteratorStateError",
    "MinHeap",
    "PriorityGraph",
    "PriorityItem",
    "UnsupportedOperationError",
    "ValidationReport",
    "topological_order",
    "topological_sort",
]
