"""Shared fixtures for the heapgraph test suite."""

import logging

import pytest
import structlog

from heapgraph.graph.priority_graph import PriorityGraph
from heapgraph.graph.priority_item import PriorityItem


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore structlog and stdlib logging defaults after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def abc_graph() -> PriorityGraph:
    """Graph with vertices A, B, C and edges A->C (1), A->B (9)."""
    graph = PriorityGraph()
    for vertex in ("A", "B", "C"):
        graph.add_vertex(vertex)
    graph.add_edge(PriorityItem("C", 1), "A", "C")
    graph.add_edge(PriorityItem("B", 9), "A", "B")
    return graph


@pytest.fixture
def graph_file(tmp_path):
    """Factory writing a graph description file and returning its path."""

    def _write(content: str, name: str = "graph.txt"):
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write
