"""Readers that build graphs from external descriptions."""

from heapgraph.io.graph_loader import GraphLoader, load_graph

__all__ = ["GraphLoader", "load_graph"]
