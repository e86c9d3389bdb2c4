"""Exception types raised by the heap-backed graph and its algorithms.

Absence (a missing vertex, a missing edge, an empty heap) is signalled by
queries returning ``False``, ``None`` or an empty list. Only the strict heap
accessors ``MinHeap.element`` and ``MinHeap.remove_min`` raise on an empty heap.
"""


class GraphError(Exception):
    """Base class for all errors raised by heapgraph."""

    def __init__(self, message: str):
        """Initialize the exception with a descriptive message.

        Args:
            message: Description of the error
        """
        super().__init__(message)
        self.message = message


class InvalidArgumentError(GraphError, ValueError):
    """Raised for ``None`` or structurally invalid input.

    Examples are a ``None`` vertex or edge, a request for an undirected edge,
    or a topological sort started from a vertex the graph does not contain.
    """


class CycleDetectedError(GraphError):
    """Exception raised when a cycle is detected during a topological sort.

    A cycle means no ordering can place every vertex before all of its
    successors, so the sort is aborted without a partial result.
    """

    def __init__(self, message: str, cycle: list | None = None):
        """Initialize the exception with a message and the offending path.

        Args:
            message: Description of the cycle detection error
            cycle: Vertices along the cycle, first and last being the same vertex
        """
        super().__init__(message)
        self.cycle = list(cycle) if cycle else []


class UnsupportedOperationError(GraphError, NotImplementedError):
    """Raised by bulk collection operations the min-heap does not support."""


class IteratorStateError(GraphError, RuntimeError):
    """Raised when a heap iterator's ``remove()`` is called out of sequence."""


class EmptyHeapError(GraphError, IndexError):
    """Raised by the strict heap accessors when the heap holds no elements."""


class GraphFormatError(GraphError, ValueError):
    """Raised when a graph description file cannot be parsed."""

    def __init__(self, message: str, line_number: int | None = None):
        """Initialize the exception with a message and source line.

        Args:
            message: Description of the format problem
            line_number: 1-based line number where the problem was found
        """
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
