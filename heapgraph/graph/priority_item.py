"""Edge record stored in a vertex's adjacency heap."""

from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar

from heapgraph.graph.exceptions import InvalidArgumentError

V = TypeVar("V")


@dataclass(frozen=True)
class PriorityItem(Generic[V]):
    """An outgoing edge: the vertex it points at and its heap priority.

    The source vertex is not stored; it is implied by whichever adjacency heap
    holds the item. Items order by ``priority`` alone (ties are unresolved),
    while equality and hashing look at both fields.

    Attributes:
        target: Destination vertex, or None until the item is added to a graph
        priority: Integer key ordering the item inside its adjacency heap
    """

    target: V | None
    priority: int

    def __post_init__(self) -> None:
        if isinstance(self.priority, bool) or not isinstance(self.priority, int):
            msg = f"Priority must be an integer, got {self.priority!r}"
            raise InvalidArgumentError(msg)

    def with_target(self, target: V) -> "PriorityItem[V]":
        """Return a copy of this item pointing at ``target``."""
        return replace(self, target=target)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, PriorityItem):
            return NotImplemented
        return self.priority < other.priority

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, PriorityItem):
            return NotImplemented
        return self.priority <= other.priority

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, PriorityItem):
            return NotImplemented
        return self.priority > other.priority

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, PriorityItem):
            return NotImplemented
        return self.priority >= other.priority

    def __str__(self) -> str:
        return f"PriorityItem[target={self.target}, priority={self.priority}]"
