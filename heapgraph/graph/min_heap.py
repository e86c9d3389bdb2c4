"""Array-backed binary min-heap with removal of arbitrary elements.

The heap keeps its elements in a backing list whose length is the current
capacity; only the first ``len(heap)`` slots are live. The capacity starts at
:data:`DEFAULT_INITIAL_CAPACITY` and doubles whenever an insert finds it full.

Besides the usual push/peek/pop, the heap supports removing any element equal
to a given value while keeping the heap invariant: every non-root slot holds
an element no smaller than its parent's.
"""

from collections.abc import Iterable
from typing import Any, Generic, TypeVar

import structlog

from heapgraph.graph.exceptions import (
    EmptyHeapError,
    InvalidArgumentError,
    IteratorStateError,
    UnsupportedOperationError,
)

logger = structlog.get_logger(__name__)

E = TypeVar("E")

DEFAULT_INITIAL_CAPACITY = 11


class MinHeap(Generic[E]):
    """Binary min-heap of orderable elements.

    Thread-safety:
        This class is NOT thread-safe. Do not mutate a heap while another
        iteration over it is in progress, except through the iterator's own
        ``remove()``.

    Example:
        >>> heap = MinHeap()
        >>> for value in (5, 3, 8, 1):
        ...     heap.push(value)
        >>> [heap.pop() for _ in range(len(heap))]
        [1, 3, 5, 8]
    """

    def __init__(self, initial_capacity: int = DEFAULT_INITIAL_CAPACITY):
        """Initialize an empty heap.

        Args:
            initial_capacity: Number of slots allocated up front (at least 1)

        Raises:
            InvalidArgumentError: If initial_capacity is smaller than 1
        """
        if initial_capacity < 1:
            msg = f"Initial capacity must be at least 1, got {initial_capacity}"
            raise InvalidArgumentError(msg)

        self._queue: list[E | None] = [None] * initial_capacity
        self._size = 0

    def copy(self) -> "MinHeap[E]":
        """Create a shallow copy with the same capacity and slot layout."""
        new_heap: MinHeap[E] = MinHeap(len(self._queue))
        new_heap._queue[: self._size] = self._queue[: self._size]
        new_heap._size = self._size
        return new_heap

    def push(self, element: E) -> bool:
        """Insert an element, growing the backing storage if it is full.

        Args:
            element: Element to insert

        Returns:
            Always True

        Raises:
            InvalidArgumentError: If element is None
        """
        if element is None:
            msg = "None elements are not allowed in MinHeap"
            raise InvalidArgumentError(msg)

        if self._size == len(self._queue):
            self._grow()

        self._queue[self._size] = element
        self._size += 1
        self._sift_up(self._size - 1)
        return True

    insert = push

    def peek(self) -> E | None:
        """Return the smallest element without removing it, or None if empty."""
        if self._size == 0:
            return None
        return self._queue[0]

    def pop(self) -> E | None:
        """Remove and return the smallest element, or None if empty."""
        if self._size == 0:
            return None

        result = self._queue[0]
        last = self._size - 1
        self._queue[0] = self._queue[last]
        self._queue[last] = None
        self._size = last
        self._sift_down(0)
        return result

    extract_min = pop

    def element(self) -> E:
        """Return the smallest element without removing it.

        Raises:
            EmptyHeapError: If the heap is empty
        """
        if self._size == 0:
            msg = "element() called on an empty MinHeap"
            raise EmptyHeapError(msg)
        return self._queue[0]

    def remove_min(self) -> E:
        """Remove and return the smallest element.

        Raises:
            EmptyHeapError: If the heap is empty
        """
        if self._size == 0:
            msg = "remove_min() called on an empty MinHeap"
            raise EmptyHeapError(msg)
        return self.pop()

    def remove(self, element: Any) -> bool:
        """Remove one element equal to ``element``, wherever it sits.

        Args:
            element: Value to look for (compared with ``==``)

        Returns:
            True if a matching element was removed, False otherwise
        """
        if element is None:
            return False

        for index in range(self._size):
            if self._queue[index] == element:
                self._remove_at(index)
                return True
        return False

    def __contains__(self, element: Any) -> bool:
        if element is None:
            return False
        return any(self._queue[index] == element for index in range(self._size))

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        """Check whether the heap holds no elements."""
        return self._size == 0

    @property
    def capacity(self) -> int:
        """Number of slots currently allocated."""
        return len(self._queue)

    def to_list(self) -> list[E]:
        """Return the live elements in physical (array) order."""
        return list(self._queue[: self._size])

    def __iter__(self) -> "HeapIterator[E]":
        return HeapIterator(self)

    def __repr__(self) -> str:
        return f"MinHeap({self.to_list()!r})"

    def contains_all(self, elements: Iterable[Any]) -> bool:
        msg = "MinHeap does not support contains_all"
        raise UnsupportedOperationError(msg)

    def add_all(self, elements: Iterable[E]) -> bool:
        msg = "MinHeap does not support add_all"
        raise UnsupportedOperationError(msg)

    def remove_all(self, elements: Iterable[Any]) -> bool:
        msg = "MinHeap does not support remove_all"
        raise UnsupportedOperationError(msg)

    def retain_all(self, elements: Iterable[Any]) -> bool:
        msg = "MinHeap does not support retain_all"
        raise UnsupportedOperationError(msg)

    def clear(self) -> None:
        msg = "MinHeap does not support clear"
        raise UnsupportedOperationError(msg)

    def _remove_at(self, index: int) -> None:
        """Remove the element in slot ``index`` and restore the invariant.

        The last element is moved into the vacated slot. Since it comes from an
        arbitrary position it may be smaller than the new parent or larger than
        the new children, so both sift directions are tried.
        """
        last = self._size - 1
        self._queue[index] = self._queue[last]
        self._queue[last] = None
        self._size = last

        if index < self._size:
            self._sift_down(index)
            self._sift_up(index)

    def _grow(self) -> None:
        new_capacity = len(self._queue) * 2
        self._queue.extend([None] * (new_capacity - len(self._queue)))
        logger.debug("min_heap_grown", capacity=new_capacity, size=self._size)

    def _sift_up(self, index: int) -> None:
        queue = self._queue
        while index > 0:
            parent = (index - 1) // 2
            if not queue[index] < queue[parent]:
                break
            queue[index], queue[parent] = queue[parent], queue[index]
            index = parent

    def _sift_down(self, index: int) -> None:
        queue = self._queue
        while index * 2 + 1 < self._size:
            left = index * 2 + 1
            right = left + 1
            smallest = left
            if right < self._size and queue[right] < queue[left]:
                smallest = right
            if not queue[smallest] < queue[index]:
                break
            queue[index], queue[smallest] = queue[smallest], queue[index]
            index = smallest


class HeapIterator(Generic[E]):
    """Live iterator over a heap's slots in physical order.

    ``remove()`` deletes the element most recently returned by ``next()``
    from the underlying heap, exactly as :meth:`MinHeap.remove` would, and
    steps back so the element moved into that slot is not skipped.
    """

    def __init__(self, heap: MinHeap[E]):
        self._heap = heap
        self._index = 0
        self._can_remove = False

    def __iter__(self) -> "HeapIterator[E]":
        return self

    def __next__(self) -> E:
        if self._index >= len(self._heap):
            raise StopIteration
        element = self._heap._queue[self._index]
        self._index += 1
        self._can_remove = True
        return element

    def remove(self) -> None:
        """Remove the last element yielded by this iterator.

        Raises:
            IteratorStateError: If next() has not been called since the last
                remove(), or the heap shrank underneath the iterator
        """
        if not self._can_remove or self._index > len(self._heap):
            msg = "remove() must follow a call to next()"
            raise IteratorStateError(msg)

        self._index -= 1
        self._heap._remove_at(self._index)
        self._can_remove = False
