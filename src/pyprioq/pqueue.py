"""
Bounded priority queue backed by an array heap.

The queue follows Sedgewick and Wayne's binary heap with a few changes:
- the root can live at any offset into the backing array (root at 0, 1, 2, ...)
- the heap can be binary or d-ary; the arity is a constructor argument
- it can serve as a max-queue or a min-queue over a caller-supplied comparator
- removal can use a plain sink or Floyd's sink-then-swim ("snake")
- capacity is fixed; giving to a full queue displaces the root and records
  the highest-priority element ever displaced that way (the "spill")

The insert and remove operations are called ``give`` and ``take``;
``insert`` and ``remove`` are aliases.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Generic, Iterator, Optional, Sequence, TypeVar

import numpy as np

from .comparators import Comparator, natural_order
from .exceptions import EmptyQueueError, InvalidArgumentError

K = TypeVar("K")

logger = logging.getLogger(__name__)


class RemovalStrategy(Enum):
    """How heap order is restored from the root after ``take``."""

    SINK = "sink"
    SNAKE = "snake"


class PriorityQueue(Generic[K]):
    """
    Fixed-capacity priority queue over an array heap.

    The backing array has ``capacity + root_offset`` slots. Slots before the
    root offset are reserved and never hold a key. Slots past the last live
    element are kept at None so removed keys are not retained.
    """

    def __init__(
        self,
        capacity: int,
        root_offset: int = 1,
        max_heap: bool = True,
        comparator: Comparator[K] = natural_order,
        snake: bool = False,
        arity: int = 2,
        removal: Optional[RemovalStrategy] = None,
    ):
        """
        Initialize priority queue.

        Args:
            capacity: Maximum number of live elements
            root_offset: Index of the root element in the backing array
            max_heap: True for a max-queue, False for a min-queue
            comparator: Three-way comparison over keys
            snake: Use sink-then-swim on removal (ignored if removal is given)
            arity: Number of children per node (2 for a binary heap)
            removal: Explicit removal strategy

        Raises:
            InvalidArgumentError: If capacity or root_offset is negative,
                or arity is less than 2
        """
        if capacity < 0:
            raise InvalidArgumentError(f"capacity must be non-negative, got {capacity}")
        if root_offset < 0:
            raise InvalidArgumentError(f"root_offset must be non-negative, got {root_offset}")
        if arity < 2:
            raise InvalidArgumentError(f"arity must be at least 2, got {arity}")

        if removal is None:
            removal = RemovalStrategy.SNAKE if snake else RemovalStrategy.SINK

        self._capacity = capacity
        self._first = root_offset
        self._max = max_heap
        self._comparator = comparator
        self._arity = arity
        self._removal = removal
        self._heap = np.full(capacity + root_offset, None, dtype=object)
        self._last = 0  # number of live elements
        self._spill: Optional[K] = None

    @classmethod
    def from_array(
        cls,
        array: Sequence[K],
        count: int,
        root_offset: int = 1,
        max_heap: bool = True,
        comparator: Comparator[K] = natural_order,
        snake: bool = False,
        arity: int = 2,
    ) -> "PriorityQueue[K]":
        """
        Build a queue over a pre-formed slot array.

        The array is laid out like the backing store: ``root_offset`` reserved
        slots followed by ``count`` live keys. Its length fixes the capacity.
        The keys are copied and heapified, so they need not already be in
        heap order.

        Args:
            array: Slot array of length ``capacity + root_offset``
            count: Number of live keys following the reserved slots

        Returns:
            New priority queue holding the ``count`` keys
        """
        capacity = len(array) - root_offset
        if capacity < 0:
            raise InvalidArgumentError(
                f"array of length {len(array)} is shorter than root_offset {root_offset}"
            )
        if not 0 <= count <= capacity:
            raise InvalidArgumentError(f"count must be in [0, {capacity}], got {count}")

        queue = cls(
            capacity,
            root_offset=root_offset,
            max_heap=max_heap,
            comparator=comparator,
            snake=snake,
            arity=arity,
        )
        for i in range(root_offset, root_offset + count):
            queue._heap[i] = array[i]
        queue._last = count
        queue._heapify()
        return queue

    # Queries

    @property
    def capacity(self) -> int:
        """Maximum number of live elements."""
        return self._capacity

    @property
    def max_heap(self) -> bool:
        return self._max

    @property
    def removal(self) -> RemovalStrategy:
        return self._removal

    @property
    def spill(self) -> Optional[K]:
        """Highest-priority element ever displaced by overflow, or None."""
        return self._spill

    def highest_priority_spill(self) -> Optional[K]:
        return self._spill

    def is_empty(self) -> bool:
        """Check if the queue holds no elements."""
        return self._last == 0

    def size(self) -> int:
        """Number of live elements."""
        return self._last

    def __len__(self) -> int:
        return self._last

    def __bool__(self) -> bool:
        return self._last > 0

    def top(self) -> Optional[K]:
        """Get the root element without removing it, or None if empty."""
        if self._last == 0:
            return None
        return self._heap[self._first]

    def peek(self, index: int) -> Optional[K]:
        """Raw contents of a backing slot. For diagnostics only."""
        return self._heap[index]

    # Mutators

    def give(self, key: K) -> None:
        """
        Insert a key.

        If the queue is full, the root is displaced instead of growing: the
        new key takes the root slot and sinks into place, and the old root
        becomes a candidate for the spill record.

        Args:
            key: Key to insert
        """
        if self._last < self._capacity:
            self._last += 1
            k = self._first + self._last - 1
            self._heap[k] = key
            self._swim(k)
            return

        if self._capacity == 0:
            spilled = key
        else:
            spilled = self._heap[self._first]
            self._heap[self._first] = key
            self._sink(self._first)
        logger.debug("queue full at capacity %d, displaced %r", self._capacity, spilled)
        self._record_spill(spilled)

    insert = give

    def take(self) -> K:
        """
        Remove and return the root element.

        Returns:
            The maximum element for a max-queue, otherwise the minimum

        Raises:
            EmptyQueueError: If the queue is empty
        """
        if self._last == 0:
            raise EmptyQueueError("Priority queue is empty")
        first = self._first
        result = self._heap[first]
        last_index = first + self._last - 1
        self._swap(first, last_index)
        self._last -= 1
        self._heap[last_index] = None
        if self._last > 0:
            if self._removal is RemovalStrategy.SNAKE:
                self._snake(first)
            else:
                self._sink(first)
        return result

    remove = take

    def is_heap(self) -> bool:
        """
        Verify the heap-order invariant (for testing).

        Returns:
            True if no live element outranks its parent
        """
        first = self._first
        for k in range(first + 1, first + self._last):
            if self._outranks(k, self._parent(k)):
                return False
        return True

    def __iter__(self) -> Iterator[K]:
        """
        Iterate over a snapshot of the live elements.

        Only the first element (the root) has a defined position; the rest
        come in backing-array order.
        """
        first = self._first
        return iter(self._heap[first:first + self._last].tolist())

    def __repr__(self) -> str:
        kind = "max" if self._max else "min"
        return (
            f"PriorityQueue({kind}, size={self._last}, capacity={self._capacity}, "
            f"arity={self._arity}, removal={self._removal.value})"
        )

    # Heap internals

    def _parent(self, k: int) -> int:
        """Index of the parent of the element at index k."""
        return (k - self._first - 1) // self._arity + self._first

    def _first_child(self, k: int) -> int:
        """Index of the first child of k; siblings follow consecutively."""
        return self._arity * (k - self._first) + self._first + 1

    def _better(self, a: K, b: K) -> bool:
        """True if key a has strictly higher priority than key b."""
        c = self._comparator(a, b)
        return c > 0 if self._max else c < 0

    def _outranks(self, i: int, j: int) -> bool:
        return self._better(self._heap[i], self._heap[j])

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]

    def _swim(self, k: int) -> None:
        """Swim the element at index k up."""
        while k > self._first:
            p = self._parent(k)
            if not self._outranks(k, p):
                break
            self._swap(k, p)
            k = p

    def _sink(self, k: int) -> int:
        """
        Sink the element at index k down.

        Returns:
            Index where the element came to rest
        """
        end = self._first + self._last
        while True:
            c = self._first_child(k)
            if c >= end:
                break
            best = c
            for j in range(c + 1, min(c + self._arity, end)):
                if self._outranks(j, best):
                    best = j
            if not self._outranks(best, k):
                break
            self._swap(k, best)
            k = best
        return k

    def _snake(self, k: int) -> None:
        """Sink the element at k, then swim whatever rests there back up."""
        self._swim(self._sink(k))

    def _heapify(self) -> None:
        """Restore heap order over all live elements in O(n)."""
        if self._last < 2:
            return
        last_index = self._first + self._last - 1
        for k in range(self._parent(last_index), self._first - 1, -1):
            self._sink(k)

    def _record_spill(self, spilled: K) -> None:
        if self._spill is None or self._better(spilled, self._spill):
            logger.debug("highest priority spill %r -> %r", self._spill, spilled)
            self._spill = spilled


def four_ary_heap(
    capacity: int,
    max_heap: bool = True,
    comparator: Comparator[K] = natural_order,
    snake: bool = False,
) -> PriorityQueue[K]:
    """
    Create a four-ary priority queue with its root at index 1.

    Args:
        capacity: Maximum number of live elements
        max_heap: True for a max-queue, False for a min-queue
        comparator: Three-way comparison over keys
        snake: Use sink-then-swim on removal

    Returns:
        New priority queue
    """
    return PriorityQueue(
        capacity,
        root_offset=1,
        max_heap=max_heap,
        comparator=comparator,
        snake=snake,
        arity=4,
    )


def four_ary_heap_with_snake(
    capacity: int,
    max_heap: bool = True,
    comparator: Comparator[K] = natural_order,
) -> PriorityQueue[K]:
    """Create a four-ary priority queue that removes with sink-then-swim."""
    return four_ary_heap(capacity, max_heap=max_heap, comparator=comparator, snake=True)
