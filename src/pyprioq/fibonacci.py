"""
Fibonacci heap with nodes stored in an index-addressed arena.

Nodes are integer slots into parallel arrays rather than objects holding
references to one another. Links (parent, child, left, right) are slot
indices with NIL marking an absent link. Every sibling ring, including the
root ring, is circular and doubly linked.

Insertion is O(1); extract_min is amortized O(log n). Trees are only merged
(consolidated) during extract_min.
"""

from __future__ import annotations

import logging
from typing import Generic, Iterator, Optional, TypeVar

import numpy as np

from .comparators import Comparator, natural_order
from .exceptions import EmptyHeapError

K = TypeVar("K")

NIL = -1

logger = logging.getLogger(__name__)


class FibonacciHeap(Generic[K]):
    """
    Unbounded min-heap over a caller-supplied comparator.

    The minimum is the smallest key under the comparator; pass
    ``reverse_order`` to extract maxima instead.
    """

    def __init__(self, comparator: Comparator[K] = natural_order, initial_slots: int = 16):
        """
        Initialize an empty heap.

        Args:
            comparator: Three-way comparison over keys
            initial_slots: Arena slots to allocate up front; the arena
                doubles when it runs out
        """
        self._comparator = comparator
        self._initial_slots = max(1, initial_slots)
        self._allocate(self._initial_slots)

    def _allocate(self, n: int) -> None:
        self._keys: list[Optional[K]] = [None] * n
        self._parent = np.full(n, NIL, dtype=np.int64)
        self._child = np.full(n, NIL, dtype=np.int64)
        self._left = np.full(n, NIL, dtype=np.int64)
        self._right = np.full(n, NIL, dtype=np.int64)
        self._degree = np.zeros(n, dtype=np.int64)
        self._mark = np.zeros(n, dtype=bool)
        self._free = list(range(n - 1, -1, -1))
        self._min = NIL
        self._n = 0

    def _grow(self) -> None:
        old = len(self._keys)
        extra = old
        self._keys.extend([None] * extra)
        self._parent = np.concatenate([self._parent, np.full(extra, NIL, dtype=np.int64)])
        self._child = np.concatenate([self._child, np.full(extra, NIL, dtype=np.int64)])
        self._left = np.concatenate([self._left, np.full(extra, NIL, dtype=np.int64)])
        self._right = np.concatenate([self._right, np.full(extra, NIL, dtype=np.int64)])
        self._degree = np.concatenate([self._degree, np.zeros(extra, dtype=np.int64)])
        self._mark = np.concatenate([self._mark, np.zeros(extra, dtype=bool)])
        self._free.extend(range(old + extra - 1, old - 1, -1))

    def _new_node(self, key: K) -> int:
        """Take a free slot and make it a singleton ring holding key."""
        if not self._free:
            self._grow()
        i = self._free.pop()
        self._keys[i] = key
        self._parent[i] = NIL
        self._child[i] = NIL
        self._left[i] = i
        self._right[i] = i
        self._degree[i] = 0
        self._mark[i] = False
        return i

    def _release(self, i: int) -> None:
        self._keys[i] = None
        self._left[i] = NIL
        self._right[i] = NIL
        self._free.append(i)

    # Public API

    def insert(self, key: K) -> None:
        """
        Insert a key into the root ring.

        Args:
            key: Key to insert
        """
        i = self._new_node(key)
        if self._min == NIL:
            self._min = i
        else:
            self._splice(self._min, i)
            if self._compare(i, self._min) < 0:
                self._min = i
        self._n += 1

    def extract_min(self) -> K:
        """
        Remove and return the minimum key.

        Returns:
            Smallest key under the comparator

        Raises:
            EmptyHeapError: If the heap is empty
        """
        if self._min == NIL:
            raise EmptyHeapError("Heap is empty, cannot extract minimum")

        z = self._min
        if self._child[z] != NIL:
            for x in self._ring(int(self._child[z])):
                self._parent[x] = NIL
                self._mark[x] = False
                self._left[x] = x
                self._right[x] = x
                self._splice(z, x)
            self._child[z] = NIL
            self._degree[z] = 0

        if self._right[z] == z:
            self._min = NIL
        else:
            self._min = int(self._right[z])
            self._unlink(z)
            self._consolidate()

        key = self._keys[z]
        self._release(z)
        self._n -= 1
        return key

    def minimum(self) -> K:
        """
        Get the minimum key without removing it.

        Raises:
            EmptyHeapError: If the heap is empty
        """
        if self._min == NIL:
            raise EmptyHeapError("Heap is empty")
        return self._keys[self._min]

    def is_empty(self) -> bool:
        return self._min == NIL

    def size(self) -> int:
        return self._n

    def __len__(self) -> int:
        return self._n

    def __bool__(self) -> bool:
        return self._n > 0

    def clear(self) -> None:
        """Remove all keys and shrink the arena back to its initial size."""
        self._allocate(self._initial_slots)

    def is_heap(self) -> bool:
        """
        Verify ring linkage, parent links, degrees and heap order (for testing).

        Returns:
            True if the heap is in a valid state
        """
        if self._min == NIL:
            return self._n == 0

        seen = 0
        roots = self._ring(self._min)
        for r in roots:
            if self._parent[r] != NIL or self._compare(r, self._min) < 0:
                return False
        stack = list(roots)
        while stack:
            i = stack.pop()
            seen += 1
            if self._left[self._right[i]] != i or self._right[self._left[i]] != i:
                return False
            c = int(self._child[i])
            children = self._ring(c) if c != NIL else []
            if len(children) != self._degree[i]:
                return False
            for x in children:
                if self._parent[x] != i or self._compare(x, i) < 0:
                    return False
            stack.extend(children)
        return seen == self._n

    def __repr__(self) -> str:
        return f"FibonacciHeap(size={self._n})"

    # Internals

    def _compare(self, i: int, j: int) -> int:
        return self._comparator(self._keys[i], self._keys[j])

    def _ring(self, start: int) -> list[int]:
        """Slots of the ring containing start, beginning at start."""
        return list(self._walk(start))

    def _walk(self, start: int) -> Iterator[int]:
        i = start
        while True:
            yield i
            i = int(self._right[i])
            if i == start:
                break

    def _splice(self, a: int, b: int) -> None:
        """Insert singleton b into a's ring, immediately left of a."""
        self._right[b] = a
        self._left[b] = self._left[a]
        self._right[self._left[a]] = b
        self._left[a] = b

    def _unlink(self, i: int) -> None:
        """Detach i from its ring, leaving it a singleton."""
        self._right[self._left[i]] = self._right[i]
        self._left[self._right[i]] = self._left[i]
        self._left[i] = i
        self._right[i] = i

    def _link(self, child: int, parent: int) -> None:
        """Make root child a child of root parent."""
        self._left[child] = child
        self._right[child] = child
        if self._child[parent] == NIL:
            self._child[parent] = child
        else:
            self._splice(int(self._child[parent]), child)
        self._parent[child] = parent
        self._degree[parent] += 1
        self._mark[child] = False

    def _consolidate(self) -> None:
        """Merge roots of equal degree, then rebuild the root ring."""
        roots = self._ring(self._min)
        by_degree: dict[int, int] = {}
        for x in roots:
            d = int(self._degree[x])
            while d in by_degree:
                y = by_degree.pop(d)
                if self._compare(x, y) > 0:
                    x, y = y, x
                self._link(y, x)
                d += 1
            by_degree[d] = x

        self._min = NIL
        for x in by_degree.values():
            self._left[x] = x
            self._right[x] = x
            if self._min == NIL:
                self._min = x
            else:
                self._splice(self._min, x)
                if self._compare(x, self._min) < 0:
                    self._min = x
        logger.debug("consolidated %d roots into %d", len(roots), len(by_degree))
