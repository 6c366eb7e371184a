"""
pyprioq: bounded array heaps and an amortized Fibonacci heap.

Bounded binary and d-ary priority queues with overflow tracking.
"""

import logging

from .comparators import Comparator, natural_order, reverse_order, comparing, as_sort_key
from .exceptions import PQException, InvalidArgumentError, EmptyQueueError, EmptyHeapError
from .pqueue import PriorityQueue, RemovalStrategy, four_ary_heap, four_ary_heap_with_snake
from .fibonacci import FibonacciHeap

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Comparator",
    "natural_order",
    "reverse_order",
    "comparing",
    "as_sort_key",
    "PQException",
    "InvalidArgumentError",
    "EmptyQueueError",
    "EmptyHeapError",
    "PriorityQueue",
    "RemovalStrategy",
    "four_ary_heap",
    "four_ary_heap_with_snake",
    "FibonacciHeap",
]
