"""
Comparators used to order keys in the priority queues.

A comparator takes two keys and returns a negative number, zero or a positive
number when the first key is less than, equal to or greater than the second.
The queues never own or modify the comparator they are given.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, Protocol, TypeVar

K = TypeVar("K")
K_contra = TypeVar("K_contra", contravariant=True)


class Comparator(Protocol[K_contra]):
    """Interface for a three-way comparison function."""

    def __call__(self, a: K_contra, b: K_contra) -> int:
        ...


def natural_order(a: Any, b: Any) -> int:
    """Compare two keys with their own ``<`` and ``>`` operators."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def reverse_order(a: Any, b: Any) -> int:
    """Inverse of :func:`natural_order`."""
    return natural_order(b, a)


def comparing(key: Callable[[K], Any], reverse: bool = False) -> Comparator[K]:
    """
    Build a comparator that orders items by ``key(item)``.

    Args:
        key: Function extracting the sort key from an item
        reverse: If True, invert the resulting order

    Returns:
        Comparator over items
    """

    def compare(a: K, b: K) -> int:
        result = natural_order(key(a), key(b))
        return -result if reverse else result

    return compare


def as_sort_key(comparator: Comparator[K]) -> Callable[[K], Any]:
    """Adapt a comparator to a key function for ``sorted`` and ``SortedList``."""
    return cmp_to_key(comparator)
