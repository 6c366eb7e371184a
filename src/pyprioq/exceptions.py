"""Exceptions raised by the priority queues in this package."""


class PQException(Exception):
    """Base class for every error raised by pyprioq."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"{self.__class__.__name__}: {self.message}"


class InvalidArgumentError(PQException, ValueError):
    """A constructor argument is out of range (capacity, root offset, arity)."""


class EmptyQueueError(PQException, IndexError):
    """take() was called on an empty bounded priority queue."""


class EmptyHeapError(PQException, IndexError):
    """extract_min() or minimum() was called on an empty Fibonacci heap."""
