"""
Fixed-depth lookahead over any iterator

Example:
    >>> it = Lookahead(iter([0, 1, 2]), 1)
    >>> it.ahead(0), it.ahead(1)
    (0, 1)
    >>> next(it), it.ahead(1)
    (0, 2)
    >>> next(it), next(it), it.ahead(0) is None
    (1, 2, True)
"""

from collections import deque
from typing import Deque, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")

_SENTINEL: object = object()


class Lookahead(Generic[T]):
    """
    Iterator adapter that keeps n+1 items buffered

    The first n+1 source items are pulled at construction. Every next()
    pops the front item and pulls one more from the source, so ahead(0)
    through ahead(n) stay available until the source runs dry.
    """

    def __init__(self, source: Iterator[T], n: int) -> None:
        self.source = source
        self.buffer: Deque[T] = deque()

        for _ in range(n + 1):
            item = next(self.source, _SENTINEL)
            if item is _SENTINEL:
                break
            self.buffer.append(item)

    def ahead(self, i: int) -> Optional[T]:
        """Peek the i-th buffered item without consuming it"""
        if 0 <= i < len(self.buffer):
            return self.buffer[i]
        return None

    def __iter__(self) -> "Lookahead[T]":
        return self

    def __next__(self) -> T:
        if not self.buffer:
            raise StopIteration

        item = self.buffer.popleft()

        refill = next(self.source, _SENTINEL)
        if refill is not _SENTINEL:
            self.buffer.append(refill)

        return item

