"""Unbounded monotonic sequence of raw integers mapped to an output type."""

import itertools
from typing import Callable, Generic, Optional, TypeVar

from streamkeys.core.counter import FixedWidthCounter
from streamkeys.core.models import KeyFormat

T = TypeVar("T")


class UnboundedSequence(Generic[T]):
    """Yields convert(0), convert(1), ... without end.

    Restart by building a new instance.
    """

    def __init__(self, convert: Callable[[int], T]):
        self._convert = convert
        self._counter = itertools.count(start=0)

    def __iter__(self) -> "UnboundedSequence[T]":
        return self

    def __next__(self) -> T:
        return self._convert(next(self._counter))


def counters(
    prefix: Optional[str] = None,
    width: Optional[int] = None,
) -> UnboundedSequence[FixedWidthCounter]:
    """Plain counters 0, 1, 2, ... of the given width.

    The sequence stops with a ValueError once it passes the width's maximum.
    """
    return UnboundedSequence(
        lambda n: FixedWidthCounter.from_int(n, prefix, width, KeyFormat.PLAIN)
    )
