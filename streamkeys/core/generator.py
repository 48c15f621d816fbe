"""Double-ended generator over a half-open range of counters.

The generator holds two cursors, start and end, describing [start, end).
Forward steps emit start and then increment it; backward steps decrement
end and then emit it. Both directions share one termination test
(start < end), so a mixed sequence of steps emits every value in the range
exactly once.

Not safe for concurrent stepping: each step mutates the cursors.
"""

from typing import Iterator, Optional

from streamkeys.core.clock import Clock
from streamkeys.core.counter import FixedWidthCounter
from streamkeys.core.models import KeyFormat


class Generator:
    def __init__(
        self,
        start: FixedWidthCounter,
        end: FixedWidthCounter,
        clock: Optional[Clock] = None,
    ):
        self._start = start
        self._end = end
        self._clock = clock

    @classmethod
    def empty(
        cls,
        prefix: Optional[str] = None,
        width: Optional[int] = None,
        key_format: Optional[KeyFormat] = None,
        clock: Optional[Clock] = None,
    ) -> "Generator":
        """Generator whose bounds are both the zero counter."""
        base = FixedWidthCounter.zero(prefix, width, key_format, clock)
        return cls(base, base, clock)

    @classmethod
    def spanning(
        cls,
        prefix: Optional[str] = None,
        width: Optional[int] = None,
        key_format: Optional[KeyFormat] = None,
        clock: Optional[Clock] = None,
    ) -> "Generator":
        """Generator over [zero, max)."""
        return cls(
            FixedWidthCounter.zero(prefix, width, key_format, clock),
            FixedWidthCounter.max(prefix, width, key_format, clock),
            clock,
        )

    @property
    def start(self) -> FixedWidthCounter:
        return self._start

    @property
    def end(self) -> FixedWidthCounter:
        return self._end

    def is_exhausted(self) -> bool:
        return not self._start < self._end

    def remaining(self) -> int:
        """How many values are left to emit from either end."""
        if self.is_exhausted():
            return 0
        return self._start.distance(self._end)

    def __iter__(self) -> "Generator":
        return self

    def __next__(self) -> FixedWidthCounter:
        if self.is_exhausted():
            raise StopIteration
        result = self._start
        self._start = self._start.increment(self._clock)
        return result

    def next_back(self) -> FixedWidthCounter:
        """Step the end cursor back and return it.

        Raises StopIteration once the cursors have met.
        """
        if self.is_exhausted():
            raise StopIteration
        self._end = self._end.decrement(self._clock)
        return self._end

    def __reversed__(self) -> Iterator[FixedWidthCounter]:
        return _Backward(self)

    def __repr__(self) -> str:
        return f"Generator(start={self._start.encode()!r}, end={self._end.encode()!r})"


class _Backward:
    """Backward view sharing the cursors of its generator."""

    def __init__(self, generator: Generator):
        self._generator = generator

    def __iter__(self) -> "_Backward":
        return self

    def __next__(self) -> FixedWidthCounter:
        return self._generator.next_back()
