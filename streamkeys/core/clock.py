"""Epoch-seconds clock providers used to stamp counters.

Counters never read the wall clock directly. Every transformation accepts an
optional clock; when none is given the module default (the system clock) is
used. Swap in a FixedClock to make stamping deterministic.
"""

import time
from typing import Optional, Protocol

U64_MAX = (1 << 64) - 1


def epoch_secs() -> int:
    """Return whole seconds since the Unix epoch."""
    return int(time.time())


class Clock(Protocol):
    def now(self) -> int:
        ...


class SystemClock:
    """Wall clock. Assumed not to regress within a process lifetime."""

    def now(self) -> int:
        return epoch_secs()


class FixedClock:
    """A clock that only moves when told to.

    A timestamp of 0 is reserved: decoding treats it as unusable.
    """

    def __init__(self, value: int):
        if not 0 < value <= U64_MAX:
            raise ValueError(f"Clock value must be in 1..{U64_MAX}, got {value}")
        self.value = value

    def now(self) -> int:
        return self.value

    def advance(self, seconds: int = 1) -> int:
        self.value += seconds
        return self.value


_default_clock: Clock = SystemClock()


def get_clock(clock: Optional[Clock] = None) -> Clock:
    """Return the given clock, or the process default."""
    return clock if clock is not None else _default_clock


def set_default_clock(clock: Clock) -> Clock:
    """Replace the process default clock. Returns the previous one."""
    global _default_clock
    previous = _default_clock
    _default_clock = clock
    return previous


def parse_timestamp(text: str) -> int:
    """Parse a decimal u64 timestamp; anything unparseable becomes 0."""
    if not text.isascii() or not text.isdigit():
        return 0
    value = int(text)
    if value > U64_MAX:
        return 0
    return value
