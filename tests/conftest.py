"""Shared test fixtures for the StreamKeys test suite."""

from typing import Optional

import pytest

from streamkeys.core.clock import FixedClock
from streamkeys.core.counter import FixedWidthCounter
from streamkeys.core.models import KeyFormat

NOW = 1_700_000_000


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


def make_counter(
    number: int,
    prefix: Optional[str] = None,
    width: int = 8,
    key_format: KeyFormat = KeyFormat.TIMESTAMPED,
    timestamp: int = NOW,
) -> FixedWidthCounter:
    """Helper to build a counter with a pinned timestamp."""
    return FixedWidthCounter.from_int(
        number, prefix, width, key_format, FixedClock(timestamp)
    )


def segment_of(number: int, width: int = 8) -> str:
    """Expected segment text for a positional value."""
    return "".join(f"{b:03d}" for b in number.to_bytes(width, "big"))
