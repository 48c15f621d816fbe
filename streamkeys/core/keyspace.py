"""Keyspace definition format.

A keyspace names a family of counters that share a prefix, a byte width and
a key format. It is the unit of configuration: callers pick a keyspace and
get consistently shaped keys from it.

Example YAML:

    name: events
    prefix: events
    width: 8
    key_format: timestamped
    description: Event stream entry keys
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from streamkeys.core.clock import Clock
from streamkeys.core.codec import SEPARATOR
from streamkeys.core.counter import FixedWidthCounter
from streamkeys.core.generator import Generator
from streamkeys.core.models import KeyFormat


class Keyspace(BaseModel):
    name: str
    prefix: Optional[str] = None
    width: int = Field(default=8, gt=0)
    key_format: KeyFormat = KeyFormat.TIMESTAMPED
    description: Optional[str] = None

    @field_validator("prefix")
    @classmethod
    def _check_prefix(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and SEPARATOR in v:
            raise ValueError(f"Prefix {v!r} must not contain '{SEPARATOR}'")
        return v

    def zero(self, clock: Optional[Clock] = None) -> FixedWidthCounter:
        return FixedWidthCounter.zero(self.prefix, self.width, self.key_format, clock)

    def max(self, clock: Optional[Clock] = None) -> FixedWidthCounter:
        return FixedWidthCounter.max(self.prefix, self.width, self.key_format, clock)

    def from_int(self, number: int, clock: Optional[Clock] = None) -> FixedWidthCounter:
        return FixedWidthCounter.from_int(number, self.prefix, self.width, self.key_format, clock)

    def decode(self, text: str, clock: Optional[Clock] = None) -> FixedWidthCounter:
        return FixedWidthCounter.decode(text, self.width, self.key_format, clock)

    def generator(self, clock: Optional[Clock] = None) -> Generator:
        """Empty generator anchored at this keyspace's zero counter."""
        return Generator.empty(self.prefix, self.width, self.key_format, clock)

    def range(
        self,
        start: Optional[FixedWidthCounter] = None,
        end: Optional[FixedWidthCounter] = None,
        clock: Optional[Clock] = None,
    ) -> Generator:
        """Generator over [start, end), defaulting to [zero, max)."""
        return Generator(
            start if start is not None else self.zero(clock),
            end if end is not None else self.max(clock),
            clock,
        )
