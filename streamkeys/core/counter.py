"""Fixed-width big-endian byte counters.

A counter is an immutable W-byte unsigned value, most significant byte first,
optionally tagged with a namespace prefix and a creation timestamp (whole
seconds since the epoch). Every transformation returns a new counter; a
timestamped counter is re-stamped with the clock's "now" on each step rather
than inheriting its predecessor's stamp.

Natural ordering is over (prefix, timestamp, value) in that precedence, so
counters only order numerically when prefix and timestamp are held fixed.
"""

import logging
from typing import Annotated, Any, Callable, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
)

from streamkeys.core import codec
from streamkeys.core.clock import U64_MAX, Clock, get_clock, parse_timestamp
from streamkeys.core.config import settings
from streamkeys.core.models import KeyFormat

logger = logging.getLogger(__name__)


def _resolve(width: Optional[int], key_format: Optional[KeyFormat]) -> tuple[int, KeyFormat]:
    """Fill in width and key format from settings when not given."""
    width = width if width is not None else settings.default_width
    if width <= 0:
        raise ValueError(f"Counter width must be positive, got {width}")
    key_format = KeyFormat(key_format) if key_format is not None else settings.default_key_format
    return width, key_format


def _stamp(key_format: KeyFormat, clock: Optional[Clock]) -> Optional[int]:
    if key_format == KeyFormat.TIMESTAMPED:
        return get_clock(clock).now()
    return None


class FixedWidthCounter(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    value: bytes
    prefix: Optional[str] = None
    timestamp: Optional[int] = None
    # Status flag only: ignored by equality, hashing, ordering and serialization.
    valid: bool = Field(default=True, exclude=True)

    @field_validator("value")
    @classmethod
    def _check_value(cls, v: bytes) -> bytes:
        if not v:
            raise ValueError("Counter value must hold at least one byte")
        return v

    @field_validator("prefix")
    @classmethod
    def _check_prefix(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and codec.SEPARATOR in v:
            raise ValueError(f"Prefix {v!r} must not contain '{codec.SEPARATOR}'")
        return v

    @field_validator("timestamp")
    @classmethod
    def _check_timestamp(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not 0 <= v <= U64_MAX:
            raise ValueError(f"Timestamp {v} is outside the unsigned 64-bit range")
        return v

    # --- Construction ---

    @classmethod
    def _filled(
        cls,
        byte: int,
        prefix: Optional[str],
        width: Optional[int],
        key_format: Optional[KeyFormat],
        clock: Optional[Clock],
    ) -> "FixedWidthCounter":
        width, key_format = _resolve(width, key_format)
        return cls(
            value=bytes([byte]) * width,
            prefix=prefix,
            timestamp=_stamp(key_format, clock),
        )

    @classmethod
    def zero(
        cls,
        prefix: Optional[str] = None,
        width: Optional[int] = None,
        key_format: Optional[KeyFormat] = None,
        clock: Optional[Clock] = None,
    ) -> "FixedWidthCounter":
        """All-zero counter stamped with the current time."""
        return cls._filled(0x00, prefix, width, key_format, clock)

    @classmethod
    def max(
        cls,
        prefix: Optional[str] = None,
        width: Optional[int] = None,
        key_format: Optional[KeyFormat] = None,
        clock: Optional[Clock] = None,
    ) -> "FixedWidthCounter":
        """All-0xFF counter stamped with the current time."""
        return cls._filled(0xFF, prefix, width, key_format, clock)

    @classmethod
    def from_int(
        cls,
        number: int,
        prefix: Optional[str] = None,
        width: Optional[int] = None,
        key_format: Optional[KeyFormat] = None,
        clock: Optional[Clock] = None,
    ) -> "FixedWidthCounter":
        """Counter holding the positional value `number`."""
        width, key_format = _resolve(width, key_format)
        if not 0 <= number < 1 << (8 * width):
            raise ValueError(f"{number} does not fit in {width} unsigned bytes")
        return cls(
            value=number.to_bytes(width, "big"),
            prefix=prefix,
            timestamp=_stamp(key_format, clock),
        )

    @classmethod
    def invalid(
        cls,
        width: Optional[int] = None,
        key_format: Optional[KeyFormat] = None,
        clock: Optional[Clock] = None,
    ) -> "FixedWidthCounter":
        """Zero counter flagged invalid, the result of a failed decode."""
        width, key_format = _resolve(width, key_format)
        return cls(
            value=bytes(width),
            timestamp=_stamp(key_format, clock),
            valid=False,
        )

    # --- Accessors ---

    @property
    def width(self) -> int:
        return len(self.value)

    @property
    def key_format(self) -> KeyFormat:
        return KeyFormat.PLAIN if self.timestamp is None else KeyFormat.TIMESTAMPED

    @property
    def segment(self) -> str:
        return codec.encode_segment(self.value)

    def raw_value(self) -> bytes:
        return self.value

    def to_list(self) -> list[int]:
        return list(self.value)

    # --- Arithmetic ---

    def _derive(self, value: bytes, clock: Optional[Clock]) -> "FixedWidthCounter":
        timestamp = None if self.timestamp is None else get_clock(clock).now()
        return type(self)(value=value, prefix=self.prefix, timestamp=timestamp)

    def increment(self, clock: Optional[Clock] = None) -> "FixedWidthCounter":
        """Next value. All-0xFF wraps to all-zero without signalling."""
        buf = bytearray(self.value)
        for i in reversed(range(len(buf))):
            if buf[i] == 0xFF:
                buf[i] = 0x00
            else:
                buf[i] += 1
                break
        return self._derive(bytes(buf), clock)

    def decrement(self, clock: Optional[Clock] = None) -> "FixedWidthCounter":
        """Previous value. All-zero wraps to all-0xFF without signalling."""
        buf = bytearray(self.value)
        for i in reversed(range(len(buf))):
            if buf[i] == 0x00:
                buf[i] = 0xFF
            else:
                buf[i] -= 1
                break
        return self._derive(bytes(buf), clock)

    def advance(self, count: int, clock: Optional[Clock] = None) -> "FixedWidthCounter":
        """Equivalent to `count` increments, stamped once."""
        if count < 0:
            raise ValueError(f"Step count must be non-negative, got {count}")
        modulus = 1 << (8 * self.width)
        number = (self.to_numeric() + count) % modulus
        return self._derive(number.to_bytes(self.width, "big"), clock)

    def retreat(self, count: int, clock: Optional[Clock] = None) -> "FixedWidthCounter":
        """Equivalent to `count` decrements, stamped once."""
        if count < 0:
            raise ValueError(f"Step count must be non-negative, got {count}")
        modulus = 1 << (8 * self.width)
        number = (self.to_numeric() - count) % modulus
        return self._derive(number.to_bytes(self.width, "big"), clock)

    def to_numeric(self) -> int:
        """Positional base-256 value of the bytes."""
        return int.from_bytes(self.value, "big")

    def distance(self, other: "FixedWidthCounter") -> int:
        return abs(self.to_numeric() - other.to_numeric())

    # --- Text codec ---

    def encode(self) -> str:
        return codec.join_key(self.segment, self.prefix, self.timestamp)

    @classmethod
    def decode(
        cls,
        text: str,
        width: Optional[int] = None,
        key_format: Optional[KeyFormat] = None,
        clock: Optional[Clock] = None,
    ) -> "FixedWidthCounter":
        """Decode a key.

        A field count that fits neither shape of the key format yields an
        invalid counter, as does an unparseable or zero timestamp. A bad
        segment group raises SegmentDecodeError.
        """
        width, key_format = _resolve(width, key_format)
        parts = codec.split_key(text)
        prefix: Optional[str] = None
        timestamp: Optional[int] = None

        if key_format == KeyFormat.TIMESTAMPED:
            if len(parts) == 3:
                prefix, stamp, segment = parts
            elif len(parts) == 2:
                stamp, segment = parts
            else:
                logger.debug(f"Key {text!r} has {len(parts)} fields, expected 2 or 3")
                return cls.invalid(width, key_format, clock)
            timestamp = parse_timestamp(stamp)
        else:
            if len(parts) == 2:
                prefix, segment = parts
            elif len(parts) == 1:
                segment = parts[0]
            else:
                logger.debug(f"Key {text!r} has {len(parts)} fields, expected 1 or 2")
                return cls.invalid(width, key_format, clock)

        value = codec.decode_segment(segment, width)
        valid = timestamp != 0
        if not valid:
            logger.debug(f"Key {text!r} carries an unusable timestamp {stamp!r}")
        return cls(value=value, prefix=prefix, timestamp=timestamp, valid=valid)

    @classmethod
    def decode_bytes(
        cls,
        raw: bytes,
        width: Optional[int] = None,
        key_format: Optional[KeyFormat] = None,
        clock: Optional[Clock] = None,
    ) -> "FixedWidthCounter":
        """Decode a key read from a binary channel (UTF-8, lossy)."""
        return cls.decode(raw.decode("utf-8", errors="replace"), width, key_format, clock)

    def __str__(self) -> str:
        return self.encode()

    # --- Ordering ---

    def _sort_key(self) -> tuple:
        return (
            self.prefix is not None,
            self.prefix or "",
            self.timestamp is not None,
            self.timestamp or 0,
            self.value,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedWidthCounter):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __hash__(self) -> int:
        return hash(self._sort_key())

    def __lt__(self, other: "FixedWidthCounter") -> bool:
        if not isinstance(other, FixedWidthCounter):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: "FixedWidthCounter") -> bool:
        if not isinstance(other, FixedWidthCounter):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: "FixedWidthCounter") -> bool:
        if not isinstance(other, FixedWidthCounter):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: "FixedWidthCounter") -> bool:
        if not isinstance(other, FixedWidthCounter):
            return NotImplemented
        return self._sort_key() >= other._sort_key()


# ---------------------------------------------------------------------------
# Embedding a counter as a text key inside other models
# ---------------------------------------------------------------------------

def _key_coercer(width: Optional[int], key_format: Optional[KeyFormat]) -> Callable[[Any], Any]:
    def coerce(v: Any) -> Any:
        resolved_width, resolved_format = _resolve(width, key_format)
        if isinstance(v, (bytes, bytearray)):
            counter = FixedWidthCounter.decode_bytes(bytes(v), resolved_width, resolved_format)
        elif isinstance(v, str):
            counter = FixedWidthCounter.decode(v, resolved_width, resolved_format)
        elif isinstance(v, FixedWidthCounter):
            counter = v
        else:
            return v
        if not counter.valid:
            raise ValueError(f"Malformed stream key: {v!r}")
        if counter.width != resolved_width or counter.key_format != resolved_format:
            raise ValueError(
                f"Stream key {counter.encode()!r} is a {counter.width}-byte "
                f"{counter.key_format.value} key, expected {resolved_width}-byte "
                f"{resolved_format.value}"
            )
        return counter
    return coerce


def _encode_key(counter: FixedWidthCounter) -> str:
    return counter.encode()


def stream_key(width: Optional[int] = None, key_format: Optional[KeyFormat] = None) -> Any:
    """Field type storing a counter as its text key.

    Width and key format are fixed by the field; unset ones fall back to
    settings when a value is validated.
    """
    return Annotated[
        FixedWidthCounter,
        BeforeValidator(_key_coercer(width, key_format)),
        PlainSerializer(_encode_key, return_type=str),
    ]


StreamKey = stream_key()
