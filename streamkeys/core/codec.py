"""Text codec for counter keys.

Provides:
- Segment encoding: each byte rendered as a zero-padded 3-digit decimal group
- Segment decoding with left-padding / truncation to a fixed byte width
- Key composition and splitting on the ':' field separator

These functions know nothing about the counter model; they operate on raw
bytes and strings only.
"""

from typing import Optional

SEPARATOR = ":"
GROUP_SIZE = 3


class SegmentDecodeError(ValueError):
    """A segment group is not a decimal value in 0..255."""

    def __init__(self, segment: str, index: int, group: str):
        self.segment = segment
        self.index = index
        self.group = group
        super().__init__(
            f"Invalid byte group {group!r} at position {index} in segment {segment!r}: "
            f"expected 3 decimal digits in 000-255"
        )


def encode_segment(value: bytes) -> str:
    """Render bytes as concatenated 3-digit decimal groups."""
    return "".join(f"{b:03d}" for b in value)


def align_segment(text: str, width: int) -> str:
    """Normalize segment text to exactly width * 3 characters.

    Shorter input is zero-filled on the left (implicit leading zero bytes).
    Longer input keeps only the trailing width * 3 characters.
    """
    size = width * GROUP_SIZE
    if len(text) < size:
        return text.rjust(size, "0")
    return text[len(text) - size:]


def decode_segment(text: str, width: int) -> bytes:
    """Recover width bytes from segment text.

    Raises SegmentDecodeError for a group containing non-digits or a value
    above 255.
    """
    aligned = align_segment(text, width)
    out = bytearray()
    for index in range(width):
        group = aligned[index * GROUP_SIZE:(index + 1) * GROUP_SIZE]
        if not group.isascii() or not group.isdigit():
            raise SegmentDecodeError(text, index, group)
        number = int(group)
        if number > 0xFF:
            raise SegmentDecodeError(text, index, group)
        out.append(number)
    return bytes(out)


# ---------------------------------------------------------------------------
# Key composition
# ---------------------------------------------------------------------------

def join_key(
    segment: str,
    prefix: Optional[str] = None,
    timestamp: Optional[int] = None,
) -> str:
    """Build a key from its fields.

    Format: [{prefix}:][{timestamp}:]{segment}
    """
    parts = []
    if prefix is not None:
        parts.append(prefix)
    if timestamp is not None:
        parts.append(str(timestamp))
    parts.append(segment)
    return SEPARATOR.join(parts)


def split_key(text: str) -> list[str]:
    """Split a key into its ':' separated fields."""
    return text.split(SEPARATOR)
