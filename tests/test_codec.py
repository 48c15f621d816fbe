"""Tests for the key text codec — segment encoding, alignment and key splitting."""

import pytest

from streamkeys.core.codec import (
    SegmentDecodeError,
    align_segment,
    decode_segment,
    encode_segment,
    join_key,
    split_key,
)


class TestEncodeSegment:
    def test_three_digit_groups(self):
        assert encode_segment(bytes([0, 0, 0, 0, 0, 15, 66, 64])) == "000000000000000015066064"

    def test_boundaries(self):
        assert encode_segment(bytes([0, 9, 10, 99, 100, 255])) == "000009010099100255"

    def test_length_is_three_per_byte(self):
        assert len(encode_segment(bytes(16))) == 48


class TestAlignSegment:
    def test_exact_width_untouched(self):
        assert align_segment("001002", 2) == "001002"

    def test_short_input_left_padded(self):
        assert align_segment("1", 2) == "000001"

    def test_long_input_keeps_trailing_groups(self):
        assert align_segment("777001002", 2) == "001002"


class TestDecodeSegment:
    def test_full_width(self):
        assert decode_segment("000000000000000015066064", 8) == bytes([0, 0, 0, 0, 0, 15, 66, 64])

    def test_single_character_pads_to_value_one(self):
        assert decode_segment("1", 8) == bytes([0, 0, 0, 0, 0, 0, 0, 1])

    def test_missing_groups_are_leading_zero_bytes(self):
        assert decode_segment("015066064", 8) == bytes([0, 0, 0, 0, 0, 15, 66, 64])

    def test_excess_leading_groups_discarded(self):
        # The dropped leading group would not even parse as a byte.
        assert decode_segment("999" + "000" * 7 + "001", 8) == bytes([0] * 7 + [1])

    def test_empty_segment_is_zero(self):
        assert decode_segment("", 4) == bytes(4)

    def test_unaligned_length_is_zero_filled(self):
        assert decode_segment("1000", 2) == bytes([1, 0])

    def test_non_digit_group_raises(self):
        with pytest.raises(SegmentDecodeError) as exc:
            decode_segment("00000a", 2)
        assert exc.value.index == 1
        assert exc.value.group == "00a"

    def test_group_above_255_raises(self):
        with pytest.raises(SegmentDecodeError, match="256"):
            decode_segment("000256", 2)

    def test_sign_characters_rejected(self):
        with pytest.raises(SegmentDecodeError):
            decode_segment("-01", 1)

    def test_non_ascii_digits_rejected(self):
        with pytest.raises(SegmentDecodeError):
            decode_segment("0١٢", 1)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            decode_segment("xyz", 1)


class TestKeyComposition:
    def test_segment_only(self):
        assert join_key("001") == "001"

    def test_timestamp_and_segment(self):
        assert join_key("001", timestamp=42) == "42:001"

    def test_prefix_and_segment(self):
        assert join_key("001", prefix="stream") == "stream:001"

    def test_all_fields(self):
        assert join_key("001", prefix="stream", timestamp=42) == "stream:42:001"

    def test_zero_timestamp_is_rendered(self):
        assert join_key("001", timestamp=0) == "0:001"

    def test_split(self):
        assert split_key("stream:42:001") == ["stream", "42", "001"]
        assert split_key("001") == ["001"]
