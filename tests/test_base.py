"""Tests for the primitive decoders."""

import struct

import pytest

from sfctools.parsers.base import (
    read_bytes,
    read_count,
    read_counted_string,
    read_fixed_string,
    read_i32,
    read_u8,
    read_u16,
    read_u32,
)
from sfctools.parsers.errors import CountOutOfBounds, SfcParseError, StructuralUnderrun


def test_integers_are_little_endian():
    data = bytes([0x01, 0x34, 0x12, 0x78, 0x56, 0x34, 0x12])
    value, offset = read_u8(data, 0)
    assert (value, offset) == (1, 1)
    value, offset = read_u16(data, offset)
    assert (value, offset) == (0x1234, 3)
    value, offset = read_u32(data, offset)
    assert (value, offset) == (0x12345678, 7)


def test_read_i32_is_signed():
    value, offset = read_i32(struct.pack('<i', -42), 0)
    assert value == -42
    assert offset == 4


def test_underrun_reports_offset_and_sizes():
    with pytest.raises(StructuralUnderrun) as exc_info:
        read_u32(b'\x00\x00\x00\x01\x02', 3)
    err = exc_info.value
    assert err.offset == 3
    assert err.needed == 4
    assert err.available == 2
    assert isinstance(err, SfcParseError)
    assert isinstance(err, ValueError)


def test_underrun_past_end_of_buffer():
    with pytest.raises(StructuralUnderrun) as exc_info:
        read_u8(b'', 0)
    assert exc_info.value.available == 0


def test_read_bytes_copies_exact_size():
    data = memoryview(b'abcdef')
    raw, offset = read_bytes(data, 1, 3)
    assert raw == b'bcd'
    assert isinstance(raw, bytes)
    assert offset == 4


def test_counted_string():
    text, offset = read_counted_string(b'\x05Hello world', 0)
    assert text == 'Hello'
    assert offset == 6


def test_counted_string_empty():
    text, offset = read_counted_string(b'\x00', 0)
    assert text == ''
    assert offset == 1


def test_counted_string_replaces_undecodable_bytes():
    # 0x81 is unassigned in cp1252
    text, _ = read_counted_string(b'\x03a\x81b', 0)
    assert text == "a\ufffdb"


def test_counted_string_truncated_body():
    with pytest.raises(StructuralUnderrun):
        read_counted_string(b'\x09abc', 0)


def test_fixed_string_stops_at_nul():
    text, offset = read_fixed_string(b'walk\x00junk!', 0, 10)
    assert text == 'walk'
    assert offset == 10


def test_read_count_accepts_ceiling():
    count, offset = read_count(struct.pack('<H', 2000), 0, 2, "doors")
    assert count == 2000
    assert offset == 2


def test_read_count_rejects_above_ceiling():
    data = b'\xff' + struct.pack('<I', 2001)
    with pytest.raises(CountOutOfBounds) as exc_info:
        read_count(data, 1, 4, "objects")
    err = exc_info.value
    assert err.count == 2001
    assert err.limit == 2000
    assert err.site == "objects"
    assert err.offset == 1


def test_read_count_custom_limit():
    with pytest.raises(CountOutOfBounds):
        read_count(struct.pack('<H', 11), 0, 2, "points", limit=10)


def test_read_count_bad_width():
    with pytest.raises(ValueError):
        read_count(b'\x00\x00\x00', 0, 3, "bad")
