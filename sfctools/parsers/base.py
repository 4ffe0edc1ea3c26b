"""
Base utilities for SFC binary file parsing.

This module provides the primitive decoders used by all record parsers.
Every reader takes the whole buffer plus an absolute offset and returns
a tuple of (value, new_offset), so the stream is consumed strictly left
to right:
- read_u8 / read_u16 / read_u32 / read_i32: little-endian integers
- read_bytes: fixed-size raw buffers
- read_counted_string: u8 length prefix followed by that many bytes
- read_fixed_string: fixed-size NUL padded text
- read_count: u16/u32 collection counts checked against the ceiling
"""

import struct
from typing import Tuple, Union

from ..constants import MAX_COLLECTION_COUNT, SFC_TEXT_ENCODING
from .errors import CountOutOfBounds, StructuralUnderrun

Buffer = Union[bytes, bytearray, memoryview]


def ensure_available(data: Buffer, offset: int, size: int, field: str = "") -> None:
    """
    Raise StructuralUnderrun unless `size` bytes remain at `offset`.

    Args:
        data: Binary data being decoded
        offset: Offset of the field
        size: Bytes the field needs
        field: Field name for the error message
    """
    available = len(data) - offset
    if size > available:
        raise StructuralUnderrun(size, max(0, available), offset, field)


def read_u8(data: Buffer, offset: int, field: str = "u8") -> Tuple[int, int]:
    ensure_available(data, offset, 1, field)
    return data[offset], offset + 1


def read_u16(data: Buffer, offset: int, field: str = "u16") -> Tuple[int, int]:
    ensure_available(data, offset, 2, field)
    return struct.unpack_from('<H', data, offset)[0], offset + 2


def read_u32(data: Buffer, offset: int, field: str = "u32") -> Tuple[int, int]:
    ensure_available(data, offset, 4, field)
    return struct.unpack_from('<I', data, offset)[0], offset + 4


def read_i32(data: Buffer, offset: int, field: str = "i32") -> Tuple[int, int]:
    ensure_available(data, offset, 4, field)
    return struct.unpack_from('<i', data, offset)[0], offset + 4


def read_bytes(data: Buffer, offset: int, size: int, field: str = "bytes") -> Tuple[bytes, int]:
    """
    Read a fixed-size raw buffer.

    Returns:
        Tuple of (bytes copy, new_offset)
    """
    ensure_available(data, offset, size, field)
    return bytes(data[offset:offset + size]), offset + size


def decode_text(raw: bytes) -> str:
    """Decode stored text leniently; undecodable bytes are replaced."""
    return raw.decode(SFC_TEXT_ENCODING, errors='replace')


def read_counted_string(data: Buffer, offset: int, field: str = "string") -> Tuple[str, int]:
    """
    Read a string with a one-byte length prefix.

    Args:
        data: Binary data to read from
        offset: Offset of the length byte

    Returns:
        Tuple of (string, new_offset after the last character)
    """
    length, offset = read_u8(data, offset, f"{field} length")
    raw, offset = read_bytes(data, offset, length, field)
    return decode_text(raw), offset


def read_fixed_string(data: Buffer, offset: int, size: int, field: str = "string") -> Tuple[str, int]:
    """
    Read a fixed-size text field, dropping everything from the first NUL.

    Returns:
        Tuple of (string, offset + size)
    """
    raw, offset = read_bytes(data, offset, size, field)
    end = raw.find(b'\x00')
    if end != -1:
        raw = raw[:end]
    return decode_text(raw), offset


def read_count(data: Buffer, offset: int, width: int, site: str,
               limit: int = MAX_COLLECTION_COUNT) -> Tuple[int, int]:
    """
    Read a collection count and reject it above `limit`.

    The check happens before the caller builds anything, so a corrupt
    count never drives a proportional allocation.

    Args:
        data: Binary data to read from
        offset: Offset of the count field
        width: 2 for a u16 count, 4 for a u32 count
        site: Name of the collection, used in the error
        limit: Largest count accepted

    Returns:
        Tuple of (count, new_offset)
    """
    if width == 2:
        count, new_offset = read_u16(data, offset, f"{site} count")
    elif width == 4:
        count, new_offset = read_u32(data, offset, f"{site} count")
    else:
        raise ValueError(f"Unsupported count width: {width}")

    if count > limit:
        raise CountOutOfBounds(site, count, limit, offset)
    return count, new_offset
