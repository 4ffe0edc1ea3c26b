"""
Archive header / tag protocol.

Every polymorphic record in an SFC file starts with one of two things:

- Archive header, on the first occurrence of a class in the stream:
  - u16 tag (zero words before it are padding and skipped)
  - u32 object tag, only when tag == 0x7fff; otherwise the object tag is
    derived from the short tag, bit 15 moving up to bit 31
  - u16 schema version
  - u16 class name length
  - class name (length bytes)
- Tag, on every later occurrence:
  - u16 tag

Which one to expect is decided by the ClassRegistry in the decode context.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from ..constants import BIG_OBJECT_TAG, CLASS_TAG_BIT, OBJECT_TAG_HIGH_BIT
from ..utils import logDebug
from .base import Buffer, decode_text, read_bytes, read_u16, read_u32
from .errors import InvalidArchiveTag, UnexpectedClassName
from .registry import DecodeContext


@dataclass(frozen=True)
class ArchiveHeader:
    """Full class header, written once per class per stream."""
    tag: int
    object_tag: int
    schema: int
    class_name: str


@dataclass(frozen=True)
class ClassTag:
    """Compact back-reference to an already headered class."""
    tag: int


HeaderOrTag = Union[ArchiveHeader, ClassTag]


def derive_object_tag(tag: int) -> int:
    """Widen a short archive tag to its 32-bit object tag."""
    return ((tag & CLASS_TAG_BIT) << 16) | (tag & 0x7FFF)


def read_archive_header(data: Buffer, offset: int) -> Tuple[ArchiveHeader, int]:
    """
    Read a full archive header.

    Args:
        data: Binary data to read from
        offset: Offset of the first tag word (or padding before it)

    Returns:
        Tuple of (ArchiveHeader, new_offset after the class name)
    """
    tag_offset = offset
    tag, offset = read_u16(data, offset, "archive tag")
    while tag == 0:
        tag_offset = offset
        tag, offset = read_u16(data, offset, "archive tag")

    if tag == BIG_OBJECT_TAG:
        object_tag, offset = read_u32(data, offset, "archive object tag")
    else:
        object_tag = derive_object_tag(tag)

    if not object_tag & OBJECT_TAG_HIGH_BIT:
        raise InvalidArchiveTag(object_tag, tag_offset)

    schema, offset = read_u16(data, offset, "archive schema")
    name_length, offset = read_u16(data, offset, "class name length")
    raw_name, offset = read_bytes(data, offset, name_length, "class name")

    return ArchiveHeader(
        tag=tag,
        object_tag=object_tag,
        schema=schema,
        class_name=decode_text(raw_name),
    ), offset


def read_class_header(data: Buffer, offset: int, ctx: DecodeContext,
                      class_name: str) -> Tuple[ArchiveHeader, int]:
    """
    Read a full header that must name `class_name`, then register the class.

    Raises:
        UnexpectedClassName: if the header names another class
    """
    start = offset
    header, offset = read_archive_header(data, offset)
    if header.class_name != class_name:
        raise UnexpectedClassName(class_name, header.class_name, start)

    ctx.registry.register(class_name)
    logDebug(f"{class_name} header at 0x{start:X} (schema {header.schema})")
    return header, offset


def read_header_or_tag(data: Buffer, offset: int, ctx: DecodeContext,
                       class_name: str) -> Tuple[HeaderOrTag, int]:
    """
    Read the header or tag that opens a polymorphic record.

    A class not yet in the registry must arrive with a full archive
    header; once registered, every later record of that class is opened
    by a two-byte tag.

    Args:
        data: Binary data to read from
        offset: Offset of the record
        ctx: Decode context for this parse
        class_name: Class expected at this position

    Returns:
        Tuple of (ArchiveHeader or ClassTag, new_offset)
    """
    if not ctx.registry.contains(class_name):
        return read_class_header(data, offset, ctx, class_name)

    tag, offset = read_u16(data, offset, f"{class_name} tag")
    return ClassTag(tag=tag), offset
