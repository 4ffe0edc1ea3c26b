"""
Creatures Binary File Parsers

This package provides parsers for the binary formats a Creatures world
is stored in:

- base: Primitive decoders (integers, counted strings, fixed buffers)
- errors: SfcParseError and its subclasses
- registry: ClassRegistry and DecodeContext (one per parse)
- archive: Archive header / tag protocol shared by polymorphic records
- world: SfcParser and record decoders for .sfc world files
- s16: S16Parser for .s16 sprite files

Usage:
    from sfctools.parsers import SfcParser, S16Parser

    # Parse a world file
    doc = SfcParser("Eden.sfc").document
    for room in doc.map.rooms:
        print(room.room_id, room.room_type.name)

    # Decode a sprite the gallery points at
    sprites = S16Parser.from_file("Images/back.s16")
    rgba = sprites.get_image(0)
"""

# Base utilities
from .base import (
    read_u8,
    read_u16,
    read_u32,
    read_i32,
    read_bytes,
    read_counted_string,
    read_fixed_string,
    read_count,
)

# Errors
from .errors import (
    SfcParseError,
    StructuralUnderrun,
    CountOutOfBounds,
    UnexpectedClassName,
    InvalidEnumValue,
    InvalidArchiveTag,
)

# Registry and archive protocol
from .registry import ClassRegistry, DecodeContext
from .archive import (
    ArchiveHeader,
    ClassTag,
    HeaderOrTag,
    read_archive_header,
    read_header_or_tag,
)

# World file parser
from .world import (
    SfcParser,
    Document,
    MapData,
    Room,
    Door,
    Gallery,
    Object,
    SimpleObject,
    Entity,
    parse_document,
    parse_document_or_default,
)

# Sprite parser
from .s16 import S16Parser, S16Format, S16ImageInfo, S16FormatError, decode_pixels

__all__ = [
    # Base
    'read_u8',
    'read_u16',
    'read_u32',
    'read_i32',
    'read_bytes',
    'read_counted_string',
    'read_fixed_string',
    'read_count',
    # Errors
    'SfcParseError',
    'StructuralUnderrun',
    'CountOutOfBounds',
    'UnexpectedClassName',
    'InvalidEnumValue',
    'InvalidArchiveTag',
    # Registry / archive
    'ClassRegistry',
    'DecodeContext',
    'ArchiveHeader',
    'ClassTag',
    'HeaderOrTag',
    'read_archive_header',
    'read_header_or_tag',
    # World
    'SfcParser',
    'Document',
    'MapData',
    'Room',
    'Door',
    'Gallery',
    'Object',
    'SimpleObject',
    'Entity',
    'parse_document',
    'parse_document_or_default',
    # Sprites
    'S16Parser',
    'S16Format',
    'S16ImageInfo',
    'S16FormatError',
    'decode_pixels',
]
