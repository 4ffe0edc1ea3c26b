"""
Document assembler and SFC file parser.

File format:
- MapData:
  - Archive header ("MapData", always a full header)
  - u32 map_is_wrappable
  - u32 time_of_day
  - u32 day_in_year
  - u32 year
  - CGallery (tile gallery)
  - u32 room count (ceiling applies), rooms
- u32 object count (ceiling applies), Objects
- u32 scenery count (ceiling applies), SimpleObjects
- Anything left over is reported as trailing bytes, not an error
"""

from pathlib import Path
from typing import Optional, Tuple, Union

from ...constants import CLASS_MAP_DATA
from ...utils import logDebug, logError
from ..archive import ArchiveHeader, ClassTag, read_class_header
from ..base import Buffer, read_count, read_u32
from ..errors import SfcParseError
from ..registry import DecodeContext
from .data_types import Document, Gallery, MapData, MapDataFlags
from .gallery_parser import read_gallery
from .object_parser import read_object, read_simple_object
from .room_parser import read_rooms


def read_map_flags(data: Buffer, offset: int) -> Tuple[MapDataFlags, int]:
    map_is_wrappable, offset = read_u32(data, offset, "map_is_wrappable")
    time_of_day, offset = read_u32(data, offset, "time_of_day")
    day_in_year, offset = read_u32(data, offset, "day_in_year")
    year, offset = read_u32(data, offset, "year")
    return MapDataFlags(
        map_is_wrappable=map_is_wrappable,
        time_of_day=time_of_day,
        day_in_year=day_in_year,
        year=year,
    ), offset


def read_map_data(data: Buffer, offset: int, ctx: DecodeContext) -> Tuple[MapData, int]:
    with ctx.record(CLASS_MAP_DATA):
        header, offset = read_class_header(data, offset, ctx, CLASS_MAP_DATA)
        flags, offset = read_map_flags(data, offset)
        gallery, offset = read_gallery(data, offset, ctx)
        with ctx.record("Rooms"):
            rooms, offset = read_rooms(data, offset, ctx)
        return MapData(header=header, flags=flags, gallery=gallery, rooms=rooms), offset


def parse_document(data: Buffer, ctx: Optional[DecodeContext] = None) -> Tuple[Document, int]:
    """
    Decode a whole SFC world file held in memory.

    Args:
        data: Complete file contents
        ctx: Decode context; a fresh one is created when omitted. A context
             must not be shared between parses.

    Returns:
        Tuple of (Document, number of unconsumed trailing bytes)

    Raises:
        SfcParseError: on the first malformed field; no partial document
    """
    if ctx is None:
        ctx = DecodeContext()

    offset = 0
    with ctx.record("Document"):
        map_data, offset = read_map_data(data, offset, ctx)

        with ctx.record("Objects"):
            object_count, offset = read_count(data, offset, 4, "objects", ctx.max_count)
            logDebug(f"Objects: {object_count}")
            objects = []
            for index in range(object_count):
                obj, offset = read_object(data, offset, ctx, index)
                objects.append(obj)

        with ctx.record("Scenery"):
            scenery_count, offset = read_count(data, offset, 4, "scenery", ctx.max_count)
            logDebug(f"Scenery: {scenery_count}")
            scenery = []
            for index in range(scenery_count):
                simple_object, offset = read_simple_object(data, offset, ctx, index)
                scenery.append(simple_object)

    document = Document(map=map_data, objects=tuple(objects), scenery=tuple(scenery))
    return document, len(data) - offset


def empty_document() -> Document:
    """Document with no rooms, objects or scenery, for callers that need a stand-in."""
    return Document(
        map=MapData(
            header=ArchiveHeader(tag=0, object_tag=0, schema=0, class_name=CLASS_MAP_DATA),
            flags=MapDataFlags(map_is_wrappable=0, time_of_day=0, day_in_year=0, year=0),
            gallery=Gallery(header_or_tag=ClassTag(tag=0), num_images=0, fsp="", file_pos=0, users=0),
        ),
    )


def parse_document_or_default(data: Buffer,
                              ctx: Optional[DecodeContext] = None
                              ) -> Tuple[Document, Optional[SfcParseError]]:
    """
    Decode a world file, substituting an empty document on failure.

    Returns:
        Tuple of (Document, error or None)
    """
    try:
        document, _ = parse_document(data, ctx)
    except SfcParseError as e:
        return empty_document(), e
    return document, None


class SfcParser:
    """
    Parser for Creatures .sfc world files.

    Usage:
        parser = SfcParser(Path("Eden.sfc"))
        doc = parser.document
        for room in doc.map.rooms:
            print(room.room_id, room.room_type.name, room.render_rect)

        print(f"{parser.trailing_bytes} trailing bytes")
    """

    def __init__(self, filepath: Union[str, Path], max_count: Optional[int] = None):
        """
        Args:
            filepath: Path to the .sfc file
            max_count: Optional lower ceiling for length-prefixed counts
        """
        self.filepath = Path(filepath)
        self.max_count = max_count
        self._document: Optional[Document] = None
        self._trailing_bytes = 0

    @classmethod
    def from_bytes(cls, data: bytes, name: str = "<memory>",
                   max_count: Optional[int] = None) -> 'SfcParser':
        """Create a parser over data that is already in memory."""
        parser = cls(name, max_count)
        parser._parse(data)
        return parser

    def _make_context(self) -> DecodeContext:
        if self.max_count is None:
            return DecodeContext()
        return DecodeContext(max_count=self.max_count)

    def _parse(self, data: bytes):
        try:
            self._document, self._trailing_bytes = parse_document(data, self._make_context())
        except SfcParseError as e:
            logError(f"{self.filepath.name}: {e}")
            raise

        if self._trailing_bytes:
            logDebug(f"{self.filepath.name}: {self._trailing_bytes} trailing bytes")

    def _ensure_loaded(self):
        if self._document is not None:
            return

        with open(self.filepath, 'rb') as f:
            data = f.read()
        self._parse(data)

    @property
    def document(self) -> Document:
        self._ensure_loaded()
        return self._document

    @property
    def trailing_bytes(self) -> int:
        self._ensure_loaded()
        return self._trailing_bytes
