"""
SFC World File Parser

Parses Creatures .sfc world files: the map, its rooms and doors, and the
objects and scenery placed in it.

This module is organized into submodules:
- data_types: Shared data structures (Room, Door, Gallery, Object, Document, ...)
- structures: Point, Rect, point arrays, attribute flags, classifiers
- gallery_parser: CGallery parsing
- room_parser: CRoom, CDoor and bacteria parsing
- object_parser: Object, SimpleObject and Entity parsing
- document: Document assembly and the SfcParser class
"""

# Data types
from .data_types import (
    RoomType,
    DropStatus,
    BacteriaState,
    MovementStatus,
    DoorDirection,
    Point,
    Rect,
    Attributes,
    Image,
    Gallery,
    Door,
    Bacteria,
    Room,
    MapDataFlags,
    MapData,
    Classifier,
    Script,
    Entity,
    Object,
    SimpleObject,
    Document,
)

# Record parsing
from .structures import read_point, read_rect, read_point_array, read_attributes, read_classifier
from .gallery_parser import read_gallery
from .room_parser import read_door_array, read_room, read_rooms
from .object_parser import read_object, read_entity, read_simple_object

# Document assembly
from .document import (
    SfcParser,
    parse_document,
    parse_document_or_default,
    empty_document,
    read_map_data,
)

__all__ = [
    # Data types
    'RoomType',
    'DropStatus',
    'BacteriaState',
    'MovementStatus',
    'DoorDirection',
    'Point',
    'Rect',
    'Attributes',
    'Image',
    'Gallery',
    'Door',
    'Bacteria',
    'Room',
    'MapDataFlags',
    'MapData',
    'Classifier',
    'Script',
    'Entity',
    'Object',
    'SimpleObject',
    'Document',
    # Record parsing
    'read_point',
    'read_rect',
    'read_point_array',
    'read_attributes',
    'read_classifier',
    'read_gallery',
    'read_door_array',
    'read_room',
    'read_rooms',
    'read_object',
    'read_entity',
    'read_simple_object',
    # Document assembly
    'SfcParser',
    'parse_document',
    'parse_document_or_default',
    'empty_document',
    'read_map_data',
]
