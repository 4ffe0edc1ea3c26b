"""
Structural decoders built from primitives.

Point:      i32 x, i32 y
Rect:       u32 left, u32 top, u32 right, u32 bottom
PointArray: u16 count (ceiling applies), count * Point
Attributes: u8 bit-flags
Classifier: u16 family/genus, u32 species/event
"""

from enum import IntEnum
from typing import Callable, Tuple, Type, TypeVar

from ..base import Buffer, read_count, read_i32, read_u8, read_u16, read_u32
from ..errors import InvalidEnumValue
from ..registry import DecodeContext
from .data_types import Attributes, Classifier, Point, Rect

E = TypeVar('E', bound=IntEnum)


def read_point(data: Buffer, offset: int) -> Tuple[Point, int]:
    x, offset = read_i32(data, offset, "point x")
    y, offset = read_i32(data, offset, "point y")
    return Point(x=x, y=y), offset


def read_rect(data: Buffer, offset: int) -> Tuple[Rect, int]:
    left, offset = read_u32(data, offset, "rect left")
    top, offset = read_u32(data, offset, "rect top")
    right, offset = read_u32(data, offset, "rect right")
    bottom, offset = read_u32(data, offset, "rect bottom")
    return Rect(left=left, top=top, right=right, bottom=bottom), offset


def read_point_array(data: Buffer, offset: int, ctx: DecodeContext,
                     site: str = "point array") -> Tuple[Tuple[Point, ...], int]:
    """
    Read a u16-counted array of points.

    Returns:
        Tuple of (points, new_offset)
    """
    count, offset = read_count(data, offset, 2, site, ctx.max_count)
    points = []
    for _ in range(count):
        point, offset = read_point(data, offset)
        points.append(point)
    return tuple(points), offset


def read_attributes(data: Buffer, offset: int) -> Tuple[Attributes, int]:
    value, offset = read_u8(data, offset, "attributes")
    return Attributes.from_byte(value), offset


def read_classifier(data: Buffer, offset: int) -> Tuple[Classifier, int]:
    family_genus, offset = read_u16(data, offset, "classifier family/genus")
    species_event, offset = read_u32(data, offset, "classifier species/event")
    return Classifier(family_genus=family_genus, species_event=species_event), offset


def read_enum(data: Buffer, offset: int, enum_type: Type[E],
              reader: Callable[..., Tuple[int, int]]) -> Tuple[E, int]:
    """
    Read a discriminant with `reader` and map it onto `enum_type`.

    Raises:
        InvalidEnumValue: if no enumerator has that value
    """
    start = offset
    value, offset = reader(data, offset, enum_type.__name__)
    try:
        return enum_type(value), offset
    except ValueError:
        raise InvalidEnumValue(enum_type.__name__, value, start) from None
