"""
Byte builders for hand-made SFC test buffers.

Test-only: the package itself never writes SFC data. SfcBuilder mirrors
the archive convention of the game, writing a full class header on the
first occurrence of a class and a short tag afterwards, so the buffers
it produces must be assembled in stream order.
"""

import struct
from typing import Iterable, List, Optional, Sequence, Set, Tuple


def u8(value: int) -> bytes:
    return struct.pack('<B', value)


def u16(value: int) -> bytes:
    return struct.pack('<H', value)


def u32(value: int) -> bytes:
    return struct.pack('<I', value)


def i32(value: int) -> bytes:
    return struct.pack('<i', value)


def archive_header(class_name: str, schema: int = 1, tag: int = 0xFFFF,
                   object_tag: Optional[int] = None, padding: int = 0) -> bytes:
    """Full archive header, optionally preceded by zero padding words."""
    name = class_name.encode('ascii')
    out = b'\x00\x00' * padding + u16(tag)
    if tag == 0x7FFF:
        out += u32(0x80000001 if object_tag is None else object_tag)
    return out + u16(schema) + u16(len(name)) + name


def counted_string(text: bytes) -> bytes:
    return u8(len(text)) + text


def point(x: int, y: int) -> bytes:
    return i32(x) + i32(y)


def rect(left: int, top: int, right: int, bottom: int) -> bytes:
    return u32(left) + u32(top) + u32(right) + u32(bottom)


def point_array(points: Sequence[Tuple[int, int]]) -> bytes:
    return u16(len(points)) + b''.join(point(x, y) for x, y in points)


def bacteria(flags: int = 0, antigen: int = 0, fatal: int = 0, infect: int = 0,
             toxins: bytes = b'\x00\x00\x00\x00') -> bytes:
    return u8(flags) + u8(antigen) + u8(fatal) + u8(infect) + toxins


class SfcBuilder:
    """Writes records in stream order, tracking which classes are headered."""

    def __init__(self, tag: int = 0x8001):
        self.seen: Set[str] = set()
        self.tag = tag

    def opener(self, class_name: str) -> bytes:
        if class_name in self.seen:
            return u16(self.tag)
        self.seen.add(class_name)
        return archive_header(class_name)

    def image(self, width: int = 10, height: int = 20, offset: int = 0,
              class_index: int = 1, status: int = 0) -> bytes:
        return u16(class_index) + u8(status) + u32(width) + u32(height) + u32(offset)

    def gallery(self, fsp: bytes = b'back', images: Sequence[bytes] = (),
                file_pos: int = 0, users: int = 1) -> bytes:
        return (self.opener('CGallery') + u32(len(images)) + fsp.ljust(4, b'\x00')[:4]
                + u32(file_pos) + u32(users) + b''.join(images))

    def door(self, room_id: int, amount_open: int = 255) -> bytes:
        return self.opener('CDoor') + u8(amount_open) + u32(room_id)

    def door_array(self, doors: Iterable[Tuple[int, int]]) -> bytes:
        doors = list(doors)
        return u16(len(doors)) + b''.join(self.door(room_id, amount) for room_id, amount in doors)

    def room(self, room_id: int = 0, rect_values: Tuple[int, int, int, int] = (0, 0, 100, 50),
             doors: Sequence[Sequence[Tuple[int, int]]] = ((), (), (), ()),
             room_type: int = 0, surface: Sequence[Tuple[int, int]] = ((0, 40), (100, 40)),
             music: bytes = b'', drop_status: int = 0, bacteria_flags: int = 0,
             visited: int = 0) -> bytes:
        out = self.opener('CRoom') + u32(room_id) + u16(1) + rect(*rect_values)
        for array in doors:
            out += self.door_array(array)
        out += i32(room_type)
        out += u8(1) + u8(2) + u8(3) + u8(4)         # floor value, nutrients, temperature
        out += i32(-5)                               # heat source
        out += u8(6) + i32(7)                        # pressure, source
        out += point(8, -9)                          # wind
        out += u8(10) + i32(11)                      # light, source
        out += u8(12) + i32(13)                      # radiation, source
        out += bacteria(bacteria_flags, antigen=1) * 100
        out += point_array(surface)
        out += u32(visited)
        out += counted_string(music)
        out += u32(drop_status)
        return out

    def scripts(self, scripts: Sequence[bytes]) -> bytes:
        return u32(len(scripts)) + b''.join(
            u16(0x0102) + u32(0x03040506) + counted_string(body) for body in scripts
        )

    def object_fields(self, obj_id: int = 1, movement: int = 0, attributes: int = 0,
                      fsp: bytes = b'obj1', scripts: Sequence[bytes] = (),
                      objvar: int = 0) -> bytes:
        out = u16(0x0203) + u32(0x00040005)          # classifier
        out += i32(obj_id) + u8(movement) + u8(attributes)
        out += rect(0, 0, 800, 600)
        out += u16(0) + u8(1)                        # vehicle ptr, active
        out += self.gallery(fsp, [self.image()])
        out += u32(10) + u32(20) + u16(0) + u32(0)   # timer rate, timer, obj ptr, sound
        out += u32(objvar) * 100
        out += u8(3)                                 # min door size
        out += i32(100) + i32(-1) + i32(2)           # range, falling index, gravity
        out += point(1, -1)                          # velocity
        out += i32(50) + i32(5)                      # restitution, aerodynamic
        out += u16(7) + u32(0) + u8(0) + u8(1)       # room, wall, threat, running
        out += self.scripts(scripts)
        return out

    def object(self, **kwargs) -> bytes:
        return self.opener('Object') + self.object_fields(**kwargs)

    def entity(self, animation: Optional[bytes] = None, flag: Optional[int] = None,
               world: Tuple[int, int] = (300, 400)) -> bytes:
        out = self.opener('Entity') + u16(0x8002) + u8(4) + u8(5) + i32(1000)
        out += i32(world[0]) + i32(world[1])
        if flag is None:
            flag = 1 if animation is not None else 0
        out += u8(flag)
        if flag == 1:
            out += (animation or b'').ljust(99, b'\x00')
        return out

    def simple_object(self, animation: Optional[bytes] = None,
                      handles: Sequence[Tuple[int, int]] = ((1, 2),),
                      points: Sequence[Tuple[int, int]] = ((3, 4), (5, 6)),
                      **kwargs) -> bytes:
        out = self.opener('SimpleObject') + self.object_fields(**kwargs)
        out += self.entity(animation)
        out += i32(1500)                             # normal plane
        out += b'\x01\x02\x03' + u8(1)               # click, touch
        out += point_array(handles) + point_array(points)
        return out

    def map_data(self, rooms: Sequence[dict] = (), images: int = 0,
                 flags: Tuple[int, int, int, int] = (1, 2, 3, 4)) -> bytes:
        self.seen.add('MapData')
        out = archive_header('MapData')
        out += b''.join(u32(v) for v in flags)
        out += self.gallery(b'back', [self.image(offset=6 + 8 * images + i * 400) for i in range(images)])
        out += u32(len(rooms)) + b''.join(self.room(**fields) for fields in rooms)
        return out

    def document(self, rooms: Sequence[dict] = (), objects: Sequence[dict] = (),
                 scenery: Sequence[dict] = (), trailing: bytes = b'', images: int = 0) -> bytes:
        out = self.map_data(rooms, images)
        out += u32(len(objects)) + b''.join(self.object(**fields) for fields in objects)
        out += u32(len(scenery)) + b''.join(self.simple_object(**fields) for fields in scenery)
        return out + trailing


def minimal_document() -> bytes:
    """MapData header with an empty gallery, no rooms, objects or scenery."""
    return SfcBuilder().document()


def two_room_document() -> bytes:
    rooms: List[dict] = [
        {'room_id': 1, 'doors': ((), (), ((2, 128),), ())},
        {'room_id': 2, 'rect_values': (100, 0, 200, 50), 'doors': (((1, 128),), (), (), ())},
    ]
    return SfcBuilder().document(rooms=rooms)
