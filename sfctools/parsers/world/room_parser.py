"""
Room parser.

Parses CRoom records together with their door arrays and bacteria.

CRoom format:
- Header or tag ("CRoom")
- u32 room_id
- u16 map_class_index
- Rect (16 bytes)
- 4 door arrays (left, up, right, down), each:
  - u16 count (ceiling applies)
  - count * CDoor:
    - Header or tag ("CDoor")
    - u8 amount_open
    - u32 room_id (target room)
- i32 room_type (-1..3)
- u8 floor_value
- u8 inorganic_nutrient
- u8 organic_nutrient
- u8 temperature
- i32 heat_source
- u8 pressure
- i32 pressure_source
- Point wind (8 bytes)
- u8 light
- i32 light_source
- u8 radiation
- i32 radiation_source
- 100 * Bacteria (8 bytes each, fixed, no count):
  - u8 flags (low two bits: state)
  - u8 antigen
  - u8 fatal_level
  - u8 infect_level
  - u8[4] toxins
- PointArray surface_points
- u32 visited
- counted string music_track
- u32 drop_status (0..2)
"""

from typing import Tuple

from ...constants import BACTERIA_SLOTS, CLASS_DOOR, CLASS_ROOM, DOOR_DIRECTION_COUNT, TOXIN_COUNT
from ...utils import logDebug
from ..archive import read_header_or_tag
from ..base import Buffer, read_bytes, read_count, read_counted_string, read_i32, read_u8, read_u16, read_u32
from ..errors import InvalidEnumValue
from ..registry import DecodeContext
from .data_types import Bacteria, BacteriaState, Door, DoorDirection, DropStatus, Room, RoomType
from .structures import read_enum, read_point, read_point_array, read_rect


def read_door(data: Buffer, offset: int, ctx: DecodeContext, index: int) -> Tuple[Door, int]:
    with ctx.record(CLASS_DOOR, index):
        header_or_tag, offset = read_header_or_tag(data, offset, ctx, CLASS_DOOR)
        amount_open, offset = read_u8(data, offset, "door amount_open")
        room_id, offset = read_u32(data, offset, "door room_id")
        return Door(header_or_tag=header_or_tag, amount_open=amount_open, room_id=room_id), offset


def read_door_array(data: Buffer, offset: int, ctx: DecodeContext) -> Tuple[Tuple[Door, ...], int]:
    """
    Read one u16-counted door array.

    Returns:
        Tuple of (doors, new_offset)
    """
    count, offset = read_count(data, offset, 2, "door array", ctx.max_count)
    doors = []
    for index in range(count):
        door, offset = read_door(data, offset, ctx, index)
        doors.append(door)
    return tuple(doors), offset


def read_door_arrays(data: Buffer, offset: int,
                     ctx: DecodeContext) -> Tuple[Tuple[Tuple[Door, ...], ...], int]:
    """Read the four door arrays of a room, indexed by DoorDirection."""
    arrays = []
    for direction in range(DOOR_DIRECTION_COUNT):
        with ctx.record(f"Doors.{DoorDirection(direction).name.lower()}"):
            doors, offset = read_door_array(data, offset, ctx)
        arrays.append(doors)
    return tuple(arrays), offset


def read_bacteria(data: Buffer, offset: int) -> Tuple[Bacteria, int]:
    start = offset
    flags, offset = read_u8(data, offset, "bacteria flags")
    state_value = flags & 0b11
    try:
        state = BacteriaState(state_value)
    except ValueError:
        raise InvalidEnumValue("BacteriaState", state_value, start) from None

    antigen, offset = read_u8(data, offset, "bacteria antigen")
    fatal_level, offset = read_u8(data, offset, "bacteria fatal_level")
    infect_level, offset = read_u8(data, offset, "bacteria infect_level")
    toxins, offset = read_bytes(data, offset, TOXIN_COUNT, "bacteria toxins")
    return Bacteria(
        state=state,
        antigen=antigen,
        fatal_level=fatal_level,
        infect_level=infect_level,
        toxins=toxins,
    ), offset


def read_room(data: Buffer, offset: int, ctx: DecodeContext, index: int = 0) -> Tuple[Room, int]:
    """
    Read a CRoom record.

    Args:
        data: Binary data to read from
        offset: Offset of the room's header or tag
        ctx: Decode context for this parse
        index: Position of the room in the room list (for error paths)

    Returns:
        Tuple of (Room, new_offset)
    """
    with ctx.record(CLASS_ROOM, index):
        header_or_tag, offset = read_header_or_tag(data, offset, ctx, CLASS_ROOM)

        room_id, offset = read_u32(data, offset, "room_id")
        map_class_index, offset = read_u16(data, offset, "map_class_index")
        rect, offset = read_rect(data, offset)
        door_arrays, offset = read_door_arrays(data, offset, ctx)
        room_type, offset = read_enum(data, offset, RoomType, read_i32)

        floor_value, offset = read_u8(data, offset, "floor_value")
        inorganic_nutrient, offset = read_u8(data, offset, "inorganic_nutrient")
        organic_nutrient, offset = read_u8(data, offset, "organic_nutrient")
        temperature, offset = read_u8(data, offset, "temperature")
        heat_source, offset = read_i32(data, offset, "heat_source")
        pressure, offset = read_u8(data, offset, "pressure")
        pressure_source, offset = read_i32(data, offset, "pressure_source")
        wind, offset = read_point(data, offset)
        light, offset = read_u8(data, offset, "light")
        light_source, offset = read_i32(data, offset, "light_source")
        radiation, offset = read_u8(data, offset, "radiation")
        radiation_source, offset = read_i32(data, offset, "radiation_source")

        bacteria = []
        for _ in range(BACTERIA_SLOTS):
            bacterium, offset = read_bacteria(data, offset)
            bacteria.append(bacterium)

        surface_points, offset = read_point_array(data, offset, ctx, "surface points")
        visited, offset = read_u32(data, offset, "visited")
        music_track, offset = read_counted_string(data, offset, "music_track")
        drop_status, offset = read_enum(data, offset, DropStatus, read_u32)

        return Room(
            header_or_tag=header_or_tag,
            room_id=room_id,
            map_class_index=map_class_index,
            rect=rect,
            door_arrays=door_arrays,
            room_type=room_type,
            floor_value=floor_value,
            inorganic_nutrient=inorganic_nutrient,
            organic_nutrient=organic_nutrient,
            temperature=temperature,
            heat_source=heat_source,
            pressure=pressure,
            pressure_source=pressure_source,
            wind=wind,
            light=light,
            light_source=light_source,
            radiation=radiation,
            radiation_source=radiation_source,
            bacteria=tuple(bacteria),
            surface_points=surface_points,
            visited=visited,
            music_track=music_track,
            drop_status=drop_status,
        ), offset


def read_rooms(data: Buffer, offset: int, ctx: DecodeContext) -> Tuple[Tuple[Room, ...], int]:
    """Read the u32-counted room list."""
    count, offset = read_count(data, offset, 4, "rooms", ctx.max_count)
    logDebug(f"Rooms: {count}")
    rooms = []
    for index in range(count):
        room, offset = read_room(data, offset, ctx, index)
        rooms.append(room)
    return tuple(rooms), offset
