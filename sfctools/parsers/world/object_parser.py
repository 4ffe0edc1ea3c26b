"""
Object parser.

Parses Object, SimpleObject and Entity records.

Object / SimpleObject common fields:
- Classifier (6 bytes)
- i32 id
- u8 movement_status (0..4)
- u8 attributes (bit-flags)
- Rect limit
- u16 vehicle_ptr
- u8 active
- CGallery
- u32 timer_rate
- u32 timer
- u16 obj_pointer
- u32 active_sound
- 100 * u32 objvars (fixed, no count)
- u8 min_door_size
- i32 range
- i32 falling_object_index
- i32 gravity_acceleration
- Point velocity
- i32 restitution
- i32 aerodynamic
- u16 current_room
- u32 wall_last_collided
- u8 threat
- u8 running
- u32 script count (ceiling applies)
- Scripts: Classifier + counted string body

SimpleObject then continues with:
- Entity:
  - Header or tag ("Entity")
  - u16 gallery_tag
  - u8 image_index
  - u8 base_index
  - i32 plane
  - i32 world_x
  - i32 world_y
  - u8 animation flag, followed by char[99] animation only when it equals 1
- i32 normal_plane
- u8[3] click
- u8 touch
- PointArray pickup_handles
- PointArray pickup_points
"""

from typing import Any, Dict, Tuple

from ...constants import (
    ANIMATION_PRESENT,
    ANIMATION_STRING_SIZE,
    CLASS_ENTITY,
    CLASS_OBJECT,
    CLASS_SIMPLE_OBJECT,
    CLICK_MASK_SIZE,
    OBJVAR_SLOTS,
)
from ..archive import read_header_or_tag
from ..base import (
    Buffer,
    read_bytes,
    read_count,
    read_counted_string,
    read_fixed_string,
    read_i32,
    read_u8,
    read_u16,
    read_u32,
)
from ..registry import DecodeContext
from .data_types import Entity, MovementStatus, Object, Script, SimpleObject
from .gallery_parser import read_gallery
from .structures import read_attributes, read_classifier, read_enum, read_point, read_point_array, read_rect


def read_script(data: Buffer, offset: int) -> Tuple[Script, int]:
    classifier, offset = read_classifier(data, offset)
    body, offset = read_counted_string(data, offset, "script body")
    return Script(classifier=classifier, body=body), offset


def read_scripts(data: Buffer, offset: int, ctx: DecodeContext) -> Tuple[Tuple[Script, ...], int]:
    count, offset = read_count(data, offset, 4, "scripts", ctx.max_count)
    scripts = []
    for _ in range(count):
        script, offset = read_script(data, offset)
        scripts.append(script)
    return tuple(scripts), offset


def read_object_fields(data: Buffer, offset: int, ctx: DecodeContext) -> Tuple[Dict[str, Any], int]:
    """
    Read the fields Object and SimpleObject share, after the header or tag.

    Returns:
        Tuple of (field name -> value, new_offset)
    """
    fields: Dict[str, Any] = {}

    fields['classifier'], offset = read_classifier(data, offset)
    fields['id'], offset = read_i32(data, offset, "id")
    fields['movement_status'], offset = read_enum(data, offset, MovementStatus, read_u8)
    fields['attributes'], offset = read_attributes(data, offset)
    fields['limit'], offset = read_rect(data, offset)
    fields['vehicle_ptr'], offset = read_u16(data, offset, "vehicle_ptr")
    fields['active'], offset = read_u8(data, offset, "active")
    fields['gallery'], offset = read_gallery(data, offset, ctx)
    fields['timer_rate'], offset = read_u32(data, offset, "timer_rate")
    fields['timer'], offset = read_u32(data, offset, "timer")
    fields['obj_pointer'], offset = read_u16(data, offset, "obj_pointer")
    fields['active_sound'], offset = read_u32(data, offset, "active_sound")

    objvars = []
    for _ in range(OBJVAR_SLOTS):
        var, offset = read_u32(data, offset, "objvar")
        objvars.append(var)
    fields['objvars'] = tuple(objvars)

    fields['min_door_size'], offset = read_u8(data, offset, "min_door_size")
    fields['range'], offset = read_i32(data, offset, "range")
    fields['falling_object_index'], offset = read_i32(data, offset, "falling_object_index")
    fields['gravity_acceleration'], offset = read_i32(data, offset, "gravity_acceleration")
    fields['velocity'], offset = read_point(data, offset)
    fields['restitution'], offset = read_i32(data, offset, "restitution")
    fields['aerodynamic'], offset = read_i32(data, offset, "aerodynamic")
    fields['current_room'], offset = read_u16(data, offset, "current_room")
    fields['wall_last_collided'], offset = read_u32(data, offset, "wall_last_collided")
    fields['threat'], offset = read_u8(data, offset, "threat")
    fields['running'], offset = read_u8(data, offset, "running")
    fields['scripts'], offset = read_scripts(data, offset, ctx)

    return fields, offset


def read_object(data: Buffer, offset: int, ctx: DecodeContext, index: int = 0) -> Tuple[Object, int]:
    """
    Read an Object record.

    Args:
        data: Binary data to read from
        offset: Offset of the object's header or tag
        ctx: Decode context for this parse
        index: Position in the object list (for error paths)

    Returns:
        Tuple of (Object, new_offset)
    """
    with ctx.record(CLASS_OBJECT, index):
        header_or_tag, offset = read_header_or_tag(data, offset, ctx, CLASS_OBJECT)
        fields, offset = read_object_fields(data, offset, ctx)
        return Object(header_or_tag=header_or_tag, **fields), offset


def read_entity(data: Buffer, offset: int, ctx: DecodeContext) -> Tuple[Entity, int]:
    """Read an Entity record; the animation string only exists when its flag is 1."""
    with ctx.record(CLASS_ENTITY):
        header_or_tag, offset = read_header_or_tag(data, offset, ctx, CLASS_ENTITY)

        gallery_tag, offset = read_u16(data, offset, "entity gallery_tag")
        image_index, offset = read_u8(data, offset, "entity image_index")
        base_index, offset = read_u8(data, offset, "entity base_index")
        plane, offset = read_i32(data, offset, "entity plane")
        world_x, offset = read_i32(data, offset, "entity world_x")
        world_y, offset = read_i32(data, offset, "entity world_y")
        animation_flag, offset = read_u8(data, offset, "entity animation flag")

        animation = ""
        if animation_flag == ANIMATION_PRESENT:
            animation, offset = read_fixed_string(data, offset, ANIMATION_STRING_SIZE, "entity animation")

        return Entity(
            header_or_tag=header_or_tag,
            gallery_tag=gallery_tag,
            image_index=image_index,
            base_index=base_index,
            plane=plane,
            world_x=world_x,
            world_y=world_y,
            animation_flag=animation_flag,
            animation=animation,
        ), offset


def read_simple_object(data: Buffer, offset: int, ctx: DecodeContext,
                       index: int = 0) -> Tuple[SimpleObject, int]:
    """
    Read a SimpleObject (scenery) record.

    Returns:
        Tuple of (SimpleObject, new_offset)
    """
    with ctx.record(CLASS_SIMPLE_OBJECT, index):
        header_or_tag, offset = read_header_or_tag(data, offset, ctx, CLASS_SIMPLE_OBJECT)
        fields, offset = read_object_fields(data, offset, ctx)

        entity, offset = read_entity(data, offset, ctx)
        normal_plane, offset = read_i32(data, offset, "normal_plane")
        click, offset = read_bytes(data, offset, CLICK_MASK_SIZE, "click")
        touch, offset = read_u8(data, offset, "touch")
        pickup_handles, offset = read_point_array(data, offset, ctx, "pickup handles")
        pickup_points, offset = read_point_array(data, offset, ctx, "pickup points")

        return SimpleObject(
            header_or_tag=header_or_tag,
            entity=entity,
            normal_plane=normal_plane,
            click=click,
            touch=touch,
            pickup_handles=pickup_handles,
            pickup_points=pickup_points,
            **fields,
        ), offset
