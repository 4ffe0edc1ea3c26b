"""
Data types for SFC world parsing.

Contains the dataclasses shared by all world submodules. Every record is
frozen and every sequence is a tuple: a Document is built once per parse
and never mutated afterwards.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from ..archive import ArchiveHeader, HeaderOrTag


class RoomType(IntEnum):
    """Room environment, stored as i32."""
    INVALID = -1
    INDOORS = 0
    SURFACE = 1
    UNDERWATER = 2
    ATMOSPHERE = 3


class DropStatus(IntEnum):
    """Whether objects may be dropped in a room, stored as u32."""
    NEVER = 0
    ABOVE_FLOOR = 1
    ALWAYS = 2


class BacteriaState(IntEnum):
    """Low two bits of a bacterium's flag byte."""
    NOT_PRESENT = 0
    DORMANT = 1
    ACTIVE = 2


class MovementStatus(IntEnum):
    """How an object moves, stored as u8."""
    AUTONOMOUS = 0
    MOUSE_DRIVEN = 1
    FLOATING = 2
    IN_VEHICLE = 3
    CARRIED = 4


class DoorDirection(IntEnum):
    """Index of a door array within a room, in stream order."""
    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3


@dataclass(frozen=True)
class Point:
    """Signed 2D point."""
    x: int
    y: int

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """
    Rectangle in file coordinates (vertical axis grows downward).

    Use to_render_rect() for render space, where the vertical axis
    grows upward.
    """
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def to_render_rect(self) -> Tuple[float, float, float, float]:
        """
        Convert to render space with vertical fields negated.

        Returns:
            (min_x, min_y, max_x, max_y)
        """
        x0, y0 = float(self.left), -float(self.top)
        x1, y1 = float(self.right), -float(self.bottom)
        return (min(x0, x1), min(y0, y1), max(x0, x1), max(y0, y1))


@dataclass(frozen=True)
class Attributes:
    """Object attribute bit-flags (one byte)."""
    carryable: bool = False
    mouseable: bool = False
    activatable: bool = False
    container: bool = False
    invisible: bool = False
    floatable: bool = False
    has_boundaries: bool = False
    suffers_gravity: bool = False

    # Field name -> bit position
    BITS = (
        'carryable',
        'mouseable',
        'activatable',
        'container',
        'invisible',
        'floatable',
        'has_boundaries',
        'suffers_gravity',
    )

    @classmethod
    def from_byte(cls, value: int) -> 'Attributes':
        return cls(**{name: bool(value & (1 << bit)) for bit, name in enumerate(cls.BITS)})

    def to_byte(self) -> int:
        value = 0
        for bit, name in enumerate(self.BITS):
            if getattr(self, name):
                value |= 1 << bit
        return value


@dataclass(frozen=True)
class Image:
    """One sprite in a gallery."""
    gallery_class_index: int
    status: int
    width: int
    height: int
    offset: int  # Byte offset of the pixel data in the sprite file


@dataclass(frozen=True)
class Gallery:
    """Named set of sprite images."""
    header_or_tag: HeaderOrTag
    num_images: int
    fsp: str  # Sprite file stem (4 characters)
    file_pos: int
    users: int
    images: Tuple[Image, ...] = ()

    @property
    def sprite_name(self) -> str:
        """Sprite file name this gallery draws from (e.g. "back.s16")."""
        return f"{self.fsp.strip()}.s16"


@dataclass(frozen=True)
class Door:
    """Opening between two rooms. room_id is resolved by lookup, never owned."""
    header_or_tag: HeaderOrTag
    amount_open: int  # 0-255
    room_id: int


@dataclass(frozen=True)
class Bacteria:
    """One of a room's fixed bacteria slots."""
    state: BacteriaState
    antigen: int
    fatal_level: int
    infect_level: int
    toxins: bytes  # 4 bytes

    @property
    def is_present(self) -> bool:
        return self.state != BacteriaState.NOT_PRESENT


@dataclass(frozen=True)
class Room:
    """Rectangular world region with its own environment state."""
    header_or_tag: HeaderOrTag
    room_id: int
    map_class_index: int
    rect: Rect
    door_arrays: Tuple[Tuple[Door, ...], ...]  # Indexed by DoorDirection
    room_type: RoomType
    floor_value: int
    inorganic_nutrient: int
    organic_nutrient: int
    temperature: int
    heat_source: int
    pressure: int
    pressure_source: int
    wind: Point
    light: int
    light_source: int
    radiation: int
    radiation_source: int
    bacteria: Tuple[Bacteria, ...]
    surface_points: Tuple[Point, ...]
    visited: int
    music_track: str
    drop_status: DropStatus

    @property
    def render_rect(self) -> Tuple[float, float, float, float]:
        return self.rect.to_render_rect()

    @property
    def ground(self) -> List[Tuple[int, int]]:
        """Surface polyline as (x, y) tuples."""
        return [point.as_tuple() for point in self.surface_points]

    @property
    def doors(self) -> List[Door]:
        """All doors across the four directions, in stream order."""
        return [door for array in self.door_arrays for door in array]

    @property
    def is_visited(self) -> bool:
        return self.visited != 0

    def doors_towards(self, direction: DoorDirection) -> Tuple[Door, ...]:
        return self.door_arrays[direction]


@dataclass(frozen=True)
class MapDataFlags:
    """World environment flags."""
    map_is_wrappable: int
    time_of_day: int
    day_in_year: int
    year: int

    @property
    def is_wrappable(self) -> bool:
        return self.map_is_wrappable != 0


@dataclass(frozen=True)
class MapData:
    """Map header, flags, tile gallery and rooms."""
    header: ArchiveHeader
    flags: MapDataFlags
    gallery: Gallery
    rooms: Tuple[Room, ...] = ()

    @property
    def room_count(self) -> int:
        return len(self.rooms)

    def get_room(self, room_id: int) -> Optional[Room]:
        """Resolve a room id (e.g. a door's target) to its Room."""
        for room in self.rooms:
            if room.room_id == room_id:
                return room
        return None

    def rooms_by_id(self) -> Dict[int, Room]:
        return {room.room_id: room for room in self.rooms}


@dataclass(frozen=True)
class Classifier:
    """Family/genus and species/event of an agent or script."""
    family_genus: int
    species_event: int


@dataclass(frozen=True)
class Script:
    """Script attached to an object."""
    classifier: Classifier
    body: str


@dataclass(frozen=True)
class Entity:
    """Drawable part of a simple object."""
    header_or_tag: HeaderOrTag
    gallery_tag: int
    image_index: int
    base_index: int
    plane: int
    world_x: int
    world_y: int
    animation_flag: int
    animation: str = ""  # Empty unless animation_flag == 1

    @property
    def has_animation(self) -> bool:
        return self.animation_flag == 1


@dataclass(frozen=True)
class Object:
    """In-world agent."""
    header_or_tag: HeaderOrTag
    classifier: Classifier
    id: int
    movement_status: MovementStatus
    attributes: Attributes
    limit: Rect
    vehicle_ptr: int
    active: int
    gallery: Gallery
    timer_rate: int
    timer: int
    obj_pointer: int
    active_sound: int
    objvars: Tuple[int, ...]
    min_door_size: int
    range: int
    falling_object_index: int
    gravity_acceleration: int
    velocity: Point
    restitution: int
    aerodynamic: int
    current_room: int
    wall_last_collided: int
    threat: int
    running: int
    scripts: Tuple[Script, ...]


@dataclass(frozen=True)
class SimpleObject(Object):
    """Scenery agent: the Object fields followed by an Entity and pickup data."""
    entity: Entity
    normal_plane: int
    click: bytes  # 3 bytes
    touch: int
    pickup_handles: Tuple[Point, ...]
    pickup_points: Tuple[Point, ...]


@dataclass(frozen=True)
class Document:
    """A decoded SFC world file."""
    map: MapData
    objects: Tuple[Object, ...] = ()
    scenery: Tuple[SimpleObject, ...] = ()

    @property
    def object_count(self) -> int:
        return len(self.objects)

    @property
    def scenery_count(self) -> int:
        return len(self.scenery)
