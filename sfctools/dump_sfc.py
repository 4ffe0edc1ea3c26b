#!/usr/bin/env python3
"""
SFC Dump

Prints a summary of a Creatures .sfc world file and optionally writes
the decoded document as JSON.

Usage:
    python -m sfctools.dump_sfc Eden.sfc
    python -m sfctools.dump_sfc Eden.sfc --output eden.json --config dump.ini
    python -m sfctools.dump_sfc Eden.sfc --sprites Images/
"""

import argparse
import json
import sys
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import DumpConfig
from .parsers import SfcParseError, SfcParser
from .parsers.archive import ArchiveHeader, HeaderOrTag
from .parsers.world import Document, Gallery, Object, Room, SimpleObject
from .utils import close_logging, init_logging, log, logError, logWarning, print_summary


def _header_to_dict(header_or_tag: HeaderOrTag) -> Dict[str, Any]:
    if isinstance(header_or_tag, ArchiveHeader):
        return {'class': header_or_tag.class_name, 'schema': header_or_tag.schema}
    return {'tag': header_or_tag.tag}


def _gallery_to_dict(gallery: Gallery) -> Dict[str, Any]:
    return {
        'archive': _header_to_dict(gallery.header_or_tag),
        'fsp': gallery.fsp,
        'file_pos': gallery.file_pos,
        'users': gallery.users,
        'images': [
            {'offset': img.offset, 'width': img.width, 'height': img.height, 'status': img.status}
            for img in gallery.images
        ],
    }


def _room_to_dict(room: Room, config: DumpConfig) -> Dict[str, Any]:
    result = {
        'room_id': room.room_id,
        'room_type': room.room_type.name,
        'rect': [room.rect.left, room.rect.top, room.rect.right, room.rect.bottom],
        'doors': {
            direction: [{'room_id': d.room_id, 'amount_open': d.amount_open} for d in doors]
            for direction, doors in zip(('left', 'up', 'right', 'down'), room.door_arrays)
        },
        'floor_value': room.floor_value,
        'nutrients': [room.inorganic_nutrient, room.organic_nutrient],
        'temperature': [room.temperature, room.heat_source],
        'pressure': [room.pressure, room.pressure_source],
        'wind': list(room.wind.as_tuple()),
        'light': [room.light, room.light_source],
        'radiation': [room.radiation, room.radiation_source],
        'ground': [list(p) for p in room.ground],
        'visited': room.is_visited,
        'music_track': room.music_track,
        'drop_status': room.drop_status.name,
    }
    if config.include_bacteria:
        result['bacteria'] = [
            {
                'state': b.state.name,
                'antigen': b.antigen,
                'fatal_level': b.fatal_level,
                'infect_level': b.infect_level,
                'toxins': list(b.toxins),
            }
            for b in room.bacteria
        ]
    return result


def _object_to_dict(obj: Object, config: DumpConfig) -> Dict[str, Any]:
    result = {
        'archive': _header_to_dict(obj.header_or_tag),
        'classifier': [obj.classifier.family_genus, obj.classifier.species_event],
        'id': obj.id,
        'movement_status': obj.movement_status.name,
        'attributes': obj.attributes.to_byte(),
        'limit': [obj.limit.left, obj.limit.top, obj.limit.right, obj.limit.bottom],
        'gallery': obj.gallery.fsp,
        'current_room': obj.current_room,
        'scripts': [
            {'classifier': [s.classifier.family_genus, s.classifier.species_event], 'body': s.body}
            for s in obj.scripts
        ],
    }
    if config.include_objvars:
        result['objvars'] = list(obj.objvars)
    if isinstance(obj, SimpleObject):
        result['entity'] = {
            'image_index': obj.entity.image_index,
            'plane': obj.entity.plane,
            'world': [obj.entity.world_x, obj.entity.world_y],
            'animation': obj.entity.animation,
        }
        result['pickup_handles'] = [list(p.as_tuple()) for p in obj.pickup_handles]
        result['pickup_points'] = [list(p.as_tuple()) for p in obj.pickup_points]
    return result


def document_to_dict(doc: Document, config: Optional[DumpConfig] = None) -> Dict[str, Any]:
    """Convert a decoded document into JSON-serialisable data."""
    config = config or DumpConfig()
    flags = doc.map.flags
    return {
        'map': {
            'wrappable': flags.is_wrappable,
            'time_of_day': flags.time_of_day,
            'day_in_year': flags.day_in_year,
            'year': flags.year,
            'gallery': _gallery_to_dict(doc.map.gallery),
            'rooms': [_room_to_dict(room, config) for room in doc.map.rooms],
        },
        'objects': [_object_to_dict(obj, config) for obj in doc.objects],
        'scenery': [_object_to_dict(obj, config) for obj in doc.scenery],
    }


def find_missing_sprites(doc: Document, sprites_dir: Path) -> List[str]:
    """Return the sprite files referenced by galleries that are not in sprites_dir."""
    names = {doc.map.gallery.sprite_name}
    for obj in list(doc.objects) + list(doc.scenery):
        if obj.gallery.fsp.strip():
            names.add(obj.gallery.sprite_name)

    present = {p.name.lower() for p in sprites_dir.iterdir()} if sprites_dir.is_dir() else set()
    return sorted(name for name in names if name.lower() not in present)


def print_document_summary(doc: Document, trailing_bytes: int):
    room_types = Counter(room.room_type.name for room in doc.map.rooms)
    door_count = sum(len(room.doors) for room in doc.map.rooms)

    log(f"Rooms:    {doc.map.room_count} ({door_count} doors)")
    for name, count in sorted(room_types.items()):
        log(f"  {name:<12} {count}")
    log(f"Objects:  {doc.object_count}")
    log(f"Scenery:  {doc.scenery_count}")
    log(f"Gallery:  {doc.map.gallery.sprite_name} ({doc.map.gallery.num_images} images)")
    log(f"Time:     year {doc.map.flags.year}, day {doc.map.flags.day_in_year}, "
        f"time of day {doc.map.flags.time_of_day}")
    if trailing_bytes:
        logWarning(f"{trailing_bytes} trailing bytes after scenery")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Decode a Creatures .sfc world file',
        epilog='Examples:\n'
               '  %(prog)s Eden.sfc\n'
               '  %(prog)s Eden.sfc --output eden.json --config dump.ini\n',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('sfc_file', type=Path,
                        help='Path to the .sfc world file')
    parser.add_argument('--output', '-o', type=Path, default=None,
                        help='Write the decoded document as JSON')
    parser.add_argument('--config', type=Path, default=None,
                        help='INI file with dump settings')
    parser.add_argument('--sprites', type=Path, default=None,
                        help='Directory of .s16 sprite files to check gallery references against')
    parser.add_argument('--log', type=Path, default=None,
                        help='Log file (overrides [logging] log_path)')
    args = parser.parse_args(argv)

    config = DumpConfig.load(args.config) if args.config else DumpConfig()
    init_logging(args.log or config.log_path)

    try:
        log(f"Parsing {args.sfc_file}...")
        sfc = SfcParser(args.sfc_file, max_count=config.max_collection_count)
        try:
            doc = sfc.document
        except FileNotFoundError:
            logError(f"File not found: {args.sfc_file}")
            return 1
        except SfcParseError:
            # SfcParser has already logged the error with offset and record path
            return 1

        print_document_summary(doc, sfc.trailing_bytes)

        if args.sprites:
            for name in find_missing_sprites(doc, args.sprites):
                logWarning(f"Sprite file not found: {args.sprites / name}")

        if args.output:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            with open(args.output, 'w', encoding='utf-8') as f:
                json.dump(document_to_dict(doc, config), f, indent=config.indent)
            log(f"Wrote {args.output}")

        return 0
    finally:
        if config.summary:
            print_summary()
        close_logging()


if __name__ == '__main__':
    sys.exit(main())
