"""
Constants used across the SFC modules.

Consolidates magic numbers and class names observed in Creatures world
files so the decoders read as a list of fields rather than numbers.
"""

# Ceiling applied to every length-prefixed count in the stream
# (door arrays, point arrays, script lists, gallery images, rooms,
# objects, scenery). Checked before anything is allocated.
MAX_COLLECTION_COUNT = 2000

# Fixed slot counts (never length-prefixed in the stream)
BACTERIA_SLOTS = 100
OBJVAR_SLOTS = 100

# Door arrays per room, in stream order
DOOR_DIRECTION_COUNT = 4

# Entity animation string, present only when its flag byte equals 1
ANIMATION_STRING_SIZE = 99
ANIMATION_PRESENT = 1

# Gallery sprite-file stem (fixed width, not counted)
GALLERY_FSP_SIZE = 4

# SimpleObject click mask
CLICK_MASK_SIZE = 3

# Bacteria toxins
TOXIN_COUNT = 4

# Archive header tags
# A u16 tag of 0x7fff means a full 32-bit object tag follows.
BIG_OBJECT_TAG = 0x7FFF
# Bit 15 of the short tag lands on bit 31 of the object tag.
CLASS_TAG_BIT = 0x8000
OBJECT_TAG_HIGH_BIT = 0x80000000

# Class names emitted in archive headers
CLASS_MAP_DATA = "MapData"
CLASS_GALLERY = "CGallery"
CLASS_ROOM = "CRoom"
CLASS_DOOR = "CDoor"
CLASS_OBJECT = "Object"
CLASS_ENTITY = "Entity"
CLASS_SIMPLE_OBJECT = "SimpleObject"

# Text encoding for strings stored in world files (Windows title)
SFC_TEXT_ENCODING = 'cp1252'
