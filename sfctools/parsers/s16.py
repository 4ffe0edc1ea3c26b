"""
S16 Sprite File Parser

Parses .s16 sprite files, the sheets a gallery's images are cut from.
Pixel data is decoded lazily, one image per request.

File format:
- Header (6 bytes):
  - u32 pixel format (0 = RGB555, 1 = RGB565)
  - u16 image_count
- Image table (8 bytes each):
  - u32 offset (absolute, to the pixel data)
  - u16 width
  - u16 height
- Pixel data: width * height little-endian u16 words per image

Decoded images are (height, width, 4) uint8 RGBA arrays. Each channel is
widened from its source bit width by shifting; alpha is 0 for pure black
pixels and 255 otherwise.
"""

import struct
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np


class S16FormatError(ValueError):
    """Raised for truncated sprite files or unknown pixel formats."""


class S16Format(IntEnum):
    RGB555 = 0
    RGB565 = 1


@dataclass(frozen=True)
class S16ImageInfo:
    """Image table entry."""
    index: int
    offset: int
    width: int
    height: int

    @property
    def byte_size(self) -> int:
        return self.width * self.height * 2


def decode_pixels(pixels: Union[bytes, np.ndarray], pixel_format: S16Format) -> np.ndarray:
    """
    Expand 16-bit pixels to RGBA.

    Args:
        pixels: Raw little-endian bytes, or an array of u16 words
        pixel_format: RGB555 or RGB565

    Returns:
        Array of shape pixels.shape + (4,), dtype uint8
    """
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        words = np.frombuffer(pixels, dtype='<u2')
    else:
        words = np.asarray(pixels, dtype=np.uint16)

    if pixel_format == S16Format.RGB565:
        red = (words & 0xF800) >> 8
        green = (words & 0x07E0) >> 3
        blue = (words & 0x001F) << 3
    elif pixel_format == S16Format.RGB555:
        red = (words & 0x7C00) >> 7
        green = (words & 0x03E0) >> 2
        blue = (words & 0x001F) << 3
    else:
        raise S16FormatError(f"Unknown S16 pixel format: {pixel_format}")

    rgba = np.empty(words.shape + (4,), dtype=np.uint8)
    rgba[..., 0] = red
    rgba[..., 1] = green
    rgba[..., 2] = blue
    rgba[..., 3] = np.where((red | green | blue) == 0, 0, 255)
    return rgba


class S16Parser:
    """
    Parser for .s16 sprite files.

    Usage:
        sprites = S16Parser(Path("Images/back.s16"))
        print(sprites.image_count, sprites.pixel_format.name)
        rgba = sprites.get_image(0)

        # Resolve a gallery image by the offset stored in the world file
        rgba = sprites.get_image_at_offset(image.offset)
    """

    HEADER_SIZE = 6
    ENTRY_SIZE = 8

    def __init__(self, data: bytes, name: str = "<memory>"):
        """
        Initialize parser with sprite file contents.

        Args:
            data: Raw .s16 file data
            name: Name used in error messages
        """
        self.name = name
        self._data = data
        self._images: List[S16ImageInfo] = []
        self._by_offset: Dict[int, S16ImageInfo] = {}
        self._cache: Dict[int, np.ndarray] = {}
        self.pixel_format = S16Format.RGB555
        self._parse_header()

    @classmethod
    def from_file(cls, filepath: Union[str, Path]) -> 'S16Parser':
        filepath = Path(filepath)
        with open(filepath, 'rb') as f:
            data = f.read()
        return cls(data, filepath.name)

    def _parse_header(self):
        """Parse pixel format and image table."""
        if len(self._data) < self.HEADER_SIZE:
            raise S16FormatError(f"{self.name}: file too small for S16 header: {len(self._data)} bytes")

        raw_format, image_count = struct.unpack_from('<IH', self._data, 0)
        try:
            self.pixel_format = S16Format(raw_format)
        except ValueError:
            raise S16FormatError(f"{self.name}: unknown S16 pixel format {raw_format}") from None

        table_end = self.HEADER_SIZE + image_count * self.ENTRY_SIZE
        if table_end > len(self._data):
            raise S16FormatError(
                f"{self.name}: image table for {image_count} images needs {table_end} bytes, "
                f"file has {len(self._data)}"
            )

        for index in range(image_count):
            offset, width, height = struct.unpack_from(
                '<IHH', self._data, self.HEADER_SIZE + index * self.ENTRY_SIZE
            )
            info = S16ImageInfo(index=index, offset=offset, width=width, height=height)
            self._images.append(info)
            self._by_offset.setdefault(offset, info)

    @property
    def image_count(self) -> int:
        return len(self._images)

    @property
    def images(self) -> List[S16ImageInfo]:
        return list(self._images)

    def get_info(self, index: int) -> S16ImageInfo:
        if not 0 <= index < len(self._images):
            raise IndexError(f"{self.name}: image {index} out of range (0-{len(self._images) - 1})")
        return self._images[index]

    def get_image(self, index: int) -> np.ndarray:
        """
        Decode one image.

        Returns:
            (height, width, 4) uint8 RGBA array
        """
        info = self.get_info(index)
        if index not in self._cache:
            self._cache[index] = self._decode(info)
        return self._cache[index]

    def get_image_at_offset(self, offset: int) -> Optional[np.ndarray]:
        """Decode the image whose pixel data starts at `offset`, or None."""
        info = self._by_offset.get(offset)
        if info is None:
            return None
        return self.get_image(info.index)

    def _decode(self, info: S16ImageInfo) -> np.ndarray:
        end = info.offset + info.byte_size
        if end > len(self._data):
            raise S16FormatError(
                f"{self.name}: image {info.index} pixel data ends at {end}, file has {len(self._data)} bytes"
            )
        pixels = self._data[info.offset:end]
        return decode_pixels(pixels, self.pixel_format).reshape(info.height, info.width, 4)
