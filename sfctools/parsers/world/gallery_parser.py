"""
Gallery parser.

CGallery format:
- Header or tag ("CGallery")
- u32 num_images (ceiling applies)
- char[4] fsp (sprite file stem)
- u32 file_pos
- u32 users
- Images (15 bytes each):
  - u16 gallery_class_index
  - u8 status
  - u32 width
  - u32 height
  - u32 offset
"""

from typing import Tuple

from ...constants import CLASS_GALLERY, GALLERY_FSP_SIZE
from ...utils import logDebug
from ..archive import read_header_or_tag
from ..base import Buffer, read_count, read_fixed_string, read_u8, read_u16, read_u32
from ..registry import DecodeContext
from .data_types import Gallery, Image


def read_image(data: Buffer, offset: int) -> Tuple[Image, int]:
    gallery_class_index, offset = read_u16(data, offset, "image class index")
    status, offset = read_u8(data, offset, "image status")
    width, offset = read_u32(data, offset, "image width")
    height, offset = read_u32(data, offset, "image height")
    image_offset, offset = read_u32(data, offset, "image offset")
    return Image(
        gallery_class_index=gallery_class_index,
        status=status,
        width=width,
        height=height,
        offset=image_offset,
    ), offset


def read_gallery(data: Buffer, offset: int, ctx: DecodeContext) -> Tuple[Gallery, int]:
    """
    Read a CGallery record.

    Args:
        data: Binary data to read from
        offset: Offset of the gallery's header or tag
        ctx: Decode context for this parse

    Returns:
        Tuple of (Gallery, new_offset)
    """
    with ctx.record(CLASS_GALLERY):
        header_or_tag, offset = read_header_or_tag(data, offset, ctx, CLASS_GALLERY)

        num_images, offset = read_count(data, offset, 4, "gallery images", ctx.max_count)
        fsp, offset = read_fixed_string(data, offset, GALLERY_FSP_SIZE, "gallery fsp")
        file_pos, offset = read_u32(data, offset, "gallery file_pos")
        users, offset = read_u32(data, offset, "gallery users")

        images = []
        for _ in range(num_images):
            image, offset = read_image(data, offset)
            images.append(image)

        logDebug(f"Gallery {fsp!r}: {num_images} images")

        return Gallery(
            header_or_tag=header_or_tag,
            num_images=num_images,
            fsp=fsp,
            file_pos=file_pos,
            users=users,
            images=tuple(images),
        ), offset
