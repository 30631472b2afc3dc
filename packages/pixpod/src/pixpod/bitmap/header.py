# packages/pixpod/src/pixpod/bitmap/header.py
from __future__ import annotations
import struct
from dataclasses import dataclass

from ..errors import InvalidArgument, TruncatedInputError

MAGIC = b"BM"

FILE_HEADER_SIZE = 14    # magic, file_size, reserved1/2, offset_data
INFO_HEADER_SIZE = 40    # BITMAPINFOHEADER
COLOR_HEADER_SIZE = 84   # masks + color space + 16 x u32 unused
HEADER_SIZE = FILE_HEADER_SIZE + INFO_HEADER_SIZE + COLOR_HEADER_SIZE  # = 138

BITS_PER_PIXEL = 32
BYTES_PER_PIXEL = BITS_PER_PIXEL // 8
BI_RGB = 0

RED_MASK = 0x00FF0000
GREEN_MASK = 0x0000FF00
BLUE_MASK = 0x000000FF
ALPHA_MASK = 0xFF000000
LCS_SRGB = 0x73524742    # "sRGB"

# Little-endian (format BMP), pas de padding
HEADER_FMT = "<2sIHHI" "IiiHHIIiiII" "IIIII" "64x"
assert struct.calcsize(HEADER_FMT) == HEADER_SIZE


@dataclass
class BitmapHeader:
    """138-byte BMP header (file header + info header + color header).

    height > 0 : rows stored bottom-up (origin lower-left)
    height < 0 : rows stored top-down (origin upper-left)
    """
    width: int
    height: int
    file_size: int = 0
    offset_data: int = HEADER_SIZE
    reserved1: int = 0
    reserved2: int = 0
    info_size: int = INFO_HEADER_SIZE
    planes: int = 1
    bit_count: int = BITS_PER_PIXEL
    compression: int = BI_RGB
    size_image: int = 0
    x_pixels_per_meter: int = 0
    y_pixels_per_meter: int = 0
    colors_used: int = 0
    colors_important: int = 0
    red_mask: int = RED_MASK
    green_mask: int = GREEN_MASK
    blue_mask: int = BLUE_MASK
    alpha_mask: int = ALPHA_MASK
    color_space_type: int = LCS_SRGB

    @staticmethod
    def for_image(width: int, signed_height: int) -> "BitmapHeader":
        """Derive file_size/offset_data from the pixel dimensions."""
        width, signed_height = int(width), int(signed_height)
        if width <= 0 or signed_height == 0:
            raise InvalidArgument(f"bitmap dimensions must be non-zero (width={width}, height={signed_height})")
        return BitmapHeader(
            width=width,
            height=signed_height,
            file_size=width * abs(signed_height) * BYTES_PER_PIXEL + HEADER_SIZE,
            offset_data=HEADER_SIZE,
        )

    @property
    def origin_top_left(self) -> bool:
        return self.height < 0

    @property
    def rows(self) -> int:
        return abs(self.height)

    @property
    def pixel_bytes(self) -> int:
        return self.width * self.rows * BYTES_PER_PIXEL


def pack_header(h: BitmapHeader) -> bytes:
    """BitmapHeader -> exactly 138 bytes."""
    try:
        return struct.pack(
            HEADER_FMT,
            MAGIC, h.file_size, h.reserved1, h.reserved2, h.offset_data,
            h.info_size, h.width, h.height, h.planes, h.bit_count,
            h.compression, h.size_image,
            h.x_pixels_per_meter, h.y_pixels_per_meter,
            h.colors_used, h.colors_important,
            h.red_mask, h.green_mask, h.blue_mask, h.alpha_mask,
            h.color_space_type,
        )
    except struct.error as e:
        raise InvalidArgument(f"bitmap header field out of range ({h.width}x{h.height}): {e}") from e


def unpack_header(data: bytes) -> BitmapHeader:
    """Parse and validate a header written by `pack_header`."""
    if len(data) < HEADER_SIZE:
        raise TruncatedInputError(f"bitmap header too short ({len(data)} < {HEADER_SIZE} bytes)")
    (magic, file_size, reserved1, reserved2, offset_data,
     info_size, width, height, planes, bit_count,
     compression, size_image, xppm, yppm, colors_used, colors_important,
     red_mask, green_mask, blue_mask, alpha_mask, cs_type) = struct.unpack_from(HEADER_FMT, data, 0)

    if magic != MAGIC:
        raise InvalidArgument(f"bad bitmap magic {magic!r}")
    if info_size != INFO_HEADER_SIZE:
        raise InvalidArgument(f"unsupported info header size {info_size} (expected {INFO_HEADER_SIZE})")
    if bit_count != BITS_PER_PIXEL:
        raise InvalidArgument(f"unsupported bit depth {bit_count} (expected {BITS_PER_PIXEL})")
    if compression != BI_RGB:
        raise InvalidArgument(f"unsupported compression {compression} (expected uncompressed)")
    if offset_data != HEADER_SIZE:
        raise InvalidArgument(f"unexpected pixel data offset {offset_data} (expected {HEADER_SIZE})")
    if width <= 0 or height == 0:
        raise InvalidArgument(f"bad bitmap dimensions {width}x{height}")

    return BitmapHeader(
        width=int(width), height=int(height),
        file_size=int(file_size), offset_data=int(offset_data),
        reserved1=int(reserved1), reserved2=int(reserved2),
        info_size=int(info_size), planes=int(planes), bit_count=int(bit_count),
        compression=int(compression), size_image=int(size_image),
        x_pixels_per_meter=int(xppm), y_pixels_per_meter=int(yppm),
        colors_used=int(colors_used), colors_important=int(colors_important),
        red_mask=int(red_mask), green_mask=int(green_mask),
        blue_mask=int(blue_mask), alpha_mask=int(alpha_mask),
        color_space_type=int(cs_type),
    )
