# packages/pixpod/src/pixpod/bitmap/stream.py
from __future__ import annotations
import logging
from typing import Any, Tuple

from ..errors import TruncatedInputError
from ..pixels import PixelGrid
from .header import HEADER_SIZE, BitmapHeader, pack_header, unpack_header

log = logging.getLogger(__name__)

# Ordre des canaux sur disque
DISK_ORDER = "BGRA"


def encode_bitmap(grid: Any, origin_top_left: bool = True) -> bytes:
    """
    Header (138 bytes) + pixel stream (BGRA), as one buffer.

    Rows are always emitted y = 0..H-1. Orientation lives only in the sign of
    the header height: a reader that honors it shows row 0 at the top when
    origin_top_left is True and at the bottom otherwise. No row reversal here.
    """
    g = PixelGrid.coerce(grid)
    signed_height = -g.height if origin_top_left else g.height
    header = BitmapHeader.for_image(g.width, signed_height)
    hdr = pack_header(header)
    pixels = g.to_scanlines(DISK_ORDER)
    # header et pixels ne doivent jamais diverger
    assert len(hdr) + len(pixels) == header.file_size
    log.debug("encode_bitmap: %dx%d top_left=%s file_size=%d",
              header.width, header.height, origin_top_left, header.file_size)
    return hdr + pixels


def decode_bitmap(blob: bytes) -> Tuple[PixelGrid, bool]:
    """Parse a bitmap written by `encode_bitmap` -> (grid, origin_top_left)."""
    header = unpack_header(blob)
    end = HEADER_SIZE + header.pixel_bytes
    if len(blob) < end:
        raise TruncatedInputError(
            f"bitmap pixel stream truncated ({len(blob) - HEADER_SIZE} < {header.pixel_bytes} bytes)"
        )
    grid = PixelGrid.from_scanlines(bytes(blob[HEADER_SIZE:end]), header.width, header.rows, DISK_ORDER)
    return grid, header.origin_top_left
