from __future__ import annotations
import struct

import pytest

from pixpod.bitmap import HEADER_SIZE, BitmapHeader, encode_bitmap, pack_header, unpack_header
from pixpod import make_blank_grid, Pixel, PixelGrid
from pixpod.errors import InvalidArgument, TruncatedInputError

def test_header_is_138_bytes_with_fixed_fields():
    b = pack_header(BitmapHeader.for_image(3, -2))
    assert HEADER_SIZE == 138 and len(b) == 138
    assert b[0:2] == b"BM"
    assert struct.unpack_from("<I", b, 2)[0] == 3 * 2 * 4 + 138
    assert struct.unpack_from("<HH", b, 6) == (0, 0)
    assert struct.unpack_from("<I", b, 10)[0] == 138
    assert struct.unpack_from("<I", b, 14)[0] == 40
    assert struct.unpack_from("<ii", b, 18) == (3, -2)
    assert struct.unpack_from("<HH", b, 26) == (1, 32)
    assert struct.unpack_from("<II", b, 30) == (0, 0)
    assert b[38:54] == b"\x00" * 16
    assert struct.unpack_from("<IIII", b, 54) == (0x00FF0000, 0x0000FF00, 0x000000FF, 0xFF000000)
    assert b[70:74] == b"BGRs"  # 0x73524742 "sRGB" en little-endian
    assert b[74:138] == b"\x00" * 64

@pytest.mark.parametrize("w,h", [(1, 1), (2, 3), (17, 5), (64, 1), (1, 33)])
def test_saved_header_matches_dimensions(w, h):
    blob = encode_bitmap(make_blank_grid(w, h))
    hdr = unpack_header(blob)
    assert hdr.width == w
    assert abs(hdr.height) == h
    assert hdr.file_size == w * h * 4 + 138 == len(blob)
    assert hdr.offset_data == 138

def test_orientation_only_changes_header_sign():
    g = PixelGrid.from_columns([[Pixel(x, y, 7, 9) for y in range(4)] for x in range(3)])
    top = encode_bitmap(g, origin_top_left=True)
    bottom = encode_bitmap(g, origin_top_left=False)
    assert top[138:] == bottom[138:]
    h_top = struct.unpack_from("<i", top, 22)[0]
    h_bottom = struct.unpack_from("<i", bottom, 22)[0]
    assert h_top == -h_bottom == -4
    # seul le champ height diffère
    assert top[:22] == bottom[:22] and top[26:138] == bottom[26:138]

def test_channel_order_is_bgra():
    g = PixelGrid.from_columns([[Pixel(10, 20, 30, 40)]])
    blob = encode_bitmap(g)
    assert len(blob) == 142
    assert tuple(blob[138:142]) == (30, 20, 10, 40)

def test_unpack_header_rejects_foreign_headers():
    good = pack_header(BitmapHeader.for_image(2, 2))
    with pytest.raises(TruncatedInputError):
        unpack_header(good[:100])
    with pytest.raises(InvalidArgument):
        unpack_header(b"XX" + good[2:])
    bpp24 = good[:28] + struct.pack("<H", 24) + good[30:]
    with pytest.raises(InvalidArgument):
        unpack_header(bpp24)

def test_for_image_rejects_zero_dims():
    with pytest.raises(InvalidArgument):
        BitmapHeader.for_image(0, 5)
    with pytest.raises(InvalidArgument):
        BitmapHeader.for_image(5, 0)
