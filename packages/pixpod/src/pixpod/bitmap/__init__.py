# packages/pixpod/src/pixpod/bitmap/__init__.py
from __future__ import annotations

# Header BMP 138 bytes
from .header import BitmapHeader, pack_header, unpack_header, HEADER_SIZE

# Header + pixels <-> bytes
from .stream import encode_bitmap, decode_bitmap

# Fichiers  # [STORE:OVERWRITE]
from .io import save_bitmap, load_bitmap

__all__ = [
    "BitmapHeader", "pack_header", "unpack_header", "HEADER_SIZE",
    "encode_bitmap", "decode_bitmap",
    "save_bitmap", "load_bitmap",
]
