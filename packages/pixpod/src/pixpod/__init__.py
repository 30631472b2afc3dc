# packages/pixpod/src/pixpod/__init__.py
from __future__ import annotations

"""pixpod - truecolor BMP writer and plain-record codec (public surface)."""

__version__ = "1.0.0"

from .config import CodecConfig
from .errors import (
    PixpodError, InvalidArgument, TruncatedInputError, AllocationError, IoError,
)
from .index import collapse2, collapse3
from .records import (
    RecordLayout, INT64, UINT32, FLOAT64,
    write_record, read_record, write_sequence, read_sequence,
    pack_sequence, unpack_sequence,
)
from .pixels import Pixel, WHITE, PIXEL, PixelGrid, make_blank_grid
from .bitmap import (
    BitmapHeader, encode_bitmap, decode_bitmap, save_bitmap, load_bitmap,
)
from .io import read_blob, write_blob

__all__ = [
    "__version__",
    "CodecConfig",
    "PixpodError", "InvalidArgument", "TruncatedInputError", "AllocationError", "IoError",
    "collapse2", "collapse3",
    "RecordLayout", "INT64", "UINT32", "FLOAT64",
    "write_record", "read_record", "write_sequence", "read_sequence",
    "pack_sequence", "unpack_sequence",
    "Pixel", "WHITE", "PIXEL", "PixelGrid", "make_blank_grid",
    "BitmapHeader", "encode_bitmap", "decode_bitmap", "save_bitmap", "load_bitmap",
    "read_blob", "write_blob",
]
