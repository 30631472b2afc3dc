from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Tuple

from ..io import read_blob, write_blob
from ..pixels import PixelGrid
from .stream import decode_bitmap, encode_bitmap

log = logging.getLogger(__name__)


def save_bitmap(path: str | Path, grid: Any, origin_top_left: bool = True) -> None:
    """Encode `grid` and write it to `path` in one go.  # [STORE:OVERWRITE]

    Raises InvalidArgument (empty / non-rectangular grid) or IoError.
    """
    blob = encode_bitmap(grid, origin_top_left)
    write_blob(path, blob)
    log.debug("save_bitmap: %s (%d bytes)", path, len(blob))


def load_bitmap(path: str | Path) -> Tuple[PixelGrid, bool]:
    """Read a bitmap written by `save_bitmap` -> (grid, origin_top_left)."""
    return decode_bitmap(read_blob(path))
