from __future__ import annotations
import logging
import os
from pathlib import Path

from .errors import IoError

log = logging.getLogger(__name__)

__all__ = ["read_blob", "write_blob"]


def read_blob(path: str | Path) -> bytes:
    """Read a whole file from disk (raw bytes)."""
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as e:
        raise IoError(f"cannot read {p}: {e}") from e
    log.debug("read %d bytes from %s", len(data), p)
    return data


def write_blob(path: str | Path, data: bytes) -> None:
    """Single buffered write to target path via a sibling .tmp.  # [STORE:OVERWRITE]

    No cleanup on failure: a failed write may leave the .tmp behind.
    """
    p = Path(path)
    if p.name in ("", ".", ".."):
        raise IoError(f"cannot write {str(path)!r}: destination has no file name")
    tmp = p.with_name(p.name + ".tmp")
    try:
        with open(tmp, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, p)
    except OSError as e:
        raise IoError(f"cannot write {p}: {e}") from e
    log.debug("wrote %d bytes to %s", len(data), p)
