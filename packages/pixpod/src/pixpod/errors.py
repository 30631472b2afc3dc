# packages/pixpod/src/pixpod/errors.py
from __future__ import annotations

__all__ = [
    "PixpodError",
    "InvalidArgument",
    "TruncatedInputError",
    "AllocationError",
    "IoError",
]


class PixpodError(Exception):
    """Base class of every error raised by pixpod."""


class InvalidArgument(PixpodError, ValueError):
    """Bad dimensions, non-rectangular grid, out-of-range channel, bad header field."""


class TruncatedInputError(PixpodError, ValueError):
    """Declared size/count does not match the bytes actually available."""


class AllocationError(PixpodError, MemoryError):
    """Declared sequence count too large (or negative) to materialize."""


class IoError(PixpodError, OSError):
    """Destination unwritable or source unreadable."""
