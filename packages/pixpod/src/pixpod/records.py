# packages/pixpod/src/pixpod/records.py
"""
Plain-record codec: fixed-size records <-> raw bytes.

A record is described by a `RecordLayout` (struct format + optional dataclass).
Byte order is the host's native one with standard sizes and no alignment
padding (`=`), so a layout always has the same size on every platform.

Size-prefixed sequence
----------------------
    int64   count                      # native byte order
    bytes   count * layout.size        # records, contiguous, no padding

The count is authoritative: the reader never truncates or pads.
"""
from __future__ import annotations

import io
import logging
import struct
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, BinaryIO, Iterable, List, Optional

from .config import CodecConfig
from .errors import AllocationError, InvalidArgument, IoError, TruncatedInputError

log = logging.getLogger(__name__)

__all__ = [
    "RecordLayout",
    "INT64", "UINT32", "FLOAT64",
    "COUNT_SIZE",
    "write_record", "read_record",
    "write_sequence", "read_sequence",
    "pack_sequence", "unpack_sequence",
]

_NATIVE = "="


@dataclass(frozen=True)
class RecordLayout:
    """Binary schema of a plain record.

    fmt : struct format *without* byte-order prefix (e.g. "IHHd", "4B").
    cls : dataclass whose fields map in order onto the format items, or None
          (single item -> bare scalar, several items -> tuple).
    """
    fmt: str
    cls: Optional[type] = None
    _st: struct.Struct = field(init=False, repr=False, compare=False)
    _nitems: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.fmt or self.fmt[0] in "@=<>!":
            raise InvalidArgument(f"RecordLayout.fmt must be non-empty and carry no byte-order prefix: {self.fmt!r}")
        try:
            st = struct.Struct(_NATIVE + self.fmt)
        except struct.error as e:
            raise InvalidArgument(f"RecordLayout.fmt invalid ({self.fmt!r}): {e}") from e
        if st.size == 0:
            raise InvalidArgument(f"RecordLayout.fmt describes a zero-size record: {self.fmt!r}")
        nitems = len(st.unpack(bytes(st.size)))
        if self.cls is not None:
            if not is_dataclass(self.cls):
                raise InvalidArgument(f"RecordLayout.cls must be a dataclass, got {self.cls!r}")
            nfields = len(fields(self.cls))
            if nfields != nitems:
                raise InvalidArgument(
                    f"RecordLayout: {self.cls.__name__} has {nfields} fields but {self.fmt!r} has {nitems} items"
                )
        object.__setattr__(self, "_st", st)
        object.__setattr__(self, "_nitems", nitems)

    @property
    def size(self) -> int:
        return self._st.size

    def _values(self, record: Any) -> tuple:
        if self.cls is not None:
            if not isinstance(record, self.cls):
                raise InvalidArgument(f"expected {self.cls.__name__}, got {type(record).__name__}")
            return tuple(getattr(record, f.name) for f in fields(self.cls))
        if self._nitems == 1:
            return (record,)
        return tuple(record)

    def _build(self, values: tuple) -> Any:
        if self.cls is not None:
            return self.cls(*values)
        if self._nitems == 1:
            return values[0]
        return values

    def pack(self, record: Any) -> bytes:
        try:
            return self._st.pack(*self._values(record))
        except struct.error as e:
            raise InvalidArgument(f"record does not fit layout {self.fmt!r}: {e}") from e

    def unpack(self, buf: bytes) -> Any:
        if len(buf) != self.size:
            raise TruncatedInputError(f"record needs {self.size} bytes, got {len(buf)}")
        return self._build(self._st.unpack(buf))

    def unpack_many(self, buf: bytes) -> List[Any]:
        """Parse exactly len(buf) // size records (len(buf) must be a multiple of size)."""
        if len(buf) % self.size:
            raise TruncatedInputError(f"{len(buf)} bytes is not a whole number of {self.size}-byte records")
        return [self._build(v) for v in self._st.iter_unpack(buf)]


# Layouts de base
INT64 = RecordLayout("q")
UINT32 = RecordLayout("I")
FLOAT64 = RecordLayout("d")

COUNT_SIZE = INT64.size  # = 8 bytes


# ----------------------------- helpers ------------------------------------

def _write(sink: BinaryIO, data: bytes) -> None:
    try:
        n = sink.write(data)
    except (OSError, ValueError) as e:  # ValueError: closed file
        raise IoError(f"sink rejected {len(data)} bytes: {e}") from e
    if n is not None and n != len(data):
        raise IoError(f"short write: {n}/{len(data)} bytes")


def _read_exact(source: BinaryIO, n: int) -> bytes:
    buf = bytearray()
    while len(buf) < n:
        try:
            chunk = source.read(n - len(buf))
        except (OSError, ValueError) as e:
            raise IoError(f"source unreadable: {e}") from e
        if not chunk:
            break
        buf.extend(chunk)
    if len(buf) != n:
        raise TruncatedInputError(f"expected {n} bytes, only {len(buf)} available")
    return bytes(buf)


def _check_count(count: int, layout: RecordLayout, max_bytes: Optional[int]) -> int:
    limit = _limit(max_bytes)
    if count < 0:
        raise AllocationError(f"sequence count is negative ({count})")
    need = count * layout.size
    if need > limit:
        raise AllocationError(f"sequence of {count} x {layout.size} bytes exceeds limit ({need} > {limit})")
    return need


# ----------------------------- records ------------------------------------

def write_record(sink: BinaryIO, record: Any, layout: RecordLayout) -> None:
    """Append the `layout.size` raw bytes of `record` to `sink`."""
    _write(sink, layout.pack(record))


def read_record(source: BinaryIO, layout: RecordLayout) -> Any:
    """Read exactly `layout.size` bytes from `source` and build the record."""
    return layout.unpack(_read_exact(source, layout.size))


# ----------------------------- sequences ----------------------------------

def _limit(max_bytes: Optional[int]) -> int:
    return CodecConfig().max_sequence_bytes if max_bytes is None else int(max_bytes)


def pack_sequence(elements: Iterable[Any], layout: RecordLayout, max_bytes: Optional[int] = None) -> bytes:
    """Liste de records -> bytes (count int64 + payload contigu).

    Same bound as the readers: a payload over `max_bytes` raises InvalidArgument,
    so anything written here can be read back with the same limit.
    """
    buf = io.BytesIO()
    body = b"".join(layout.pack(e) for e in elements)
    limit = _limit(max_bytes)
    if len(body) > limit:
        raise InvalidArgument(f"sequence payload of {len(body)} bytes exceeds limit ({limit})")
    buf.write(INT64.pack(len(body) // layout.size))  # record_count
    buf.write(body)
    return buf.getvalue()


def unpack_sequence(buf: bytes, layout: RecordLayout, max_bytes: Optional[int] = None) -> List[Any]:
    """Bytes -> liste de records. Le buffer doit être consommé exactement."""
    s = memoryview(buf)
    if len(s) < COUNT_SIZE:
        raise TruncatedInputError(f"sequence: need {COUNT_SIZE} bytes for the count, got {len(s)}")
    count = INT64.unpack(bytes(s[:COUNT_SIZE]))
    need = _check_count(count, layout, max_bytes)
    if len(s) != COUNT_SIZE + need:
        raise TruncatedInputError(
            f"sequence: count={count} declares {need} payload bytes, buffer holds {len(s) - COUNT_SIZE}"
        )
    try:
        return layout.unpack_many(bytes(s[COUNT_SIZE:]))
    except MemoryError as e:
        raise AllocationError(f"cannot materialize {count} records: {e}") from e


def write_sequence(sink: BinaryIO, elements: Iterable[Any], layout: RecordLayout,
                   max_bytes: Optional[int] = None) -> None:
    """Write count then every element, as one buffered write.

    Payloads over `max_bytes` (default CodecConfig().max_sequence_bytes) are
    refused with InvalidArgument before anything reaches `sink`.
    """
    data = pack_sequence(elements, layout, max_bytes)
    _write(sink, data)
    log.debug("write_sequence: %d records (%d bytes)", (len(data) - COUNT_SIZE) // layout.size, len(data))


def read_sequence(source: BinaryIO, layout: RecordLayout, max_bytes: Optional[int] = None) -> List[Any]:
    """Read the count, bound-check it, then read exactly count records."""
    count = read_record(source, INT64)
    need = _check_count(count, layout, max_bytes)
    try:
        payload = _read_exact(source, need)
        out = layout.unpack_many(payload)
    except MemoryError as e:
        raise AllocationError(f"cannot materialize {count} records: {e}") from e
    log.debug("read_sequence: %d records (%d bytes)", count, need)
    return out
