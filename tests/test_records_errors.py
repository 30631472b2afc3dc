from __future__ import annotations
import io
import struct

import pytest

from pixpod import INT64, PIXEL, Pixel, pack_sequence, read_record, read_sequence, unpack_sequence, write_sequence
from pixpod.errors import AllocationError, InvalidArgument, IoError, TruncatedInputError

def test_read_record_truncated():
    with pytest.raises(TruncatedInputError):
        read_record(io.BytesIO(b"\x01\x02\x03"), PIXEL)

def test_read_sequence_truncated_payload():
    raw = pack_sequence([1, 2, 3], INT64)
    with pytest.raises(TruncatedInputError):
        read_sequence(io.BytesIO(raw[:-4]), INT64)

def test_read_sequence_truncated_count():
    with pytest.raises(TruncatedInputError):
        read_sequence(io.BytesIO(b"\x00\x00\x00"), INT64)

def test_unpack_sequence_count_is_authoritative():
    raw = pack_sequence([Pixel(1, 2, 3, 4)] * 3, PIXEL)
    with pytest.raises(TruncatedInputError):
        unpack_sequence(raw[:-1], PIXEL)
    with pytest.raises(TruncatedInputError):
        unpack_sequence(raw + b"\x00" * 4, PIXEL)  # octets en trop

def test_read_sequence_huge_count_is_allocation_error():
    raw = struct.pack("=q", 1 << 60)
    with pytest.raises(AllocationError):
        read_sequence(io.BytesIO(raw), INT64)

def test_read_sequence_negative_count():
    with pytest.raises(AllocationError):
        read_sequence(io.BytesIO(struct.pack("=q", -1)), INT64)

def test_read_sequence_respects_max_bytes():
    raw = pack_sequence(list(range(10)), INT64)
    assert read_sequence(io.BytesIO(raw), INT64, max_bytes=80) == list(range(10))
    with pytest.raises(AllocationError):
        read_sequence(io.BytesIO(raw), INT64, max_bytes=79)

def test_allocation_error_is_memory_error():
    with pytest.raises(MemoryError):
        unpack_sequence(struct.pack("=q", 1 << 40), INT64)

def test_write_sequence_closed_sink_is_io_error():
    sink = io.BytesIO()
    sink.close()
    with pytest.raises(IoError):
        write_sequence(sink, [1], INT64)

def test_write_sequence_readonly_file_is_io_error(tmp_path):
    p = tmp_path / "seq.bin"
    p.write_bytes(b"")
    with open(p, "rb") as f:
        with pytest.raises(IoError):
            write_sequence(f, [1, 2], INT64)

def test_write_sequence_applies_read_bound():
    sink = io.BytesIO()
    with pytest.raises(InvalidArgument):
        write_sequence(sink, [1, 2], INT64, max_bytes=15)
    assert sink.getvalue() == b""
    write_sequence(sink, [1, 2], INT64, max_bytes=16)
    sink.seek(0)
    assert read_sequence(sink, INT64, max_bytes=16) == [1, 2]

def test_pack_sequence_over_default_bound(monkeypatch):
    from pixpod import records
    monkeypatch.setattr(records, "_limit", lambda max_bytes: 8 if max_bytes is None else int(max_bytes))
    with pytest.raises(InvalidArgument):
        pack_sequence([1, 2], INT64)
    assert len(pack_sequence([1], INT64)) == 16
