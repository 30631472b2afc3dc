# packages/pixpod/src/pixpod/pixels.py
from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

import numpy as np

from .config import CodecConfig
from .errors import InvalidArgument
from .records import RecordLayout

__all__ = ["Pixel", "WHITE", "PIXEL", "PixelGrid", "make_blank_grid"]

# Ordre des canaux en mémoire : R, G, B, A
_CHANNELS = "RGBA"


@dataclass(frozen=True)
class Pixel:
    """Truecolor pixel, four 8-bit channels stored as r, g, b, a."""
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            v = getattr(self, name)
            if not (0 <= int(v) <= 255):
                raise InvalidArgument(f"Pixel.{name} must be in [0..255], got {v}")

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (int(self.r), int(self.g), int(self.b), int(self.a))

    def to_float(self) -> float:
        """Reinterpret the four RGBA bytes as one native float32."""
        return struct.unpack("=f", bytes(self.to_tuple()))[0]

    @staticmethod
    def from_float(f: float) -> "Pixel":
        return Pixel(*struct.pack("=f", f))


WHITE = Pixel(255, 255, 255, 255)

# Record layout of one pixel (RGBA, 4 bytes)
PIXEL = RecordLayout("4B", Pixel)


def _as_rgba(p: Any) -> Tuple[int, int, int, int]:
    if isinstance(p, Pixel):
        return p.to_tuple()
    t = tuple(int(c) for c in p)
    if len(t) == 3:
        t = t + (255,)
    if len(t) != 4:
        raise InvalidArgument(f"pixel must have 3 or 4 channels, got {len(t)}")
    for name, v in zip(_CHANNELS, t):
        if not (0 <= v <= 255):
            raise InvalidArgument(f"pixel channel {name} must be in [0..255], got {v}")
    return t  # type: ignore[return-value]


class PixelGrid:
    """Rectangular pixel table addressed grid[x, y], x = column (outer), y = row (inner).

    Storage: numpy uint8 array of shape (width, height, 4), channels RGBA.
    """

    __slots__ = ("_a",)

    def __init__(self, width: int, height: int, fill: Pixel | Sequence[int] = WHITE):
        if int(width) <= 0 or int(height) <= 0:
            raise InvalidArgument(f"PixelGrid dimensions must be > 0, got {width}x{height}")
        a = np.empty((int(width), int(height), 4), dtype=np.uint8)
        a[:, :] = _as_rgba(fill)
        self._a = a

    # -- constructors --------------------------------------------------------

    @classmethod
    def from_array(cls, arr: Any) -> "PixelGrid":
        """Wrap a (W, H, 4) uint8-compatible array (copied)."""
        a = np.asarray(arr)
        if a.ndim != 3 or a.shape[2] != 4:
            raise InvalidArgument(f"pixel array must be (W, H, 4), got {a.shape}")
        if a.shape[0] == 0 or a.shape[1] == 0:
            raise InvalidArgument(f"pixel array must be non-empty, got {a.shape}")
        if a.dtype != np.uint8:
            # pas de troncature silencieuse des flottants
            if not np.issubdtype(a.dtype, np.integer):
                raise InvalidArgument(f"pixel array must have an integer dtype, got {a.dtype}")
            if a.size and (a.min() < 0 or a.max() > 255):
                raise InvalidArgument("pixel array values must be in [0..255]")
            a = a.astype(np.uint8)
        g = cls.__new__(cls)
        g._a = np.array(a, dtype=np.uint8, copy=True)
        return g

    @classmethod
    def from_columns(cls, columns: Sequence[Sequence[Any]]) -> "PixelGrid":
        """Build from nested columns: columns[x][y] is a Pixel or an (r, g, b[, a]) tuple."""
        cols = list(columns)
        if not cols:
            raise InvalidArgument("pixel grid must have at least one column")
        height = len(cols[0])
        if height == 0:
            raise InvalidArgument("pixel grid columns must not be empty")
        for x, col in enumerate(cols):
            if len(col) != height:
                raise InvalidArgument(f"pixel grid is not rectangular: column {x} has {len(col)} rows, expected {height}")
        a = np.empty((len(cols), height, 4), dtype=np.uint8)
        for x, col in enumerate(cols):
            for y, p in enumerate(col):
                a[x, y] = _as_rgba(p)
        g = cls.__new__(cls)
        g._a = a
        return g

    @classmethod
    def coerce(cls, grid: Any) -> "PixelGrid":
        if isinstance(grid, PixelGrid):
            return grid
        if isinstance(grid, np.ndarray):
            return cls.from_array(grid)
        return cls.from_columns(grid)

    # -- accessors ------------------------------------------------------------

    @property
    def width(self) -> int:
        return int(self._a.shape[0])

    @property
    def height(self) -> int:
        return int(self._a.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.width, self.height

    def __getitem__(self, xy: Tuple[int, int]) -> Pixel:
        x, y = xy
        return Pixel(*(int(c) for c in self._a[x, y]))

    def __setitem__(self, xy: Tuple[int, int], p: Pixel | Sequence[int]) -> None:
        x, y = xy
        self._a[x, y] = _as_rgba(p)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return self._a.shape == other._a.shape and bool(np.array_equal(self._a, other._a))

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"PixelGrid({self.width}x{self.height})"

    def as_array(self) -> np.ndarray:
        """Read-only (W, H, 4) view, channels RGBA."""
        v = self._a.view()
        v.flags.writeable = False
        return v

    def to_scanlines(self, order: str = "BGRA") -> bytes:
        """Rows y = 0..H-1, x fastest inside each row, channels in `order`."""
        order = order.upper()
        if sorted(order) != sorted(_CHANNELS):
            raise InvalidArgument(f"channel order must be a permutation of RGBA, got {order!r}")
        idx = [_CHANNELS.index(c) for c in order]
        # (W, H, 4) -> (H, W, 4) : ligne y, puis x
        return np.ascontiguousarray(self._a.transpose(1, 0, 2)[:, :, idx]).tobytes()

    @classmethod
    def from_scanlines(cls, data: bytes, width: int, height: int, order: str = "BGRA") -> "PixelGrid":
        """Inverse of `to_scanlines`."""
        order = order.upper()
        if sorted(order) != sorted(_CHANNELS):
            raise InvalidArgument(f"channel order must be a permutation of RGBA, got {order!r}")
        if len(data) != width * height * 4:
            raise InvalidArgument(f"scanlines: expected {width * height * 4} bytes, got {len(data)}")
        rows = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 4)
        inv = [order.index(c) for c in _CHANNELS]
        return cls.from_array(rows[:, :, inv].transpose(1, 0, 2))


def make_blank_grid(width: int, height: int, cfg: CodecConfig | None = None) -> PixelGrid:
    """Blank (opaque white by default) grid of the given dimensions."""
    cfg = cfg or CodecConfig()
    return PixelGrid(width, height, fill=cfg.blank_pixel)
