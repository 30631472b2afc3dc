from __future__ import annotations
import numpy as np
import pytest

from pixpod import CodecConfig, Pixel, PixelGrid, WHITE, collapse2, make_blank_grid
from pixpod.errors import InvalidArgument

def test_make_blank_grid_is_opaque_white():
    g = make_blank_grid(5, 3)
    assert (g.width, g.height) == (5, 3)
    assert all(g[x, y] == WHITE for x in range(5) for y in range(3))
    assert (g.as_array() == 255).all()

@pytest.mark.parametrize("w,h", [(0, 3), (3, 0), (-1, 2), (2, -5)])
def test_make_blank_grid_rejects_bad_dims(w, h):
    with pytest.raises(InvalidArgument):
        make_blank_grid(w, h)

def test_make_blank_grid_custom_fill():
    g = make_blank_grid(2, 2, CodecConfig(blank_pixel=(0, 0, 0, 255)))
    assert g[1, 1] == Pixel(0, 0, 0, 255)

def test_from_columns_indexing_is_x_then_y():
    cols = [[(x, y, 0, 255) for y in range(3)] for x in range(2)]
    g = PixelGrid.from_columns(cols)
    assert (g.width, g.height) == (2, 3)
    assert g[1, 2] == Pixel(1, 2, 0, 255)
    # RGB sans alpha -> opaque
    g[0, 0] = (9, 8, 7)
    assert g[0, 0] == Pixel(9, 8, 7, 255)

def test_from_columns_rejects_non_rectangular():
    with pytest.raises(InvalidArgument):
        PixelGrid.from_columns([[WHITE, WHITE], [WHITE]])

def test_from_columns_rejects_empty():
    with pytest.raises(InvalidArgument):
        PixelGrid.from_columns([])
    with pytest.raises(InvalidArgument):
        PixelGrid.from_columns([[]])

def test_pixel_channel_bounds():
    with pytest.raises(InvalidArgument):
        Pixel(256, 0, 0)
    with pytest.raises(InvalidArgument):
        Pixel(0, 0, 0, -1)

def test_pixel_float_reinterpretation():
    p = Pixel(10, 20, 30, 40)
    f = p.to_float()
    assert isinstance(f, float)
    assert Pixel.from_float(f) == p

def test_scanlines_follow_row_major_convention():
    w, h = 3, 2
    g = make_blank_grid(w, h)
    for x in range(w):
        for y in range(h):
            g[x, y] = Pixel(x, y, 10 * x + y, 200)
    raw = g.to_scanlines("BGRA")
    assert len(raw) == w * h * 4
    for x in range(w):
        for y in range(h):
            off = collapse2(x, y, w) * 4
            p = g[x, y]
            assert tuple(raw[off:off + 4]) == (p.b, p.g, p.r, p.a)

def test_scanlines_roundtrip_and_array_is_readonly():
    rng = np.random.default_rng(0)
    g = PixelGrid.from_array(rng.integers(0, 256, size=(4, 5, 4), dtype=np.uint8))
    g2 = PixelGrid.from_scanlines(g.to_scanlines("BGRA"), 4, 5, "BGRA")
    assert g2 == g
    with pytest.raises(ValueError):
        g.as_array()[0, 0, 0] = 1

@pytest.mark.parametrize("bad", [(300, -1, 0, 255), (256, 0, 0), (0, 0, 0, -1)])
def test_tuple_pixels_are_range_checked(bad):
    with pytest.raises(InvalidArgument):
        PixelGrid.from_columns([[bad]])
    g = make_blank_grid(1, 1)
    with pytest.raises(InvalidArgument):
        g[0, 0] = bad
    # aucune valeur repliée n'a été écrite
    assert g[0, 0] == WHITE

def test_from_array_rejects_float_dtype():
    with pytest.raises(InvalidArgument):
        PixelGrid.from_array(np.full((2, 2, 4), 0.7))
    g = PixelGrid.from_array(np.full((2, 2, 4), 7, dtype=np.int64))
    assert g[1, 1] == Pixel(7, 7, 7, 7)
