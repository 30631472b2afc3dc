from __future__ import annotations

# Row-major collapse: the last-varying index is contiguous.
# No bounds checks; out-of-range inputs give a well-defined but meaningless offset.
# Plain arithmetic, so numpy integer arrays work element-wise too.

__all__ = ["collapse2", "collapse3"]


def collapse2(x, y, width):
    """(x, y) -> y*width + x"""
    return y * width + x


def collapse3(x, y, z, width, height):
    """(x, y, z) -> x*width*height + y*width + z"""
    return x * width * height + y * width + z
