from __future__ import annotations
import time
from pathlib import Path

from pixpod.paths import bitmap_name

def bmp_name(stem: str, width: int, height: int, origin_top_left: bool) -> str:
    return bitmap_name(stem, width, height, origin_top_left)

def log_append(path: Path | str, msg: str) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    ts = time.strftime("%Y-%m-%d %H:%M:%S")
    with open(path, "a", encoding="utf-8") as f:
        f.write(f"[{ts}] {msg}\n")
