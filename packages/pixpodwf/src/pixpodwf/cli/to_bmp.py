from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

import numpy as np
from PIL import Image

from pixpod import CodecConfig, PixelGrid, save_bitmap
from pixpod.paths import PathsConfig
from .common import setup_logging, ensure_dir, list_images
from ..api import log_append

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="pixpod — Image(s) -> BMP 32 bits (BGRA)")
    p.add_argument("sources", nargs="+", help="Images ou dossiers d'images")
    p.add_argument("--out", default=None, help="Dossier de sortie (défaut: $PIXPOD_OUTPUTS_DIR)")
    p.add_argument("--origin", choices=["top-left", "bottom-left"], default=None,
                   help="Orientation déclarée dans le header (défaut: CodecConfig)")
    p.add_argument("--log-file", default=None)
    p.add_argument("--verbose", action="store_true")
    return p.parse_args(argv)

def image_to_grid(path: Path) -> PixelGrid:
    """PIL image -> PixelGrid. PIL is (H, W, 4) row-major; the grid is [x][y]."""
    with Image.open(path) as im:
        rgba = np.asarray(im.convert("RGBA"), dtype=np.uint8)
    return PixelGrid.from_array(rgba.transpose(1, 0, 2))

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)

    cfg = CodecConfig()
    paths = PathsConfig.from_env()
    top_left = cfg.origin_top_left if args.origin is None else (args.origin == "top-left")

    out_dir = Path(args.out) if args.out else paths.outputs()
    if out_dir is None:
        logging.error("No output directory: pass --out or set PIXPOD_OUTPUTS_DIR")
        return 2
    ensure_dir(out_dir)
    run_log = paths.artifacts_path("to_bmp.log", create=True)

    sources = [p for s in args.sources for p in list_images(Path(s))]
    ok = 0
    for i, src in enumerate(sources, 1):
        try:
            logging.info("[%d/%d] convert: %s", i, len(sources), src)
            grid = image_to_grid(src)
            dst = paths.bitmap_path(src.stem, grid.width, grid.height, top_left, root=out_dir)
            save_bitmap(dst, grid, origin_top_left=top_left)
            logging.info("→ OK %s", dst)
            if run_log:
                log_append(run_log, f"{src} -> {dst} ({grid.width}x{grid.height})")
            ok += 1
        except Exception as e:
            logging.exception("Échec conversion %s: %s", src, e)
    return 0 if sources and ok == len(sources) else 1

if __name__ == "__main__":
    sys.exit(main())
