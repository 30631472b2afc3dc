from __future__ import annotations
import argparse, json, logging, sys
from pathlib import Path

from pixpod import PixpodError, read_blob
from pixpod.bitmap import unpack_header
from .common import setup_logging

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="pixpod — Dump du header BMP (JSON, une ligne par fichier)")
    p.add_argument("files", nargs="+", help="Fichiers .bmp")
    p.add_argument("--verbose", action="store_true")
    return p.parse_args(argv)

def describe(path: Path) -> dict:
    blob = read_blob(path)
    h = unpack_header(blob)
    return {
        "path": str(path),
        "width": h.width,
        "height": h.rows,
        "origin": "top-left" if h.origin_top_left else "bottom-left",
        "file_size": h.file_size,
        "offset_data": h.offset_data,
        "actual_size": len(blob),
    }

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(None, verbose=args.verbose)
    rc = 0
    for f in args.files:
        try:
            print(json.dumps(describe(Path(f))))
        except PixpodError as e:
            logging.error("%s: %s", f, e)
            rc = 1
    return rc

if __name__ == "__main__":
    sys.exit(main())
