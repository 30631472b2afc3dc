# packages/pixpodwf/src/pixpodwf/__init__.py
from __future__ import annotations

from .api import bmp_name, log_append

__all__ = [
    "bmp_name",
    "log_append",
    # on n’importe PAS le sous-module cli ici (Pillow n'est utile qu'aux CLIs)
]

__version__ = "1.0.0"
