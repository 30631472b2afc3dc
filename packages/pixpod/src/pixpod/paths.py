from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import os

@dataclass(frozen=True)
class PathsConfig:
    """Parametric path resolver for written bitmaps and run logs.

    ENV keys
    --------
    PIXPOD_OUTPUTS_DIR   → .bmp / record files                 # [STORE:OVERWRITE]
    PIXPOD_ARTIFACTS_DIR → run logs (append-only)              # [STORE:CUMULATIVE]
    """
    outputs_dir: Path | None = None   # [STORE:OVERWRITE]
    artifacts_dir: Path | None = None # [STORE:CUMULATIVE]

    @staticmethod
    def from_env() -> "PathsConfig":
        return PathsConfig(
            outputs_dir=_opt_env("PIXPOD_OUTPUTS_DIR"),
            artifacts_dir=_opt_env("PIXPOD_ARTIFACTS_DIR"),
        )

    # Accessors (explicit → ENV fallback)
    def outputs(self) -> Path | None: return self.outputs_dir or _opt_env("PIXPOD_OUTPUTS_DIR")
    def artifacts(self) -> Path | None: return self.artifacts_dir or _opt_env("PIXPOD_ARTIFACTS_DIR")

    # Builders
    def outputs_path(self, *parts: str, create: bool = False) -> Path | None:
        root = self.outputs()
        if not root: return None
        p = Path(root) / Path(*parts)
        if create: p.parent.mkdir(parents=True, exist_ok=True)
        return p  # [STORE:OVERWRITE]

    def artifacts_path(self, *parts: str, create: bool = False) -> Path | None:
        root = self.artifacts()
        if not root: return None
        p = Path(root) / Path(*parts)
        if create: p.parent.mkdir(parents=True, exist_ok=True)
        return p  # [STORE:CUMULATIVE]

    def bitmap_path(self, stem: str, width: int, height: int, origin_top_left: bool,
                    root: Path | str | None = None, create: bool = False) -> Path | None:
        """Deterministic .bmp destination under `root` (default: outputs dir)."""
        base = Path(root) if root else self.outputs()
        if not base: return None
        p = Path(base) / bitmap_name(stem, width, height, origin_top_left)
        if create: p.parent.mkdir(parents=True, exist_ok=True)
        return p  # [STORE:OVERWRITE]

def bitmap_name(stem: str, width: int, height: int, origin_top_left: bool) -> str:
    origin = "tl" if origin_top_left else "bl"
    return f"{stem}__{width}x{height}__{origin}.bmp"

def _opt_env(name: str) -> Path | None:
    v = os.getenv(name)
    return Path(v) if v else None

__all__ = ["PathsConfig", "bitmap_name"]
