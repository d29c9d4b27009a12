"""Explicit odercache context handed to every odercache operation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from config import (
    HOME_DEPTH,
    HOME_DIR,
    ODERCACHE_CONFIG,
    ODERCACHE_SKELETON,
    ODERCACHE_STORAGE,
)


@dataclass(frozen=True)
class OdercacheContext:
    home: Path
    storage_dir: Path
    skeleton_dir: Path
    config_path: Path
    home_depth: int = HOME_DEPTH

    @classmethod
    def for_home(cls, home: str | os.PathLike | None = None, home_depth: int = HOME_DEPTH) -> "OdercacheContext":
        base = Path(home or HOME_DIR)
        return cls(
            home=base,
            storage_dir=base / ODERCACHE_STORAGE,
            skeleton_dir=base / ODERCACHE_SKELETON,
            config_path=base / ODERCACHE_CONFIG,
            home_depth=home_depth,
        )
