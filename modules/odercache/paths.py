"""User path sanitizing and storage-area mirroring."""

from __future__ import annotations

import os
import re
from pathlib import Path

from modules.errors import InvalidPath
from .context import OdercacheContext

SLASH_RUN_RE = re.compile(r"/{2,}")


def sanitize_path(raw: str, docroot: str) -> str:
    """Normalize a directory given relative to docroot.

    Strips and collapses slash runs. Rejects "." / ".." segments, an empty
    result and paths that point at an existing regular file.
    """
    rel = SLASH_RUN_RE.sub("/", (raw or "").strip("/"))
    if not rel:
        raise InvalidPath(f"empty directory '{raw}' under {docroot}")
    for segment in rel.split("/"):
        if segment in (".", ".."):
            raise InvalidPath(f"'{raw}' contains a '{segment}' segment")
    target = os.path.join(docroot, rel)
    if os.path.isfile(target):
        raise InvalidPath(f"{target} is a file, not a directory")
    return rel


def home_relative(docroot: str, rel: str, depth: int) -> str:
    # "/home/u1/public_html".split("/") -> ["", "home", "u1", "public_html"]
    tail = [p for p in docroot.rstrip("/").split("/")[depth:] if p]
    if rel:
        tail.append(rel)
    return "/".join(tail)


def source_path(docroot: str, rel: str) -> Path:
    return Path(docroot.rstrip("/") + "/" + rel)


def storage_path(ctx: OdercacheContext, docroot: str, rel: str) -> Path:
    return ctx.storage_dir / home_relative(docroot, rel, ctx.home_depth)


def skeleton_path(ctx: OdercacheContext, docroot: str, rel: str) -> Path:
    return ctx.skeleton_dir / home_relative(docroot, rel, ctx.home_depth)
