"""Disk usage and free space queries through du / df."""

from __future__ import annotations

import logging
from pathlib import Path

from config import DF_PATH, DU_PATH, MIB
from modules.errors import CommandFailed
from modules.utils import run_capture


def usage_bytes(path: Path) -> int:
    """Recursive on-disk size of path in bytes (du -sk)."""
    ok, out, err, code = run_capture([DU_PATH, "-sk", str(path)])
    if not ok:
        raise CommandFailed(f"du {path} exit={code}: {err.strip()}")
    first = out.strip().split("\t", 1)[0].split()
    if not first or not first[0].isdigit():
        raise CommandFailed(f"du {path}: unexpected output {out.strip()!r}")
    return int(first[0]) * 1024


def usage_mib(path: Path) -> int:
    """Like du -m: whole mebibytes, rounded up."""
    size = usage_bytes(path)
    return -(-size // MIB)


def _existing_ancestor(path: Path) -> Path:
    anchor = path
    while not anchor.exists() and anchor != anchor.parent:
        anchor = anchor.parent
    return anchor


def free_bytes(path: Path) -> int:
    """Bytes available to the account on the filesystem holding path (df -Pk).

    path may not exist yet; the nearest existing ancestor is queried.
    """
    anchor = _existing_ancestor(path)
    ok, out, err, code = run_capture([DF_PATH, "-Pk", str(anchor)])
    if not ok:
        raise CommandFailed(f"df {anchor} exit={code}: {err.strip()}")
    lines = [ln for ln in out.splitlines() if ln.strip()]
    # POSIX format: header, then "fs blocks used available capacity mount"
    fields = lines[-1].split() if len(lines) >= 2 else []
    if len(fields) < 6 or not fields[3].isdigit():
        raise CommandFailed(f"df {anchor}: unexpected output {out.strip()!r}")
    avail = int(fields[3]) * 1024
    logging.debug("df %s: %d bytes available", anchor, avail)
    return avail
