"""Move a docroot directory into the storage area and leave a symlink behind.

Nothing is rolled back. If the final symlink cannot be created after the
original directory was renamed to its backup, the backup stays where it is
and the error names it for manual repair.
"""

from __future__ import annotations

import logging
import os
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from config import BACKUP_PREFIX, ODERCACHE_DIR_PERMS, SPACE_HEADROOM
from modules.cpanel.domains import DomainRecord
from modules.errors import (
    AlreadyMigrated,
    CommandFailed,
    DirectoryCreateFailed,
    InsufficientSpace,
    InvalidPath,
    SymlinkFailed,
)
from modules.utils import log
from . import disk
from .context import OdercacheContext
from .paths import skeleton_path, source_path, storage_path


@dataclass(frozen=True)
class MigrationResult:
    source: Path
    target: Path
    backup: Optional[Path] = None


# ─── Capacity ──────────────────────────────────────────────────────────────
def check_capacity(ctx: OdercacheContext, src: Path) -> int:
    available = disk.free_bytes(ctx.storage_dir)
    size = disk.usage_bytes(src)
    if size + SPACE_HEADROOM > available:
        raise InsufficientSpace(
            f"{src} needs {size} bytes plus {SPACE_HEADROOM} headroom, "
            f"only {available} available for {ctx.storage_dir}"
        )
    log(f"PASS: capacity {src} size={size} available={available}")
    return size


# ─── Tree copy ─────────────────────────────────────────────────────────────
def _make_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise DirectoryCreateFailed(f"could not create {path}: {err}") from err


def _copy_link(item: Path, dest: Path) -> None:
    if os.path.lexists(dest):
        os.unlink(dest)
    os.symlink(os.readlink(item), dest)


def replicate_tree(src: Path, target: Path, skeleton: Path) -> None:
    """Recreate src's directories under target and skeleton, then copy its files into target."""
    dirs: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(src):
        current = Path(dirpath)
        rel = current.relative_to(src)
        _make_dir(target / rel)
        _make_dir(skeleton / rel)
        dirs.append(rel)
        for name in dirnames + filenames:
            item = current / name
            dest = target / rel / name
            try:
                if item.is_symlink():
                    _copy_link(item, dest)
                elif item.is_file():
                    shutil.copy2(item, dest)
                elif not item.is_dir():
                    logging.warning("Skipping special file %s", item)
            except OSError as err:
                raise CommandFailed(f"could not copy {item} to {dest}: {err}") from err

    # Apply directory modes and times last so read-only dirs accept their files.
    for rel in reversed(dirs):
        for base in (target, skeleton):
            try:
                shutil.copystat(src / rel, base / rel)
            except OSError as err:
                logging.warning("Could not copy metadata to %s: %s", base / rel, err)
    log(f"PASS: Copied {src} to {target} ({len(dirs)} directories)")


def backup_original(src: Path) -> Path:
    backup = src.parent / f"{BACKUP_PREFIX}{int(time.time())}_{src.name}"
    try:
        os.rename(src, backup)
    except OSError as err:
        raise CommandFailed(f"could not rename {src} to {backup}: {err}") from err
    log(f"PASS: Renamed {src} to {backup}")
    return backup


def ensure_dirs(paths: Iterable[Path]) -> None:
    for path in paths:
        if not path.is_dir():
            try:
                os.makedirs(path, mode=ODERCACHE_DIR_PERMS, exist_ok=True)
            except OSError as err:
                logging.error("Could not create %s: %s", path, err)
        if not path.is_dir():
            raise DirectoryCreateFailed(f"directory {path} does not exist")


def link(src: Path, target: Path, backup: Optional[Path] = None) -> None:
    try:
        os.symlink(target, src)
    except OSError as err:
        msg = f"could not link {src} -> {target}: {err}"
        if backup is not None:
            msg += f"; original directory kept at {backup}"
        raise SymlinkFailed(msg) from err
    log(f"PASS: Linked {src} -> {target}")


# ─── Public API ────────────────────────────────────────────────────────────
def migrate(ctx: OdercacheContext, record: DomainRecord, rel: str) -> MigrationResult:
    src = source_path(record.docroot, rel)
    target = storage_path(ctx, record.docroot, rel)
    skeleton = skeleton_path(ctx, record.docroot, rel)

    if src.is_symlink():
        raise AlreadyMigrated(f"{src} is already a symlink to {os.readlink(src)}")

    backup = None
    if src.is_dir():
        check_capacity(ctx, src)
        replicate_tree(src, target, skeleton)
        backup = backup_original(src)
    elif src.exists():
        raise InvalidPath(f"{src} is not a directory")
    else:
        ensure_dirs([src.parent, target, skeleton])

    link(src, target, backup)
    return MigrationResult(source=src, target=target, backup=backup)
