"""List migrated directories and render them as a report."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from modules.cpanel.domains import DomainRecord
from modules.utils import log
from . import disk
from .context import OdercacheContext
from .paths import storage_path
from .store import CacheStore

HEADER_DOMAIN = "Domain"
HEADER_PATH = "Directory"
HEADER_SIZE = "Size (MiB)"


@dataclass(frozen=True)
class CacheEntry:
    domain: str
    rel_path: str
    cache_path: Path
    size_mib: int


def list_entries(ctx: OdercacheContext, domains: Dict[str, DomainRecord]) -> List[CacheEntry]:
    """Entries from the config whose domain still resolves and whose storage exists.

    Order follows the config document.
    """
    store = CacheStore.load(ctx.config_path)
    entries: List[CacheEntry] = []
    for domain, rel in store.entries():
        record = domains.get(domain)
        if record is None:
            log(f"SKIP: {domain} no longer on the account")
            continue
        cache_path = storage_path(ctx, record.docroot, rel)
        if not cache_path.is_dir():
            log(f"SKIP: {cache_path} missing for {domain} {rel}")
            continue
        entries.append(
            CacheEntry(
                domain=domain,
                rel_path=rel,
                cache_path=cache_path,
                size_mib=disk.usage_mib(cache_path),
            )
        )
    return entries


def render_report(entries: List[CacheEntry]) -> str:
    width = max([len(HEADER_DOMAIN)] + [len(e.domain) for e in entries])
    rest = f" | {HEADER_PATH} | {HEADER_SIZE}"
    # The rule follows the padded domain column plus the fixed header tail.
    lines = [f"{HEADER_DOMAIN:<{width}}{rest}", "-" * (width + len(rest))]
    for e in entries:
        lines.append(f"{e.domain:<{width}} | {e.rel_path} | {e.size_mib}")
    return "\n".join(lines)
