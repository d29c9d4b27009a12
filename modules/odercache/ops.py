"""odercache management operations: enable and list."""

from __future__ import annotations

from typing import Dict, List, Optional

from modules.cpanel.domains import DomainRecord, resolve_domains
from modules.errors import DomainNotFound
from modules.utils import log
from .context import OdercacheContext
from .lister import CacheEntry, list_entries
from .migrate import MigrationResult, migrate
from .paths import sanitize_path
from .store import CacheStore


def enable(
    ctx: OdercacheContext,
    domain: str,
    directory: str,
    domains: Optional[Dict[str, DomainRecord]] = None,
) -> MigrationResult:
    if domains is None:
        domains = resolve_domains()
    record = domains.get(domain)
    if record is None:
        raise DomainNotFound(f"{domain} is not a domain on this account")

    rel = sanitize_path(directory, record.docroot)
    # Fail on a corrupt config before touching the filesystem.
    store = CacheStore.load(ctx.config_path)
    result = migrate(ctx, record, rel)
    store.add_entry(domain, rel)
    log(f"PASS: odercache enabled for {domain} {rel}")
    return result


def list_cache(
    ctx: OdercacheContext, domains: Optional[Dict[str, DomainRecord]] = None
) -> List[CacheEntry]:
    if domains is None:
        domains = resolve_domains()
    return list_entries(ctx, domains)
