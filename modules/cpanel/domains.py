"""Domains on the account: resolve docroots and add addon domains."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from modules.errors import ExternalApiError
from modules.utils import log
from .api import domains_data
from .cli import cpapi2

KIND_MAIN = "main"
KIND_PARKED = "parked"
KIND_ADDON = "addon"
KIND_SUB = "sub"


@dataclass(frozen=True)
class DomainRecord:
    name: str
    docroot: str
    kind: str


def _entry(item: Any, kind: str) -> DomainRecord:
    if not isinstance(item, dict):
        raise ExternalApiError(f"{kind} domain entry is not an object: {item!r}")
    name = item.get("domain")
    docroot = item.get("documentroot")
    if not isinstance(name, str) or not name:
        raise ExternalApiError(f"{kind} domain entry without a name: {item!r}")
    if not isinstance(docroot, str) or not docroot.startswith("/"):
        raise ExternalApiError(f"{kind} domain {name} has no absolute documentroot")
    return DomainRecord(name=name, docroot=docroot, kind=kind)


def _list_of(data: Dict[str, Any], key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ExternalApiError(f"{key} is not a list")
    return value


def resolve_domains(data: Optional[Dict[str, Any]] = None) -> Dict[str, DomainRecord]:
    """Flatten main, parked, addon and sub domains into {name: DomainRecord}.

    Categories are applied in that order; a repeated name replaces the
    earlier record. Parked domains share the main domain's docroot.
    """
    if data is None:
        data = domains_data()
    if not isinstance(data, dict):
        raise ExternalApiError("domains data is not an object")

    main = _entry(data.get("main_domain"), KIND_MAIN)
    domains: Dict[str, DomainRecord] = {main.name: main}

    for name in _list_of(data, "parked_domains"):
        if not isinstance(name, str) or not name:
            raise ExternalApiError(f"parked domain entry is not a name: {name!r}")
        domains[name] = DomainRecord(name=name, docroot=main.docroot, kind=KIND_PARKED)

    for item in _list_of(data, "addon_domains"):
        rec = _entry(item, KIND_ADDON)
        domains[rec.name] = rec

    for item in _list_of(data, "sub_domains"):
        rec = _entry(item, KIND_SUB)
        domains[rec.name] = rec

    log(f"Resolved {len(domains)} domains")
    return domains


def add_addon_domain(domain: str, directory: str, subdomain: str | None = None) -> None:
    cpapi2(
        "AddonDomain",
        "addaddondomain",
        dir=directory,
        newdomain=domain,
        subdomain=subdomain or domain,
    )
    log(f"PASS: Addon domain {domain} added with document root {directory}")
