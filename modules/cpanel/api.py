"""Account API client: the two read calls the rest of the tool depends on."""

from __future__ import annotations

from typing import Any, Dict

from modules.errors import ExternalApiError
from .cli import uapi

RESTRICTION_KEYS = ("prefix", "max_username_length", "max_database_name_length")


def domains_data() -> Dict[str, Any]:
    """Return {main_domain, parked_domains?, addon_domains?, sub_domains?}."""
    data = uapi("DomainInfo", "domains_data")
    if not isinstance(data, dict) or "main_domain" not in data:
        raise ExternalApiError("DomainInfo::domains_data: missing main_domain")
    return data


def restrictions() -> Dict[str, Any]:
    """Return prefix, max_username_length and max_database_name_length."""
    data = uapi("Mysql", "get_restrictions")
    if not isinstance(data, dict):
        raise ExternalApiError("Mysql::get_restrictions: unexpected data")
    missing = [k for k in RESTRICTION_KEYS if k not in data]
    if missing:
        raise ExternalApiError(
            f"Mysql::get_restrictions: missing {', '.join(missing)}"
        )
    try:
        return {
            "prefix": str(data["prefix"]),
            "max_username_length": int(data["max_username_length"]),
            "max_database_name_length": int(data["max_database_name_length"]),
        }
    except (TypeError, ValueError) as err:
        raise ExternalApiError(f"Mysql::get_restrictions: {err}") from err
