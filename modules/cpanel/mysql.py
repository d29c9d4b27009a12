"""MySQL provisioning through UAPI, honoring the account's naming restrictions."""

from __future__ import annotations

from typing import Any, Dict, Optional

from config import DB_PRIVILEGES
from modules.utils import log, status_warn
from .api import restrictions
from .cli import uapi


def apply_restrictions(name: str, prefix: str, max_length: int, label: str) -> str:
    """Prefix and truncate a database or user name, warning on each change."""
    if not name.startswith(prefix):
        name = prefix + name
        status_warn(f"{label} has to be prefixed with: {prefix}")
    if max_length > 0 and len(name) > max_length:
        name = name[:max_length]
        status_warn(f"{label} max length is {max_length}")
    return name


def create_database(dbname: str, limits: Optional[Dict[str, Any]] = None) -> str:
    limits = limits or restrictions()
    dbname = apply_restrictions(
        dbname, limits["prefix"], limits["max_database_name_length"], "Database name"
    )
    uapi("Mysql", "create_database", name=dbname)
    log(f"PASS: Created database {dbname}")
    return dbname


def create_database_user(
    username: str, password: str, limits: Optional[Dict[str, Any]] = None
) -> str:
    limits = limits or restrictions()
    username = apply_restrictions(
        username, limits["prefix"], limits["max_username_length"], "Database username"
    )
    uapi("Mysql", "create_user", name=username, password=password)
    log(f"PASS: Created database user {username}")
    return username


def set_database_privileges(username: str, database: str) -> None:
    uapi(
        "Mysql",
        "set_privileges_on_database",
        user=username,
        database=database,
        privileges=DB_PRIVILEGES,
    )
    log(f"PASS: Granted {DB_PRIVILEGES} to {username} on {database}")
