#!/usr/bin/env python3
"""CLI for account provisioning and odercache on a cPanel hosting account.

Inputs: a subcommand and its arguments.
Side effects: calls uapi/cpapi2 on the account; odercache-enable moves a
docroot directory into ~/odercache, leaves a symlink and a .bak_ copy behind,
and records it in ~/.oderland/odercache/config.json.
"""
import logging
import sys
from typing import Callable, Dict, List

from config import HOME_DIR
from modules.cpanel import mysql
from modules.cpanel.domains import add_addon_domain
from modules.errors import OderlandError
from modules.odercache import ops
from modules.odercache.context import OdercacheContext
from modules.odercache.lister import render_report
from modules.utils import init_logging, log, printable, status_fail, status_pass

# ─── CONFIG ──────────────────────────────────────────────────────────────
FLAG_SUBDOMAIN = "--subdomain"
USAGE = (
    "usage: odercache-enable <domain> <directory> | odercache-list | "
    "create-database <dbname> | create-database-user <username> <password> | "
    "set-database-privileges <username> <database> | "
    "add-addon-domain <domain> <directory> [--subdomain=<subdomain>]"
)


class UsageError(Exception):
    pass


def _context() -> OdercacheContext:
    return OdercacheContext.for_home(HOME_DIR)


def _need(args: List[str], count: int, names: str) -> None:
    if len(args) < count:
        raise UsageError(f"missing arguments: {names}")


def _flag_value(flags: List[str], name: str) -> str | None:
    for f in flags:
        if f.startswith(f"{name}="):
            return f.split("=", 1)[1]
    return None


# ─── Commands ────────────────────────────────────────────────────────────
def cmd_odercache_enable(args: List[str], flags: List[str]) -> int:
    _need(args, 2, "<domain> <directory>")
    domain, directory = args[0], args[1]
    result = ops.enable(_context(), domain, directory)
    if result.backup is not None:
        status_pass(f"original directory kept as {result.backup}")
    status_pass(f"odercache enabled: {result.source} -> {result.target}")
    return 0


def cmd_odercache_list(args: List[str], flags: List[str]) -> int:
    entries = ops.list_cache(_context())
    print(printable(render_report(entries)))
    return 0


def cmd_create_database(args: List[str], flags: List[str]) -> int:
    _need(args, 1, "<dbname>")
    name = mysql.create_database(args[0])
    status_pass(f"Created database: {name}")
    return 0


def cmd_create_database_user(args: List[str], flags: List[str]) -> int:
    _need(args, 2, "<username> <password>")
    name = mysql.create_database_user(args[0], args[1])
    status_pass(f"Created database user: {name}")
    return 0


def cmd_set_database_privileges(args: List[str], flags: List[str]) -> int:
    _need(args, 2, "<username> <database>")
    mysql.set_database_privileges(args[0], args[1])
    status_pass(f"Set all privileges for user: {args[0]} on database {args[1]}")
    return 0


def cmd_add_addon_domain(args: List[str], flags: List[str]) -> int:
    _need(args, 2, "<domain> <directory>")
    subdomain = _flag_value(flags, FLAG_SUBDOMAIN)
    add_addon_domain(args[0], args[1], subdomain=subdomain)
    status_pass(f"Addon domain was added: {args[0]} with document root: {args[1]}")
    return 0


COMMANDS: Dict[str, Callable[[List[str], List[str]], int]] = {
    "odercache-enable": cmd_odercache_enable,
    "odercache-list": cmd_odercache_list,
    "create-database": cmd_create_database,
    "create-database-user": cmd_create_database_user,
    "set-database-privileges": cmd_set_database_privileges,
    "add-addon-domain": cmd_add_addon_domain,
}


def main(argv: List[str]) -> int:
    init_logging(None)
    if not argv:
        status_fail(USAGE)
        return 2
    handler = COMMANDS.get(argv[0])
    if handler is None:
        status_fail(f"unknown command '{argv[0]}'; {USAGE}")
        return 2
    flags = [a for a in argv[1:] if a.startswith("--")]
    args = [a for a in argv[1:] if not a.startswith("--")]
    log(f"command={argv[0]} args={len(args)} flags={flags}")
    try:
        return handler(args, flags)
    except UsageError as err:
        status_fail(f"{err}; {USAGE}")
        return 2
    except OderlandError as err:
        logging.error("%s failed: %s: %s", argv[0], type(err).__name__, err)
        status_fail(f"{type(err).__name__}: {err}")
        return 1


def run() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()
