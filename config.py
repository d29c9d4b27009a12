"""Shared configuration constants for oderland.

Centralizes binary paths, account directories and odercache layout used by
modules.
"""

import os

HOME_DIR = os.environ.get("ODERLAND_HOME", os.path.expanduser("~"))
STATE_DIR = os.path.join(HOME_DIR, ".oderland")
LOG_DIR = os.environ.get("ODERLAND_LOG_DIR", os.path.join(STATE_DIR, "log"))

UAPI_PATH = "/usr/bin/uapi"
CPAPI2_PATH = "/usr/bin/cpapi2"
DU_PATH = "du"
DF_PATH = "df"
CMD_TIMEOUT = int(os.environ.get("ODERLAND_CMD_TIMEOUT", "600"))  # seconds

# odercache layout, all relative to the account home
ODERCACHE_STORAGE = "odercache"
ODERCACHE_STATE = os.path.join(".oderland", "odercache")
ODERCACHE_SKELETON = os.path.join(ODERCACHE_STATE, "dirs")
ODERCACHE_CONFIG = os.path.join(ODERCACHE_STATE, "config.json")
ODERCACHE_DIR_PERMS = 0o750

# Items dropped from "/home/<user>/..." when splitting a docroot on "/".
# Mirrored paths in existing storage areas depend on this value.
HOME_DEPTH = 3

MIB = 1024 * 1024
SPACE_HEADROOM = MIB
BACKUP_PREFIX = ".bak_"

DB_PRIVILEGES = "ALL PRIVILEGES"
