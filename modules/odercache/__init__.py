"""odercache: move docroot directories onto the storage area behind a symlink.

Submodules:
- context: explicit directories/config value passed to every operation
- paths: sanitizing and mirroring of relative paths
- disk: du / df queries
- store: persisted {domain: {path: {}}} config document
- migrate: capacity check, copy, backup and symlink
- lister: listing and report rendering
- ops: enable / list entry points used by the CLI
"""

# Intentionally minimal; logic lives in submodules.
