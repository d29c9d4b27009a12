"""cPanel account package.

Submodules:
- cli: uapi / cpapi2 wrappers and envelope parsing
- api: account API client (domains data, MySQL restrictions)
- domains: domain resolver and addon domains
- mysql: database, user and privilege provisioning
"""

# Intentionally minimal; logic lives in submodules.
