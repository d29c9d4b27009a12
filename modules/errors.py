"""Error kinds raised by the cpanel and odercache modules.

Every error is fatal to the current invocation; oderland.main maps them to
a FAIL line and a non-zero exit.
"""


class OderlandError(Exception):
    """Base class for all reported failures."""


class InvalidPath(OderlandError):
    pass


class AlreadyMigrated(OderlandError):
    pass


class InsufficientSpace(OderlandError):
    pass


class DirectoryCreateFailed(OderlandError):
    pass


class SymlinkFailed(OderlandError):
    pass


class ExternalApiError(OderlandError):
    pass


class ConfigCorrupt(OderlandError):
    pass


class DomainNotFound(OderlandError):
    pass


class CommandFailed(OderlandError):
    """A filesystem primitive (du, df, copy, rename) failed or printed something unexpected."""


class ConfigWriteFailed(OderlandError):
    pass
