"""Custom exceptions for NetDisk application"""


class NetdiskError(Exception):
    """Base exception for NetDisk application"""

    status_code = 500
    title = "ERROR"


class ConfigurationError(NetdiskError):
    """Configuration-related errors"""

    pass


class ValidationError(NetdiskError):
    """Malformed or missing client input"""

    status_code = 400
    title = "Warning"


class PathResolutionError(NetdiskError):
    """A path escapes the browsable root or cannot be mapped"""

    status_code = 403
    title = "Forbidden"


class FileOperationError(NetdiskError):
    """File operation errors"""

    pass


class ArchiveError(NetdiskError):
    """Archive generation errors"""

    pass
