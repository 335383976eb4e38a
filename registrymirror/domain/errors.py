"""
Error types for registrymirror.

Validation errors are caller-input errors and are never retried.
FilesystemError wraps failures from the filesystem layer.
"""

from typing import Optional


class RegistryURLError(ValueError):
    """Base class for registry URL validation failures."""

    reason = "is invalid"

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"invalid registry url {self.reason}: {url}")


class InvalidSchemeError(RegistryURLError):
    """Raised when the scheme is not http or https."""
    reason = "scheme must be http or https"


class InvalidPathError(RegistryURLError):
    """Raised when the URL carries a path."""
    reason = "path has to be empty"


class InvalidQueryError(RegistryURLError):
    """Raised when the URL carries a query string."""
    reason = "query has to be empty"


class InvalidUserInfoError(RegistryURLError):
    """Raised when the URL carries user info."""
    reason = "user has to be empty"


class InvalidHostError(RegistryURLError):
    """Raised when the host cannot be used as a directory name."""
    reason = "host has to be a valid host name"


class FilesystemError(Exception):
    """
    Wraps an OSError raised while creating, writing or removing config files,
    or the ValueError os functions raise for paths they cannot represent.

    Attributes:
        path: Path the operation was acting on
        operation: Name of the failed operation (makedirs, write_file, ...)
    """

    def __init__(self, operation: str, path: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.path = path
        self.cause = cause
        message = f"{operation} failed for {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
