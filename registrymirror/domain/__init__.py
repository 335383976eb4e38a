"""
Domain layer for registrymirror.

Contains pure domain objects with no I/O or side effects:
- RegistryURL: A validated upstream registry
- MirrorEndpoint: A mirror with its primary/external role
- MirrorOperationResult: What an add/remove did per registry
- Error types raised by validation and the filesystem layer
"""

from .registry import RegistryURL, MirrorEndpoint
from .operation import OperationStatus, RegistryOperation, MirrorOperationResult
from .errors import (
    RegistryURLError,
    InvalidSchemeError,
    InvalidPathError,
    InvalidQueryError,
    InvalidUserInfoError,
    InvalidHostError,
    FilesystemError,
)

__all__ = [
    'RegistryURL',
    'MirrorEndpoint',
    'OperationStatus',
    'RegistryOperation',
    'MirrorOperationResult',
    'RegistryURLError',
    'InvalidSchemeError',
    'InvalidPathError',
    'InvalidQueryError',
    'InvalidUserInfoError',
    'InvalidHostError',
    'FilesystemError',
]
