"""
Infrastructure layer for registrymirror.

Contains abstractions for external systems:
- Filesystem: capability protocol used by the mirror service
- LocalFilesystem: Disk-backed implementation with atomic writes
- MemoryFilesystem: In-memory implementation for dry runs and tests

These provide clean interfaces that can be swapped out for testing.
"""

from .filesystem import Filesystem, LocalFilesystem, MemoryFilesystem

__all__ = [
    'Filesystem',
    'LocalFilesystem',
    'MemoryFilesystem',
]
