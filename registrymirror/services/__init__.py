"""
Service layer for registrymirror.

Contains business logic that orchestrates domain objects and infrastructure:
- MirrorConfigurationService: Add, remove and inspect per-registry
  containerd mirror configuration

Services are the primary API for commands to use.
"""

from .mirror_service import MirrorConfigurationService

__all__ = [
    'MirrorConfigurationService',
]
