"""
registrymirror - containerd registry mirror configuration.

Generates and removes the per-registry hosts.toml files that make
containerd send image pulls for selected registries to local mirrors,
and builds the filters that scope containerd image listing and event
subscription to those registries.

Quick Start:
    import registrymirror

    # Validate and render
    registry = registrymirror.validate_registry_url("https://docker.io")
    print(registrymirror.render_hosts_file(registry, ["http://127.0.0.1:5000"]))

    # Write configuration to /etc/containerd/certs.d/docker.io/hosts.toml
    service = registrymirror.MirrorConfigurationService(
        registrymirror.LocalFilesystem(), "/etc/containerd/certs.d"
    )
    service.add(["https://docker.io", "https://ghcr.io"], ["http://127.0.0.1:5000"])
    service.remove(["https://docker.io", "https://ghcr.io"])

    # Filters for the containerd client
    list_filter, event_filter = registrymirror.build_filters([registry])

Hosts file layout:
    The first mirror is the primary mirror. Every later mirror is tagged
    with an X-Spegel-External header. docker.io is served from
    https://registry-1.docker.io unless server_overrides says otherwise.
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    RegistryURL,
    MirrorEndpoint,
    OperationStatus,
    RegistryOperation,
    MirrorOperationResult,
    RegistryURLError,
    InvalidSchemeError,
    InvalidPathError,
    InvalidQueryError,
    InvalidUserInfoError,
    InvalidHostError,
    FilesystemError,
)

# Core functions
from .validation import validate_registry_url
from .hosts import render_hosts_file, DEFAULT_SERVER_OVERRIDES
from .filters import build_filters

# Services and infrastructure
from .services import MirrorConfigurationService
from .infra import LocalFilesystem, MemoryFilesystem

# Configuration
from .config import load_config, save_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "RegistryURL",
    "MirrorEndpoint",
    "OperationStatus",
    "RegistryOperation",
    "MirrorOperationResult",
    # Errors
    "RegistryURLError",
    "InvalidSchemeError",
    "InvalidPathError",
    "InvalidQueryError",
    "InvalidUserInfoError",
    "InvalidHostError",
    "FilesystemError",
    # Core functions
    "validate_registry_url",
    "render_hosts_file",
    "DEFAULT_SERVER_OVERRIDES",
    "build_filters",
    # Services and infrastructure
    "MirrorConfigurationService",
    "LocalFilesystem",
    "MemoryFilesystem",
    # Configuration
    "load_config",
    "save_config",
]
