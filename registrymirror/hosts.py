"""
containerd hosts.toml rendering for registrymirror.

Produces the per-registry file containerd reads from
{config_path}/{registry host}/hosts.toml. The output is parsed by
containerd, so the layout is exact: two-space indentation, double-quoted
strings, no trailing newline.

Example output for https://example.com mirrored by http://127.0.0.1:5000:

    server = "https://example.com"

    [host."http://127.0.0.1:5000"]
      capabilities = ["pull", "resolve"]
    [host."http://127.0.0.1:5000".header]
      X-Spegel-Registry = ["https://example.com"]
      X-Spegel-Mirror = ["true"]
"""

from typing import Dict, Mapping, Optional, Sequence, Union

from .domain.registry import RegistryURL, MirrorEndpoint

HOSTS_FILE_NAME = 'hosts.toml'

# Registries whose pull endpoint differs from the name used in image references.
DEFAULT_SERVER_OVERRIDES: Dict[str, str] = {
    'docker.io': 'https://registry-1.docker.io',
}

REGISTRY_HEADER = 'X-Spegel-Registry'
MIRROR_HEADER = 'X-Spegel-Mirror'
EXTERNAL_HEADER = 'X-Spegel-External'


def server_for(registry: RegistryURL, server_overrides: Optional[Mapping[str, str]] = None) -> str:
    """Return the upstream server containerd should fall back to."""
    overrides = DEFAULT_SERVER_OVERRIDES if server_overrides is None else server_overrides
    return overrides.get(registry.host, str(registry))


def _render_mirror(registry: RegistryURL, mirror: MirrorEndpoint) -> str:
    lines = [
        f'[host."{mirror.url}"]',
        '  capabilities = ["pull", "resolve"]',
        f'[host."{mirror.url}".header]',
        f'  {REGISTRY_HEADER} = ["{registry}"]',
        f'  {MIRROR_HEADER} = ["true"]',
    ]
    if mirror.is_external:
        lines.append(f'  {EXTERNAL_HEADER} = ["true"]')
    return '\n'.join(lines)


def render_hosts_file(
    registry: RegistryURL,
    mirrors: Sequence[Union[str, MirrorEndpoint]],
    server_overrides: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Render hosts.toml content for one registry.

    Args:
        registry: Validated registry URL
        mirrors: Ordered mirror URLs; the first is primary, the rest external
        server_overrides: Host to server URL table (defaults to
            DEFAULT_SERVER_OVERRIDES)

    Returns:
        File content without a trailing newline
    """
    endpoints = MirrorEndpoint.from_urls(mirrors)
    blocks = [f'server = "{server_for(registry, server_overrides)}"']
    blocks.extend(_render_mirror(registry, endpoint) for endpoint in endpoints)
    return '\n\n'.join(blocks)
