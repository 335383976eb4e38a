"""
Registry URL validation for registrymirror.

Registry hosts become directory names under the containerd config path,
so every URL is checked before it reaches the renderer or the filesystem.
Rules are checked in a fixed order and only the first failure is reported.
"""

from typing import Union
from urllib.parse import urlsplit

from .domain.registry import RegistryURL
from .domain.errors import (
    InvalidSchemeError,
    InvalidPathError,
    InvalidQueryError,
    InvalidUserInfoError,
    InvalidHostError,
)


ALLOWED_SCHEMES = ('http', 'https')

# Quotes and backslashes would break the TOML strings the URL is written into.
UNSAFE_CHARACTERS = frozenset('"\\')


def _has_unsafe_characters(url: str) -> bool:
    """Control characters, whitespace, quotes or backslashes anywhere in the URL."""
    return any(
        ord(c) < 0x20 or ord(c) == 0x7f or c.isspace() or c in UNSAFE_CHARACTERS
        for c in url
    )


def validate_registry_url(url: Union[str, RegistryURL]) -> RegistryURL:
    """
    Validate a registry URL.

    Args:
        url: Registry URL string, or an already validated RegistryURL

    Returns:
        RegistryURL wrapping the unchanged input

    Raises:
        InvalidSchemeError: scheme is not http or https
        InvalidPathError: URL has a path other than "/"
        InvalidQueryError: URL has a query string
        InvalidUserInfoError: URL has user info
        InvalidHostError: host is empty, unsafe characters are present, or
            the host is not usable as a directory name
    """
    if isinstance(url, RegistryURL):
        return url

    url = str(url)
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidHostError(url) from e

    if parts.scheme not in ALLOWED_SCHEMES:
        raise InvalidSchemeError(url)
    if parts.path not in ('', '/'):
        raise InvalidPathError(url)
    if parts.query:
        raise InvalidQueryError(url)
    if '@' in parts.netloc:
        raise InvalidUserInfoError(url)

    host = parts.netloc
    if not host or host in ('.', '..') or _has_unsafe_characters(url):
        raise InvalidHostError(url)

    return RegistryURL(url=url, scheme=parts.scheme, host=host)
