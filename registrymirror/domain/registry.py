"""
Registry and mirror value objects for registrymirror.

RegistryURL is only produced by validation.validate_registry_url, so any
instance is safe to use as a hosts-file selector and directory name.
"""

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class RegistryURL:
    """
    Validated upstream registry URL.

    Attributes:
        url: Original URL string, returned unchanged by str()
        scheme: "http" or "https"
        host: Host including an optional port (e.g. "foo.bar:5000")
    """

    url: str
    scheme: str
    host: str

    def __str__(self) -> str:
        return self.url

    def to_dict(self) -> dict:
        return {'registry': self.url, 'host': self.host}


@dataclass(frozen=True)
class MirrorEndpoint:
    """
    A mirror that receives redirected pulls for a registry.

    The first mirror in a sequence is the primary mirror; every later one is
    external and gets tagged as such in the hosts file.
    """

    url: str
    is_external: bool = False

    @classmethod
    def from_urls(cls, urls: Iterable) -> List['MirrorEndpoint']:
        """
        Build endpoints from an ordered sequence of mirror URLs.

        Items that are already MirrorEndpoints keep their URL but have the
        external flag recomputed from their position.
        """
        endpoints = []
        for index, url in enumerate(urls):
            if isinstance(url, MirrorEndpoint):
                url = url.url
            endpoints.append(cls(url=str(url), is_external=index > 0))
        return endpoints

    def __str__(self) -> str:
        return self.url
