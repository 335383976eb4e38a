"""
containerd query filters for registrymirror.

Builds the filter strings that restrict image listing and event
subscription to the mirrored registries.
"""

from typing import Iterable, Tuple

from .domain.registry import RegistryURL

IMAGE_EVENT_TOPICS = ('/images/create', '/images/update')


def build_filters(registries: Iterable[RegistryURL]) -> Tuple[str, str]:
    """
    Build (list_filter, event_filter) for a set of registries.

    Hosts keep their input order. An empty input gives an empty
    alternation, which matches every image; avoiding that is up to the
    caller.
    """
    hosts = '|'.join(registry.host for registry in registries)
    list_filter = f'name~="{hosts}"'
    event_filter = f'topic~="{"|".join(IMAGE_EVENT_TOPICS)}",event.name~="{hosts}"'
    return list_filter, event_filter
