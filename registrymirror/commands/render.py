"""
Preview commands for registrymirror.

render prints the hosts.toml for one registry; filters prints the
containerd list and event filters for a set of registries. Neither
command touches the filesystem.
"""

import click
import json

from ..cli_utils import handle_errors, require
from ..config import load_config
from ..filters import build_filters
from ..hosts import render_hosts_file
from ..output import emit
from ..validation import validate_registry_url


@click.command('render')
@click.argument('registry')
@click.option('--mirror', '-m', 'mirrors', multiple=True,
              help='Mirror URL (repeatable, first is primary, defaults to configured mirrors)')
@handle_errors
def render_cmd(registry, mirrors):
    """
    Print the hosts.toml content for REGISTRY.

    Example:

    \b
        registrymirror render https://docker.io -m http://127.0.0.1:5000
    """
    config = load_config()
    mirrors = require(mirrors or config.get('mirrors'), 'mirror')

    registry_url = validate_registry_url(registry)
    click.echo(render_hosts_file(registry_url, mirrors, config.get('server_overrides')))


@click.command('filters')
@click.option('--registry', '-r', 'registries', multiple=True,
              help='Registry URL (repeatable, defaults to configured registries)')
@click.option('--pretty', is_flag=True, help='Display as a formatted table')
@handle_errors
def filters_cmd(registries, pretty):
    """
    Print the containerd image list and event filters for registries.

    Host order follows the order the registries are given in.
    """
    config = load_config()
    registries = require(registries or config.get('registries'), 'registry')

    list_filter, event_filter = build_filters(validate_registry_url(r) for r in registries)
    result = {'list_filter': list_filter, 'event_filter': event_filter}

    if pretty:
        emit([{'filter': key, 'value': value} for key, value in result.items()], pretty=True)
    else:
        print(json.dumps(result, ensure_ascii=False))
