"""
Mirror configuration commands for registrymirror.

add, remove and status operate on {config_path}/{registry host}/hosts.toml
for each registry. Registries, mirrors and the config path default to the
values in the configuration file.
"""

import click
from typing import Optional

from rich.console import Console

from ..config import load_config, configure_logging
from ..cli_utils import handle_errors, require
from ..infra.filesystem import LocalFilesystem, MemoryFilesystem
from ..output import emit
from ..services.mirror_service import MirrorConfigurationService

console = Console()


def _service(config, config_path: Optional[str], filesystem=None) -> MirrorConfigurationService:
    return MirrorConfigurationService(
        filesystem or LocalFilesystem(),
        config_path or config['containerd']['config_path'],
        server_overrides=config.get('server_overrides'),
    )


registry_option = click.option(
    '--registry', '-r', 'registries', multiple=True,
    help='Registry URL to mirror (repeatable, defaults to configured registries)'
)
config_path_option = click.option(
    '--config-path', type=click.Path(file_okay=False),
    help='containerd registry config directory (default: /etc/containerd/certs.d)'
)
pretty_option = click.option('--pretty', is_flag=True, help='Display as a formatted table')
debug_option = click.option('--debug', is_flag=True, help='Enable debug logging')


@click.command('add')
@registry_option
@click.option('--mirror', '-m', 'mirrors', multiple=True,
              help='Mirror URL (repeatable, first is primary, defaults to configured mirrors)')
@config_path_option
@pretty_option
@click.option('--dry-run', is_flag=True, help='Show what would be written without touching disk')
@debug_option
@handle_errors
def add_cmd(registries, mirrors, config_path, pretty, dry_run, debug):
    """
    Write mirror configuration for registries.

    Examples:

    \b
        registrymirror add -r https://docker.io -r https://ghcr.io -m http://127.0.0.1:5000
        registrymirror add --dry-run --pretty
    """
    config = load_config()
    configure_logging(config, debug)

    registries = require(registries or config.get('registries'), 'registry')
    mirrors = require(mirrors or config.get('mirrors'), 'mirror')

    filesystem = MemoryFilesystem() if dry_run else None
    service = _service(config, config_path, filesystem)
    result = service.add(registries, mirrors)

    if dry_run:
        rows = []
        for op in result.operations:
            row = op.to_dict()
            row['status'] = 'dry_run'
            row['content'] = filesystem.read_file(op.path)
            rows.append(row)
        if pretty:
            for row in rows:
                console.rule(row['path'])
                console.print(row['content'], markup=False, highlight=False)
        else:
            emit(rows)
        return

    emit(result.operations, pretty=pretty, columns=['registry', 'path', 'status'],
         title='Mirror configuration')


@click.command('remove')
@registry_option
@config_path_option
@pretty_option
@debug_option
@handle_errors
def remove_cmd(registries, config_path, pretty, debug):
    """
    Remove mirror configuration for registries.

    Registries without configuration are reported as absent.
    """
    config = load_config()
    configure_logging(config, debug)

    registries = require(registries or config.get('registries'), 'registry')
    result = _service(config, config_path).remove(registries)

    emit(result.operations, pretty=pretty, columns=['registry', 'path', 'status'],
         title='Mirror configuration')


@click.command('status')
@registry_option
@config_path_option
@pretty_option
@handle_errors
def status_cmd(registries, config_path, pretty):
    """Show which registries currently have mirror configuration."""
    config = load_config()
    configure_logging(config)

    registries = require(registries or config.get('registries'), 'registry')
    statuses = _service(config, config_path).status(registries)

    emit(statuses, pretty=pretty, columns=['registry', 'path', 'configured'])
