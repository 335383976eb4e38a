#!/usr/bin/env python3

import click

from registrymirror.commands.mirror import add_cmd, remove_cmd, status_cmd
from registrymirror.commands.render import render_cmd, filters_cmd
from registrymirror.commands.config import config_cmd


@click.group()
@click.version_option(package_name='registrymirror')
def cli():
    """registrymirror - containerd registry mirror configuration.

    Writes and removes per-registry hosts.toml files that route image pulls
    through local mirrors, and builds the containerd filters that scope
    image listing and events to the mirrored registries.
    """
    pass


cli.add_command(add_cmd)
cli.add_command(remove_cmd)
cli.add_command(status_cmd)
cli.add_command(render_cmd)
cli.add_command(filters_cmd)
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
