# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""rjy CLI package."""

import click

from rjy import __version__
from rjy.utils.logging import set_debug_mode


@click.group()
@click.option("--debug", "-d", is_flag=True, help="Verbose output and tracebacks on errors.")
@click.version_option(version=__version__, prog_name="rjy")
def cli(debug: bool):
    """rjy - Manage SSH tunnels to remote Jupyter notebook servers.

    \b
    Usage:
        rjy new LINK HOST     # Forward the notebook at LINK through HOST
        rjy list              # Show tracked sessions
        rjy rc [KEY]          # Reconnect one session, or all
        rjy dc [KEY]          # Disconnect one session, or all
        rjy drop KEY | --all  # Disconnect and forget sessions

    Sessions are identified by their key, host:port.
    """
    if debug:
        set_debug_mode(True)


def main():
    """Main entry point."""
    cli()


from rjy.cli.commands import sessions  # noqa: E402,F401
