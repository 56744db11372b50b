# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Session commands: new, list, rc, dc, drop.

Each command loads the registry, applies one operation and saves it back.
Nothing is saved when the operation fails.
"""

from typing import Optional, Tuple

import click

from rjy.cli import cli
from rjy.cli.helpers import console, handle_errors, print_sessions
from rjy.core.errors import AmbiguousArguments, RjyError
from rjy.core.process import ProcessController, SSHProcessController
from rjy.core.registry import Registry
from rjy.core.store import SessionStore


def get_process_controller() -> ProcessController:
    """Controller used by all commands."""
    return SSHProcessController()


def _open_registry() -> Tuple[SessionStore, Registry]:
    store = SessionStore()
    return store, store.load(get_process_controller())


def _complete_key(ctx, param, incomplete):
    """Shell completion for session keys. Never writes the sessions file."""
    try:
        registry = SessionStore().load(get_process_controller(), bootstrap=False)
    except (RjyError, OSError):
        return []
    return [k for k in sorted(registry.keys()) if k.startswith(incomplete)]


@cli.command(name="new")
@click.argument("link")
@click.argument("host")
@handle_errors
def new_session(link: str, host: str):
    """Forward the Jupyter server at LINK through HOST.

    LINK is the full URL printed by Jupyter (with port and ?token=...).
    HOST is anything ssh accepts (alias from ~/.ssh/config, user@host, ...).
    """
    store, registry = _open_registry()
    registry.create(link, host)
    store.save(registry)


@cli.command(name="list")
@handle_errors
def list_sessions():
    """List tracked sessions and whether their tunnel is alive."""
    _, registry = _open_registry()
    print_sessions(console, registry.list())


@cli.command(name="rc")
@click.argument("key", required=False, shell_complete=_complete_key)
@handle_errors
def reconnect(key: Optional[str]):
    """Reconnect session KEY, or every session if KEY is omitted.

    Sessions that are still connected are left alone.
    """
    store, registry = _open_registry()
    if key is None:
        registry.reconnect_all()
    else:
        registry.reconnect(key)
    store.save(registry)


@cli.command(name="dc")
@click.argument("key", required=False, shell_complete=_complete_key)
@handle_errors
def disconnect(key: Optional[str]):
    """Disconnect session KEY, or every session if KEY is omitted.

    Disconnected sessions stay registered; bring them back with `rjy rc`.
    """
    store, registry = _open_registry()
    if key is None:
        registry.disconnect_all()
    else:
        registry.disconnect(key)
    store.save(registry)


@cli.command(name="drop")
@click.argument("key", required=False, shell_complete=_complete_key)
@click.option("--all", "drop_all", is_flag=True, help="Drop every session.")
@handle_errors
def drop(key: Optional[str], drop_all: bool):
    """Disconnect session KEY and forget it (or every session with --all)."""
    if key is not None and drop_all:
        raise AmbiguousArguments("Specify either a key or --all, not both.")
    if key is None and not drop_all:
        raise AmbiguousArguments(
            "Specify a session key or --all.",
            hint="List registered sessions with: rjy list",
        )

    store, registry = _open_registry()
    if drop_all:
        registry.drop_all()
    else:
        registry.drop(key)
    store.save(registry)
