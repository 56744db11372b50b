# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Rendering of registry rows for the console."""

from typing import List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rjy.core.registry import TunnelRow
from rjy.core.tunnel import TunnelStatus

STATUS_STYLES = {
    TunnelStatus.CONNECTED: "bold green",
    TunnelStatus.DISCONNECTED: "bold red",
}


def build_sessions_table(rows: List[TunnelRow]) -> Table:
    """Table with one line per tunnel. Dead pids are shown blank."""
    table = Table(box=box.SIMPLE_HEAD, show_edge=False)
    table.add_column("Key (host:port)", no_wrap=True)
    table.add_column("Process ID", justify="right")
    table.add_column("Status")
    table.add_column("Link", overflow="fold")

    for row in rows:
        table.add_row(
            escape(row.key),
            str(row.pid) if row.pid is not None else "",
            f"[{STATUS_STYLES[row.status]}]{row.status.value}[/{STATUS_STYLES[row.status]}]",
            escape(row.link),
        )
    return table


def print_sessions(console: Console, rows: List[TunnelRow]) -> None:
    if not rows:
        console.print("[yellow]No active remote Jupyter sessions.[/yellow]")
        return
    console.print(build_sessions_table(rows))
