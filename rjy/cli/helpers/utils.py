# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Utility functions for CLI helpers."""

import functools
import sys
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from rjy.core.errors import RjyError
from rjy.utils.logging import get_logger, is_debug_mode

_console = Console()
logger = get_logger(__name__)


def show_error_panel(title: str, message: str, hint: Optional[str] = None) -> None:
    """Display a formatted error panel.

    Args:
        title: Panel title (shown in red)
        message: Main error message
        hint: Optional hint text (shown with blue "Hint:" prefix)
    """
    content = escape(message)
    if hint:
        content += f"\n\n[blue]Hint:[/blue] {escape(hint)}"
    _console.print(Panel(content, title=f"[red]{title}[/red]", border_style="red"))


def handle_errors(func: Callable) -> Callable:
    """Decorator that wraps CLI commands with standard error handling.

    Catches exceptions, prints error with nice formatting, and exits with code 1.
    Special handling for:
    - RjyError: Panel titled after the error kind, with hint if provided
    - OSError: "Filesystem Error" panel (sessions file unreadable/unwritable)
    - ClickException: Left to click
    - Other exceptions: Shows generic error panel

    Usage:
        @cli.command()
        @handle_errors
        def my_command():
            ...
    """
    import click

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except click.ClickException:
            raise
        except RjyError as exc:
            logger.error(type(exc).__name__, exc=exc, console_output=False)
            show_error_panel(exc.title, str(exc), exc.hint)
            sys.exit(1)
        except OSError as exc:
            logger.error("Filesystem error", exc=exc, console_output=False)
            show_error_panel("Filesystem Error", str(exc))
            sys.exit(1)
        except Exception as exc:
            logger.error("Unexpected error", exc=exc, console_output=False)
            show_error_panel("Error", str(exc))
            if is_debug_mode():
                _console.print_exception()
            sys.exit(1)

    return wrapper
