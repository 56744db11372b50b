# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Shared helpers for the rjy CLI.

- utils.py: Error panels and the handle_errors decorator
- render.py: Rich table rendering of the registry

All functions are re-exported here for convenience.
"""

from rich.console import Console

console = Console()

from rjy.cli.helpers.utils import (  # noqa: E402
    handle_errors,
    show_error_panel,
)

from rjy.cli.helpers.render import (  # noqa: E402
    build_sessions_table,
    print_sessions,
)
