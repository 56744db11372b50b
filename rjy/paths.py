# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Centralized path definitions for rjy.

All paths live under the user's home directory, which is resolved from the
HOME environment variable once per invocation.

Usage:
    from rjy.paths import HostPaths

    sessions = HostPaths.sessions_file()
    config = HostPaths.config_file()
"""

import os
from pathlib import Path

from rjy.core.errors import ConfigError

SESSIONS_FILE_NAME = ".remote_jupyter_sessions"


class HostPaths:
    """Paths on the machine where the rjy CLI runs."""

    @staticmethod
    def home_dir() -> Path:
        """The user's home directory, from $HOME."""
        home = os.environ.get("HOME")
        if not home:
            raise ConfigError(
                "Cannot determine the home directory: HOME is not set.",
                hint="Set HOME to your home directory and retry.",
            )
        return Path(home)

    @staticmethod
    def sessions_file() -> Path:
        """~/.remote_jupyter_sessions"""
        return HostPaths.home_dir() / SESSIONS_FILE_NAME

    # XDG config directory for rjy
    @staticmethod
    def config_dir() -> Path:
        """~/.config/rjy/"""
        return HostPaths.home_dir() / ".config" / "rjy"

    @staticmethod
    def config_file() -> Path:
        """~/.config/rjy/config.yml"""
        return HostPaths.config_dir() / "config.yml"

    # XDG data directory
    @staticmethod
    def data_dir() -> Path:
        """~/.local/share/rjy/"""
        return HostPaths.home_dir() / ".local" / "share" / "rjy"

    @staticmethod
    def log_dir() -> Path:
        """~/.local/share/rjy/logs/"""
        return HostPaths.data_dir() / "logs"
