# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Exception taxonomy for rjy.

Every error raised by the registry, the store and the process layer derives
from RjyError. They all bubble up to handle_errors in the CLI, which renders
the message (and hint, if any) and exits with status 1.

Filesystem failures are not wrapped: OSError and PermissionError propagate
as they are.
"""

from typing import Optional


class RjyError(Exception):
    """Base class for all rjy errors."""

    title = "Error"

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.hint = hint


class InvalidLink(RjyError):
    """Raised when a Jupyter link has no parsable URL, port or token."""

    title = "Invalid Link"


class InvalidHost(RjyError):
    """Raised when the SSH host is blank or not a single word."""

    title = "Invalid Host"


class DuplicateKey(RjyError):
    """Raised when a session with the same host:port is already registered."""

    title = "Duplicate Session"

    def __init__(self, key: str):
        self.key = key
        super().__init__(
            f"A remote Jupyter session with key '{key}' is already registered.",
            hint=f"If you'd like to reconnect, use: rjy rc {key}",
        )


class KeyNotFound(RjyError):
    """Raised when an operation names a key that is not registered."""

    title = "Unknown Session"

    def __init__(self, key: str):
        self.key = key
        super().__init__(
            f"Could not find a remote Jupyter session with key '{key}'.",
            hint="List registered sessions with: rjy list",
        )


class AmbiguousArguments(RjyError):
    """Raised when a command is given conflicting or insufficient targets."""

    title = "Invalid Arguments"


class SpawnError(RjyError):
    """Raised when the SSH forwarding process cannot be started."""

    title = "Spawn Error"


class SignalError(RjyError):
    """Raised when a termination signal cannot be delivered."""

    title = "Signal Error"


class CorruptState(RjyError):
    """Raised when the sessions file cannot be deserialized."""

    title = "Corrupt Sessions File"


class ConfigError(RjyError):
    """Raised when the environment does not allow resolving rjy's paths."""

    title = "Configuration Error"
