# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Persistence of the registry in ~/.remote_jupyter_sessions.

The file is a YAML mapping of key -> {host, port, link, pid, token}, readable
only by its owner. A missing or blank file bootstraps an empty registry.

Writes are not atomic and there is no locking: concurrent invocations race
and the last writer wins.
"""

import os
from pathlib import Path
from typing import Optional

import yaml

from rjy.core.errors import CorruptState
from rjy.core.process import ProcessController
from rjy.core.registry import Registry
from rjy.paths import HostPaths
from rjy.utils.logging import get_logger

logger = get_logger(__name__)

SESSIONS_FILE_MODE = 0o600


class SessionStore:
    """Loads and saves the registry from a single file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else HostPaths.sessions_file()

    def load(self, controller: ProcessController, bootstrap: bool = True) -> Registry:
        """Load the registry, creating an empty sessions file if needed.

        With bootstrap=False a missing or blank file yields an empty registry
        and nothing is written.

        Raises:
            CorruptState: If the file contents cannot be deserialized.
            OSError: If the file cannot be read or the bootstrap save fails.
        """
        if not self.path.exists():
            logger.debug(f"No sessions file at {self.path}")
            return self._bootstrap(controller, bootstrap)

        contents = self.path.read_text(encoding="utf-8")
        if not contents.strip():
            logger.debug(f"Sessions file {self.path} is empty, reinitializing")
            return self._bootstrap(controller, bootstrap)

        try:
            data = yaml.safe_load(contents)
        except yaml.YAMLError as e:
            raise CorruptState(
                f"Failed to parse {self.path}: {e}",
                hint=f"Fix or delete {self.path} to start over.",
            )

        if data is None:
            return self._bootstrap(controller, bootstrap)
        if not isinstance(data, dict):
            raise CorruptState(
                f"Expected a mapping of sessions in {self.path}, got {type(data).__name__}.",
                hint=f"Fix or delete {self.path} to start over.",
            )

        registry = Registry.from_records(data, controller)
        logger.debug(f"Loaded {len(registry)} session(s) from {self.path}")
        return registry

    def _bootstrap(self, controller: ProcessController, write: bool) -> Registry:
        registry = Registry(controller)
        if write:
            self.save(registry)
        return registry

    def save(self, registry: Registry) -> None:
        """Write the registry and restrict the file to its owner.

        Raises:
            OSError: If the file cannot be created, chmodded or written.
        """
        serialized = yaml.safe_dump(registry.to_records(), default_flow_style=False, sort_keys=True)

        # New files are created owner-only; existing ones are chmodded below
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, SESSIONS_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            os.chmod(self.path, SESSIONS_FILE_MODE)
            f.write(serialized)
        logger.debug(f"Saved {len(registry)} session(s) to {self.path}")
