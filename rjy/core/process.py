# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""OS process control for SSH port forwards.

Tunnels never touch the OS directly; they go through a ProcessController so
the registry logic can run against a fake in tests.
"""

import os
import signal
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional

from rjy.core.errors import SignalError, SpawnError
from rjy.models.host_config import SSHConfig
from rjy.utils.logging import get_logger

logger = get_logger(__name__)


class ProcessController(ABC):
    """Spawn, probe and terminate forwarding processes."""

    @abstractmethod
    def spawn(self, host: str, port: int) -> int:
        """Start a localhost:port -> host:port forward and return its pid."""

    @abstractmethod
    def is_alive(self, pid: int) -> bool:
        """Whether a process with this pid exists."""

    @abstractmethod
    def terminate(self, pid: int) -> None:
        """Ask the process to exit."""


class SSHProcessController(ProcessController):
    """Runs `ssh -N -L` in the background and signals it by pid."""

    def __init__(self, ssh_config: Optional[SSHConfig] = None):
        if ssh_config is None:
            from rjy.host_config import get_config

            ssh_config = get_config().ssh
        self.ssh_config = ssh_config

    def build_command(self, host: str, port: int) -> List[str]:
        """Build the ssh argv for forwarding `port` to `host`."""
        cfg = self.ssh_config
        cmd = [cfg.binary]
        if cfg.forward_x11:
            cmd.append("-Y")
        cmd.extend(["-N", "-L", f"{cfg.bind_address}:{port}:localhost:{port}"])
        cmd.extend(cfg.extra_args)
        cmd.append(host)
        return cmd

    def spawn(self, host: str, port: int) -> int:
        cmd = self.build_command(host, port)
        logger.debug(f"Spawning: {' '.join(cmd)}")
        try:
            # New session so the forward outlives this invocation and its terminal
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except FileNotFoundError:
            raise SpawnError(
                f"SSH binary not found: {cmd[0]}",
                hint="Install OpenSSH or set ssh.binary in ~/.config/rjy/config.yml",
            )
        except OSError as e:
            raise SpawnError(f"Failed to start SSH forward to {host}:{port}: {e}")
        return proc.pid

    def is_alive(self, pid: int) -> bool:
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            return False
        except PermissionError:
            # Exists, but belongs to another user
            return True
        except (OverflowError, ValueError):
            return False
        return True

    def terminate(self, pid: int) -> None:
        try:
            os.kill(pid, signal.SIGTERM)
        except OSError as e:
            raise SignalError(f"Failed to send SIGTERM to process {pid}: {e}")
        logger.debug(f"Sent SIGTERM to process {pid}")
