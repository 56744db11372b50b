# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""A single tracked SSH forward to a remote Jupyter server."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rjy.core.errors import InvalidHost
from rjy.core.link import LinkDescriptor
from rjy.core.process import ProcessController
from rjy.utils.logging import get_logger

logger = get_logger(__name__)


class TunnelStatus(str, Enum):
    """Liveness of a tunnel, derived from its pid on every query."""

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


def format_key(host: str, port: int) -> str:
    """Registry key for a host and forwarded port."""
    return f"{host}:{port}"


def is_valid_host(host: str) -> bool:
    return bool(host.strip()) and not any(ch.isspace() for ch in host)


class Tunnel(BaseModel):
    """One local SSH port forward.

    The same port is used on both ends. `pid` is None when no process is
    tracked; a stored pid may also be stale (process gone), which only shows
    through status().
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)
    link: str
    pid: Optional[int] = Field(default=None, ge=1)
    token: str

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        if not is_valid_host(v):
            raise ValueError("host must be a single non-blank word")
        return v

    @property
    def key(self) -> str:
        return format_key(self.host, self.port)

    @classmethod
    def start(cls, host: str, link: str, controller: ProcessController) -> "Tunnel":
        """Parse the link and spawn a forward for it.

        Raises:
            InvalidHost: If `host` is blank or contains whitespace.
            InvalidLink: If the link has no port or token.
            SpawnError: If the forwarding process cannot be started.
        """
        if not is_valid_host(host):
            raise InvalidHost(
                f"Invalid SSH host {host!r}: expected a single word such as user@server.",
                hint="Pass the host as it would be given to ssh, e.g. an alias from ~/.ssh/config.",
            )
        descriptor = LinkDescriptor.parse(link)
        pid = controller.spawn(host, descriptor.port)
        logger.debug(f"Started forward {format_key(host, descriptor.port)} (Process ID={pid})")
        return cls(host=host, port=descriptor.port, link=link, pid=pid, token=descriptor.token)

    def status(self, controller: ProcessController) -> TunnelStatus:
        if self.pid is None:
            return TunnelStatus.DISCONNECTED
        if controller.is_alive(self.pid):
            return TunnelStatus.CONNECTED
        return TunnelStatus.DISCONNECTED

    def is_alive(self, controller: ProcessController) -> bool:
        return self.status(controller) == TunnelStatus.CONNECTED

    def effective_pid(self, controller: ProcessController) -> Optional[int]:
        """The pid, but only while the process is alive."""
        if self.is_alive(controller):
            return self.pid
        return None

    def terminate(self, controller: ProcessController) -> None:
        """Stop the forward and stop tracking its pid.

        Dead or untracked processes are reported as already closed and no
        signal is sent. pid is cleared even if signalling fails.

        Raises:
            SignalError: If the termination signal cannot be delivered.
        """
        pid = self.pid
        try:
            if pid is None or not controller.is_alive(pid):
                logger.info("Connection has already closed.")
                return
            controller.terminate(pid)
            logger.success(f"Disconnected session {self.key} (Process ID={pid}).")
        finally:
            self.pid = None
