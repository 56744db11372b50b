# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Registry of tracked tunnels and the operations on them.

A Registry is loaded from the SessionStore, mutated by exactly one operation
and saved back. Keys are always `host:port` derived from the tunnel itself.

Bulk operations (*_all) work on a snapshot of the keys and stop at the first
error, leaving the remaining tunnels untouched.
"""

from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional

from pydantic import ValidationError

from rjy.core.errors import CorruptState, DuplicateKey, KeyNotFound
from rjy.core.link import LinkDescriptor
from rjy.core.process import ProcessController
from rjy.core.tunnel import Tunnel, TunnelStatus, format_key
from rjy.utils.logging import get_logger

logger = get_logger(__name__)


class TunnelRow(NamedTuple):
    """One line of `rjy list` output."""

    key: str
    pid: Optional[int]
    status: TunnelStatus
    link: str


class Registry:
    """In-memory mapping of key -> Tunnel."""

    def __init__(
        self,
        controller: ProcessController,
        tunnels: Optional[Dict[str, Tunnel]] = None,
    ):
        self.controller = controller
        self._tunnels: Dict[str, Tunnel] = {}
        for tunnel in (tunnels or {}).values():
            self._tunnels[tunnel.key] = tunnel

    def __len__(self) -> int:
        return len(self._tunnels)

    def __contains__(self, key: object) -> bool:
        return key in self._tunnels

    def __iter__(self) -> Iterator[Tunnel]:
        return iter(list(self._tunnels.values()))

    def keys(self) -> List[str]:
        return list(self._tunnels.keys())

    def get(self, key: str) -> Optional[Tunnel]:
        return self._tunnels.get(key)

    def _require(self, key: str) -> Tunnel:
        tunnel = self._tunnels.get(key)
        if tunnel is None:
            raise KeyNotFound(key)
        return tunnel

    def create(self, link: str, host: str) -> Tunnel:
        """Start a new tunnel for `link` through `host`.

        Raises:
            InvalidLink: If the link cannot be parsed.
            InvalidHost: If `host` is blank or contains whitespace.
            DuplicateKey: If host:port is already registered.
            SpawnError: If the forward cannot be started.
        """
        descriptor = LinkDescriptor.parse(link)
        key = format_key(host, descriptor.port)
        if key in self._tunnels:
            raise DuplicateKey(key)

        tunnel = Tunnel.start(host, link, self.controller)
        self._tunnels[tunnel.key] = tunnel
        logger.success(f"Created new session {key}.")
        return tunnel

    def list(self) -> List[TunnelRow]:
        """Rows for display, sorted by key. Liveness is probed per row."""
        rows = []
        for key in sorted(self._tunnels):
            tunnel = self._tunnels[key]
            status = tunnel.status(self.controller)
            pid = tunnel.pid if status == TunnelStatus.CONNECTED else None
            rows.append(TunnelRow(key=key, pid=pid, status=status, link=tunnel.link))
        return rows

    def reconnect(self, key: str) -> Tunnel:
        """Restart the forward for `key` unless it is still alive.

        Raises:
            KeyNotFound: If `key` is not registered.
            SpawnError: If the new forward cannot be started; the old entry
                is kept in that case.
        """
        tunnel = self._require(key)
        del self._tunnels[key]

        if tunnel.is_alive(self.controller):
            self._tunnels[key] = tunnel
            logger.debug(f"Session {key} is still connected (Process ID={tunnel.pid})")
            return tunnel

        try:
            new_tunnel = Tunnel.start(tunnel.host, tunnel.link, self.controller)
        except Exception:
            self._tunnels[key] = tunnel
            raise
        self._tunnels[key] = new_tunnel
        logger.success(f"Reconnected session {key}.")
        return new_tunnel

    def reconnect_all(self) -> None:
        for key in self.keys():
            self.reconnect(key)

    def disconnect(self, key: str) -> None:
        """Terminate the forward for `key`, keeping the entry.

        Raises:
            KeyNotFound: If `key` is not registered.
            SignalError: If the process cannot be signalled.
        """
        self._require(key).terminate(self.controller)

    def disconnect_all(self) -> None:
        for key in self.keys():
            self.disconnect(key)

    def drop(self, key: str) -> None:
        """Forget `key` and terminate its forward.

        Raises:
            KeyNotFound: If `key` is not registered.
            SignalError: If the process cannot be signalled (the entry is
                already removed).
        """
        tunnel = self._require(key)
        del self._tunnels[key]
        logger.debug(f"Dropped session {key}")
        tunnel.terminate(self.controller)

    def drop_all(self) -> None:
        for key in self.keys():
            self.drop(key)

    def to_records(self) -> Dict[str, Dict[str, Any]]:
        """Plain mapping of key -> tunnel fields, for serialization."""
        return {key: tunnel.model_dump(mode="json") for key, tunnel in self._tunnels.items()}

    @classmethod
    def from_records(
        cls, records: Mapping[str, Any], controller: ProcessController
    ) -> "Registry":
        """Build a registry from a deserialized mapping.

        Raises:
            CorruptState: If a record is malformed or stored under a key that
                does not match its host and port.
        """
        tunnels: Dict[str, Tunnel] = {}
        for key, record in records.items():
            try:
                tunnel = Tunnel.model_validate(record)
            except ValidationError as e:
                raise CorruptState(f"Invalid session record '{key}': {e}")
            if tunnel.key != key:
                raise CorruptState(
                    f"Session stored under '{key}' belongs to '{tunnel.key}'.",
                    hint="Fix or remove the entry in ~/.remote_jupyter_sessions.",
                )
            tunnels[key] = tunnel
        return cls(controller, tunnels)
