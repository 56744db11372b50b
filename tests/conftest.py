# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Pytest fixtures for rjy tests.

No test starts a real ssh process: the registry and CLI run against
FakeProcessController, which tracks "alive" pids in memory.
"""

import os
import tempfile

# Keep test logs out of the real home directory (must happen before rjy imports)
os.environ.setdefault("RJY_LOG_FILE", os.path.join(tempfile.gettempdir(), "rjy-tests.log"))

import pytest  # noqa: E402

from rjy.core.errors import SignalError, SpawnError  # noqa: E402
from rjy.core.process import ProcessController  # noqa: E402
from rjy.core.registry import Registry  # noqa: E402
from rjy.core.store import SessionStore  # noqa: E402
from rjy.utils.logging import set_debug_mode  # noqa: E402


class FakeProcessController(ProcessController):
    """In-memory stand-in for SSHProcessController."""

    def __init__(self, first_pid: int = 1000):
        self.next_pid = first_pid
        self.alive = set()
        self.spawned = []  # (host, port, pid)
        self.terminated = []  # pids signalled
        self.fail_spawn = False
        self.fail_spawn_hosts = set()
        self.fail_terminate = set()

    def spawn(self, host, port):
        if self.fail_spawn or host in self.fail_spawn_hosts:
            raise SpawnError(f"Failed to start SSH forward to {host}:{port}")
        pid = self.next_pid
        self.next_pid += 1
        self.alive.add(pid)
        self.spawned.append((host, port, pid))
        return pid

    def is_alive(self, pid):
        return pid in self.alive

    def terminate(self, pid):
        if pid in self.fail_terminate:
            raise SignalError(f"Failed to send SIGTERM to process {pid}")
        self.terminated.append(pid)
        self.alive.discard(pid)

    def kill(self, pid):
        """Simulate the forward dying on its own (network drop, remote exit)."""
        self.alive.discard(pid)


@pytest.fixture(autouse=True)
def reset_debug_mode():
    """--debug sets global state; don't let it leak between tests."""
    yield
    set_debug_mode(False)


@pytest.fixture
def controller():
    return FakeProcessController()


@pytest.fixture
def registry(controller):
    return Registry(controller)


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point HOME at an empty temp directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def store(tmp_path):
    return SessionStore(tmp_path / ".remote_jupyter_sessions")
