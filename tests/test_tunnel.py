"""Tests for rjy/core/tunnel.py"""

import pytest
from pydantic import ValidationError

from rjy.core.errors import InvalidHost, InvalidLink, SignalError, SpawnError
from rjy.core.tunnel import Tunnel, TunnelStatus

LINK = "https://x.example.com:8888/?token=abc123"


def make_tunnel(pid=None):
    return Tunnel(host="myhost", port=8888, link=LINK, pid=pid, token="abc123")


class TestTunnelModel:
    """Test field validation and the derived key"""

    def test_key_is_host_and_port(self):
        assert make_tunnel().key == "myhost:8888"

    @pytest.mark.parametrize("port", [0, 65536, -1])
    def test_port_out_of_range(self, port):
        with pytest.raises(ValidationError):
            Tunnel(host="myhost", port=port, link=LINK, token="abc123")

    @pytest.mark.parametrize("host", ["", "   ", "my host"])
    def test_invalid_host(self, host):
        with pytest.raises(ValidationError):
            Tunnel(host=host, port=8888, link=LINK, token="abc123")

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError):
            Tunnel(host="myhost", port=8888, link=LINK, token="abc123", key="myhost:8888")


class TestTunnelStart:
    """Test starting a forward from a link"""

    def test_start_spawns_forward(self, controller):
        tunnel = Tunnel.start("myhost", LINK, controller)

        assert tunnel.host == "myhost"
        assert tunnel.port == 8888
        assert tunnel.token == "abc123"
        assert tunnel.link == LINK
        assert tunnel.pid is not None
        assert controller.spawned == [("myhost", 8888, tunnel.pid)]

    def test_start_invalid_link_spawns_nothing(self, controller):
        with pytest.raises(InvalidLink):
            Tunnel.start("myhost", "https://x.example.com/?token=abc", controller)
        assert controller.spawned == []

    @pytest.mark.parametrize("host", ["", "   ", "my host"])
    def test_start_invalid_host_spawns_nothing(self, controller, host):
        with pytest.raises(InvalidHost):
            Tunnel.start(host, LINK, controller)
        assert controller.spawned == []

    def test_start_spawn_failure_propagates(self, controller):
        controller.fail_spawn = True
        with pytest.raises(SpawnError):
            Tunnel.start("myhost", LINK, controller)


class TestTunnelStatus:
    """Test liveness derived from the pid"""

    def test_no_pid_is_disconnected(self, controller):
        tunnel = make_tunnel()
        assert tunnel.status(controller) == TunnelStatus.DISCONNECTED
        assert tunnel.effective_pid(controller) is None

    def test_live_pid_is_connected(self, controller):
        tunnel = Tunnel.start("myhost", LINK, controller)
        assert tunnel.status(controller) == TunnelStatus.CONNECTED
        assert tunnel.effective_pid(controller) == tunnel.pid

    def test_stale_pid_is_disconnected_but_kept(self, controller):
        """A dead process shows as disconnected without clearing the stored pid"""
        tunnel = Tunnel.start("myhost", LINK, controller)
        pid = tunnel.pid
        controller.kill(pid)

        assert tunnel.status(controller) == TunnelStatus.DISCONNECTED
        assert tunnel.effective_pid(controller) is None
        assert tunnel.pid == pid


class TestTunnelTerminate:
    """Test terminating forwards"""

    def test_terminate_live_process(self, controller):
        tunnel = Tunnel.start("myhost", LINK, controller)
        pid = tunnel.pid

        tunnel.terminate(controller)

        assert controller.terminated == [pid]
        assert tunnel.pid is None
        assert tunnel.status(controller) == TunnelStatus.DISCONNECTED

    def test_terminate_twice_signals_once(self, controller):
        tunnel = Tunnel.start("myhost", LINK, controller)

        tunnel.terminate(controller)
        tunnel.terminate(controller)

        assert len(controller.terminated) == 1
        assert tunnel.pid is None

    def test_terminate_untracked_is_noop(self, controller):
        tunnel = make_tunnel()
        tunnel.terminate(controller)
        assert controller.terminated == []
        assert tunnel.pid is None

    def test_terminate_stale_pid_sends_no_signal(self, controller):
        tunnel = make_tunnel(pid=4242)
        tunnel.terminate(controller)
        assert controller.terminated == []
        assert tunnel.pid is None

    def test_terminate_signal_failure_still_clears_pid(self, controller):
        tunnel = Tunnel.start("myhost", LINK, controller)
        controller.fail_terminate.add(tunnel.pid)

        with pytest.raises(SignalError):
            tunnel.terminate(controller)
        assert tunnel.pid is None
