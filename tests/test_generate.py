"""Tests for the full generation pass."""
from __future__ import annotations

import pytest

from compose2systemd import generate_all
from compose2systemd.pacts.types import ConfigError, FirewallRuleSet


class TestGenerateAll:

    def test_syncthing_example(self, syncthing_raw):
        result = generate_all(syncthing_raw)
        assert result.firewall.as_dict() == {"tcp": [8080], "udp": []}
        assert list(result.units) == ["pod-syncthing"]
        unit = result.units["pod-syncthing"]
        assert unit.restart_sec == 30
        assert unit.timeout_stop_sec == 20
        assert result.warnings == []

    def test_one_unit_per_pod(self):
        result = generate_all({
            "b": {"workingDirectory": "/srv/b"},
            "a": {"workingDirectory": "/srv/a", "openPorts": False,
                  "forwardPorts": [{"hostPort": 80}]},
        })
        assert list(result.units) == ["pod-a", "pod-b"]
        assert result.firewall == FirewallRuleSet()

    def test_shared_port_counted_once(self):
        fwd = [{"protocol": "tcp", "hostPort": 53, "containerPort": 53}]
        result = generate_all({
            "dns1": {"workingDirectory": "/srv/dns1", "forwardPorts": fwd},
            "dns2": {"workingDirectory": "/srv/dns2", "forwardPorts": fwd},
        })
        assert result.firewall.tcp == (53,)
        assert len(result.units) == 2

    def test_invalid_port_aborts_before_any_unit(self):
        with pytest.raises(ConfigError) as exc_info:
            generate_all({
                "ok": {"workingDirectory": "/srv/ok"},
                "web": {"workingDirectory": "/srv/web",
                        "forwardPorts": [{"hostPort": 70000, "containerPort": 80}]},
            })
        assert exc_info.value.pod == "web"

    def test_warnings_collected(self):
        result = generate_all({
            "sip": {"workingDirectory": "/srv/sip",
                    "forwardPorts": [{"protocol": "sctp", "hostPort": 5060}]},
        })
        assert len(result.warnings) == 1
        assert result.units["pod-sip"].exec_start[-2:] == ("up", "-d")

    def test_compose_executable_passed_through(self, syncthing_raw):
        result = generate_all(syncthing_raw, compose_executable="/opt/bin/podman-compose")
        assert result.units["pod-syncthing"].exec_stop[0] == "/opt/bin/podman-compose"

    def test_empty(self):
        result = generate_all({})
        assert result.units == {}
        assert result.firewall == FirewallRuleSet()
