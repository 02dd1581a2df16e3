"""Tests for forward-port resolution."""
from __future__ import annotations

import pytest

from compose2systemd.core.ports import ports_by_protocol, resolve, resolve_all
from compose2systemd.pacts.helpers import format_publish, parse_publish
from compose2systemd.pacts.types import ConfigError, PortForward


class TestResolve:

    def test_protocol_defaults_to_tcp(self):
        fwd = resolve({"hostPort": 8080, "containerPort": 80})
        assert fwd == PortForward(host_port=8080, container_port=80, protocol="tcp")

    def test_protocol_is_lowercased(self):
        assert resolve({"protocol": "UDP", "hostPort": 53, "containerPort": 53}).protocol == "udp"

    def test_unknown_protocol_passes_through(self):
        assert resolve({"protocol": "SCTP", "hostPort": 9, "containerPort": 9}).protocol == "sctp"

    def test_protocol_surrounding_whitespace_stripped(self):
        fwd = resolve({"protocol": " tcp ", "hostPort": 8080, "containerPort": 80})
        assert fwd.protocol == "tcp"
        assert parse_publish(format_publish(fwd)) == fwd

    @pytest.mark.parametrize("protocol", ["t cp", "tcp/udp", "tcp\nudp", "tcp\x00", "", "  ", "/"])
    def test_malformed_protocol_rejected(self, protocol):
        with pytest.raises(ConfigError) as exc_info:
            resolve({"protocol": protocol, "hostPort": 8080}, pod="web")
        assert exc_info.value.field == "forwardPorts.protocol"

    def test_container_port_defaults_to_host_port(self):
        assert resolve({"hostPort": 443}).container_port == 443

    def test_idempotent_on_resolved_value(self):
        once = resolve({"protocol": "Tcp", "hostPort": 8080, "containerPort": 80})
        twice = resolve(once)
        assert twice == once
        assert resolve(twice) == once

    @pytest.mark.parametrize("port", [0, -1, 65536, 70000])
    def test_host_port_out_of_range(self, port):
        with pytest.raises(ConfigError) as exc_info:
            resolve({"hostPort": port, "containerPort": 80}, pod="web")
        assert exc_info.value.pod == "web"
        assert exc_info.value.field == "forwardPorts.hostPort"

    def test_container_port_out_of_range(self):
        with pytest.raises(ConfigError, match="containerPort"):
            resolve({"hostPort": 80, "containerPort": 65536})

    def test_port_bounds_are_inclusive(self):
        fwd = resolve({"hostPort": 1, "containerPort": 65535})
        assert (fwd.host_port, fwd.container_port) == (1, 65535)

    @pytest.mark.parametrize("value", [True, "80", 80.0, None])
    def test_non_integer_port_rejected(self, value):
        with pytest.raises(ConfigError, match="integer"):
            resolve({"hostPort": value})

    def test_missing_host_port(self):
        with pytest.raises(ConfigError, match="hostPort: missing"):
            resolve({"containerPort": 80})

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigError, match="unknown keys: hostport"):
            resolve({"hostport": 80, "hostPort": 80})

    def test_non_mapping_rejected(self):
        with pytest.raises(ConfigError, match="expected a mapping"):
            resolve("8080:80")


class TestResolveAll:

    def test_keeps_order(self):
        forwards = resolve_all([
            {"hostPort": 9000},
            {"hostPort": 80, "containerPort": 8080},
            {"protocol": "udp", "hostPort": 53},
        ], pod="web")
        assert [f.host_port for f in forwards] == [9000, 80, 53]

    def test_identical_duplicates_collapse(self):
        forwards = resolve_all([
            {"hostPort": 80, "containerPort": 8080},
            {"protocol": "TCP", "hostPort": 80, "containerPort": 8080},
        ], pod="web")
        assert forwards == (PortForward(80, 8080, "tcp"),)

    def test_conflicting_container_port_rejected(self):
        with pytest.raises(ConfigError) as exc_info:
            resolve_all([
                {"hostPort": 80, "containerPort": 8080},
                {"hostPort": 80, "containerPort": 9090},
            ], pod="web")
        assert exc_info.value.pod == "web"
        assert exc_info.value.field == "forwardPorts[1]"

    def test_same_host_port_different_protocols_allowed(self):
        forwards = resolve_all([
            {"protocol": "tcp", "hostPort": 53, "containerPort": 53},
            {"protocol": "udp", "hostPort": 53, "containerPort": 5353},
        ])
        assert len(forwards) == 2

    def test_error_field_carries_index(self):
        with pytest.raises(ConfigError) as exc_info:
            resolve_all([{"hostPort": 80}, {"hostPort": 70000}], pod="web")
        assert exc_info.value.field == "forwardPorts[1].hostPort"

    def test_non_list_rejected(self):
        with pytest.raises(ConfigError, match="expected a list"):
            resolve_all({"hostPort": 80})


def test_ports_by_protocol():
    forwards = resolve_all([
        {"hostPort": 443},
        {"protocol": "udp", "hostPort": 53},
        {"hostPort": 80},
    ])
    assert ports_by_protocol(forwards) == {"tcp": [443, 80], "udp": [53]}
