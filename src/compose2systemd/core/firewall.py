"""Firewall rule aggregation across all pods."""

from compose2systemd.pacts.types import (
    FIREWALL_PROTOCOLS, ConfigWarning, FirewallRuleSet, PodRecord,
)
from compose2systemd.core.ports import ports_by_protocol


def aggregate(pods: dict[str, PodRecord], warnings: list) -> FirewallRuleSet:
    """Collect host ports to open from every pod with openPorts enabled.

    Firewall rules are keyed by host port, so the same port forwarded by
    two pods yields one rule. Output is sorted, hence independent of the
    mapping's iteration order. Forwards with a protocol the firewall has no
    allow-list for are dropped, with a ConfigWarning appended to *warnings*.
    Must run once, after every pod has been validated.
    """
    buckets: dict[str, set[int]] = {proto: set() for proto in FIREWALL_PROTOCOLS}
    for name in sorted(pods):
        pod = pods[name]
        if not pod.open_ports or not pod.forward_ports:
            continue
        for proto, ports in ports_by_protocol(pod.forward_ports).items():
            if proto not in buckets:
                for port in ports:
                    warnings.append(ConfigWarning(
                        name, "forwardPorts",
                        f"protocol '{proto}' (host port {port}) has no firewall "
                        f"allow-list — not opened"))
                continue
            buckets[proto].update(ports)
    return FirewallRuleSet(tcp=tuple(sorted(buckets["tcp"])),
                           udp=tuple(sorted(buckets["udp"])))
