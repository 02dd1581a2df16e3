"""Write unit files and the firewall allow-list; report warnings."""

import os
import sys

import yaml

from compose2systemd.pacts.types import FirewallRuleSet, UnitDescriptor
from compose2systemd.core.constants import FIREWALL_FILE
from compose2systemd.core.units import render_unit


def write_units(units: dict[str, UnitDescriptor], output_dir: str) -> list[str]:
    """Write one <service>.service file per unit. Returns the written paths."""
    paths = []
    for name, unit in units.items():
        path = os.path.join(output_dir, f"{name}.service")
        with open(path, "w", encoding="utf-8") as f:
            f.write(render_unit(unit))
        print(f"Wrote {path}", file=sys.stderr)
        paths.append(path)
    return paths


def write_firewall(firewall: FirewallRuleSet, output_dir: str,
                   filename: str = FIREWALL_FILE) -> str:
    """Write the aggregated allow-lists for the firewall subsystem."""
    path = os.path.join(output_dir, filename)
    data = {
        "allowedTCPPorts": list(firewall.tcp),
        "allowedUDPPorts": list(firewall.udp),
    }
    with open(path, "w", encoding="utf-8") as f:
        f.write("# Generated by compose2systemd — do not edit manually\n")
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    print(f"Wrote {path}", file=sys.stderr)
    return path


def emit_warnings(warnings) -> None:
    """Print all warnings to stderr."""
    for w in warnings:
        print(f"⚠ {w}", file=sys.stderr)
