"""compose2systemd — turn compose pod definitions into systemd units + firewall allow-lists.

Re-exports the public API.
"""

from compose2systemd.pacts.types import (
    ConfigError, ConfigWarning, FirewallRuleSet, GenerateResult,
    PodArgs, PodRecord, PortForward, UnitDescriptor,
)
from compose2systemd.core.ports import resolve
from compose2systemd.core.pods import load_pod, load_pods
from compose2systemd.core.firewall import aggregate
from compose2systemd.core.args import build
from compose2systemd.core.units import generate, render_unit
from compose2systemd.core.generate import generate_all

__all__ = [
    "ConfigError",
    "ConfigWarning",
    "FirewallRuleSet",
    "GenerateResult",
    "PodArgs",
    "PodRecord",
    "PortForward",
    "UnitDescriptor",
    "resolve",
    "load_pod",
    "load_pods",
    "aggregate",
    "build",
    "generate",
    "render_unit",
    "generate_all",
]
