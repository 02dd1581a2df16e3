"""Public types and helpers shared across the generator."""

from compose2systemd.pacts.types import (
    ConfigError, ConfigWarning, FirewallRuleSet, GenerateResult,
    PodArgs, PodRecord, PortForward, UnitDescriptor,
)
from compose2systemd.pacts.helpers import (
    format_publish, parse_publish, shell_join, shell_split, systemd_join, systemd_quote,
)

__all__ = [
    "ConfigError",
    "ConfigWarning",
    "FirewallRuleSet",
    "GenerateResult",
    "PodArgs",
    "PodRecord",
    "PortForward",
    "UnitDescriptor",
    "format_publish",
    "parse_publish",
    "shell_join",
    "shell_split",
    "systemd_join",
    "systemd_quote",
]
