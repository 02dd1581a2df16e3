"""Public data types — pod records, derived descriptors, errors and warnings."""

from dataclasses import dataclass, field

# Protocols the firewall subsystem exposes allow-lists for
FIREWALL_PROTOCOLS = ("tcp", "udp")


class ConfigError(ValueError):
    """Fatal configuration error, tied to a pod and the offending field."""

    def __init__(self, pod: str, field_name: str, reason: str):
        self.pod = pod
        self.field = field_name
        self.reason = reason
        super().__init__(f"pod '{pod}': {field_name}: {reason}")


@dataclass(frozen=True)
class ConfigWarning:
    """Non-fatal configuration issue (reported, generation continues)."""
    pod: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"pod '{self.pod}': {self.field}: {self.message}"


@dataclass(frozen=True)
class PortForward:
    """One host → container port mapping."""
    host_port: int
    container_port: int
    protocol: str = "tcp"


@dataclass(frozen=True)
class PodRecord:
    """Fully-defaulted, validated configuration of one pod."""
    name: str
    working_directory: str = ""
    compose_file: str = "docker-compose.yml"
    network: str = ""
    open_ports: bool = True
    forward_ports: tuple[PortForward, ...] = ()

    @property
    def service_name(self) -> str:
        return f"pod-{self.name}"

    @property
    def infra_name(self) -> str:
        return f"{self.name}_infra"


@dataclass(frozen=True)
class PodArgs:
    """Argument vectors for one pod's compose invocations.

    ``pod_flags`` are handed to the pod creation step, nested inside a
    single ``--pod-args`` value (``pod_args``); ``compose_flags`` precede
    the compose verb (``pull``, ``up -d``, ``down``).
    """
    pod_flags: tuple[str, ...]
    compose_flags: tuple[str, ...]
    pod_args: str


@dataclass(frozen=True)
class FirewallRuleSet:
    """Host ports to allow, per protocol, sorted and deduplicated."""
    tcp: tuple[int, ...] = ()
    udp: tuple[int, ...] = ()

    def as_dict(self) -> dict[str, list[int]]:
        return {"tcp": list(self.tcp), "udp": list(self.udp)}


@dataclass(frozen=True)
class UnitDescriptor:
    """Declarative service lifecycle of one pod, handed to the supervisor."""
    name: str
    description: str
    working_directory: str
    exec_start_pre: tuple[str, ...]
    exec_start: tuple[str, ...]
    exec_stop: tuple[str, ...]
    service_type: str = "forking"
    restart: str = "on-failure"
    restart_sec: int = 30
    timeout_stop_sec: int = 20
    path: tuple[str, ...] = ()
    after: tuple[str, ...] = ()
    wanted_by: tuple[str, ...] = ()


@dataclass
class GenerateResult:
    """Output of one generation pass over all pods."""
    units: dict[str, UnitDescriptor] = field(default_factory=dict)
    firewall: FirewallRuleSet = field(default_factory=FirewallRuleSet)
    warnings: list[ConfigWarning] = field(default_factory=list)
