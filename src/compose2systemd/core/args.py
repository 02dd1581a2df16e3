"""Compose command-line construction (nothing is executed here)."""

from compose2systemd.pacts.helpers import format_publish, shell_join
from compose2systemd.pacts.types import PodArgs, PodRecord
from compose2systemd.core.constants import POD_BASE_FLAGS


def build_pod_flags(pod: PodRecord) -> tuple[str, ...]:
    """Pod-level flags: infra sharing, optional network, one publish per forward."""
    flags = list(POD_BASE_FLAGS)
    flags.append(f"--infra-name={pod.infra_name}")
    if pod.network:
        flags.append(f"--network={pod.network}")
    # Record order is kept so regenerated command lines are byte-identical
    flags.extend(f"--publish={format_publish(fwd)}" for fwd in pod.forward_ports)
    return tuple(flags)


def build(pod: PodRecord) -> PodArgs:
    """Build the argument vectors for one pod's compose invocations."""
    pod_flags = build_pod_flags(pod)
    pod_args = shell_join(pod_flags)
    compose_flags: list[str] = []
    if pod.compose_file:
        compose_flags.extend(["--file", pod.compose_file])
    compose_flags.extend([
        "--in-pod=1",
        "--project-name", pod.name,
        f"--pod-args={pod_args}",
    ])
    return PodArgs(pod_flags=pod_flags, compose_flags=tuple(compose_flags),
                   pod_args=pod_args)
