"""One generation pass: validate all pods, aggregate firewall rules, build units."""

from compose2systemd.pacts.types import GenerateResult
from compose2systemd.core.args import build
from compose2systemd.core.constants import DEFAULT_COMPOSE_EXECUTABLE
from compose2systemd.core.firewall import aggregate
from compose2systemd.core.pods import load_pods
from compose2systemd.core.units import generate


def generate_all(raw_pods: dict | None,
                 compose_executable: str = DEFAULT_COMPOSE_EXECUTABLE) -> GenerateResult:
    """Run a full generation pass over a raw pod mapping.

    Strategy (each phase only starts once the previous one completed):
    1. Validate — every raw record becomes a PodRecord, or ConfigError aborts
       the run before anything is produced
    2. Aggregate — firewall rules computed once over all validated pods
    3. Generate — one unit descriptor per pod, independent of the others
    """
    pods = load_pods(raw_pods)

    result = GenerateResult()
    result.firewall = aggregate(pods, result.warnings)

    for pod in pods.values():
        unit = generate(pod, build(pod), compose_executable=compose_executable)
        result.units[unit.name] = unit
    return result
