"""Unit descriptor generation and systemd unit-file rendering."""

from compose2systemd.pacts.helpers import systemd_join, systemd_quote
from compose2systemd.pacts.types import PodArgs, PodRecord, UnitDescriptor
from compose2systemd.core.constants import (
    DEFAULT_COMPOSE_EXECUTABLE, UNIT_AFTER, UNIT_BASE_PATH, UNIT_PATH,
    UNIT_RESTART, UNIT_RESTART_SEC, UNIT_SERVICE_TYPE, UNIT_TIMEOUT_STOP_SEC,
    UNIT_WANTED_BY,
)


def generate(pod: PodRecord, args: PodArgs,
             compose_executable: str = DEFAULT_COMPOSE_EXECUTABLE) -> UnitDescriptor:
    """Map a pod and its built arguments to a service lifecycle descriptor."""
    base = (compose_executable, *args.compose_flags)
    return UnitDescriptor(
        name=pod.service_name,
        description=f"Rootless pod for {pod.name}",
        working_directory=pod.working_directory,
        exec_start_pre=(*base, "pull"),
        exec_start=(*base, "up", "-d"),
        exec_stop=(*base, "down"),
        service_type=UNIT_SERVICE_TYPE,
        restart=UNIT_RESTART,
        restart_sec=UNIT_RESTART_SEC,
        timeout_stop_sec=UNIT_TIMEOUT_STOP_SEC,
        path=UNIT_PATH,
        after=UNIT_AFTER,
        wanted_by=UNIT_WANTED_BY,
    )


def render_unit(unit: UnitDescriptor) -> str:
    """Render a descriptor as systemd unit-file text."""
    lines = ["# Generated by compose2systemd — do not edit manually", "",
             "[Unit]", f"Description={unit.description}"]
    if unit.after:
        lines.append(f"After={' '.join(unit.after)}")

    lines += ["", "[Service]", f"Type={unit.service_type}"]
    if unit.path:
        search_path = ":".join((*unit.path, *UNIT_BASE_PATH))
        lines.append(f"Environment={systemd_quote('PATH=' + search_path)}")
    if unit.working_directory:
        lines.append(f"WorkingDirectory={unit.working_directory.replace('%', '%%')}")
    lines += [
        f"ExecStartPre={systemd_join(unit.exec_start_pre)}",
        f"ExecStart={systemd_join(unit.exec_start)}",
        f"ExecStop={systemd_join(unit.exec_stop)}",
        f"Restart={unit.restart}",
        f"RestartSec={unit.restart_sec}",
        f"TimeoutStopSec={unit.timeout_stop_sec}",
    ]

    if unit.wanted_by:
        lines += ["", "[Install]", f"WantedBy={' '.join(unit.wanted_by)}"]
    return "\n".join(lines) + "\n"
