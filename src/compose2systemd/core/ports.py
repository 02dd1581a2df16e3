"""Port forward resolution — protocol defaulting and port range checks."""

from compose2systemd.pacts.types import ConfigError, PortForward
from compose2systemd.core.constants import (
    DEFAULT_PROTOCOL, FORWARD_KEYS, PORT_MAX, PORT_MIN, PROTOCOL_RE,
)


def _check_port(value, pod: str, field_name: str) -> int:
    """Return *value* if it is an integer port in range, else raise ConfigError."""
    # bool is an int subclass; `hostPort: true` is a typo, not port 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(pod, field_name, f"expected an integer port, got {value!r}")
    if not PORT_MIN <= value <= PORT_MAX:
        raise ConfigError(pod, field_name,
                          f"port {value} out of range {PORT_MIN}-{PORT_MAX}")
    return value


def resolve(forward, pod: str = "?", field_name: str = "forwardPorts") -> PortForward:
    """Normalize one forward-port entry.

    Accepts a raw mapping (``protocol``, ``hostPort``, ``containerPort``)
    or an already-resolved PortForward. Protocol is stripped and lowercased,
    and defaults to tcp; containerPort defaults to hostPort. Idempotent.
    """
    if isinstance(forward, PortForward):
        raw = {"protocol": forward.protocol, "hostPort": forward.host_port,
               "containerPort": forward.container_port}
    elif isinstance(forward, dict):
        raw = forward
    else:
        raise ConfigError(pod, field_name, f"expected a mapping, got {forward!r}")

    unknown = sorted(set(raw) - set(FORWARD_KEYS))
    if unknown:
        raise ConfigError(pod, field_name, f"unknown keys: {', '.join(unknown)}")
    if "hostPort" not in raw:
        raise ConfigError(pod, f"{field_name}.hostPort", "missing")

    protocol = raw.get("protocol", DEFAULT_PROTOCOL)
    if not isinstance(protocol, str) or not PROTOCOL_RE.fullmatch(protocol.strip()):
        raise ConfigError(pod, f"{field_name}.protocol",
                          f"expected a protocol name without whitespace or '/', "
                          f"got {protocol!r}")
    protocol = protocol.strip()
    host_port = _check_port(raw["hostPort"], pod, f"{field_name}.hostPort")
    container_port = _check_port(raw.get("containerPort", host_port),
                                 pod, f"{field_name}.containerPort")
    return PortForward(host_port=host_port, container_port=container_port,
                       protocol=protocol.lower())


def resolve_all(forwards, pod: str = "?") -> tuple[PortForward, ...]:
    """Resolve a pod's forward list, dropping exact duplicates.

    Two entries sharing (protocol, hostPort) but targeting different
    container ports are ambiguous and rejected.
    """
    if not isinstance(forwards, (list, tuple)):
        raise ConfigError(pod, "forwardPorts", f"expected a list, got {forwards!r}")
    result: list[PortForward] = []
    seen: dict[tuple[str, int], PortForward] = {}
    for i, entry in enumerate(forwards):
        fwd = resolve(entry, pod, f"forwardPorts[{i}]")
        key = (fwd.protocol, fwd.host_port)
        prev = seen.get(key)
        if prev is None:
            seen[key] = fwd
            result.append(fwd)
        elif prev.container_port != fwd.container_port:
            raise ConfigError(
                pod, f"forwardPorts[{i}]",
                f"host port {fwd.host_port}/{fwd.protocol} already forwarded to "
                f"container port {prev.container_port}, cannot also forward to "
                f"{fwd.container_port}")
    return tuple(result)


def ports_by_protocol(forwards) -> dict[str, list[int]]:
    """Group host ports by protocol, in input order."""
    by_proto: dict[str, list[int]] = {}
    for fwd in forwards:
        by_proto.setdefault(fwd.protocol, []).append(fwd.host_port)
    return by_proto
