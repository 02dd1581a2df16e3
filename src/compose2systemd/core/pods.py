"""Pod record model — validate and default raw pod definitions."""

import posixpath

from compose2systemd.pacts.types import ConfigError, PodRecord
from compose2systemd.core.constants import (
    CONTROL_CHARS_RE, DEFAULT_COMPOSE_FILE, POD_KEYS, POD_NAME_RE,
)
from compose2systemd.core.ports import resolve_all


def _get_str(name: str, raw: dict, key: str, default: str) -> str:
    """Fetch a string option; null, non-strings and control characters are rejected."""
    value = raw.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(name, key, f"expected a string, got {value!r}")
    if CONTROL_CHARS_RE.search(value):
        raise ConfigError(name, key, f"control characters are not allowed: {value!r}")
    return value


def _option_key(raw: dict, field_name: str) -> str:
    """Return the raw key that sets *field_name*, or its current name if unset."""
    keys = [k for k, f in POD_KEYS.items() if f == field_name and k in raw]
    return keys[0] if keys else next(k for k, f in POD_KEYS.items() if f == field_name)


def _resolve_compose_location(name: str, working_dir: str,
                              compose_file: str) -> tuple[str, str]:
    """Return (working_directory, compose_file) after containment checks.

    An absolute compose file with no working directory makes its parent the
    working directory. A working directory, when set, must be absolute. An
    empty compose file means "let compose pick its default file in the
    working directory".
    """
    if working_dir and not posixpath.isabs(working_dir):
        raise ConfigError(name, "workingDirectory",
                          f"'{working_dir}' is not an absolute path")
    if not compose_file and not working_dir:
        raise ConfigError(name, "composeFilePath",
                          "empty, and no workingDirectory to locate a compose file in")
    if not compose_file:
        return working_dir, compose_file

    if posixpath.isabs(compose_file):
        if not working_dir:
            return posixpath.dirname(compose_file) or "/", posixpath.basename(compose_file)
        joined = posixpath.normpath(compose_file)
    elif working_dir:
        joined = posixpath.normpath(posixpath.join(working_dir, compose_file))
    else:
        # Relative to wherever the supervisor starts us; only reject escapes
        normalized = posixpath.normpath(compose_file)
        if normalized == ".." or normalized.startswith("../"):
            raise ConfigError(name, "composeFilePath",
                              f"'{compose_file}' escapes the working directory")
        return working_dir, compose_file

    base = posixpath.normpath(working_dir)
    if posixpath.commonpath([base, joined]) != base or joined == base:
        raise ConfigError(name, "composeFilePath",
                          f"'{compose_file}' is not inside '{working_dir}'")
    return working_dir, posixpath.relpath(joined, base)


def load_pod(name, raw) -> PodRecord:
    """Validate one raw pod definition and apply defaults."""
    if not isinstance(name, str) or not POD_NAME_RE.fullmatch(name):
        raise ConfigError(str(name), "name",
                          "must match [A-Za-z0-9][A-Za-z0-9_.-]* "
                          "(used in unit and project names)")
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(name, "<record>", f"expected a mapping, got {raw!r}")

    unknown = sorted(set(raw) - set(POD_KEYS))
    if unknown:
        raise ConfigError(name, "<record>", f"unknown keys: {', '.join(unknown)}")
    for field_name in set(POD_KEYS.values()):
        used = [k for k, f in POD_KEYS.items() if f == field_name and k in raw]
        if len(used) > 1:
            raise ConfigError(name, used[0], f"conflicts with {used[1]}")

    working_dir = _get_str(name, raw, _option_key(raw, "working_directory"), "")
    compose_file = _get_str(name, raw, _option_key(raw, "compose_file"),
                            DEFAULT_COMPOSE_FILE)
    working_dir, compose_file = _resolve_compose_location(name, working_dir, compose_file)

    # Only "" means "no network"; null is ambiguous and rejected
    network = _get_str(name, raw, "network", "")

    open_ports = raw.get("openPorts", True)
    if not isinstance(open_ports, bool):
        raise ConfigError(name, "openPorts", f"expected a boolean, got {open_ports!r}")

    forward_ports = resolve_all(raw.get("forwardPorts", []), name)

    return PodRecord(
        name=name,
        working_directory=working_dir,
        compose_file=compose_file,
        network=network,
        open_ports=open_ports,
        forward_ports=forward_ports,
    )


def load_pods(raw_pods) -> dict[str, PodRecord]:
    """Validate every pod of a raw name → record mapping.

    Raises ConfigError on the first invalid pod; nothing is returned for a
    partially valid mapping.
    """
    if raw_pods is None:
        return {}
    if not isinstance(raw_pods, dict):
        raise ConfigError("*", "pods", f"expected a mapping, got {raw_pods!r}")
    return {name: load_pod(name, raw) for name, raw in sorted(raw_pods.items(),
                                                              key=lambda kv: str(kv[0]))}
