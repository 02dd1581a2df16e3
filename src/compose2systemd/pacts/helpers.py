"""Quoting and publish-flag helpers shared by the builder and the renderer."""

import re
import shlex

from compose2systemd.pacts.types import PortForward

# <hostPort>:<containerPort>/<protocol>
_PUBLISH_RE = re.compile(r'(\d+):(\d+)/(\S+)')

# Characters that force quoting inside a systemd Exec*= line
_SYSTEMD_UNSAFE_RE = re.compile(r'''[\s"'\\;]''')


def shell_join(args) -> str:
    """Flatten an argument vector into one shell-style string.

    This is the only place nested arguments (``--pod-args``) are escaped;
    the compose tool splits the value back with shell rules.
    """
    return shlex.join(args)


def shell_split(text: str) -> list[str]:
    """Inverse of :func:`shell_join`."""
    return shlex.split(text)


def systemd_quote(arg: str) -> str:
    """Quote one argument for a systemd ``Exec*=`` command line.

    ``%`` and ``$`` are doubled so systemd does not expand specifiers or
    environment variables; whitespace and quotes trigger double-quoting.
    """
    text = arg.replace("%", "%%").replace("$", "$$")
    if text and not _SYSTEMD_UNSAFE_RE.search(text):
        return text
    text = text.replace("\\", "\\\\").replace('"', '\\"')
    # A raw line break would end the directive
    text = text.replace("\n", "\\n").replace("\r", "\\r")
    return f'"{text}"'


def systemd_join(args) -> str:
    """Render an argument vector as a systemd command line."""
    return " ".join(systemd_quote(a) for a in args)


def format_publish(forward: PortForward) -> str:
    """Return the ``--publish`` value for a forward: ``host:container/proto``."""
    return f"{forward.host_port}:{forward.container_port}/{forward.protocol}"


def parse_publish(value: str) -> PortForward:
    """Parse a ``--publish`` value (or full ``--publish=...`` flag) back."""
    if value.startswith("--publish="):
        value = value[len("--publish="):]
    m = _PUBLISH_RE.fullmatch(value)
    if not m:
        raise ValueError(f"malformed publish value: {value!r}")
    return PortForward(host_port=int(m.group(1)), container_port=int(m.group(2)),
                       protocol=m.group(3))
