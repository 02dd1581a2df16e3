"""Constants, defaults and patterns used throughout the generator."""

import re

# Pod names end up in unit names (pod-<name>) and compose project names
POD_NAME_RE = re.compile(r'[A-Za-z0-9][A-Za-z0-9_.-]*')

# String options end up on unit-file lines; a line break would start a new directive
CONTROL_CHARS_RE = re.compile(r'[\x00-\x1f\x7f]')

# Protocol is the tail of a --publish value (host:container/protocol)
PROTOCOL_RE = re.compile(r'[^\s/\x00-\x1f\x7f]+')

# Raw record keys → PodRecord fields; ymlDir/ymlFile are the legacy option names
POD_KEYS = {
    "workingDirectory": "working_directory",
    "ymlDir": "working_directory",
    "composeFilePath": "compose_file",
    "ymlFile": "compose_file",
    "network": "network",
    "openPorts": "open_ports",
    "forwardPorts": "forward_ports",
}

FORWARD_KEYS = ("protocol", "hostPort", "containerPort")

DEFAULT_COMPOSE_FILE = "docker-compose.yml"
DEFAULT_PROTOCOL = "tcp"
DEFAULT_COMPOSE_EXECUTABLE = "podman-compose"

PORT_MIN = 1
PORT_MAX = 65535

# Pod-level flags common to every pod (infra container shares these namespaces)
POD_BASE_FLAGS = (
    "--infra=true",
    "--share=ipc,net,uts",
    "--share-parent=true",
)

# Service lifecycle policy; the stop timeout stays below the restart delay
# so a stop always finishes before the next restart fires.
UNIT_SERVICE_TYPE = "forking"
UNIT_RESTART = "on-failure"
UNIT_RESTART_SEC = 30
UNIT_TIMEOUT_STOP_SEC = 20
UNIT_AFTER = ("network-online.target",)
UNIT_WANTED_BY = ("default.target",)

# Rootless podman needs newuidmap from the setuid wrappers
UNIT_PATH = ("/run/wrappers",)
UNIT_BASE_PATH = ("/usr/bin", "/bin")

FIREWALL_FILE = "firewall.yml"
CONFIG_FILE = "compose2systemd.yaml"
