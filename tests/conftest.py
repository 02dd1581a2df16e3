"""Shared fixtures for the compose2systemd test suite."""
from __future__ import annotations

import pytest


@pytest.fixture
def syncthing_raw() -> dict:
    """Raw definition of a single pod forwarding tcp 8080 → 80."""
    return {
        "syncthing": {
            "workingDirectory": "/var/lib/syncthing",
            "forwardPorts": [{"protocol": "tcp", "hostPort": 8080, "containerPort": 80}],
        },
    }
