"""Load compose2systemd.yaml."""

import os

import yaml

from compose2systemd.pacts.types import ConfigError
from compose2systemd.core.constants import DEFAULT_COMPOSE_EXECUTABLE


def load_config(path: str) -> dict:
    """Load compose2systemd.yaml or return empty config."""
    if os.path.exists(path):
        try:
            with open(path, encoding="utf-8") as f:
                cfg = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError("*", path, f"invalid YAML ({exc.__class__.__name__})") from exc
    else:
        cfg = {}
    if not isinstance(cfg, dict):
        raise ConfigError("*", path, "top level must be a mapping")
    cfg.setdefault("composeExecutable", DEFAULT_COMPOSE_EXECUTABLE)
    if cfg.get("pods") is None:
        cfg["pods"] = {}
    return cfg
