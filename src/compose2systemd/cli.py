"""Command-line entry point."""

import argparse
import os
import sys

from compose2systemd.pacts.types import ConfigError
from compose2systemd.core.constants import CONFIG_FILE
from compose2systemd.core.generate import generate_all
from compose2systemd.io.config import load_config
from compose2systemd.io.output import emit_warnings, write_firewall, write_units


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate systemd units and firewall allow-lists for compose pods"
    )
    parser.add_argument(
        "--config", default=CONFIG_FILE,
        help=f"Pod definitions file (default: {CONFIG_FILE})",
    )
    parser.add_argument(
        "--output-dir", default=".",
        help="Where to write pod-<name>.service files and firewall.yml (default: .)",
    )
    parser.add_argument(
        "--compose-exe",
        help="Compose executable used in unit commands (default: from config, "
             "else podman-compose)",
    )
    args = parser.parse_args(argv)

    # Everything is validated and generated before the first file is written
    try:
        config = load_config(args.config)
        compose_exe = args.compose_exe or config["composeExecutable"]
        result = generate_all(config["pods"], compose_executable=compose_exe)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"Generated {len(result.units)} unit(s) from {args.config}", file=sys.stderr)
    emit_warnings(result.warnings)

    if not result.units:
        print("No pods defined — nothing to write.", file=sys.stderr)
        sys.exit(1)

    os.makedirs(args.output_dir, exist_ok=True)
    write_units(result.units, args.output_dir)
    write_firewall(result.firewall, args.output_dir)


if __name__ == "__main__":
    main()
