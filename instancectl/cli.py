"""instancectl CLI: run one lifecycle operation on one named instance.

Usage examples::

    instancectl start
    instancectl --env-file prod.env stop
    instancectl --config '{"instance_name": "builder"}' shelve
    instancectl create
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from instancectl.base.config import validate_config
from instancectl.base.exceptions import InstanceCtlError
from instancectl.base.logger import ic_logger
from instancectl.pipeline import run_operation


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``instancectl`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="instancectl",
        description="Create, start, stop or shelve a single OVHcloud instance",
    )
    parser.add_argument(
        "--env-file", "-e",
        type=str,
        default=None,
        help="dotenv file to load (default: .env in the working directory)",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help='JSON config string (e.g. \'{"instance_name":"builder"}\')',
    )
    parser.add_argument(
        "--log-level", "-l",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    parser.add_argument(
        "operation",
        choices=["create", "start", "stop", "shelve"],
        help="Operation to perform",
    )
    return parser


def _report(error: InstanceCtlError) -> None:
    """Print the error and every one of its fields to stderr."""
    print(f"Error: {error}", file=sys.stderr)
    for key, value in error.details().items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, default=str)
        print(f"{key}: {value}", file=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Loads the dotenv file, builds the configuration once, runs the
    pipeline and prints the outcome as JSON. Exits with status 1 on any
    error.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)
    ic_logger.set_level(ns.log_level)

    env_file = Path(ns.env_file) if ns.env_file else Path.cwd() / ".env"
    if env_file.is_file():
        load_dotenv(env_file, override=False)

    try:
        raw = json.loads(ns.config)
    except json.JSONDecodeError as e:
        print(f"Invalid --config JSON: {e}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(raw, dict):
        print("Invalid --config JSON: expected an object", file=sys.stderr)
        sys.exit(1)

    try:
        config = validate_config(ns.operation, raw)
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)
    except InstanceCtlError as e:
        _report(e)
        sys.exit(1)

    try:
        outcome = run_operation(ns.operation, config)
    except InstanceCtlError as e:
        _report(e)
        sys.exit(1)

    print(json.dumps(outcome.model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    main()
