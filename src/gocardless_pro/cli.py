"""
Command-line interface for exercising the API client.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from enum import Enum
from typing import Any, Iterable, Sequence, TextIO, Tuple

import requests

from .api import Client, create_client
from .core.config import ConfigError, load_client_config
from .core.errors import GoCardlessError

RESOURCES = ("payments", "customers", "events")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: _to_jsonable(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_jsonable(item) for key, item in value.items()}
    return value


def _dump(value: Any, out: TextIO) -> None:
    json.dump(_to_jsonable(value), out, indent=2, sort_keys=True)
    out.write("\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gocardless-pro",
        description="Fetch resources from the payments API",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing GOCARDLESS_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    get_parser = commands.add_parser("get", help="Fetch a single resource by id")
    get_parser.add_argument("resource", choices=RESOURCES)
    get_parser.add_argument("identity", help="Id of the resource, e.g. PM123")

    list_parser = commands.add_parser("list", help="List resources page by page")
    list_parser.add_argument("resource", choices=RESOURCES)
    list_parser.add_argument("--limit", type=int, help="Maximum items per page")
    list_parser.add_argument("--after", help="Cursor to start after")
    list_parser.add_argument(
        "--all",
        action="store_true",
        help="Follow cursors and print every item instead of a single page",
    )
    return parser


def _run_command(client: Client, args: argparse.Namespace, out: TextIO) -> None:
    service = client.service(args.resource)
    if args.command == "get":
        _dump(service.get(args.identity), out)
        return

    if args.all:
        _dump(list(service.all(start_after=args.after, limit=args.limit)), out)
        return

    page = service.list(after=args.after, limit=args.limit)
    _dump(
        {
            "items": page.items,
            "meta": {
                "cursors": {"before": page.before, "after": page.after},
                "limit": page.limit,
            },
        },
        out,
    )


def run_cli(argv: Sequence[str] | None = None, *, out: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_client_config(env_file=args.env_file, overrides=overrides)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with create_client(config=config, session=requests.Session()) as client:
        try:
            _run_command(client, args, out or sys.stdout)
        except GoCardlessError as exc:
            logging.error("Request failed: %s", exc)
            return 1
    return 0


def main() -> None:
    sys.exit(run_cli())
