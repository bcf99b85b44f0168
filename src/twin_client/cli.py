"""
Command-line interface for exercising a twin's endpoints.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Iterable, Sequence, Tuple

import requests

from .api import create_twin_client
from .core.client import TwinClient
from .core.config import ConfigError, load_client_config
from .core.errors import TwinError


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


def _amount(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"Amount must be a decimal number, got '{value}'") from exc


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="twin-client",
        description="Read, pay and micropay twins",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing TWIN_* settings (default: .env)",
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

    commands.add_parser("info", help="Print the twin's /info document")

    pay = commands.add_parser("pay", help="Transfer tokens to another twin")
    pay.add_argument("url", help="Base URL of the destination twin")
    pay.add_argument("token_type_hash", help="Token type hash to transfer")
    pay.add_argument("amount", type=_amount, help="Amount in token units")

    micropay = commands.add_parser("micropay", help="Pay another twin's paywall")
    micropay.add_argument("url", help="Base URL of the paywalled twin")
    micropay.add_argument("token_type_hash", help="Token type hash to pay with")
    micropay.add_argument("amount", type=_amount, help="Amount in token units")
    micropay.add_argument(
        "--method",
        default="GET",
        help="HTTP method forwarded to the paywall (default: GET)",
    )
    micropay.add_argument(
        "--paywall-path",
        default="/paywall",
        help="Path appended to URL to reach the paywalled content (default: /paywall)",
    )

    fetch = commands.add_parser("fetch", help="Download a binary file from the twin")
    fetch.add_argument("file_id", help="Identifier of the file to download")
    fetch.add_argument("--output", required=True, type=Path, help="Where to write the file")

    import_ = commands.add_parser("import", help="Upload a binary file into the twin")
    import_.add_argument("path", type=Path, help="File to upload")

    return parser


def _print_json(payload: Any) -> None:
    json.dump(payload, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")


def _dispatch(client: TwinClient, args: argparse.Namespace) -> Any:
    if args.command == "info":
        return client.info()
    if args.command == "pay":
        return client.pay(args.url, args.token_type_hash, args.amount)
    if args.command == "micropay":
        return client.micropay(
            args.url,
            args.token_type_hash,
            args.amount,
            method=args.method,
            paywall_path=args.paywall_path,
        )
    if args.command == "fetch":
        content = client.fetch(args.file_id)
        args.output.write_bytes(content)
        logging.info("Wrote %d bytes to %s", len(content), args.output)
        return None
    if args.command == "import":
        return client.import_file(args.path.read_bytes())
    raise ValueError(f"Unknown command '{args.command}'")


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_client_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_twin_client(config=config, session=requests.Session())

    try:
        result = _dispatch(client, args)
    except TwinError as exc:
        logging.error("%s: %s %s", type(exc).__name__, exc.message, exc.data)
        return 1
    except requests.RequestException as exc:
        logging.error("Request to %s failed: %s", config.base_url, exc)
        return 1

    if result is not None:
        _print_json(result)
    return 0


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
