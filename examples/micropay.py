"""
Minimal script that uses the public API to pay a twin's paywall.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal
from typing import Sequence

import requests

from twin_client import (
    ConfigError,
    TwinError,
    TwinMicropayAmountMismatchError,
    TwinMicropayTokenMismatchError,
    create_twin_client,
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pay a twin's paywall using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing TWIN_* settings",
    )
    parser.add_argument("--url", help="Override the paying twin's URL (TWIN_URL)")
    parser.add_argument("--api-key", help="Override the paying twin's API key (TWIN_API_KEY)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("destination", help="Base URL of the paywalled twin")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        client = create_twin_client(env_file=args.env_file, url=args.url, api_key=args.api_key)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    try:
        # Read the paywall's own terms so the payment matches them.
        paywall = client.resolve(args.destination).paywall
        if (
            paywall is None
            or not paywall.target_pay_type
            or paywall.target_pay_quantity is None
        ):
            logging.error("%s does not advertise complete paywall terms", args.destination)
            return 1

        content = client.micropay(
            args.destination,
            paywall.target_pay_type,
            Decimal(str(paywall.target_pay_quantity)),
        )
    except TwinMicropayAmountMismatchError as exc:
        logging.error("Paywall rejected the amount: %s", exc.data)
        return 1
    except TwinMicropayTokenMismatchError as exc:
        logging.error("Paywall rejected the token type: %s", exc.data)
        return 1
    except TwinError as exc:
        logging.error("Micropayment failed (%s): %s", exc.message, exc.data)
        return 1
    except requests.RequestException as exc:
        logging.error("Request to %s failed: %s", args.destination, exc)
        return 1

    json.dump(content, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
