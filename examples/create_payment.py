"""
Minimal script that uses the public API to collect a payment against a mandate.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Tuple

from gocardless_pro import (
    ConfigError,
    Currency,
    GoCardlessError,
    PaymentCreateLinks,
    PaymentCreateParams,
    create_client,
    load_client_config,
)


def _override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _build_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    return {key: value for key, value in pairs}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a payment using the client API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing GOCARDLESS_* settings",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--mandate", required=True, help="Mandate to collect against, e.g. MD123")
    parser.add_argument("--amount", type=int, required=True, help="Amount in the minor unit, e.g. pence")
    parser.add_argument("--currency", default="GBP", choices=[c.value for c in Currency if not c.is_unknown])
    parser.add_argument("--reference", help="Reference shown on the payer's bank statement")
    parser.add_argument("--charge-date", help="Date to collect on (YYYY-MM-DD)")
    parser.add_argument(
        "--idempotency-key",
        help="Reuse a key from an earlier attempt so the payment is never created twice",
    )
    parser.add_argument(
        "--sandbox",
        action="store_true",
        help="Talk to the sandbox environment instead of live",
    )
    return parser.parse_args()


def _build_params(args: argparse.Namespace) -> PaymentCreateParams:
    optional = {
        "reference": args.reference,
        "charge_date": args.charge_date,
    }
    return PaymentCreateParams(
        amount=args.amount,
        currency=Currency(args.currency),
        links=PaymentCreateLinks(mandate=args.mandate),
        **{key: value for key, value in optional.items() if value is not None},
    )


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_client_config(
            env_file=args.env_file,
            overrides=_build_overrides(args.set or ()),
            environment="sandbox" if args.sandbox else None,
        )
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with create_client(config=config) as client:
        logging.info("Creating payment of %s %s on %s", args.amount, args.currency, args.mandate)
        try:
            payment = client.payments.create(
                _build_params(args),
                idempotency_key=args.idempotency_key,
            )
        except GoCardlessError as exc:
            logging.error("Payment creation failed: %s", exc)
            return 1

    logging.info(
        "Payment %s is %s (charge date %s)",
        payment.id,
        payment.status,
        payment.charge_date,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
