"""CLI entry point for minercraft.

Runs one Merchant API query and prints the result as JSON on stdout.

Examples:
    ```bash
    python -m minercraft best-quote --category mining --fee-type standard
    python -m minercraft fee-quote --miner Taal
    python -m minercraft query-tx --miner Taal --tx-id 7e0c4651...
    python -m minercraft best-quote --config config/minercraft.yaml --log-level DEBUG
    ```
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from minercraft.client import Client
from minercraft.core.exceptions import MinercraftError
from minercraft.core.logger import Logger, StructuredFormatter
from minercraft.mapi import SignedResponse
from minercraft.models.constants import FeeCategory, FeeType


DEFAULT_CONFIG = Path("config") / "minercraft.yaml"

logger = Logger("cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="minercraft",
        description="Merchant API fee quote and transaction status client",
    )

    parser.add_argument(
        "command",
        choices=["best-quote", "fee-quote", "query-tx"],
        help="Query to run",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help=f"Client config path (default: {DEFAULT_CONFIG} if present, else built-in miners)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level (default: WARNING)",
    )

    parser.add_argument(
        "--category",
        choices=[c.value for c in FeeCategory],
        default=FeeCategory.MINING.value,
        help="Fee category compared by best-quote (default: mining)",
    )

    parser.add_argument(
        "--fee-type",
        choices=[t.value for t in FeeType],
        default=FeeType.STANDARD.value,
        help="Fee type compared by best-quote (default: standard)",
    )

    parser.add_argument("--miner", help="Miner name for fee-quote and query-tx")

    parser.add_argument("--tx-id", help="Transaction id for query-tx")

    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    """Configure the root logger with structured formatting.

    Installs a ``StructuredFormatter`` on a stderr handler so log lines never
    mix with the JSON result on stdout.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level))


def build_client(config_path: Path | None) -> Client:
    """Create a client from *config_path*, the default config file, or built-in defaults."""
    if config_path is not None:
        return Client.from_yaml(config_path)
    if DEFAULT_CONFIG.exists():
        return Client.from_yaml(DEFAULT_CONFIG)
    return Client()


async def run_command(client: Client, args: argparse.Namespace) -> SignedResponse:
    """Execute the selected query."""
    if args.command == "best-quote":
        return await client.best_quote(args.category, args.fee_type)
    if args.command == "fee-quote":
        return await client.fee_quote(args.miner)
    return await client.query_transaction(args.miner, args.tx_id)


def _dump(result: SignedResponse) -> str:
    data: dict[str, Any] = result.to_dict()
    return json.dumps(data, indent=2)


async def main(argv: list[str] | None = None) -> int:
    """Main entry point: parse args, build the client, and run the query.

    Returns:
        Exit code: 0 for success, 1 for any minercraft error.
    """
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        client = build_client(args.config)
        result = await run_command(client, args)
    except MinercraftError as e:
        logger.error(f"{args.command.replace('-', '_')}_failed", error=str(e))
        print(f"error: {e}", file=sys.stderr)  # noqa: T201
        return 1

    print(_dump(result))  # noqa: T201
    return 0


def cli() -> None:
    """Synchronous entry point for console_scripts."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
