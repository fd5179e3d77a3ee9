"""
Screen a list of addresses and summarize risky exposure into a CSV report.

Usage:
    screen-addresses <input-file> <output-file> [-i]

    -i: include indirect exposure (indirect-authorized API key only)

Set API_KEY in the environment or a .env file.

Input file format: no header row, one address per line, e.g.
    0x00Bb9221DaAAF8A703FA19f8CE4822FE8c1B87Eb
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from address_screening.config import get_settings
from address_screening.config.env import get_log_format, get_log_level
from address_screening.core.exceptions import CatalogUnavailable, ConfigError
from address_screening.files import CsvReportWriter, read_addresses
from address_screening.screening import run_screening
from address_screening.screening_logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="screen-addresses",
        description="Screen addresses against the risk API and write a CSV exposure report.",
    )
    parser.add_argument("input_file", help="Address list, one address per line, no header")
    parser.add_argument("output_file", help="CSV report to create")
    parser.add_argument(
        "-i",
        dest="include_indirect",
        action="store_true",
        help="Include indirect exposure (indirect-authorized API key only)",
    )
    parser.add_argument("--parallelism", type=int, help="Max simultaneous screens per batch (default: env or 45)")
    parser.add_argument("--rate-limit", type=int, help="Max API requests per minute (default: env or 3800)")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds (default: env or 30)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings(
            include_indirect=args.include_indirect,
            parallelism=args.parallelism,
            rate_limit=args.rate_limit,
            request_timeout_sec=args.timeout,
        )
        configure_logging(get_log_level(), get_log_format())
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    try:
        addresses = read_addresses(args.input_file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"ERROR: cannot read {args.input_file}: {e}", file=sys.stderr)
        return 1

    logger.info(
        "screen_run_started",
        input_file=args.input_file,
        output_file=args.output_file,
        address_count=len(addresses),
        include_indirect=settings.include_indirect,
    )
    try:
        asyncio.run(run_screening(settings, addresses, CsvReportWriter(args.output_file)))
    except CatalogUnavailable as e:
        logger.error("screen_run_failed", error=str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        logger.error("screen_run_failed", error=str(e), output_file=args.output_file)
        print(f"ERROR: cannot write {args.output_file}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
