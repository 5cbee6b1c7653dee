"""CLI: look up current-day weather for a city through the cache."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from .config import load_settings
from .context import build_context
from .exceptions import (
    ConfigError,
    NormalizationError,
    UpstreamError,
    ValidationError,
)
from .log_setup import setup_logger
from .models import WeatherRecord


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse weather lookup CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Look up today's weather for a city (Redis cache-aside)."
    )
    parser.add_argument("city", help="City name; also used verbatim as the cache key.")
    parser.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print the record as a JSON object instead of a table.",
    )
    return parser.parse_args(argv)


def _print_record(console: Console, record: WeatherRecord) -> None:
    table = Table(title="Weather")
    table.add_column("City", overflow="fold")
    table.add_column("Temp (C)")
    table.add_column("Condition", overflow="fold")
    table.add_row(record.city, f"{record.temperature:g}", record.condition)
    console.print(table)


def main(argv: list[str] | None = None) -> int:
    """Run a single lookup and print the result."""
    args = parse_args(argv)
    logger = setup_logger()
    console = Console()

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger.setLevel(getattr(logging, settings.log_level))

    exit_code = 0
    try:
        with build_context(settings, logger) as context:
            record = context.lookup.lookup(args.city)
            if args.as_json:
                console.print_json(record.to_cache_value())
            else:
                _print_record(console, record)
    except ValidationError as exc:
        exit_code = 3
        logger.error("Invalid input: %s", exc)
    except (UpstreamError, NormalizationError) as exc:
        exit_code = 4
        logger.error("Weather lookup failed: %s", exc)
    except Exception as exc:  # pragma: no cover - defensive catch for CLI runtime
        exit_code = 99
        logger.exception("Unexpected weather lookup failure: %s", exc)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
