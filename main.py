"""Moodweek v1.0 — CLI entry point."""

import argparse
import json
import logging
import sys
from datetime import date

from moodweek import analyze, generate_report

LOG_FORMAT = "[%(asctime)s] | %(levelname)-8s | %(name)-15s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root = logging.getLogger("moodweek")
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def create_parser():
    parser = argparse.ArgumentParser(
        prog="moodweek",
        description="Mood overview and weekday insights for a mood journal export.",
        epilog="Example: python main.py journal.json --tz Europe/Berlin --today 2024-03-01",
    )
    parser.add_argument(
        "data",
        nargs="?",
        default="test_data.json",
        help="Path to the journal JSON payload (default: test_data.json)",
    )
    parser.add_argument("--tz", help="Override the payload's timezone (IANA identifier)")
    parser.add_argument("--today", help="Pin 'today' as an ISO date for reproducible trends")
    parser.add_argument("--json", action="store_true", help="Print the raw result as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    args = create_parser().parse_args(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger("moodweek.cli")

    today = None
    if args.today:
        try:
            today = date.fromisoformat(args.today)
        except ValueError as e:
            logger.error("Invalid --today value %r: %s", args.today, e)
            return 2

    try:
        result = analyze(args.data, timezone=args.tz, today=today)
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return 1

    if args.json:
        print(json.dumps(result, indent=2))
    else:
        print(generate_report(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
