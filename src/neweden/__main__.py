#!/usr/bin/env python3
"""
neweden CLI Entry Point

Every command prints one JSON document to stdout. Commands report expected
failures (unknown system, no route, missing graph) as a JSON object with an
"error" key; the process then exits with status 1.

Run with: python -m neweden <command> [args]
"""

import argparse
import json
import sys
from typing import Any

from .core.formatters import get_utc_timestamp
from .core.logging import get_logger

logger = get_logger(__name__)


def output_json(data: dict[str, Any], indent: int = 2) -> None:
    print(json.dumps(data, indent=indent))


def output_error(message: str, error_type: str = "error", **details: Any) -> None:
    """Print an error payload in the same shape commands return."""
    output_json(
        {
            "error": error_type,
            "message": message,
            "query_timestamp": get_utc_timestamp(),
            **details,
        }
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="neweden",
        description="Offline wayfinding and range queries for New Eden",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    from .commands import navigation, universe

    for module in (universe, navigation):
        module.register_parsers(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse `argv`, run the command and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        result = args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        output_error(str(e), error_type="command_error", command=args.command)
        return 1

    if not result:
        return 0
    output_json(result)
    return 1 if "error" in result else 0


if __name__ == "__main__":
    sys.exit(main())
