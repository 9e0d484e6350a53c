"""gendiv – unified CLI dispatcher.

All subcommands live in ``gendiv/commands/*.py`` and expose a
``register(subparsers)`` function that adds themselves to argparse.
"""
from __future__ import annotations

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="gendiv",
        description="gendiv — preview troop gender diversity verdicts",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log rule loading and decisions")
    sub = parser.add_subparsers(dest="command")

    from gendiv.commands import config, decide, sample

    decide.register(sub)
    sample.register(sub)
    config.register(sub)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(0)

    # Each command stores a ``func`` on the namespace
    rc = args.func(args)
    sys.exit(rc or 0)
