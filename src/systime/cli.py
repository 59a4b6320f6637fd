"""Command-line entry point."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from collections.abc import Sequence

from systime._errors import SystimeError
from systime.config import load_config
from systime.demos import Demo, cli_name, run_demos
from systime.storage import StorageName

logger = logging.getLogger(__name__)

_LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def _level(value: str) -> int:
    try:
        level = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"LEVEL must be an integer, got {value!r}") from None
    if level < 0:
        raise argparse.ArgumentTypeError(f"LEVEL must be non-negative, got {level}")
    return level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="systime",
        description="Experiments with system and db timestamps.",
    )
    parser.add_argument(
        "level",
        metavar="LEVEL",
        nargs="?",
        type=_level,
        default=1,
        help="demo bitmap in decimal: 1=db-roundtrip, 2=config-dump, 4=datetime-demo",
    )
    parser.add_argument("-f", "--config-file", help="path to the TOML config file")
    parser.add_argument(
        "--demo",
        action="append",
        choices=[cli_name(d) for d in Demo],
        help="run this demo (repeatable); overrides LEVEL",
    )
    parser.add_argument(
        "--backend",
        choices=list(StorageName),
        help="override storage.backend from the config file",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="more logging (-vv for debug)"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=_LOG_LEVELS[min(args.verbose, len(_LOG_LEVELS) - 1)],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    selection = Demo.from_names(args.demo) if args.demo else Demo.from_level(args.level)
    print(f"level = {selection.value if args.demo else args.level}")

    try:
        config = load_config(args.config_file)
        if args.backend:
            config = dataclasses.replace(
                config, storage=dataclasses.replace(config.storage, backend=args.backend)
            )
        run_demos(selection, config, sys.stdout)
    except SystimeError as e:
        logger.error("%s: %s", type(e).__name__, e.internal())
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
