"""Command line entry point for ``battlesearch``."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

import yaml

from .config import SearchSettings, load_settings
from .errors import BattleSearchError
from .help_formatter import RichHelpFormatter
from .models import SearchOptions
from .run_summary import log_run_summary, render_summary_table
from .scanner import run_search
from .version import __version__

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_USAGE = 2

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s\n%(message)s\n"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="battlesearch",
        description="Searches Pokémon Showdown battle logs for the battles of one user.",
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument(
        "-w",
        "--wins-only",
        action="store_true",
        default=None,
        help="Only display games where the searched user wins",
    )
    parser.add_argument(
        "-f",
        "--forfeits-only",
        action="store_true",
        default=None,
        help="Only display games that end with one player forfeiting",
    )
    parser.add_argument(
        "-j",
        "--threads",
        type=_positive_int,
        default=None,
        help="The number of threads to spawn (default: 2)",
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML file with search defaults")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Diagnostic log level (overrides --verbose)",
    )
    parser.add_argument("--summary", action="store_true", help="Print a run summary table to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("username", help="The username whose battles will be displayed")
    parser.add_argument(
        "directories",
        nargs="+",
        type=Path,
        help="The directories to search for battle logs in. Searches recursively.",
    )
    return parser


def configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
        force=True,
    )


def resolve_log_level(args: argparse.Namespace, settings: SearchSettings) -> int:
    if args.log_level:
        return logging.getLevelName(args.log_level)
    if args.verbose:
        return logging.DEBUG
    return settings.log_level_value


def build_options(args: argparse.Namespace, settings: SearchSettings) -> SearchOptions:
    return SearchOptions.for_username(
        args.username,
        wins_only=settings.wins_only if args.wins_only is None else args.wins_only,
        forfeits_only=settings.forfeits_only if args.forfeits_only is None else args.forfeits_only,
        worker_count=settings.workers if args.threads is None else args.threads,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as exc:
        configure_logging(logging.INFO)
        LOGGER.error("Invalid configuration: %s", exc)
        return EXIT_USAGE

    configure_logging(resolve_log_level(args, settings))
    options = build_options(args, settings)

    started = time.perf_counter()
    try:
        stats = run_search(options, args.directories, training_rounds=settings.training_rounds)
    except BattleSearchError as exc:
        LOGGER.error("Battle search failed: %s", exc)
        return EXIT_FATAL

    log_run_summary(stats, elapsed=time.perf_counter() - started)
    if args.summary:
        render_summary_table(stats)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
