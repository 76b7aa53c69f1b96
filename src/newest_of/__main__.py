from __future__ import annotations

import argparse
import logging
import os
from typing import Any

from newest_of.extfilter import normalize_extensions
from newest_of.report import ScanReporter
from newest_of.scanconfig import ScanConfig
from newest_of.scanconfig import write_new_config
from newest_of.scanmodel import FilterConfig
from newest_of.scanmodel import Order
from newest_of.scanner import DEFAULT_COUNT
from newest_of.scanner import Scanner

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

EXIT_OK = 0
EXIT_TRAVERSAL_FAILED = 1
EXIT_NO_VALID_PATHS = 2

logger = logging.getLogger("newest_of")


def _count(value: str) -> int:
    """argparse type for a count of zero or more."""
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count: '{value}'")

    if count < 0:
        raise argparse.ArgumentTypeError(f"count must be zero or more, got {count}")

    return count


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="newest-of",
        description="Find the most recently (or least recently) modified files below the given paths.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files or directories to search. Default: the config paths or '.'.",
    )
    parser.add_argument(
        "-n",
        "--count",
        type=_count,
        default=None,
        help=f"Number of entries to show. Default: {DEFAULT_COUNT}.",
    )
    parser.add_argument(
        "--oldest",
        help="Show the oldest entries instead of the newest.",
        default=None,
        action="store_true",
    )
    parser.add_argument(
        "-e",
        "--ext",
        action="append",
        default=None,
        help="Only consider files with this extension. Repeatable, comma separated values allowed.",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=None,
        help="Ignore files with this extension. Repeatable. Takes precedence over --ext.",
    )
    parser.add_argument(
        "-d",
        "--dirs",
        help="Consider directories as well as files.",
        default=None,
        action="store_true",
    )
    parser.add_argument(
        "-u",
        "--unordered",
        help="Print every matching entry as it is found. --count and --oldest are ignored.",
        default=None,
        action="store_true",
    )
    parser.add_argument(
        "-r",
        "--reverse",
        help="Print the most interesting entry first.",
        default=None,
        action="store_true",
    )
    parser.add_argument(
        "--sort",
        help="Walk directory entries in name order for repeatable output.",
        default=None,
        action="store_true",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Also append the report to this file.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Read defaults from this configuration file.",
    )
    parser.add_argument(
        "--make-config",
        type=str,
        metavar="FILE",
        default=None,
        help="Create a default configuration file and exit.",
    )
    parser.add_argument(
        "--debug",
        help="Enable debug logging.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="FILE",
        default=None,
        help="Also write log messages to this file.",
    )
    return parser.parse_args(args)


def add_file_handler_to_logging(log_filepath: str) -> None:
    """Add a file handler writing to the given path to the root logger."""
    file_handler = logging.FileHandler(log_filepath)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logging.getLogger().addHandler(file_handler)


def _pick(flag_value: Any, config_value: Any, default: Any) -> Any:
    """Command line wins over config, config wins over the default."""
    if flag_value is not None:
        return flag_value
    if config_value is not None:
        return config_value
    return default


def build_scanner(args: argparse.Namespace, config: ScanConfig | None, reporter: ScanReporter) -> Scanner:
    """Build a Scanner from the command line and the optional config."""
    include = normalize_extensions(args.ext) if args.ext is not None else None
    exclude = normalize_extensions(args.exclude) if args.exclude is not None else None
    order = Order.OLDEST if args.oldest else None
    unordered = _pick(args.unordered, config.unordered if config else None, False)

    filter_config = FilterConfig(
        include=_pick(include, config.include if config else None, frozenset()),
        exclude=_pick(exclude, config.exclude if config else None, frozenset()),
        include_directories=_pick(args.dirs, config.directories if config else None, False),
    )

    return Scanner(
        filter_config,
        count=_pick(args.count, config.count if config else None, DEFAULT_COUNT),
        order=_pick(order, config.order if config else None, Order.NEWEST),
        unordered=unordered,
        sort_entries=_pick(args.sort, config.sort_entries if config else None, False),
        on_candidate=reporter.candidate if unordered else None,
    )


def existing_paths(paths: list[str]) -> list[str]:
    """Return the paths that exist, logging the ones that do not."""
    valid: list[str] = []
    for path in paths:
        if os.path.exists(path):
            valid.append(path)
        else:
            logger.error("Path does not exist: %s", path)

    return valid


def main(*, cli_args: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(cli_args)

    if args.make_config:
        write_new_config(args.make_config)
        return EXIT_OK

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )

    if args.log_file:
        add_file_handler_to_logging(args.log_file)

    config = ScanConfig(args.config) if args.config else None

    paths = existing_paths(args.paths or (config.paths if config else []) or ["."])
    if not paths:
        logger.error("No valid paths to scan")
        return EXIT_NO_VALID_PATHS

    reporter = ScanReporter(
        reverse=_pick(args.reverse, config.reverse if config else None, False),
        output_file=_pick(args.output, config.output if config else None, None),
    )
    scanner = build_scanner(args, config, reporter)

    result = scanner.scan(paths)
    reporter.result(result, include_entries=not scanner.unordered)

    return EXIT_TRAVERSAL_FAILED if result.stats.failed_roots else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
