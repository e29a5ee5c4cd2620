from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from result import Err, Ok
from rich.console import Console
from rich.logging import RichHandler

from bundlesize.config.loader import config_json, load_config
from bundlesize.config.schema import AppConfig
from bundlesize.models.snapshot import Baseline
from bundlesize.services.dev_stats import collect_dev_stats, dev_stats_report
from bundlesize.services.diff import diff_snapshots
from bundlesize.services.measure import read_current_sizes
from bundlesize.services.report import build_report
from bundlesize.storage.gist import GistSettings, GistStore

logger = logging.getLogger("bundlesize")

EXIT_OK = 0
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compare-bundle-size",
        description="Compare the size of your build output against a baseline stored in a GitHub Gist.",
    )
    parser.add_argument("--config", metavar="PATH", type=Path, help="Path to a JSON config file.")
    parser.add_argument(
        "--root",
        metavar="PATH",
        type=Path,
        default=Path("."),
        help="Directory the build pattern is resolved against (default: current directory).",
    )
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level written to stderr (default: WARNING).",
    )
    parser.add_argument(
        "-d",
        "--dev-stats",
        action="store_true",
        help="Collect stats about the node_modules folder.",
    )
    parser.add_argument(
        "-t",
        "--threshold",
        type=int,
        default=None,
        help="Minimum size difference (in bytes) to be visible (default: 10).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, metavar="<cmd>")
    subparsers.add_parser("compare", help="Compare your bundle against the stored summary.")
    subparsers.add_parser("update", help="Update stored summary of the bundle (main branch).")
    subparsers.add_parser("config", help="Print the effective configuration as JSON.")
    return parser


def _configure_logging(level: str) -> None:
    # Scoped to the package logger; stdout is reserved for the report.
    handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    for existing in logger.handlers[:]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)


def _fetch_baseline(store: GistStore) -> Baseline:
    result = store.fetch()
    if isinstance(result, Ok):
        return result.unwrap()
    logger.error("Could not load baseline, treating every file as new: %s", result.unwrap_err())
    return Baseline.empty()


def run_compare(
    config: AppConfig,
    store: GistStore,
    console: Console,
    root: Path,
    threshold: int | None,
    dev_stats: bool,
) -> int:
    current = read_current_sizes(root, config.measure)
    previous = _fetch_baseline(store)

    report = build_report(diff_snapshots(previous.bundle, current), config.report_config(threshold))
    console.print(report)

    if dev_stats:
        stats = collect_dev_stats(root / config.dev_stats_dir)
        console.print(dev_stats_report(stats, previous.dev_stats))
    return EXIT_OK


def run_update(config: AppConfig, store: GistStore, root: Path, dev_stats: bool) -> int:
    current = read_current_sizes(root, config.measure)
    stats = collect_dev_stats(root / config.dev_stats_dir) if dev_stats else None

    result = store.update(Baseline(bundle=current, dev_stats=stats))
    if isinstance(result, Err):
        logger.error("Could not store baseline: %s", result.unwrap_err())
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level)
    load_dotenv(find_dotenv(usecwd=True))

    config_result = load_config(args.config)
    if isinstance(config_result, Err):
        logger.error(config_result.unwrap_err())
        return EXIT_CONFIG
    config = config_result.unwrap()

    # Markdown goes out verbatim; rich markup would eat "[...]" in filenames.
    console = Console(file=sys.stdout, markup=False, highlight=False, emoji=False, soft_wrap=True)

    if args.command == "config":
        console.print(config_json(config))
        return EXIT_OK

    store = GistStore(GistSettings.from_env(os.environ))
    if args.command == "update":
        return run_update(config, store, args.root, args.dev_stats)
    return run_compare(config, store, console, args.root, args.threshold, args.dev_stats)
