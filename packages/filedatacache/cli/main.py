"""Command-line interface for filedatacache.

Usage: fdc [--root DIR] [--config FILE] [--log-level LEVEL] <summary|get|put|add> ...
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from rich.console import Console
from rich.markup import escape

from filedatacache.core.caching import (
    CacheRootError,
    FileDataCache,
    InvalidMetadataError,
    Metadata,
    key_from_path,
)
from filedatacache.core.config import CacheConfig, load_cache_config
from filedatacache.core.scan import render_size_histogram, scan_cache_sync
from filedatacache.core.utils.logging import configure_logging_from_config

console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)
logger = logging.getLogger(__name__)


def _print(text: str) -> None:
    console.print(text, markup=False)


def _error(message: str) -> None:
    err_console.print(f"[red]{escape(message)}[/red]")


def parse_pairs(pairs: list[str]) -> Metadata:
    """Parse ``key:value`` arguments (split on the first ':').

    Raises:
        ValueError: If an argument has no ':'
    """
    metadata: Metadata = {}
    for pair in pairs:
        k, sep, v = pair.partition(":")
        if not sep:
            raise ValueError(f"Bad argument: {pair}")
        metadata[k] = v
    return metadata


def _positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def run_summary(cache: FileDataCache, config: CacheConfig, args: argparse.Namespace) -> int:
    """Scan the whole cache, print statistics, and prune invalid records."""
    workers = args.workers if args.workers is not None else config.scan.workers
    prune = config.scan.prune and not args.no_prune

    try:
        summary = scan_cache_sync(cache, workers=workers, prune=prune)
    except OSError as e:
        _error(f"Failed cache walk: {e}")
        return 1

    rows = render_size_histogram(summary.size_counts, buckets=config.scan.buckets)
    _print("Data for file sizes:")
    if rows:
        kwidth = len(str(rows[-1].high))
        vwidth = len(str(max(row.count for row in rows)))
        for row in rows:
            _print(f"{row.low:>{kwidth}}-{row.high:>{kwidth}}: {row.count:>{vwidth}} {row.bar}")

    _print("Data for number of Metadata entries:")
    for entries in sorted(summary.entry_counts):
        _print(f"{entries}: {summary.entry_counts[entries]}")

    _print(f"Number of files in cache: {summary.num_files}")
    if prune:
        _print(f"Number of files deleted: {summary.num_deletes}")
    else:
        _print(f"Number of invalid files: {summary.num_invalid}")
    return 0


def run_get(cache: FileDataCache, args: argparse.Namespace) -> int:
    """Print cached metadata for a file; prints nothing on a miss."""
    try:
        key = key_from_path(args.file)
    except OSError as e:
        _error(f"Can't resolve {args.file}: {e}")
        return 1

    metadata = cache.get(key)
    if metadata is None:
        logger.info(f"No cached metadata for {key.path}")
        return 0

    _print(f"Metadata entries: {len(metadata)}")
    for k in sorted(metadata):
        _print(f"{k}: {metadata[k]}")
    return 0


def run_put(cache: FileDataCache, args: argparse.Namespace, merge: bool) -> int:
    """Store metadata for a file, replacing it (put) or merging into it (add)."""
    try:
        updates = parse_pairs(args.pairs)
    except ValueError as e:
        _error(str(e))
        return 2

    try:
        key = key_from_path(args.file)
    except OSError as e:
        _error(f"Can't resolve {args.file}: {e}")
        return 1

    metadata: Metadata = {}
    if merge:
        metadata.update(cache.get(key) or {})
    metadata.update(updates)

    try:
        cache.put(key, metadata)
    except (OSError, InvalidMetadataError) as e:
        _error(f"Put: {e}")
        return 2
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="fdc",
        description="filedatacache - per-file metadata cache",
    )
    p.add_argument("--root", help="Cache root directory (default: user cache dir)")
    p.add_argument("--config", help="Path to config file (.json, .yaml, or .yml)")
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Override the configured log level",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    summary = sub.add_parser(
        "summary",
        aliases=["sum"],
        help="Show cache statistics and remove invalid entries",
    )
    summary.add_argument(
        "--workers", type=_positive_int, help="Concurrent record checks (>= 1)"
    )
    summary.add_argument(
        "--no-prune", action="store_true", help="Report invalid entries without removing them"
    )

    get = sub.add_parser("get", help="Print cached metadata for a file")
    get.add_argument("file", help="Source file")

    for name, help_text in (
        ("put", "Replace cached metadata for a file"),
        ("add", "Add entries to cached metadata for a file"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("file", help="Source file")
        cmd.add_argument("pairs", nargs="*", metavar="key:value", help="Metadata entries")

    return p


def run(argv: list[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_cache_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        _error(f"Could not load config: {e}")
        return 1

    updates: dict[str, object] = {}
    if args.root:
        updates["root"] = Path(args.root)
    if args.log_level:
        updates["logging"] = config.logging.model_copy(update={"level": args.log_level})
    if updates:
        config = config.model_copy(update=updates)

    configure_logging_from_config(config.logging)

    try:
        cache = FileDataCache.from_config(config)
    except CacheRootError as e:
        _error(str(e))
        return 1

    if args.cmd in ("summary", "sum"):
        return run_summary(cache, config, args)
    if args.cmd == "get":
        return run_get(cache, args)
    return run_put(cache, args, merge=args.cmd == "add")


def main() -> None:
    """Main entry point for CLI."""
    sys.exit(run())


if __name__ == "__main__":
    main()
