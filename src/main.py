from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Sequence

from src.adapters.persistence import LocalGtfsFeedWriter, LocalResponseCache
from src.adapters.persistence.local_lines_json_writer import LocalLinesJsonWriter
from src.adapters.tfl.http_tfl_client import TflClient
from src.app.services.gtfs_export_service import GtfsExportService
from src.app.services.line_fetch_service import (
    DEFAULT_WORKERS,
    DataSource,
    LineFetchService,
)
from src.app.services.line_report_service import log_report, summarize_lines

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("gtfs", "json", "none")


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tfl-gtfs", description="Convert TfL line data into a GTFS feed"
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("fetch", "Fetch line data from the TfL API (through the cache)"),
        ("transform", "Transform previously cached line data"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--format", choices=OUTPUT_FORMATS, default="gtfs")
        cmd.add_argument(
            "--threads",
            type=int,
            default=_env_int("TFL_WORKERS", DEFAULT_WORKERS),
            help="Number of lines enriched concurrently",
        )
        cmd.add_argument(
            "--sample",
            type=int,
            default=None,
            help="Only use a random window of N lines",
        )
        cmd.add_argument(
            "--output-dir",
            type=Path,
            default=Path(os.getenv("GTFS_OUTPUT_DIR") or "gtfs"),
        )
        cmd.add_argument(
            "--cache-dir",
            type=Path,
            default=Path(os.getenv("TFL_CACHE_DIR") or "cache"),
        )
    return parser


def run(args: argparse.Namespace) -> int:
    source = DataSource.API if args.command == "fetch" else DataSource.CACHE

    with TflClient(cache=LocalResponseCache(cache_dir=args.cache_dir)) as client:
        fetcher = LineFetchService(provider=client, max_workers=args.threads)
        lines = fetcher.load_lines(source, sample_size=args.sample)

    if not lines:
        logger.warning("No lines found in the cache, try fetching some data first")
        return 0

    log_report(summarize_lines(lines))

    if args.format == "gtfs":
        exporter = GtfsExportService(
            feed_writer=LocalGtfsFeedWriter(base_path=args.output_dir)
        )
        exporter.export(lines)
    elif args.format == "json":
        LocalLinesJsonWriter(base_path=args.output_dir).write_lines(lines)

    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
