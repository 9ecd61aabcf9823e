"""Command line entry point: ``friesflat [options] directory``."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .config import Settings, load_settings
from .errors import ConfigError
from .ingest.filename_map import load_filename_map
from .pipeline import ConversionPipeline
from .runner import ConversionRunner
from .sinks import ElasticsearchSink, StreamSink

logger = logging.getLogger("friesflat")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="friesflat",
        description=(
            "Flatten FRIES extraction results (sentences, entities, events) "
            "into relation tuples and load them into Elasticsearch."
        ),
    )
    parser.add_argument("directory", type=Path, help="Top directory of FRIES part files")
    parser.add_argument("-c", "--config", type=Path, help="YAML settings file")
    parser.add_argument(
        "-b",
        "--bulk",
        type=int,
        metavar="N",
        help="Use bulk loading with N additional worker threads (default: no bulk loading)",
    )
    parser.add_argument(
        "-m",
        "--map",
        dest="map_filenames",
        action="store_true",
        default=None,
        help="Map input filenames to document ids (default: no mapping)",
    )
    parser.add_argument("--map-file", type=Path, help="Filename mapping table (TSV, optionally gzipped)")
    parser.add_argument(
        "--host",
        dest="hosts",
        action="append",
        help="Elasticsearch node URL; repeat for several nodes",
    )
    parser.add_argument("-i", "--index", help="Elasticsearch index name (default: results)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Write tuples to stdout as JSON lines instead of indexing them",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Log every tuple before it is submitted",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Run in verbose mode (default: non-verbose)",
    )
    return parser


def configure_logging(settings: Settings) -> None:
    if settings.debug:
        level = logging.DEBUG
    elif settings.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = {
        "es_hosts": args.hosts,
        "index_name": args.index,
        "map_filenames": args.map_filenames,
        "filename_map_path": args.map_file,
        "verbose": args.verbose,
        "debug": args.debug,
    }
    if args.bulk is not None:
        overrides["bulk_load"] = True
        overrides["bulk_concurrency"] = args.bulk
    return load_settings(args.config, **overrides)


def _good_directory(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.R_OK | os.X_OK)


def _filename_map(settings: Settings) -> Optional[Mapping[str, str]]:
    if not settings.map_filenames:
        return None
    if settings.filename_map_path is None:
        raise ConfigError("filename mapping requested but no mapping file configured")
    logger.info("Reading filename mapping file: %s", settings.filename_map_path)
    try:
        return load_filename_map(settings.filename_map_path)
    except OSError as exc:
        raise ConfigError(f"cannot read filename mapping file: {exc}") from exc


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = _settings_from_args(args)
    except ConfigError as exc:
        logging.basicConfig(format=LOG_FORMAT)
        logger.error("%s", exc)
        return 2
    configure_logging(settings)

    if not _good_directory(args.directory):
        logger.error("%s is not a readable directory", args.directory)
        return 2

    try:
        filename_map = _filename_map(settings)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 2

    if args.dry_run:
        sink = StreamSink(sys.stdout)
    else:
        sink = ElasticsearchSink.from_settings(settings)
        if settings.bulk_load:
            logger.info(
                "Bulk processing [main + %d concurrent] result files from %s",
                settings.bulk_concurrency,
                args.directory,
            )

    logger.info("Processing result files from %s", args.directory)
    runner = ConversionRunner(ConversionPipeline(sink, debug=settings.debug), filename_map)
    try:
        report = runner.run(args.directory)
    finally:
        sink.close()
    logger.info("Processed %d result(s)", report.accepted)
    return 0


__all__ = ["build_parser", "configure_logging", "main"]
