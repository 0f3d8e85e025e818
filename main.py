#!/usr/bin/env python3
"""FEA log converter — turns client log files into a log-viewer archive."""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from fea_log_converter.config import load_config
from fea_log_converter.converter import LogConverter
from fea_log_converter.errors import ConfigError
from fea_log_converter.reader import discover_log_files
from fea_log_converter.viewer_state import build_viewer_state, distinct_client_names
from fea_log_converter.writer import (
    create_archive,
    write_audit_log,
    write_events,
    write_viewer_state,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fea-log-converter",
        description="Convert FEA, Assimilation and Native logs into a log-viewer archive.",
    )
    parser.add_argument(
        "folder", nargs="?", default=os.getcwd(),
        help="Folder containing the log files (default: current directory)",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to the YAML config (default: $CONFIG_PATH, ./config.yml, then the bundled default)",
    )
    parser.add_argument(
        "--output-dir", default=None,
        help="Where log0.json, log_state.json and the audit log are written (default: the input folder)",
    )
    parser.add_argument(
        "--archive-dir", default=None,
        help="Where the zip archive is created (default: current directory)",
    )
    parser.add_argument(
        "--no-archive", action="store_true",
        help="Leave log0.json and log_state.json in place instead of zipping them",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s [FEA-CONVERTER] %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def run(args) -> int:
    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error("%s", e)
        return 1

    folder = os.path.abspath(args.folder)
    output_dir = os.path.abspath(args.output_dir or folder)
    archive_dir = os.path.abspath(args.archive_dir or os.getcwd())
    names = config.output

    logger.info("Reading log files from: %s", folder)
    paths = discover_log_files(folder, exclude=[names.audit_file])

    converter = LogConverter(config)
    events = converter.process_paths(paths)
    logger.info("Total files found: %d", len(paths))

    write_audit_log(os.path.join(output_dir, names.audit_file), converter.audit_records)

    events_path = os.path.join(output_dir, names.events_file)
    state_path = os.path.join(output_dir, names.state_file)
    write_events(events_path, events)
    write_viewer_state(state_path, build_viewer_state(distinct_client_names(events)))

    if not args.no_archive:
        create_archive(os.path.join(archive_dir, names.archive_file), [events_path, state_path])
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    logger.info("Running FEA converter...")
    code = run(args)
    logger.info("Exit...")
    return code


if __name__ == "__main__":
    sys.exit(main())
