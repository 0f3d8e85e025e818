"""Conversion pipeline — detect, split, classify and normalize log files.

Files are processed one at a time in the order given. Events keep file order,
then record order within each file.
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterable

from fea_log_converter.central_logger import CentralLoggerNormalizer
from fea_log_converter.classifier import classify_record
from fea_log_converter.config import Config
from fea_log_converter.detector import DetectedFormat, detect_format
from fea_log_converter.errors import RecordParseError, UndetectableFormatError
from fea_log_converter.levels import LevelAliasResolver
from fea_log_converter.models import NormalizedEvent, SourceFormat
from fea_log_converter.plain import PlainRecordNormalizer
from fea_log_converter.reader import read_lines
from fea_log_converter.splitter import split_records

logger = logging.getLogger(__name__)


@dataclass
class RunStats:
    files_processed: int = 0
    files_skipped: int = 0
    central_records: int = 0
    plain_records: int = 0
    records_skipped: int = 0

    @property
    def events(self) -> int:
        return self.central_records + self.plain_records


class LogConverter:
    """Accumulates normalized events and FEA plain records across files."""

    def __init__(self, config: Config, resolver: LevelAliasResolver | None = None):
        self._config = config
        self._resolver = resolver if resolver is not None else LevelAliasResolver(config.log_levels)
        logger.debug(
            "Level aliases: %d across %s", len(self._resolver), ", ".join(self._resolver.canonical_levels)
        )
        self._central = CentralLoggerNormalizer(self._resolver)
        self._plain = PlainRecordNormalizer(self._resolver, config.timestamp_formats)
        self.events: list[NormalizedEvent] = []
        self.audit_records: list[str] = []
        self.stats = RunStats()

    def process(self, filename: str, lines: list[str]) -> int:
        """Convert one file's lines. Returns the number of events produced.

        Raises:
            UndetectableFormatError: The first line matches no boundary pattern.
        """
        first_line = lines[0] if lines else None
        detected = detect_format(first_line, self._config.patterns)
        if detected is None:
            raise UndetectableFormatError(filename, first_line)

        before = len(self.events)
        for text in split_records(lines, detected.pattern):
            self._handle_record(text, detected)
        return len(self.events) - before

    def _handle_record(self, text: str, detected: DetectedFormat) -> None:
        record = classify_record(
            text,
            detected.source_format,
            detected.client_name,
            self._config.patterns.fea_central_logger,
        )
        try:
            if record.is_central_logger:
                event = self._central.normalize(record.text)
                self.stats.central_records += 1
            else:
                if record.source_format is SourceFormat.FEA:
                    self.audit_records.append(record.text)
                event = self._plain.normalize(record.text, detected.pattern, record.client_name)
                self.stats.plain_records += 1
        except RecordParseError as e:
            self.stats.records_skipped += 1
            logger.warning("Skip record (%s):\n %s", e.reason, e.record)
            return
        self.events.append(event)

    def process_files(self, files: Iterable[tuple[str, list[str]]]) -> list[NormalizedEvent]:
        """Convert already-read ``(filename, lines)`` pairs, skipping undetectable files."""
        for filename, lines in files:
            self._process_safely(filename, lines)
        self._log_summary()
        return self.events

    def process_paths(self, paths: Iterable[str]) -> list[NormalizedEvent]:
        """Read and convert each path. Unreadable or undetectable files are skipped."""
        for path in paths:
            logger.info("Processing: %s", path)
            try:
                lines = read_lines(path)
            except (OSError, UnicodeDecodeError) as e:
                self.stats.files_skipped += 1
                logger.error("Failed to read %s: %s", path, e)
                continue
            self._process_safely(path, lines)
        self._log_summary()
        return self.events

    def _process_safely(self, filename: str, lines: list[str]) -> None:
        try:
            produced = self.process(filename, lines)
        except UndetectableFormatError as e:
            self.stats.files_skipped += 1
            logger.warning(
                "Can not determine log record type by first line for: %s file. "
                "The file will be ignored. First line: %r",
                e.filename, e.first_line,
            )
            return
        self.stats.files_processed += 1
        logger.info("Loaded file: %s (%d events)", os.path.basename(filename), produced)

    def _log_summary(self) -> None:
        logger.info("Total parsed Central Logger records: %d", self._central.parsed_count)
        logger.info(
            "Files: %d processed, %d skipped. Records: %d central logger, %d other, %d skipped",
            self.stats.files_processed, self.stats.files_skipped,
            self.stats.central_records, self.stats.plain_records, self.stats.records_skipped,
        )
