"""Normalizes plain timestamp/level/message records."""

import logging
import re
from datetime import datetime, timedelta, timezone

from fea_log_converter.errors import RecordParseError
from fea_log_converter.levels import LevelAliasResolver
from fea_log_converter.models import NormalizedEvent, PlainFields

logger = logging.getLogger(__name__)

PLAIN_CATEGORY = "system"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def extract_fields(record: str, pattern: re.Pattern) -> PlainFields | None:
    """Apply a boundary pattern to *record* and return its named groups."""
    m = pattern.search(record)
    if not m:
        return None
    return PlainFields(
        timestamp=m.group("timestamp") or "",
        level=m.group("level") or "",
        message=m.group("message") or "",
    )


def parse_timestamp(value: str, formats: tuple[str, ...] = ()) -> datetime | None:
    """Parse ISO-8601 first, then each strptime format. Naive results are UTC."""
    value = value.strip()
    if not value:
        return None

    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        dt = None
        for fmt in formats:
            try:
                dt = datetime.strptime(value, fmt)
                break
            except ValueError:
                continue
        if dt is None:
            return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_epoch_millis(dt: datetime) -> int:
    return (dt - _EPOCH) // timedelta(milliseconds=1)


class PlainRecordNormalizer:
    def __init__(self, resolver: LevelAliasResolver, timestamp_formats: tuple[str, ...] = ()):
        self._resolver = resolver
        self._timestamp_formats = timestamp_formats

    def normalize(self, record: str, pattern: re.Pattern, client_name: str) -> NormalizedEvent:
        """Parse one plain record.

        Raises:
            RecordParseError: The pattern does not match or the timestamp
                cannot be parsed.
        """
        fields = extract_fields(record, pattern)
        if fields is None:
            raise RecordParseError("Bad log record string", record)

        dt = parse_timestamp(fields.timestamp, self._timestamp_formats)
        if dt is None:
            raise RecordParseError(f"Bad DateTime string {fields.timestamp!r}", record)

        level = self._resolver.resolve(fields.level)
        if level is None:
            logger.debug("Unknown log level %r from %s", fields.level, client_name)

        return NormalizedEvent(
            category=PLAIN_CATEGORY,
            client_name=client_name,
            level=level,
            timestamp=to_epoch_millis(dt),
            args=(fields.message,),
            raw_args=fields.message,
        )
