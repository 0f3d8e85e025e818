"""Normalizes FEA central-logger records that embed a JSON payload.

The payload's ``logData`` field is usually a JSON string holding a JSON array
of strings. Older clients write it in other shapes, so argument resolution
degrades through three variants:

  ParsedArray    logData is a string containing a JSON array of strings
  SplitFallback  logData is a string (or null) but not such an array
  RawString      logData is not a string at all
"""

import json
import logging
import re
from dataclasses import dataclass

from fea_log_converter.errors import RecordParseError
from fea_log_converter.levels import LevelAliasResolver
from fea_log_converter.models import NormalizedEvent

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 500

_JSON_PART_RE = re.compile(r"\{.*\}", re.DOTALL)
_WHITESPACE_RE = re.compile(r"[ \t\n\r]*")
_DECODER = json.JSONDecoder()


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


# ---------------------------------------------------------------------------
# Argument resolution
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParsedArray:
    args: tuple[str, ...]


@dataclass(frozen=True)
class SplitFallback:
    args: tuple[str, ...]


@dataclass(frozen=True)
class RawString:
    args: tuple[str, ...]


ArgumentResolution = ParsedArray | SplitFallback | RawString


def _parse_string_array(text: str) -> tuple[str, ...] | None:
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return None
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return tuple(value)
    return None


def _split_manually(text: str | None, raw_args: str) -> tuple[str, ...]:
    """Strip one pair of square brackets and split on commas."""
    if not text:
        return (raw_args,)
    if text.startswith("["):
        text = text[1:]
    if text.endswith("]"):
        text = text[:-1]
    return tuple(text.split(","))


def resolve_arguments(raw_args: str) -> ArgumentResolution:
    """Resolve the raw JSON text of ``logData`` into event arguments."""
    try:
        unquoted = json.loads(raw_args)
    except (json.JSONDecodeError, RecursionError):
        return RawString((raw_args,))

    if unquoted is not None and not isinstance(unquoted, str):
        return RawString((raw_args,))

    if unquoted:
        parsed = _parse_string_array(unquoted)
        if parsed is not None:
            return ParsedArray(parsed)
    return SplitFallback(_split_manually(unquoted, raw_args))


# ---------------------------------------------------------------------------
# Payload extraction
# ---------------------------------------------------------------------------


def extract_json_part(record: str) -> str | None:
    """Return the text from the first '{' to the last '}' of *record*."""
    m = _JSON_PART_RE.search(record)
    return m.group(0) if m else None


def raw_members(text: str) -> dict[str, str]:
    """Map each top-level key of a JSON object to the raw text of its value.

    *text* must already be known to be a valid JSON object. Duplicate keys
    keep the last value, as ``json.loads`` does.
    """
    members: dict[str, str] = {}
    idx = _WHITESPACE_RE.match(text, 0).end() + 1
    idx = _WHITESPACE_RE.match(text, idx).end()
    if text[idx] == "}":
        return members

    while True:
        key, idx = _DECODER.raw_decode(text, idx)
        idx = _WHITESPACE_RE.match(text, idx).end() + 1  # ':'
        start = _WHITESPACE_RE.match(text, idx).end()
        _, end = _DECODER.raw_decode(text, start)
        members[key] = text[start:end]

        idx = _WHITESPACE_RE.match(text, end).end()
        if text[idx] == "}":
            return members
        idx = _WHITESPACE_RE.match(text, idx + 1).end()  # ','


def _require(payload: dict, key: str, expected: type | tuple, record: str):
    if key not in payload:
        raise RecordParseError(f"Missing required field '{key}'", record)
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, expected):
        raise RecordParseError(
            f"Field '{key}' has unexpected type {type(value).__name__}", record
        )
    return value


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------


class CentralLoggerNormalizer:
    """Turns central-logger records into NormalizedEvents and counts successes."""

    def __init__(self, resolver: LevelAliasResolver):
        self._resolver = resolver
        self.parsed_count = 0

    def normalize(self, record: str) -> NormalizedEvent:
        """Parse one central-logger record.

        Raises:
            RecordParseError: No JSON payload, malformed JSON, or a required
                field missing or of the wrong type.
        """
        json_part = extract_json_part(record)
        if json_part is None:
            raise RecordParseError("No JSON payload in central logger record", record)

        try:
            payload = json.loads(json_part, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as e:
            raise RecordParseError(f"Malformed JSON payload: {e}", record) from e

        category = _require(payload, "category", str, record)
        if not category:
            raise RecordParseError("Field 'category' is empty", record)
        client_name = _require(payload, "logClientName", str, record)
        log_type = _require(payload, "logType", str, record)
        log_timestamp = _require(payload, "logTimestamp", (int, float), record)
        if "logData" not in payload:
            raise RecordParseError("Missing required field 'logData'", record)

        raw_args = raw_members(json_part)["logData"]
        resolution = resolve_arguments(raw_args)
        if not isinstance(resolution, ParsedArray):
            logger.debug("logData resolved via %s: %s", type(resolution).__name__, raw_args)

        event = NormalizedEvent(
            category=category,
            client_name=client_name,
            level=self._resolver.resolve(log_type),
            timestamp=log_timestamp,
            args=resolution.args,
            raw_args=raw_args,
        )

        self.parsed_count += 1
        if self.parsed_count % PROGRESS_EVERY == 0:
            logger.info("Parsed Central Logger records: %d", self.parsed_count)
        return event
