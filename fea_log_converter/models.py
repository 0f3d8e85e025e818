"""Normalized event dataclass — every client format maps to this schema."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SourceFormat(Enum):
    FEA = "FEA"
    ASSIMILATION = "Assimilation"
    NATIVE = "Native"


@dataclass(frozen=True)
class PlainFields:
    """Named groups captured by a boundary pattern."""

    timestamp: str
    level: str
    message: str


@dataclass(frozen=True)
class ClassifiedRecord:
    text: str
    is_central_logger: bool
    source_format: SourceFormat
    client_name: str


@dataclass(frozen=True)
class NormalizedEvent:
    category: str
    client_name: str
    level: str | None
    timestamp: int | float
    args: tuple[str, ...]
    raw_args: str
    highlight_flags: tuple[str, ...] = field(default_factory=tuple)
    previous_row_time_delta: int = 0
    time_elapsed_from_startup: int = 0


def event_to_dict(event: NormalizedEvent) -> dict[str, Any]:
    """Convert a NormalizedEvent to the dict written into ``partial_log``."""
    return {
        "category": event.category,
        "clientName": event.client_name,
        "level": event.level,
        "timestamp": event.timestamp,
        "highlightFlags": list(event.highlight_flags),
        "args": list(event.args),
        "rawArgs": event.raw_args,
        "previousRowTimeDelta": event.previous_row_time_delta,
        "timeElapsedFromStartup": event.time_elapsed_from_startup,
    }
