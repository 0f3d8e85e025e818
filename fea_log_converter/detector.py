"""Detects which client wrote a file by matching its first line.

Detection order:
  1. FEA client pattern
  2. Assimilation pattern
  3. Native pattern
"""

import re
from dataclasses import dataclass

from fea_log_converter.config import Patterns
from fea_log_converter.models import SourceFormat


@dataclass(frozen=True)
class DetectedFormat:
    pattern: re.Pattern
    source_format: SourceFormat
    client_name: str


def detect_format(first_line: str | None, patterns: Patterns) -> DetectedFormat | None:
    """Return the first boundary pattern matching *first_line*, or None."""
    if first_line is None:
        return None

    candidates = (
        (patterns.fea, SourceFormat.FEA),
        (patterns.assimilation, SourceFormat.ASSIMILATION),
        (patterns.native, SourceFormat.NATIVE),
    )
    for pattern, source_format in candidates:
        if pattern.search(first_line):
            return DetectedFormat(pattern, source_format, source_format.value)
    return None
