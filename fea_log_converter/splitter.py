"""Reassembles physical lines into logical records.

A line matching the boundary pattern starts a new record. Every other line
is a continuation of the current one (stack traces, pretty-printed payloads).
"""

import re
from typing import Generator, Iterable


def split_records(lines: Iterable[str], boundary: re.Pattern) -> Generator[str, None, None]:
    """Yield trimmed logical records in file order. Blank records are dropped."""
    current = ""
    for line in lines:
        if boundary.search(line):
            record = current.strip()
            if record:
                yield record
            current = line
        else:
            current += "\n" + line

    record = current.strip()
    if record:
        yield record
