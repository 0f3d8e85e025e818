"""Log file discovery and reading."""

import glob
import os
import re
from typing import Iterable

ASSIMILATION_LOG_NAME = "assimilationLogs.txt"

_ROTATED_RE = re.compile(r"\.log\.\d+$")


def discover_log_files(folder: str, exclude: Iterable[str] = ()) -> list[str]:
    """Return ``*.log``, ``assimilationLogs.txt`` and ``*.log.<n>`` files in *folder*.

    Paths are de-duplicated and sorted so runs over the same folder see the
    same order. Basenames listed in *exclude* are left out.
    """
    excluded = set(exclude)
    base = glob.escape(folder)
    candidates = glob.glob(os.path.join(base, "*.log"))
    candidates += glob.glob(os.path.join(base, ASSIMILATION_LOG_NAME))
    candidates += [
        p for p in glob.glob(os.path.join(base, "*.log.*"))
        if _ROTATED_RE.search(os.path.basename(p))
    ]

    found = []
    seen = set()
    for path in sorted(candidates):
        if path in seen or not os.path.isfile(path):
            continue
        if os.path.basename(path) in excluded:
            continue
        seen.add(path)
        found.append(path)
    return found


def read_lines(filepath: str) -> list[str]:
    """Read a whole file into lines without terminators.

    Raises OSError or UnicodeDecodeError when the file cannot be read.
    """
    with open(filepath, "r", encoding="utf-8-sig") as f:
        lines = f.read().split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines
