"""Output artifacts: events JSON, viewer state, audit log and zip archive."""

import json
import logging
import os
import tempfile
import zipfile
from typing import Any, Iterable

from fea_log_converter.models import NormalizedEvent, event_to_dict

logger = logging.getLogger(__name__)

AUDIT_SEPARATOR = "\n\n"


def _write_atomic(target: str, text: str) -> None:
    """Write *text* to *target* via a temp file in the same directory."""
    directory = os.path.dirname(os.path.abspath(target))
    os.makedirs(directory, exist_ok=True)
    tmp_fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_path, target)
    except Exception:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def _write_json(target: str, document: Any) -> None:
    _write_atomic(target, json.dumps(document, indent=2, ensure_ascii=False) + "\n")


def events_document(events: Iterable[NormalizedEvent]) -> dict[str, list[dict]]:
    return {"partial_log": [event_to_dict(e) for e in events]}


def write_events(target: str, events: Iterable[NormalizedEvent]) -> None:
    _write_json(target, events_document(events))
    logger.info("%s has been created", os.path.basename(target))


def write_viewer_state(target: str, state: dict[str, Any]) -> None:
    _write_json(target, state)
    logger.info("%s has been created", os.path.basename(target))


def write_audit_log(target: str, records: list[str]) -> None:
    """Write FEA plain records verbatim, separated by a blank line."""
    _write_atomic(target, AUDIT_SEPARATOR.join(records))
    logger.info("Other FEA records have been saved into %s", target)


def create_archive(archive_path: str, files: list[str]) -> str:
    """Zip *files* into *archive_path*, removing each loose file once archived.

    An existing archive is replaced. Missing inputs are logged and skipped.
    """
    directory = os.path.dirname(os.path.abspath(archive_path))
    os.makedirs(directory, exist_ok=True)
    if os.path.exists(archive_path):
        os.remove(archive_path)

    with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for path in files:
            if not os.path.exists(path):
                logger.warning("Unable to find %s file", path)
                continue
            zf.write(path, arcname=os.path.basename(path))
            os.remove(path)

    logger.info("%s created", os.path.basename(archive_path))
    return archive_path
