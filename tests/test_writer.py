"""Tests for fea_log_converter/writer.py"""

import json
import os
import zipfile

import pytest

from fea_log_converter.models import NormalizedEvent
from fea_log_converter.writer import (
    create_archive,
    events_document,
    write_audit_log,
    write_events,
    write_viewer_state,
)


def _event(**overrides) -> NormalizedEvent:
    fields = dict(
        category="system", client_name="FEA", level="Info",
        timestamp=1000, args=("a", "b"), raw_args='"[\\"a\\",\\"b\\"]"',
    )
    fields.update(overrides)
    return NormalizedEvent(**fields)


class TestEventsDocument:
    def test_field_names(self):
        doc = events_document([_event()])
        assert list(doc) == ["partial_log"]
        assert doc["partial_log"][0] == {
            "category": "system",
            "clientName": "FEA",
            "level": "Info",
            "timestamp": 1000,
            "highlightFlags": [],
            "args": ["a", "b"],
            "rawArgs": '"[\\"a\\",\\"b\\"]"',
            "previousRowTimeDelta": 0,
            "timeElapsedFromStartup": 0,
        }

    def test_absent_level_is_null(self, tmp_path):
        target = tmp_path / "log0.json"
        write_events(str(target), [_event(level=None)])
        assert json.loads(target.read_text())["partial_log"][0]["level"] is None


class TestWriteEvents:
    def test_keeps_order(self, tmp_path):
        target = tmp_path / "log0.json"
        write_events(str(target), [_event(timestamp=i) for i in (3, 1, 2)])
        data = json.loads(target.read_text(encoding="utf-8"))
        assert [e["timestamp"] for e in data["partial_log"]] == [3, 1, 2]

    def test_non_ascii_preserved(self, tmp_path):
        target = tmp_path / "log0.json"
        write_events(str(target), [_event(args=("héllo",), raw_args="héllo")])
        assert "héllo" in target.read_text(encoding="utf-8")

    def test_creates_missing_directory(self, tmp_path):
        target = tmp_path / "nested" / "out" / "log0.json"
        write_events(str(target), [])
        assert json.loads(target.read_text()) == {"partial_log": []}

    def test_no_temp_files_left(self, tmp_path):
        write_events(str(tmp_path / "log0.json"), [_event()])
        assert os.listdir(tmp_path) == ["log0.json"]


class TestWriteViewerState:
    def test_writes_document(self, tmp_path):
        target = tmp_path / "log_state.json"
        write_viewer_state(str(target), {"registeredClientNames": ["FEA"]})
        assert json.loads(target.read_text()) == {"registeredClientNames": ["FEA"]}


class TestWriteAuditLog:
    def test_records_joined_by_blank_line(self, tmp_path):
        target = tmp_path / "Not Central Logger.log"
        write_audit_log(str(target), ["first", "second\n  trace"])
        assert target.read_text(encoding="utf-8") == "first\n\nsecond\n  trace"

    def test_empty(self, tmp_path):
        target = tmp_path / "audit.log"
        write_audit_log(str(target), [])
        assert target.read_text() == ""


class TestCreateArchive:
    def _files(self, tmp_path):
        paths = []
        for name in ("log0.json", "log_state.json"):
            p = tmp_path / name
            p.write_text("{}")
            paths.append(str(p))
        return paths

    def test_archives_and_removes_inputs(self, tmp_path):
        paths = self._files(tmp_path)
        archive = tmp_path / "out" / "FEA.CentralLogger.zip"
        create_archive(str(archive), paths)
        with zipfile.ZipFile(archive) as zf:
            assert sorted(zf.namelist()) == ["log0.json", "log_state.json"]
        assert not any(os.path.exists(p) for p in paths)

    def test_replaces_existing_archive(self, tmp_path):
        archive = tmp_path / "FEA.CentralLogger.zip"
        archive.write_bytes(b"stale")
        create_archive(str(archive), self._files(tmp_path))
        assert zipfile.is_zipfile(archive)

    def test_missing_input_is_skipped(self, tmp_path, caplog):
        archive = tmp_path / "a.zip"
        create_archive(str(archive), [str(tmp_path / "absent.json")])
        with zipfile.ZipFile(archive) as zf:
            assert zf.namelist() == []
        assert "Unable to find" in caplog.text

    @pytest.mark.parametrize("count", [0, 1])
    def test_returns_archive_path(self, tmp_path, count):
        archive = str(tmp_path / "a.zip")
        assert create_archive(archive, self._files(tmp_path)[:count]) == archive
