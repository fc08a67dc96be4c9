"""Tests for saved selection storage."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from arcpick import storage

pytestmark = pytest.mark.usefixtures("isolate_storage")


class TestSelectionStorage:
    def test_round_trip(self, tmp_path):
        archive = tmp_path / "a.zip"
        storage.save_selection(archive, {"src", "src/index.ts"})
        assert storage.load_selection(archive) == ["src", "src/index.ts"]

    def test_keyed_by_resolved_path(self, tmp_path, monkeypatch):
        archive = tmp_path / "a.zip"
        storage.save_selection(archive, ["README.md"])
        monkeypatch.chdir(tmp_path)
        assert storage.load_selection(Path("a.zip")) == ["README.md"]

    def test_archives_stored_separately(self, tmp_path, isolate_storage):
        storage.save_selection(tmp_path / "a.zip", ["x"])
        storage.save_selection(tmp_path / "b.zip", ["y"])

        data = json.loads(isolate_storage.read_text())
        assert len(data["archives"]) == 2
        assert storage.load_selection(tmp_path / "a.zip") == ["x"]

    def test_empty_selection_removes_entry(self, tmp_path):
        archive = tmp_path / "a.zip"
        storage.save_selection(archive, ["x"])
        storage.save_selection(archive, [])
        assert storage.load_selection(archive) == []

    def test_forget(self, tmp_path):
        archive = tmp_path / "a.zip"
        storage.save_selection(archive, ["x"])
        assert storage.forget_selection(archive)
        assert not storage.forget_selection(archive)

    def test_missing_file(self, tmp_path, isolate_storage):
        assert storage.load_selection(tmp_path / "a.zip") == []
        assert not isolate_storage.exists()

    def test_corrupt_file_treated_as_empty(self, tmp_path, isolate_storage):
        isolate_storage.write_text("{oops")
        assert storage.load_selection(tmp_path / "a.zip") == []
