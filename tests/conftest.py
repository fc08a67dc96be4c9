"""Shared test fixtures."""

from __future__ import annotations

import pytest

import arcpick.storage as storage
from arcpick.core.builder import ArchiveTree
from arcpick.models.entry import ArchiveEntryRecord


@pytest.fixture
def isolate_storage(tmp_path, monkeypatch):
    """Redirect storage to a temp directory."""
    data_dir = tmp_path / "arcpick_data"
    data_dir.mkdir()
    selections_file = data_dir / "selections.json"
    monkeypatch.setattr(storage, "SELECTIONS_FILE", selections_file)
    monkeypatch.setattr(storage, "_DATA_DIR", data_dir)
    return selections_file


@pytest.fixture
def isolate_config(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME at a temp directory."""
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


def _records(*specs: tuple[str, int | None]) -> list[ArchiveEntryRecord]:
    """Build records from ``(name, size)`` pairs; a trailing slash marks a directory."""
    return [ArchiveEntryRecord.from_name(name, size=size) for name, size in specs]


@pytest.fixture
def project_records():
    """The sample project layout used throughout the suite, deliberately unordered."""
    return _records(
        ("README.md", 2560),
        ("src/components/Card.tsx", 3072),
        ("src/", None),
        ("public/logo.svg", 4096),
        ("src/index.ts", 512),
        ("src/components/Button.tsx", 2048),
        ("package.json", 1536),
        ("src/utils/helpers.ts", 1024),
    )


@pytest.fixture
def project_tree(project_records):
    return ArchiveTree.from_records(project_records)


@pytest.fixture
def make_records():
    """Factory for record lists from ``(name, size)`` pairs."""
    return _records
