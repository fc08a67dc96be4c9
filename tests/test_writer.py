"""Tests for writing extracted files to disk."""

from __future__ import annotations

import zipfile

import pytest

from arcpick.core.registry import ReaderRegistry
from arcpick.core.session import BrowseSession
from arcpick.core.writer import write_extracted
from arcpick.models.extract_result import ExtractedFileDescriptor
from arcpick.readers.zip_reader import ZipReader


@pytest.fixture
def archive(tmp_path):
    path = tmp_path / "a.zip"
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("src/components/Button.tsx", b"button")
        zf.writestr("src/components/Card.tsx", b"card!")
    return path


def _descriptor(source: str, destination: str, size: int = 0) -> ExtractedFileDescriptor:
    return ExtractedFileDescriptor(source_path=source, destination_path=destination, size=size)


class TestWriteExtracted:
    def test_writes_files_at_destination_paths(self, archive, tmp_path):
        out = tmp_path / "out"
        result = write_extracted(
            [
                _descriptor("src/components/Button.tsx", "ui/Button.tsx", 6),
                _descriptor("src/components/Card.tsx", "ui/Card.tsx", 5),
            ],
            ZipReader(),
            archive,
            out,
        )

        assert result.errors == []
        assert result.files_written == 2
        assert result.bytes_written == 11
        assert (out / "ui" / "Button.tsx").read_bytes() == b"button"
        assert (out / "ui" / "Card.tsx").read_bytes() == b"card!"

    def test_missing_member_reported_not_raised(self, archive, tmp_path):
        result = write_extracted(
            [_descriptor("gone.txt", "gone.txt"), _descriptor("src/components/Card.tsx", "Card.tsx")],
            ZipReader(),
            archive,
            tmp_path / "out",
        )
        assert result.files_written == 1
        assert len(result.errors) == 1
        assert result.errors[0].startswith("gone.txt:")

    def test_escaping_destination_refused(self, archive, tmp_path):
        out = tmp_path / "out"
        result = write_extracted(
            [_descriptor("src/components/Card.tsx", "../evil.tsx")],
            ZipReader(),
            archive,
            out,
        )
        assert result.files_written == 0
        assert "escapes" in result.errors[0]
        assert not (tmp_path / "evil.tsx").exists()

    def test_nothing_to_write(self, archive, tmp_path):
        result = write_extracted([], ZipReader(), archive, tmp_path / "out")
        assert (result.files_written, result.bytes_written, result.errors) == (0, 0, [])

    def test_colliding_destinations_reported(self, tmp_path):
        path = tmp_path / "dup.zip"
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("a/f.txt", b"AAA")
            zf.writestr("b/f.txt", b"BBBB")
        out = tmp_path / "out"

        result = write_extracted(
            [_descriptor("a/f.txt", "f.txt", 3), _descriptor("b/f.txt", "f.txt", 4)],
            ZipReader(),
            path,
            out,
        )

        assert result.files_written == 1
        assert result.bytes_written == 3
        assert result.errors == ["f.txt: destination collides with a/f.txt"]
        assert (out / "f.txt").read_bytes() == b"AAA"

    def test_unreadable_archive_reported_once(self, tmp_path):
        bad = tmp_path / "bad.zip"
        bad.write_bytes(b"not a zip")
        result = write_extracted(
            [_descriptor("x.txt", "x.txt"), _descriptor("y.txt", "y.txt")],
            ZipReader(),
            bad,
            tmp_path / "out",
        )
        assert result.files_written == 0
        assert len(result.errors) == 1
        assert "Could not read" in result.errors[0]


class TestSessionCollisions:
    def test_sibling_directories_with_same_file_name(self, tmp_path):
        path = tmp_path / "dup.zip"
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("a/f.txt", b"AAA")
            zf.writestr("b/f.txt", b"BBBB")
        registry = ReaderRegistry()
        registry.register(ZipReader())
        session = BrowseSession.open(path, registry)
        session.toggle("a")
        session.toggle("b")

        result = session.extract_to(tmp_path / "out")

        assert result.files_written == 1
        assert len(result.errors) == 1
        assert "collides" in result.errors[0]
