"""Example external reader for arcpick.

This demonstrates how to teach arcpick a new container format.
Place reader directories in ~/.local/share/arcpick/readers/ (or list them
under ``readers.paths`` in settings) to be discovered.

The format is a plain-text listing, one entry per line::

    1536	package.json
    -	src/
    512	src/index.ts

A ``-`` size or a trailing slash marks a directory. Listings describe a
remote tree, such as a repository, without carrying file contents.
"""

from __future__ import annotations

from pathlib import Path

from arcpick.core.errors import ArchiveReadError
from arcpick.models.entry import ArchiveEntryRecord
from arcpick.models.reader import ArchiveReader


class ListingReader(ArchiveReader):
    """Reads ``.listing`` files produced by a remote repository lister."""

    @property
    def id(self) -> str:
        return "listing"

    @property
    def name(self) -> str:
        return "Path Listing"

    @property
    def description(self) -> str:
        return "Tab-separated size/path listings of a remote tree (no file contents)"

    @property
    def extensions(self) -> tuple[str, ...]:
        return (".listing",)

    def list_entries(self, path: Path) -> list[ArchiveEntryRecord]:
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise ArchiveReadError(str(path), str(e)) from e

        records: list[ArchiveEntryRecord] = []
        for lineno, line in enumerate(lines, 1):
            if not line.strip() or line.startswith("#"):
                continue
            size_field, sep, name = line.partition("\t")
            if not sep:
                raise ArchiveReadError(str(path), f"line {lineno}: expected '<size>\\t<path>'")
            if size_field == "-":
                records.append(ArchiveEntryRecord.from_name(name, is_directory=True))
            elif size_field.isdigit():
                records.append(ArchiveEntryRecord.from_name(name, size=int(size_field)))
            else:
                raise ArchiveReadError(str(path), f"line {lineno}: bad size {size_field!r}")
        return records

    def read_bytes(self, path: Path, source_path: str) -> bytes:
        raise ArchiveReadError(str(path), "listings carry no file contents")
