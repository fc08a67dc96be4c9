"""Reader for plain directories such as a cloned repository."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from arcpick.core.errors import ArchiveReadError
from arcpick.models.entry import ArchiveEntryRecord
from arcpick.models.reader import ArchiveReader

log = logging.getLogger(__name__)

# Version-control metadata is never part of a checkout's contents.
_SKIP_DIRS = frozenset({".git", ".hg", ".svn"})


class DirectoryReader(ArchiveReader):
    """Treats a local directory tree as an archive.

    Symlinks are not followed and are left out of the listing.
    """

    @property
    def id(self) -> str:
        return "directory"

    @property
    def name(self) -> str:
        return "Directory"

    @property
    def description(self) -> str:
        return "A local directory, e.g. a repository checkout"

    @property
    def sort_order(self) -> int:
        return 90

    def can_read(self, path: Path) -> bool:
        return path.is_dir()

    def list_entries(self, path: Path) -> list[ArchiveEntryRecord]:
        if not path.is_dir():
            raise ArchiveReadError(str(path), "not a directory")

        def _on_error(error: OSError) -> None:
            log.warning("Skipping unreadable directory %s: %s", error.filename, error.strerror)

        records: list[ArchiveEntryRecord] = []
        for current, dirnames, filenames in os.walk(path, onerror=_on_error):
            base = Path(current)
            rel = base.relative_to(path).parts
            dirnames[:] = sorted(
                d for d in dirnames if d not in _SKIP_DIRS and not (base / d).is_symlink()
            )
            for dirname in dirnames:
                records.append(ArchiveEntryRecord(path=rel + (dirname,), is_directory=True))
            for filename in sorted(filenames):
                file_path = base / filename
                if file_path.is_symlink():
                    continue
                try:
                    size = file_path.stat().st_size
                except OSError as e:
                    log.warning("Skipping unreadable file %s: %s", file_path, e)
                    continue
                records.append(ArchiveEntryRecord(path=rel + (filename,), size=size))

        log.debug("Listed %d entries in %s", len(records), path)
        return records

    def read_bytes(self, path: Path, source_path: str) -> bytes:
        base = path.resolve()
        target = (base / source_path).resolve()
        if not target.is_relative_to(base):
            raise ArchiveReadError(str(path), f"{source_path!r} is outside the directory")
        try:
            return target.read_bytes()
        except OSError as e:
            raise ArchiveReadError(str(path), str(e)) from e
