"""Browsing session: one archive tree plus its selection."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from arcpick.content_types import ContentKindTable
from arcpick.core.builder import ArchiveTree
from arcpick.core.errors import ArchiveReadError, NoReaderError
from arcpick.core.projector import project
from arcpick.core.registry import ReaderRegistry
from arcpick.core.selection import SelectionEngine
from arcpick.core.writer import write_extracted
from arcpick.models.entry import ArchiveEntryRecord
from arcpick.models.extract_result import ExtractedFileDescriptor, ExtractResult
from arcpick.models.reader import ArchiveReader
from arcpick.models.tree import SelectionSummary

log = logging.getLogger(__name__)


class BrowseSession:
    """Owns the tree and selection for one loaded archive.

    Callers create one session per archive they browse; nothing here is
    shared between sessions.
    """

    def __init__(
        self,
        tree: ArchiveTree,
        name: str = "",
        reader: ArchiveReader | None = None,
        archive: Path | None = None,
        content_types: ContentKindTable | None = None,
    ) -> None:
        self.name = name
        self.reader = reader
        self.archive = archive
        self.content_types = content_types or ContentKindTable()
        self._tree = tree
        self._selection = SelectionEngine(tree)

    @classmethod
    def from_records(
        cls,
        records: Iterable[ArchiveEntryRecord],
        name: str = "",
        content_types: ContentKindTable | None = None,
    ) -> BrowseSession:
        return cls(ArchiveTree.from_records(records), name=name, content_types=content_types)

    @classmethod
    def open(
        cls,
        archive: Path,
        registry: ReaderRegistry,
        content_types: ContentKindTable | None = None,
    ) -> BrowseSession:
        """Enumerate ``archive`` with the first matching reader and build a session."""
        reader = registry.for_path(archive)
        if reader is None:
            raise NoReaderError(str(archive))
        log.info("Opening %s with reader '%s'", archive, reader.id)
        records = reader.list_entries(archive)
        return cls(
            ArchiveTree.from_records(records),
            name=archive.name,
            reader=reader,
            archive=archive,
            content_types=content_types,
        )

    @property
    def tree(self) -> ArchiveTree:
        return self._tree

    @property
    def selection(self) -> SelectionEngine:
        return self._selection

    @property
    def selected(self) -> frozenset[str]:
        return self._selection.selected

    def load(self, records: Iterable[ArchiveEntryRecord]) -> None:
        """Replace the archive contents; the selection starts over empty."""
        tree = ArchiveTree.from_records(records)
        self._tree = tree
        self._selection = SelectionEngine(tree)

    def restore_selection(self, paths: Iterable[str]) -> frozenset[str]:
        """Replace the selection with previously stored paths."""
        self._selection = SelectionEngine(self._tree, paths)
        return self._selection.selected

    def toggle(self, path: str) -> frozenset[str]:
        return self._selection.toggle(path)

    def clear(self) -> frozenset[str]:
        return self._selection.clear()

    def is_selected(self, path: str) -> bool:
        return self._selection.is_selected(path)

    def summary(self) -> SelectionSummary:
        return self._selection.summary()

    def project(self, destination_prefix: str = "") -> list[ExtractedFileDescriptor]:
        return project(self._tree, self._selection.selected, destination_prefix, self.content_types)

    def extract_to(self, output_dir: Path, destination_prefix: str = "") -> ExtractResult:
        """Write the selected files under ``output_dir``.

        Only sessions opened from an archive through a reader can write.
        """
        if self.reader is None or self.archive is None:
            raise ArchiveReadError(self.name or "<records>", "session has no archive reader")
        descriptors = self.project(destination_prefix)
        return write_extracted(descriptors, self.reader, self.archive, output_dir)
