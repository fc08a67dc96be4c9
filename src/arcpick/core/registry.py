"""Central archive reader registry."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from arcpick.models.reader import ArchiveReader

log = logging.getLogger(__name__)


class ReaderRegistry:
    """Stores and retrieves registered archive readers."""

    def __init__(self) -> None:
        self._readers: dict[str, ArchiveReader] = {}

    def register(self, reader: ArchiveReader) -> None:
        """Register a reader instance."""
        if reader.id in self._readers:
            log.warning("Reader '%s' already registered, skipping duplicate", reader.id)
            return
        self._readers[reader.id] = reader
        log.debug("Registered reader: %s (%s)", reader.id, reader.name)

    def get(self, reader_id: str) -> ArchiveReader | None:
        """Get a reader by its ID."""
        return self._readers.get(reader_id)

    def get_all(self) -> list[ArchiveReader]:
        """Get all registered readers in resolution order."""
        return sorted(self._readers.values(), key=lambda r: r.sort_order)

    def for_path(self, path: Path) -> ArchiveReader | None:
        """Return the first reader that can open ``path``."""
        for reader in self.get_all():
            try:
                if reader.can_read(path):
                    return reader
            except OSError:
                log.exception("Error probing reader '%s' for %s", reader.id, path)
        return None

    def __len__(self) -> int:
        return len(self._readers)

    def __iter__(self) -> Iterator[ArchiveReader]:
        return iter(self.get_all())

    def __contains__(self, reader_id: str) -> bool:
        return reader_id in self._readers
