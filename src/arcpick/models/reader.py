"""Base archive reader interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import partial
from pathlib import Path

from arcpick.models.entry import ArchiveEntryRecord


class ArchiveReader(ABC):
    """Base class for all archive readers.

    A reader turns one kind of container into a flat list of
    ``ArchiveEntryRecord`` and can fetch the bytes of a single member.
    It never decides what gets extracted.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique identifier, e.g. 'zip'."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name, e.g. 'Zip Archive'."""

    @property
    def description(self) -> str:
        """What this reader opens."""
        return ""

    @property
    def extensions(self) -> tuple[str, ...]:
        """File name suffixes handled by this reader, lower case."""
        return ()

    @property
    def sort_order(self) -> int:
        """Resolution order in the registry (lower = tried first). Default 50."""
        return 50

    def can_read(self, path: Path) -> bool:
        """Check whether this reader handles ``path``.

        The default matches the file name against ``extensions``.
        """
        if not path.is_file():
            return False
        lower = path.name.lower()
        return any(lower.endswith(ext) for ext in self.extensions)

    @abstractmethod
    def list_entries(self, path: Path) -> list[ArchiveEntryRecord]:
        """Enumerate the archive's members. MUST NOT extract anything."""

    @abstractmethod
    def read_bytes(self, path: Path, source_path: str) -> bytes:
        """Return the payload of the member at ``source_path``."""

    @contextmanager
    def member_reader(self, path: Path) -> Iterator[Callable[[str], bytes]]:
        """Yield a ``read(source_path) -> bytes`` callable for many reads.

        The default delegates to ``read_bytes``. Readers whose format is
        expensive to reopen keep one handle for the duration of the block.
        """
        yield partial(self.read_bytes, path)
