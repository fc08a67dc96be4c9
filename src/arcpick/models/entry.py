"""Archive entry record dataclass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ArchiveEntryRecord:
    """One file or directory as enumerated by an archive reader.

    ``path`` holds the segments of the entry's location inside the archive;
    a slash-joined string is split on ``/``. Directories carry no size.
    """

    path: tuple[str, ...]
    is_directory: bool = False
    size: int | None = None

    def __post_init__(self) -> None:
        if isinstance(self.path, str):
            object.__setattr__(self, "path", tuple(self.path.split("/")) if self.path else ())
        elif not isinstance(self.path, tuple):
            object.__setattr__(self, "path", tuple(self.path))
        if self.is_directory:
            object.__setattr__(self, "size", None)
        elif self.size is None:
            object.__setattr__(self, "size", 0)
        elif self.size < 0:
            raise ValueError(f"Negative size for entry {'/'.join(self.path)!r}: {self.size}")

    @classmethod
    def from_name(cls, name: str, is_directory: bool = False, size: int | None = None) -> ArchiveEntryRecord:
        """Build a record from a slash-joined archive member name.

        A trailing slash marks a directory, as zip archives do.
        """
        if name.endswith("/"):
            is_directory = True
            name = name.rstrip("/")
        segments = tuple(name.split("/")) if name else ()
        return cls(path=segments, is_directory=is_directory, size=size)

    @property
    def name(self) -> str:
        """Slash-joined path of the entry."""
        return "/".join(self.path)
