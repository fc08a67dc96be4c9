"""Exceptions raised by arcpick."""

from __future__ import annotations


class ArcpickError(Exception):
    """Base class for every error arcpick raises on purpose."""


class InvalidPath(ArcpickError):
    """An input record carries a malformed or empty path."""

    def __init__(self, path: str, reason: str = "malformed path") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path {path!r}: {reason}")


class PathKindConflict(ArcpickError):
    """A path is declared as both a file and a directory."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Path {path!r} is declared as both a file and a directory")


class UnknownPath(ArcpickError):
    """A selection operation names a path that is not in the tree."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Path {path!r} is not in the archive tree")


class ArchiveReadError(ArcpickError):
    """A reader could not enumerate or read an archive."""

    def __init__(self, archive: str, reason: str) -> None:
        self.archive = archive
        self.reason = reason
        super().__init__(f"Could not read {archive}: {reason}")


class NoReaderError(ArcpickError):
    """No registered reader handles the given archive."""

    def __init__(self, archive: str) -> None:
        self.archive = archive
        super().__init__(f"No reader available for {archive}")
