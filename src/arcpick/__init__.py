"""Browse archive contents and extract a selected subset."""

from arcpick.core.builder import ArchiveTree, build_tree
from arcpick.core.errors import (
    ArchiveReadError,
    ArcpickError,
    InvalidPath,
    NoReaderError,
    PathKindConflict,
    UnknownPath,
)
from arcpick.core.projector import project
from arcpick.core.selection import SelectionEngine
from arcpick.core.session import BrowseSession

__version__ = "0.3.0"

__all__ = [
    "ArchiveReadError",
    "ArchiveTree",
    "ArcpickError",
    "BrowseSession",
    "InvalidPath",
    "NoReaderError",
    "PathKindConflict",
    "SelectionEngine",
    "UnknownPath",
    "build_tree",
    "project",
]
