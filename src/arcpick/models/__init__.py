"""Arcpick data models."""

from arcpick.models.entry import ArchiveEntryRecord
from arcpick.models.extract_result import ExtractedFileDescriptor, ExtractResult
from arcpick.models.reader import ArchiveReader
from arcpick.models.tree import NodeKind, SelectionSummary, TreeNode

__all__ = [
    "ArchiveEntryRecord",
    "ArchiveReader",
    "ExtractResult",
    "ExtractedFileDescriptor",
    "NodeKind",
    "SelectionSummary",
    "TreeNode",
]
