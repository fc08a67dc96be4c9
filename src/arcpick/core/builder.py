"""Archive tree construction from flat entry records."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from arcpick.core.errors import InvalidPath, PathKindConflict
from arcpick.models.entry import ArchiveEntryRecord
from arcpick.models.tree import NodeKind, TreeNode
from arcpick.utils import join_path, normalize_path

log = logging.getLogger(__name__)

# Segments that refer back to the current or a parent directory.
_SELF_REFERENCES = frozenset({".", ".."})


class _Draft:
    """Mutable node used while the tree is being assembled."""

    __slots__ = ("name", "path", "is_dir", "size", "inferred", "children")

    def __init__(self, name: str, path: str, is_dir: bool, size: int | None = None, inferred: bool = False) -> None:
        self.name = name
        self.path = path
        self.is_dir = is_dir
        self.size = size
        self.inferred = inferred
        self.children: dict[str, _Draft] = {}

    def freeze(self) -> TreeNode:
        children = sorted(self.children.values(), key=lambda d: (not d.is_dir, d.name))
        return TreeNode(
            name=self.name,
            path=self.path,
            kind=NodeKind.DIRECTORY if self.is_dir else NodeKind.FILE,
            size=None if self.is_dir else self.size,
            children=tuple(child.freeze() for child in children),
            inferred=self.inferred,
        )


def _validate(record: ArchiveEntryRecord) -> None:
    """Reject paths that cannot name a single place in the tree."""
    name = record.name
    if not record.path:
        raise InvalidPath(name, "empty path")
    for segment in record.path:
        if not segment:
            raise InvalidPath(name, "empty path segment")
        if segment in _SELF_REFERENCES:
            raise InvalidPath(name, f"self-referencing segment {segment!r}")
        if "/" in segment or "\x00" in segment:
            raise InvalidPath(name, f"illegal character in segment {segment!r}")


def _attach(root: _Draft, record: ArchiveEntryRecord) -> None:
    node = root
    segments = record.path

    for depth, segment in enumerate(segments[:-1], start=1):
        child = node.children.get(segment)
        if child is None:
            child = _Draft(segment, join_path(segments[:depth]), is_dir=True, inferred=True)
            node.children[segment] = child
        elif not child.is_dir:
            raise PathKindConflict(child.path)
        node = child

    leaf = segments[-1]
    path = record.name
    existing = node.children.get(leaf)
    if existing is None:
        node.children[leaf] = _Draft(leaf, path, is_dir=record.is_directory, size=record.size)
        return

    if existing.is_dir != record.is_directory:
        raise PathKindConflict(path)
    if not record.is_directory:
        raise InvalidPath(path, "duplicate file entry")
    # A repeated or late directory record only confirms the directory exists.
    existing.inferred = False


def build_tree(records: Iterable[ArchiveEntryRecord]) -> TreeNode:
    """Build an ordered directory tree from flat archive records.

    Missing parent directories are created implicitly and flagged as
    ``inferred``. Raises ``InvalidPath`` or ``PathKindConflict``; nothing
    is returned from a failed build.
    """
    ordered = sorted(records, key=lambda r: len(r.path))
    root = _Draft("", "", is_dir=True)

    for record in ordered:
        _validate(record)
        _attach(root, record)

    tree = root.freeze()
    log.debug("Built archive tree from %d records", len(ordered))
    return tree


class ArchiveTree:
    """A built archive tree plus a path index for constant-time lookup.

    Read-only; safe to share between readers once constructed.
    """

    def __init__(self, root: TreeNode) -> None:
        self.root = root
        self._index: dict[str, TreeNode] = {node.path: node for node in root.iter_descendants()}

    @classmethod
    def from_records(cls, records: Iterable[ArchiveEntryRecord]) -> ArchiveTree:
        return cls(build_tree(records))

    def get(self, path: str) -> TreeNode | None:
        """Return the node at ``path`` or None. The root is never returned."""
        return self._index.get(normalize_path(path))

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_path(path) in self._index

    def __len__(self) -> int:
        return len(self._index)

    def walk(self) -> Iterator[TreeNode]:
        """Depth-first traversal of every node in display order."""
        return self.root.iter_descendants()

    def files(self) -> Iterator[TreeNode]:
        """Depth-first traversal of file nodes only."""
        return (node for node in self.walk() if not node.is_dir)
