"""Projection of a selection onto extracted-file descriptors."""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Collection, Iterator

from arcpick.content_types import ContentKindTable
from arcpick.core.builder import ArchiveTree
from arcpick.models.extract_result import ExtractedFileDescriptor
from arcpick.models.tree import SelectionSummary, TreeNode
from arcpick.utils import normalize_path

log = logging.getLogger(__name__)


def _normalized(selection: Collection[str]) -> frozenset[str]:
    return frozenset(normalize_path(path) for path in selection)


def _covered_files(root: TreeNode, selection: Collection[str]) -> Iterator[tuple[TreeNode, str | None]]:
    """Yield ``(file, anchor)`` for every file the selection covers.

    ``anchor`` is the shallowest selected ancestor directory path, or None
    when the file is covered only by its own membership.
    """
    stack: list[tuple[TreeNode, str | None]] = [(child, None) for child in reversed(root.children)]
    while stack:
        node, anchor = stack.pop()
        if node.is_dir:
            if anchor is None and node.path in selection:
                anchor = node.path
            stack.extend((child, anchor) for child in reversed(node.children))
        elif anchor is not None or node.path in selection:
            yield node, anchor


def project(
    tree: ArchiveTree | TreeNode,
    selection: Collection[str],
    destination_prefix: str = "",
    content_types: ContentKindTable | None = None,
) -> list[ExtractedFileDescriptor]:
    """Turn the selected part of ``tree`` into extracted-file descriptors.

    A file is extracted when its own path is selected or when any ancestor
    directory is. Files under a selected directory are re-rooted relative
    to the shallowest selected ancestor; other files keep their
    archive-root-relative path. Output follows tree order.
    """
    root = tree.root if isinstance(tree, ArchiveTree) else tree
    table = content_types or ContentKindTable()
    prefix = destination_prefix.strip("/")
    selection = _normalized(selection)

    descriptors: list[ExtractedFileDescriptor] = []
    if not selection:
        return descriptors

    for node, anchor in _covered_files(root, selection):
        relative = node.path[len(anchor) + 1:] if anchor is not None else node.path
        destination = posixpath.join(prefix, relative) if prefix else relative
        descriptors.append(
            ExtractedFileDescriptor(
                source_path=node.path,
                destination_path=destination,
                size=node.size or 0,
                content_kind=table.kind_for(node.name),
            )
        )

    log.debug("Projected %d files from %d selected paths", len(descriptors), len(selection))
    return descriptors


def summarize(tree: ArchiveTree | TreeNode, selection: Collection[str]) -> SelectionSummary:
    """Count the files and bytes a selection covers."""
    root = tree.root if isinstance(tree, ArchiveTree) else tree
    selection = _normalized(selection)
    file_count = 0
    total_bytes = 0
    for node, _anchor in _covered_files(root, selection):
        file_count += 1
        total_bytes += node.size or 0
    return SelectionSummary(selected_count=len(selection), file_count=file_count, total_bytes=total_bytes)
